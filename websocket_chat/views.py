from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.views import APIView

from .services import ChatService


def parse_message_ids(value):
    """``message_ids`` is optional; when present it must be a list of integers"""
    if value is None:
        return None
    if not isinstance(value, list):
        raise ValidationError({'message_ids': ['Expected a list of message IDs.']})
    try:
        return [int(message_id) for message_id in value]
    except (TypeError, ValueError):
        raise ValidationError({'message_ids': ['Message IDs must be integers.']})


class ConversationMessagesHistoryView(APIView):
    """
    HTTP endpoint for retrieving message history with pagination
    This complements the WebSocket real-time messaging
    """

    def get(self, request, conversation_id):
        mark_read = request.query_params.get('mark_read', '').lower() in ('1', 'true', 'yes')

        result = ChatService.get_conversation_messages(
            conversation_id=conversation_id,
            session=request.user,
            page=request.query_params.get('page', 1),
            limit=request.query_params.get('limit'),
            mark_read=mark_read,
        )
        return Response(result, status=status.HTTP_200_OK)


class MarkMessagesAsReadView(APIView):
    """
    HTTP endpoint for marking messages as read
    """

    def put(self, request, conversation_id):
        data = request.data if isinstance(request.data, dict) else {}
        message_ids = parse_message_ids(data.get('message_ids'))

        result = ChatService.mark_messages_as_read(
            conversation_id=conversation_id,
            session=request.user,
            message_ids=message_ids,
        )
        return Response(result, status=status.HTTP_200_OK)
