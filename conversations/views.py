from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from .serializers import ConversationListSerializer
from .services import ConversationService


class ConversationListView(APIView):
    """List all conversations for the authenticated user"""

    def get(self, request):
        conversations = ConversationService.list_conversations(request.user)
        serializer = ConversationListSerializer(conversations, many=True)

        return Response({
            'user_id': request.user.user_id,
            'results': serializer.data,
            'total_count': len(conversations),
        })


class ConversationInfoView(APIView):
    """
    Resolve a conversation id into its type, participants and context for the
    chat header
    """

    def get(self, request, conversation_id):
        info = ConversationService.get_conversation_info(conversation_id, request.user)
        return Response(info, status=status.HTTP_200_OK)
