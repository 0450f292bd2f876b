from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from .serializers import (
    ConnectionMessageSerializer,
    DirectMessageSerializer,
    MessageSerializer,
    QuotationMessageSerializer,
)
from .services import MessageService


class SendQuotationMessageView(APIView):
    """Send a message in a quotation conversation"""

    def post(self, request):
        serializer = QuotationMessageSerializer(data=request.data)
        if not serializer.is_valid():
            return Response({
                'error': 'Please provide quotation_id, receiver_id, and content',
                'fields': serializer.errors,
            }, status=status.HTTP_400_BAD_REQUEST)

        data = serializer.validated_data
        message = MessageService.send_quotation_message(
            request.user,
            quotation_id=data['quotation_id'],
            receiver_id=data['receiver_id'],
            content=data['content'],
        )
        return Response(MessageSerializer(message).data, status=status.HTTP_201_CREATED)


class SendVendorMessageView(APIView):
    """Send a message between connected vendors"""

    def post(self, request):
        serializer = ConnectionMessageSerializer(data=request.data)
        if not serializer.is_valid():
            return Response({
                'error': 'Please provide connection_id, receiver_id, and content',
                'fields': serializer.errors,
            }, status=status.HTTP_400_BAD_REQUEST)

        data = serializer.validated_data
        message = MessageService.send_connection_message(
            request.user,
            connection_id=data['connection_id'],
            receiver_id=data['receiver_id'],
            content=data['content'],
        )
        return Response(MessageSerializer(message).data, status=status.HTTP_201_CREATED)


class SendDirectMessageView(APIView):
    """Send a message in an ad-inquiry or direct conversation"""

    def post(self, request):
        serializer = DirectMessageSerializer(data=request.data)
        if not serializer.is_valid():
            return Response({
                'error': 'Please provide conversation_id, receiver_id, and content',
                'fields': serializer.errors,
            }, status=status.HTTP_400_BAD_REQUEST)

        data = serializer.validated_data
        message = MessageService.send_direct_message(
            request.user,
            conversation_id=data['conversation_id'],
            receiver_id=data['receiver_id'],
            content=data['content'],
        )
        return Response(MessageSerializer(message).data, status=status.HTTP_201_CREATED)
