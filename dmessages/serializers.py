import html

import bleach
from django.conf import settings
from rest_framework import serializers

from .models import Message


def sanitize_content(content):
    """Strip every HTML tag from message content, keeping the text as typed"""
    return html.unescape(bleach.clean(content, tags=[], attributes={}, strip=True))


class ParticipantSerializer(serializers.Serializer):
    id = serializers.CharField(source='user_id')
    name = serializers.CharField(source='display_name')
    role = serializers.CharField()


class MessageSerializer(serializers.ModelSerializer):
    sender = ParticipantSerializer(read_only=True)
    sender_id = serializers.CharField(read_only=True)
    receiver_id = serializers.CharField(read_only=True)
    is_read = serializers.BooleanField(read_only=True)

    class Meta:
        model = Message
        fields = [
            'id', 'conversation_id', 'kind', 'context_id', 'sender_id', 'sender',
            'receiver_id', 'content', 'message_type', 'created_at', 'read_at', 'is_read',
        ]
        read_only_fields = fields


class SendMessageSerializer(serializers.Serializer):
    """Fields shared by every send variant"""
    receiver_id = serializers.CharField(max_length=64)
    content = serializers.CharField(trim_whitespace=True)

    def validate_receiver_id(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Receiver ID cannot be empty.")
        return value

    def validate_content(self, value):
        value = sanitize_content(value).strip()
        if not value:
            raise serializers.ValidationError("Message content cannot be empty.")
        max_length = getattr(settings, 'CHAT_MESSAGE_MAX_LENGTH', 2000)
        if len(value) > max_length:
            raise serializers.ValidationError(f"Message cannot exceed {max_length} characters.")
        return value


class QuotationMessageSerializer(SendMessageSerializer):
    quotation_id = serializers.CharField(max_length=64)


class ConnectionMessageSerializer(SendMessageSerializer):
    connection_id = serializers.CharField(max_length=64)


class DirectMessageSerializer(SendMessageSerializer):
    conversation_id = serializers.CharField(max_length=255)
