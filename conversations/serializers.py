from rest_framework import serializers


class ParticipantSummarySerializer(serializers.Serializer):
    id = serializers.CharField()
    name = serializers.CharField()
    role = serializers.CharField()
    phone = serializers.CharField(allow_blank=True, allow_null=True)
    email = serializers.CharField(allow_blank=True, allow_null=True)


class LastMessageSerializer(serializers.Serializer):
    content = serializers.CharField()
    created_at = serializers.DateTimeField()
    is_from_me = serializers.BooleanField()


class ConversationListSerializer(serializers.Serializer):
    """One row of the conversation list, built by ConversationService"""
    conversation_id = serializers.CharField()
    type = serializers.CharField()
    context_id = serializers.CharField(allow_null=True)
    title = serializers.CharField()
    other_user = ParticipantSummarySerializer()
    last_message = LastMessageSerializer(allow_null=True)
    unread_count = serializers.IntegerField()
    quotation_status = serializers.CharField(required=False)
