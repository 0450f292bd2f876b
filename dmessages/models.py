from django.db import models
from django.utils import timezone

from conversations.identity import ConversationKey, ConversationKind


class MessageQuerySet(models.QuerySet):
    def in_conversation(self, conversation_id):
        return self.filter(conversation_id=str(conversation_id))

    def involving(self, user_id):
        return self.filter(models.Q(sender_id=user_id) | models.Q(receiver_id=user_id))

    def unread_for(self, user_id):
        return self.filter(receiver_id=user_id, read_at__isnull=True)

    def mark_read_for(self, user_id, message_ids=None):
        """Set read_at on unread messages addressed to user_id; returns the count"""
        messages = self.unread_for(user_id)
        if message_ids is not None:
            messages = messages.filter(id__in=message_ids)
        return messages.update(read_at=timezone.now())


class Message(models.Model):
    MESSAGE_TYPE_CHOICES = [
        ("text", "Text"),
        ("image", "Image"),
        ("system", "System"),
    ]

    conversation_id = models.CharField(max_length=255, db_index=True)
    kind = models.CharField(max_length=20, choices=ConversationKind.choices)
    context_id = models.CharField(max_length=64, null=True, blank=True)
    sender = models.ForeignKey('users.User', on_delete=models.CASCADE, related_name='sent_messages')
    receiver = models.ForeignKey('users.User', on_delete=models.CASCADE, related_name='received_messages')
    content = models.TextField(max_length=2000)
    message_type = models.CharField(max_length=10, choices=MESSAGE_TYPE_CHOICES, default="text")
    created_at = models.DateTimeField(auto_now_add=True)
    read_at = models.DateTimeField(null=True, blank=True)

    objects = MessageQuerySet.as_manager()

    class Meta:
        ordering = ['created_at', 'id']
        indexes = [
            models.Index(fields=['conversation_id', '-created_at'], name='message_conv_created_idx'),
            models.Index(fields=['receiver', 'read_at'], name='message_receiver_read_idx'),
        ]

    @classmethod
    def create_for_key(cls, key: ConversationKey, sender_id, receiver_id, content, message_type="text"):
        return cls.objects.create(
            conversation_id=key.serialize(),
            kind=key.kind,
            context_id=key.context_id,
            sender_id=sender_id,
            receiver_id=receiver_id,
            content=content,
            message_type=message_type,
        )

    @property
    def key(self) -> ConversationKey:
        return ConversationKey.parse(self.conversation_id)

    @property
    def is_read(self):
        return self.read_at is not None

    def save(self, *args, **kwargs):
        # Once stored, only read_at may change
        if not self._state.adding and not kwargs.get('update_fields'):
            kwargs['update_fields'] = ['read_at']
        super().save(*args, **kwargs)

    def preview(self, length=100):
        return self.content[:length] + '...' if len(self.content) > length else self.content

    def __str__(self):
        return f"{self.sender_id} to {self.receiver_id}: {self.preview(50)}"
