from django.contrib import admin
from .models import Message


@admin.register(Message)
class MessageAdmin(admin.ModelAdmin):
    list_display = ['id', 'conversation_id', 'kind', 'sender', 'receiver', 'content_preview', 'created_at', 'read_at']
    list_filter = ['kind', 'message_type', 'created_at']
    search_fields = ['content', 'conversation_id', 'sender__name', 'receiver__name']
    readonly_fields = ['conversation_id', 'kind', 'context_id', 'sender', 'receiver', 'content', 'created_at', 'read_at']
    list_select_related = ['sender', 'receiver']

    @admin.display(description='Content Preview')
    def content_preview(self, obj):
        return obj.preview(50)
