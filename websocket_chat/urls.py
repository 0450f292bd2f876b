from django.urls import path
from . import views

app_name = 'websocket_chat'

urlpatterns = [
    path('<str:conversation_id>/messages/',
         views.ConversationMessagesHistoryView.as_view(),
         name='conversation_messages_history'),
    path('<str:conversation_id>/read/',
         views.MarkMessagesAsReadView.as_view(),
         name='mark_messages_read'),
]
