from django.urls import path

from . import views

app_name = 'conversations'

urlpatterns = [
    path('conversations/', views.ConversationListView.as_view(), name='conversation-list'),
    path('<str:conversation_id>/info/', views.ConversationInfoView.as_view(), name='conversation-info'),
]
