"""
URL configuration for servon project.

Every endpoint lives under ``/api/``; the chat endpoints are contributed by
the conversations, dmessages and websocket_chat apps.
"""
from django.contrib import admin
from django.urls import include, path

from . import views

base_urlpatterns = [
    path('health/', views.HealthView.as_view(), name='health'),
    path('chat/', include('dmessages.urls')),
    path('chat/', include('conversations.urls')),
    path('chat/', include('websocket_chat.urls')),
]

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/', include(base_urlpatterns)),
]
