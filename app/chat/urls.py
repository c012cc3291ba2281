"""
URL configuration for chat API.

URL Structure:
    /api/v1/chat/conversations/                 - List / create
    /api/v1/chat/conversations/{id}/            - Retrieve / delete
    /api/v1/chat/conversations/{id}/messages/   - History

WebSocket routes are in chat.routing.
"""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from chat.views import ConversationViewSet

app_name = "chat"

router = DefaultRouter()
router.register(r"conversations", ConversationViewSet, basename="conversation")

urlpatterns = [
    path("", include(router.urls)),
]
