"""
WebSocket URL routing for the chat application.

URL Patterns:
    ws/conversations/<conversation_id>/ - Live feed and send endpoint
        for one conversation

Authentication:
    Pass a JWT access token as ?token=<jwt> or via the "jwt, <token>"
    subprotocol pair; see chat.middleware.
"""

from django.urls import path

from chat import consumers

websocket_urlpatterns = [
    path(
        "ws/conversations/<int:conversation_id>/",
        consumers.ChatConsumer.as_asgi(),
    ),
]
