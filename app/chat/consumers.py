"""
WebSocket consumer for real-time chat.

Consumers:
    ChatConsumer: One connection scoped to one conversation

Authentication:
    JWTAuthMiddleware puts the user on ``self.scope["user"]``.

Channel Groups:
    Each conversation topic ``conversation/{id}`` is the channel layer
    group ``conversation_{id}``. A connection subscribes after the
    membership check passes and unsubscribes when it closes.

Frames (from client):
    {"type": "TEXT", "sender": "alice", "content": "hello"}
    {"type": "VOICE", "sender": "alice", "content": "<base64>", "audioMimeType": "audio/webm"}
    {"type": "FILE_URL", "sender": "alice", "content": "https://...", "fileName": "a.pdf",
     "fileType": "application/pdf"}

Frames (to client):
    Wire messages, see chat.serializers.WireMessageSerializer.
    With CHAT_REJECTION_ACKS on, a rejected frame is answered to its sender
    only with {"event": "error", "error": ..., "error_code": ...}.
"""

from __future__ import annotations

import logging

from channels.db import database_sync_to_async
from channels.generic.websocket import AsyncJsonWebsocketConsumer
from django.conf import settings

from chat.authorization import ChatAuthorizationService
from chat.broadcast import get_broadcast_channel, topic_for
from chat.constants import WS_CLOSE_CODES
from chat.dispatcher import MessageDispatcher
from chat.middleware import JWT_SUBPROTOCOL

logger = logging.getLogger(__name__)


class ChatConsumer(AsyncJsonWebsocketConsumer):
    """
    WebSocket consumer for a single conversation.

    Attributes:
        conversation_id: Conversation from the URL
        topic: Broadcast topic, set once subscribed
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.conversation_id: int | None = None
        self.topic: str | None = None
        self.broadcaster = get_broadcast_channel()
        self.dispatcher = MessageDispatcher(broadcaster=self.broadcaster)

    async def connect(self):
        """
        Validates:
            1. User is authenticated (else close 4001)
            2. User is initiator or counterpart (else close 4003)
        """
        self.conversation_id = self.scope["url_route"]["kwargs"]["conversation_id"]
        user = self.scope.get("user")

        if user is None or not user.is_authenticated:
            logger.warning(
                f"Rejected unauthenticated connection to conversation {self.conversation_id}"
            )
            await self.close(code=WS_CLOSE_CODES.UNAUTHENTICATED)
            return

        is_participant = await database_sync_to_async(
            ChatAuthorizationService.is_participant
        )(user.get_username(), self.conversation_id)
        if not is_participant:
            logger.warning(
                f"User {user.id} is not a participant in "
                f"conversation {self.conversation_id}"
            )
            await self.close(code=WS_CLOSE_CODES.NOT_PARTICIPANT)
            return

        self.topic = topic_for(self.conversation_id)
        await self.broadcaster.subscribe(self.topic, self.channel_name)

        subprotocol = (
            JWT_SUBPROTOCOL
            if JWT_SUBPROTOCOL in self.scope.get("subprotocols", [])
            else None
        )
        await self.accept(subprotocol=subprotocol)
        logger.info(f"User {user.id} connected to conversation {self.conversation_id}")

    async def disconnect(self, close_code):
        if self.topic is None:
            return
        await self.broadcaster.unsubscribe(self.topic, self.channel_name)
        user = self.scope.get("user")
        logger.info(
            f"User {getattr(user, 'id', 'anonymous')} disconnected from "
            f"conversation {self.conversation_id} (code {close_code})"
        )
        self.topic = None

    async def receive(self, text_data=None, bytes_data=None, **kwargs):
        """Decode JSON here so a bad frame is dropped instead of closing the socket."""
        if text_data is None:
            logger.warning(
                f"Ignored binary frame on conversation {self.conversation_id}"
            )
            await self._reject("Binary frames are not supported", "MALFORMED_PAYLOAD")
            return
        try:
            content = await self.decode_json(text_data)
        except ValueError:
            logger.warning(
                f"Ignored non-JSON frame on conversation {self.conversation_id}"
            )
            await self._reject("Frame is not valid JSON", "MALFORMED_PAYLOAD")
            return
        await self.receive_json(content, **kwargs)

    async def receive_json(self, content, **kwargs):
        user = self.scope["user"]
        result = await database_sync_to_async(self.dispatcher.handle)(
            self.conversation_id, content, user.get_username()
        )
        if not result:
            await self._reject(result.error, result.error_code)

    async def chat_message(self, event):
        """Forward a chat.message event from the channel layer."""
        await self.send_json(event["message"])

    async def _reject(self, error: str, error_code: str) -> None:
        if settings.CHAT_REJECTION_ACKS:
            await self.send_json(
                {"event": "error", "error": error, "error_code": error_code}
            )
