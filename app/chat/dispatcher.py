"""
Inbound real-time message handling.

``MessageDispatcher.handle`` runs one inbound frame through a fixed series
of gates. The first failing gate ends processing; nothing is stored or
published for a rejected frame:

    1. well-formed      payload is a mapping with non-null type and sender
    2. identity         caller identity present; declared sender replaced by it
    3. membership       caller is initiator or counterpart (checked every time)
    4. classification   payload becomes a Text/Voice/FileUrl variant
    5. persistence      stored with a server timestamp
    6. broadcast        wire projection of the stored row is published
    7. auto-responder   AI conversations + TEXT: reply task is enqueued

The caller identity is an explicit argument; the dispatcher never reads
it from ambient request or connection state.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from chat.authorization import ChatAuthorizationService
from chat.models import MessageType
from chat.payloads import parse_payload
from chat.services import MessageService
from core.exceptions import ValidationError
from core.services import ServiceResult

if TYPE_CHECKING:
    from chat.broadcast import BroadcastChannel
    from chat.models import Message

logger = logging.getLogger(__name__)


def enqueue_auto_reply(conversation_id: int, text: str) -> None:
    """Hand the reply off to a Celery worker."""
    from ai.tasks import generate_auto_reply

    generate_auto_reply.delay(conversation_id, text)


class MessageDispatcher:
    """
    Validate, store and fan out one inbound chat message.

    Args:
        broadcaster: Channel to publish on (process default when None)
        auto_reply: Callable taking (conversation_id, text) that schedules
            the AI reply without waiting for it
    """

    def __init__(
        self,
        broadcaster: BroadcastChannel | None = None,
        auto_reply=enqueue_auto_reply,
    ):
        self.broadcaster = broadcaster
        self.auto_reply = auto_reply

    def handle(
        self,
        conversation_id,
        payload: Any,
        identity: str | None,
    ) -> ServiceResult[dict]:
        """
        Process one inbound frame.

        Returns:
            ServiceResult with the published wire message, or a failure whose
            error_code names the gate that rejected it: MALFORMED_PAYLOAD,
            UNAUTHENTICATED, NOT_PARTICIPANT, a payload validation code,
            CONVERSATION_NOT_FOUND or PERSISTENCE_FAILED.
        """
        if (
            not isinstance(payload, Mapping)
            or payload.get("type") is None
            or payload.get("sender") is None
        ):
            logger.warning(
                f"Rejected malformed payload for conversation {conversation_id}"
            )
            return ServiceResult.failure(
                "Message must declare a type and a sender",
                error_code="MALFORMED_PAYLOAD",
            )

        if not identity:
            logger.warning(
                f"Rejected unauthenticated message for conversation {conversation_id}"
            )
            return ServiceResult.failure(
                "Authentication required", error_code="UNAUTHENTICATED"
            )

        if payload["sender"] != identity:
            logger.info(
                f"Declared sender {payload['sender']!r} replaced by authenticated "
                f"user {identity!r} in conversation {conversation_id}"
            )
            payload = {**payload, "sender": identity}

        if not ChatAuthorizationService.is_participant(identity, conversation_id):
            logger.warning(
                f"User {identity!r} is not a participant in "
                f"conversation {conversation_id}; message dropped"
            )
            return ServiceResult.failure(
                "User is not a participant in this conversation",
                error_code="NOT_PARTICIPANT",
            )

        try:
            body = parse_payload(payload)
        except ValidationError as exc:
            logger.warning(
                f"Rejected {payload.get('type')} message from {identity!r} in "
                f"conversation {conversation_id}: {exc}"
            )
            return ServiceResult.from_exception(exc)

        result = MessageService.persist(conversation_id, identity, body)
        if not result:
            logger.error(
                f"Message from {identity!r} in conversation {conversation_id} "
                f"not stored ({result.error_code}); nothing broadcast"
            )
            return result

        message = result.data
        wire_message = MessageService.publish(message, broadcaster=self.broadcaster)
        logger.info(
            f"Dispatched {message.message_type} message {message.id} "
            f"from {identity!r} to conversation {conversation_id}"
        )

        self._trigger_auto_reply(message)
        return ServiceResult.success(wire_message)

    def _trigger_auto_reply(self, message: Message) -> None:
        if message.message_type != MessageType.TEXT:
            return
        if not message.conversation.is_ai_enabled:
            return
        try:
            self.auto_reply(message.conversation_id, message.content)
        except Exception:
            logger.exception(
                f"Could not schedule auto-reply for message {message.id} "
                f"in conversation {message.conversation_id}"
            )