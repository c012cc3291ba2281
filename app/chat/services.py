"""
Chat services.

ConversationService: the conversation directory (create / list / delete)
MessageService: message store and the persist-then-publish step shared by
    the dispatcher and the AI auto-responder

All methods return ServiceResult; views and the dispatcher decide how a
failure surfaces (HTTP status, log line, private error frame).

Error codes:
    COUNTERPART_NOT_FOUND   Counterpart username does not resolve
    SAME_USER               Counterpart is the initiator
    DUPLICATE_CONVERSATION  The pair already has a conversation
    CONVERSATION_NOT_FOUND  Unknown conversation id
    NOT_INITIATOR           Only the initiator may delete
    NOT_PARTICIPANT         Caller is not in the conversation
    PERSISTENCE_FAILED      The message could not be stored
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from django.conf import settings
from django.db import DatabaseError, IntegrityError

from chat.authorization import (
    ChatAuthorizationService,
    require_conversation_participant,
)
from chat.broadcast import get_broadcast_channel, topic_for
from chat.models import Conversation, Message
from chat.serializers import to_wire_message
from core.services import BaseService, ServiceResult

if TYPE_CHECKING:
    from django.db.models import QuerySet

    from authentication.models import User
    from chat.broadcast import BroadcastChannel
    from chat.payloads import MessagePayload


class ConversationService(BaseService):
    """Create, list and delete pairwise conversations."""

    @classmethod
    def create(
        cls,
        initiator: User,
        name: str,
        counterpart_username: str,
    ) -> ServiceResult[Conversation]:
        """
        Create a conversation from ``initiator`` to the named counterpart.

        The counterpart is resolved by username now; later renames do not
        move the conversation. A conversation with the bot identity is
        flagged AI-enabled.

        Error codes:
            COUNTERPART_NOT_FOUND, SAME_USER, DUPLICATE_CONVERSATION
        """
        from authentication.models import User

        counterpart = User.objects.filter(username=counterpart_username).first()
        if counterpart is None:
            return ServiceResult.failure(
                f"Receiver user not found: {counterpart_username}",
                error_code="COUNTERPART_NOT_FOUND",
            )

        if counterpart.pk == initiator.pk:
            return ServiceResult.failure(
                "Cannot create a chat with yourself.",
                error_code="SAME_USER",
            )

        if Conversation.objects.between(initiator, counterpart).exists():
            return ServiceResult.failure(
                "Chat already exists between these users.",
                error_code="DUPLICATE_CONVERSATION",
            )

        try:
            with cls.atomic():
                conversation = Conversation.objects.create(
                    name=name,
                    initiator=initiator,
                    counterpart=counterpart,
                    counterpart_name=counterpart.username,
                    is_ai_enabled=counterpart.username == settings.AI_BOT_USERNAME,
                )
        except IntegrityError:
            # Lost a race with a concurrent create for the same pair
            return ServiceResult.failure(
                "Chat already exists between these users.",
                error_code="DUPLICATE_CONVERSATION",
            )

        cls.get_logger().info(
            f"Created conversation {conversation.id} "
            f"from user {initiator.id} to user {counterpart.id}"
        )
        return ServiceResult.success(conversation)

    @classmethod
    def create_ai_conversation(cls, user: User) -> ServiceResult[Conversation | None]:
        """
        Open the default conversation with the bot for a new user.

        Succeeds with ``None`` when the bot account does not exist.
        """
        from authentication.models import User

        if not User.objects.filter(username=settings.AI_BOT_USERNAME).exists():
            cls.get_logger().info(
                f"Bot user {settings.AI_BOT_USERNAME} missing; "
                f"no AI conversation for user {user.id}"
            )
            return ServiceResult.success(None)

        return cls.create(
            initiator=user,
            name=settings.AI_CONVERSATION_NAME,
            counterpart_username=settings.AI_BOT_USERNAME,
        )

    @classmethod
    def list_for(cls, user: User) -> QuerySet[Conversation]:
        """Conversations where the user is initiator or counterpart, newest first."""
        return Conversation.objects.for_user(user).select_related(
            "initiator", "counterpart"
        )

    @classmethod
    def delete(cls, conversation_id, requester: User) -> ServiceResult[None]:
        """
        Delete a conversation and, through the FK cascade, all its messages.

        Error codes:
            CONVERSATION_NOT_FOUND, NOT_INITIATOR
        """
        conversation = Conversation.objects.filter(pk=conversation_id).first()
        if conversation is None:
            return ServiceResult.failure(
                f"Chat not found with ID: {conversation_id}",
                error_code="CONVERSATION_NOT_FOUND",
            )

        if not ChatAuthorizationService.is_initiator(requester, conversation.pk):
            cls.get_logger().warning(
                f"User {requester.id} tried to delete conversation "
                f"{conversation_id} owned by user {conversation.initiator_id}"
            )
            return ServiceResult.failure(
                "Only the user who created this chat can delete it.",
                error_code="NOT_INITIATOR",
            )

        with cls.atomic():
            message_count, _ = Message.objects.filter(
                conversation_id=conversation.pk
            ).delete()
            conversation.delete()

        cls.get_logger().info(
            f"Deleted conversation {conversation_id} "
            f"with {message_count} messages by user {requester.id}"
        )
        return ServiceResult.success(None)


class MessageService(BaseService):
    """Store messages and publish their wire projection."""

    @classmethod
    def persist(
        cls,
        conversation_id,
        sender: str,
        body: MessagePayload,
    ) -> ServiceResult[Message]:
        """
        Store a validated message with a server timestamp.

        Error codes:
            CONVERSATION_NOT_FOUND, PERSISTENCE_FAILED
        """
        try:
            with cls.atomic():
                conversation = Conversation.objects.filter(pk=conversation_id).first()
                if conversation is None:
                    return ServiceResult.failure(
                        f"Chat not found with ID: {conversation_id}",
                        error_code="CONVERSATION_NOT_FOUND",
                    )
                message = Message.objects.create(
                    conversation=conversation,
                    sender=sender,
                    **body.to_model_fields(),
                )
        except DatabaseError as exc:
            return cls.handle_exception(
                exc,
                f"Failed to persist message in conversation {conversation_id}",
                error_code="PERSISTENCE_FAILED",
            )

        return ServiceResult.success(message)

    @classmethod
    def publish(
        cls,
        message: Message,
        broadcaster: BroadcastChannel | None = None,
    ) -> dict:
        """
        Publish the wire projection of a stored message.

        Delivery is best effort: a layer failure is logged and the message
        stays available through history.
        """
        broadcaster = broadcaster or get_broadcast_channel()
        wire_message = to_wire_message(message)
        topic = topic_for(message.conversation_id)
        try:
            broadcaster.publish_sync(topic, wire_message)
        except Exception:
            cls.get_logger().exception(
                f"Broadcast of message {message.id} to {topic} failed"
            )
        return wire_message

    @classmethod
    def persist_and_publish(
        cls,
        conversation_id,
        sender: str,
        body: MessagePayload,
        broadcaster: BroadcastChannel | None = None,
    ) -> ServiceResult[Message]:
        """Store, then publish from the stored row. Nothing is published on failure."""
        result = cls.persist(conversation_id, sender, body)
        if not result:
            return result

        cls.publish(result.data, broadcaster=broadcaster)
        return result

    @classmethod
    @require_conversation_participant()
    def history(cls, user: User, conversation_id) -> ServiceResult[QuerySet[Message]]:
        """
        Messages of a conversation in ascending timestamp order.

        Error codes:
            NOT_PARTICIPANT (also for an unknown conversation)
        """
        return ServiceResult.success(
            Message.objects.filter(conversation_id=conversation_id).order_by(
                "created_at", "id"
            )
        )
