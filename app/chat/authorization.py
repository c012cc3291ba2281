"""
Service-level authorization for chat operations.

Distinct from DRF permission classes: these checks run for every inbound
real-time message as well as for REST calls, so they take plain values
(username / user and conversation id) rather than a request.

Key Components:
    ChatAuthorizationService: membership and initiator checks
    require_conversation_participant: decorator for service methods

Error Codes:
    NOT_PARTICIPANT: User is not the initiator or counterpart
    INVALID_REQUEST: Missing user or conversation id

Usage:
    if ChatAuthorizationService.is_participant("alice", conversation_id):
        ...

    class MessageService(BaseService):
        @classmethod
        @require_conversation_participant()
        def history(cls, user, conversation_id):
            ...
"""

from __future__ import annotations

from functools import wraps
from typing import TYPE_CHECKING, Callable, TypeVar

from django.db.models import Q

from core.services import ServiceResult

if TYPE_CHECKING:
    from authentication.models import User


T = TypeVar("T")


class ChatAuthorizationService:
    """
    Stateless membership checks.

    Nothing is cached: membership is looked up again on each call, so a
    deleted conversation stops authorizing immediately.
    """

    @classmethod
    def is_participant(cls, identity: str | None, conversation_id) -> bool:
        """
        Whether the user named ``identity`` is the initiator or counterpart.

        An unknown user, an unknown conversation, or a malformed id all
        answer False rather than raising.
        """
        from authentication.models import User
        from chat.models import Conversation

        if not identity or conversation_id is None:
            return False

        user_id = (
            User.objects.filter(username=identity).values_list("id", flat=True).first()
        )
        if user_id is None:
            return False

        try:
            return Conversation.objects.filter(
                Q(initiator_id=user_id) | Q(counterpart_id=user_id),
                pk=conversation_id,
            ).exists()
        except (TypeError, ValueError):
            return False

    @classmethod
    def is_conversation_participant(cls, user: User, conversation_id) -> bool:
        """Same check for an already-resolved user object."""
        if user is None or not getattr(user, "is_authenticated", False):
            return False
        return cls.is_participant(user.get_username(), conversation_id)

    @classmethod
    def is_initiator(cls, user: User, conversation_id) -> bool:
        from chat.models import Conversation

        return Conversation.objects.filter(
            pk=conversation_id, initiator_id=user.pk
        ).exists()


def require_conversation_participant(
    conversation_id_param: str = "conversation_id",
    user_param: str = "user",
) -> Callable:
    """
    Decorator that requires the user kwarg to be a conversation participant.

    Returns:
        ServiceResult.failure with NOT_PARTICIPANT if the check fails
        ServiceResult.failure with INVALID_REQUEST if required kwargs are missing
    """

    def decorator(
        func: Callable[..., ServiceResult[T]],
    ) -> Callable[..., ServiceResult[T]]:
        @wraps(func)
        def wrapper(*args, **kwargs) -> ServiceResult[T]:
            user = kwargs.get(user_param)
            conversation_id = kwargs.get(conversation_id_param)

            if user is None or conversation_id is None:
                return ServiceResult.failure(
                    "Missing required parameters",
                    error_code="INVALID_REQUEST",
                )

            if not ChatAuthorizationService.is_conversation_participant(
                user, conversation_id
            ):
                return ServiceResult.failure(
                    "User is not a participant in this conversation",
                    error_code="NOT_PARTICIPANT",
                )

            return func(*args, **kwargs)

        return wrapper

    return decorator
