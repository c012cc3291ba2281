"""
Authentication services.

AuthService.register creates an account and, when the bot account
exists, the user's starting conversation with the auto-responder.

Related files:
    - models.py: User and username validators
    - chat/services.py: ConversationService.create_ai_conversation
"""

from __future__ import annotations

from django.db import IntegrityError

from authentication.models import User
from core.services import BaseService, ServiceResult


class AuthService(BaseService):
    """
    Account lifecycle.

    Usage:
        result = AuthService.register("alice", "a-long-password")
        if not result:
            return Response(result.to_response(), status=400)
    """

    @classmethod
    def is_username_taken(cls, username: str) -> bool:
        return User.objects.filter(username=username).exists()

    @classmethod
    def register(cls, username: str, password: str) -> ServiceResult[User]:
        """
        Create a user with a hashed password.

        Error codes:
            USERNAME_TAKEN: An account with this username exists
        """
        from chat.services import ConversationService

        if cls.is_username_taken(username):
            return ServiceResult.failure(
                "User already registered!", error_code="USERNAME_TAKEN"
            )

        try:
            with cls.atomic():
                user = User.objects.create_user(username=username, password=password)
                ai_result = ConversationService.create_ai_conversation(user)
        except IntegrityError:
            return ServiceResult.failure(
                "User already registered!", error_code="USERNAME_TAKEN"
            )

        if not ai_result:
            cls.get_logger().warning(
                f"Registered user {user.id} without AI conversation: {ai_result.error}"
            )

        cls.get_logger().info(f"Registered user {user.id} ({user.username})")
        return ServiceResult.success(user)
