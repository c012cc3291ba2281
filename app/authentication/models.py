"""
Authentication models.

This module defines the user directory for the chat backend:
- User: account identified by a unique username, password hashed by Django

Related files:
    - managers.py: UserManager.create_user / create_superuser
    - services.py: AuthService.register
    - migrations/0002_create_bot_user.py: reserved auto-responder account

Security:
    - Passwords hashed with Django's configured PASSWORD_HASHERS
    - The bot account has an unusable password and cannot log in
"""

import re

from django.conf import settings
from django.contrib.auth.models import AbstractBaseUser, PermissionsMixin
from django.core.exceptions import ValidationError
from django.db import models

from authentication.managers import UserManager

# Reserved usernames that cannot be registered
RESERVED_USERNAMES = frozenset([
    "admin", "administrator", "root", "system", "api", "www",
    "support", "help", "login", "logout", "register", "auth",
    "user", "users", "null", "undefined", "anonymous", "guest",
    "staff", "mod", "moderator", "bot", "robot", "ai", "assistant",
])


def validate_username_not_reserved(value):
    """Reject reserved names, including the configured bot identity."""
    lowered = value.lower()
    if lowered in RESERVED_USERNAMES or lowered == settings.AI_BOT_USERNAME.lower():
        raise ValidationError(
            f"The username '{value}' is reserved and cannot be used."
        )


def validate_username_format(value):
    """Validate username format: 3-150 chars, letters, digits, '.', '_' and '-'."""
    if not re.match(r"^[a-zA-Z0-9_.-]{3,150}$", value):
        raise ValidationError(
            "Username must be 3-150 characters and contain only "
            "letters, numbers, dots, underscores, and hyphens."
        )


class User(AbstractBaseUser, PermissionsMixin):
    """
    Chat user identified by username.

    A user takes part in conversations either as the initiator or as the
    counterpart; chat messages carry the sender's username.

    Fields:
        username: Unique, case-sensitive login name and chat identity
        is_active: Whether the account may log in
        is_staff: Whether the user can access Django admin
        date_joined: When the account was created
        updated_at: When the user record was last modified
    """

    username = models.CharField(
        max_length=150,
        unique=True,
        validators=[validate_username_format],
        help_text="Unique username used for login and as the chat sender identity",
        error_messages={"unique": "User already registered!"},
    )

    is_active = models.BooleanField(
        default=True,
        help_text="Whether this user account is active. Deselect instead of deleting.",
    )
    is_staff = models.BooleanField(
        default=False,
        help_text="Whether the user can access the admin site.",
    )

    date_joined = models.DateTimeField(
        auto_now_add=True,
        help_text="When the user account was created",
    )
    updated_at = models.DateTimeField(
        auto_now=True,
        help_text="When the user record was last modified",
    )

    USERNAME_FIELD = "username"
    REQUIRED_FIELDS = []

    objects = UserManager()

    class Meta:
        verbose_name = "user"
        verbose_name_plural = "users"
        ordering = ["-date_joined"]

    def __str__(self):
        return self.username

    @property
    def is_bot(self) -> bool:
        """True for the reserved auto-responder account."""
        return self.username == settings.AI_BOT_USERNAME
