"""
Chat application configuration.

Pairwise conversations, message history and the real-time
dispatch/broadcast path.
"""

from django.apps import AppConfig


class ChatConfig(AppConfig):
    """Configuration for the chat application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "chat"
    verbose_name = "Chat"
