"""
Chat system models.

Models:
    Conversation: Pairwise chat between an initiator and a counterpart
    Message: Immutable chat message, ordered by server timestamp

Design Decisions:
    - Exactly two users per conversation, fixed at creation
    - The unordered pair is unique; the service checks both orderings
      since the row is stored directionally
    - Messages are never edited; they disappear only when the conversation
      is deleted (FK cascade)
    - Message.sender is the username string so the reserved bot identity
      can author replies
    - VOICE audio is stored as raw bytes and re-encoded for the wire
"""

from __future__ import annotations

import base64
from typing import TYPE_CHECKING

from django.conf import settings
from django.db import models
from django.db.models import F, Q

from core.models import BaseModel

if TYPE_CHECKING:
    from authentication.models import User


class MessageType(models.TextChoices):
    """
    Type of message content.

    TEXT: Plain text in ``content``
    VOICE: Audio bytes in ``audio_data``, base64 on the wire
    FILE_URL: Remote file URL in ``content`` plus file name and type
    """

    TEXT = "TEXT", "Text"
    VOICE = "VOICE", "Voice"
    FILE_URL = "FILE_URL", "File URL"


class ConversationQuerySet(models.QuerySet):
    def for_user(self, user: User) -> ConversationQuerySet:
        """Conversations where the user is initiator or counterpart."""
        return self.filter(Q(initiator=user) | Q(counterpart=user))

    def between(self, first: User, second: User) -> ConversationQuerySet:
        """Conversations for the unordered pair, in either role ordering."""
        return self.filter(
            Q(initiator=first, counterpart=second)
            | Q(initiator=second, counterpart=first)
        )


class Conversation(BaseModel):
    """
    A pairwise conversation.

    The initiator created it by naming the counterpart's username. Only the
    initiator may delete it; deletion removes every message.

    Fields:
        name: Display name chosen by the initiator
        initiator: User who created the conversation
        counterpart: The other participant
        counterpart_name: Counterpart username at creation, for display
        is_ai_enabled: Text messages here trigger the auto-responder
    """

    name = models.CharField(
        max_length=255,
        help_text="Display name chosen by the initiator",
    )

    initiator = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="initiated_conversations",
        help_text="User who created the conversation",
    )

    counterpart = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="received_conversations",
        help_text="The other participant",
    )

    counterpart_name = models.CharField(
        max_length=150,
        help_text="Counterpart username, denormalized for display",
    )

    is_ai_enabled = models.BooleanField(
        default=False,
        help_text="Whether text messages trigger the AI auto-responder",
    )

    objects = ConversationQuerySet.as_manager()

    class Meta:
        db_table = "chat_conversation"
        ordering = ["-created_at", "-id"]
        constraints = [
            models.CheckConstraint(
                condition=~Q(initiator=F("counterpart")),
                name="chat_conversation_no_self_chat",
            ),
            models.UniqueConstraint(
                fields=["initiator", "counterpart"],
                name="chat_conversation_unique_pair",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.name} ({self.initiator_id} -> {self.counterpart_id})"


class Message(models.Model):
    """
    A message within a conversation.

    Created only by the dispatch path after validation. ``created_at`` is
    stamped by the server and drives history order; ``id`` breaks ties.

    Fields:
        conversation: Conversation this message belongs to
        sender: Username of the author (or the bot identity)
        message_type: TEXT, VOICE or FILE_URL
        content: Text, or file URL for FILE_URL; empty for VOICE
        audio_data: Decoded audio bytes (VOICE only)
        audio_mime_type: Audio MIME type (VOICE only, optional)
        file_name: Original file name (FILE_URL only)
        file_type: File MIME type (FILE_URL only)
        created_at: Server timestamp
    """

    conversation = models.ForeignKey(
        Conversation,
        on_delete=models.CASCADE,
        related_name="messages",
        help_text="Conversation this message belongs to",
    )

    sender = models.CharField(
        max_length=150,
        db_index=True,
        help_text="Username of the author",
    )

    message_type = models.CharField(
        max_length=10,
        choices=MessageType.choices,
        default=MessageType.TEXT,
        help_text="Type of message content",
    )

    content = models.TextField(
        blank=True,
        default="",
        help_text="Text content, or the file URL for FILE_URL messages",
    )

    audio_data = models.BinaryField(
        null=True,
        blank=True,
        help_text="Decoded audio bytes for VOICE messages",
    )

    audio_mime_type = models.CharField(
        max_length=100,
        blank=True,
        default="",
        help_text="Audio MIME type for VOICE messages",
    )

    file_name = models.CharField(
        max_length=255,
        blank=True,
        default="",
        help_text="Original file name for FILE_URL messages",
    )

    file_type = models.CharField(
        max_length=100,
        blank=True,
        default="",
        help_text="File MIME type for FILE_URL messages",
    )

    created_at = models.DateTimeField(
        auto_now_add=True,
        db_index=True,
        help_text="Server timestamp; history is ordered by this field",
    )

    class Meta:
        db_table = "chat_message"
        ordering = ["created_at", "id"]
        indexes = [
            models.Index(
                fields=["conversation", "created_at"],
                name="chat_msg_conv_created_idx",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.message_type} from {self.sender} in {self.conversation_id}"

    @property
    def audio_base64(self) -> str:
        """Audio bytes as standard base64, empty when there is no audio."""
        if not self.audio_data:
            return ""
        return base64.b64encode(bytes(self.audio_data)).decode("ascii")
