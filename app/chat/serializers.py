"""
Serializers for the chat API.

Serializer Hierarchy:
    ConversationSerializer: Conversation as listed to either participant
    ConversationCreateSerializer: Request body for creating a conversation
    WireMessageSerializer: The transport projection of a stored Message,
        used both for live broadcast and for history

Design Decisions:
    - Wire messages use camelCase keys, matching the real-time payload
      clients send
    - Keys that do not apply to the message type are omitted, not nulled
    - VOICE audio goes out as base64 in ``content``
"""

from __future__ import annotations

from typing import Any

from rest_framework import serializers

from chat.models import Conversation, Message, MessageType

# Keys dropped from the wire message per type
_IRRELEVANT_FIELDS: dict[str, tuple[str, ...]] = {
    MessageType.TEXT: ("fileName", "fileType", "audioMimeType"),
    MessageType.VOICE: ("fileName", "fileType"),
    MessageType.FILE_URL: ("audioMimeType",),
}


class WireMessageSerializer(serializers.ModelSerializer):
    """
    Externally visible shape of a persisted message.

    Example (TEXT):
        {"id": 7, "conversationId": 42, "sender": "alice", "type": "TEXT",
         "content": "hello", "timestamp": "2026-01-01T12:00:00Z"}
    """

    conversationId = serializers.IntegerField(source="conversation_id")
    type = serializers.CharField(source="message_type")
    content = serializers.SerializerMethodField()
    fileName = serializers.CharField(source="file_name")
    fileType = serializers.CharField(source="file_type")
    audioMimeType = serializers.CharField(source="audio_mime_type")
    timestamp = serializers.DateTimeField(source="created_at")

    class Meta:
        model = Message
        fields = [
            "id",
            "conversationId",
            "sender",
            "type",
            "content",
            "fileName",
            "fileType",
            "audioMimeType",
            "timestamp",
        ]
        read_only_fields = fields

    def get_content(self, obj: Message) -> str:
        if obj.message_type == MessageType.VOICE:
            return obj.audio_base64
        return obj.content

    def to_representation(self, instance: Message) -> dict[str, Any]:
        data = super().to_representation(instance)
        for key in _IRRELEVANT_FIELDS.get(instance.message_type, ()):
            data.pop(key, None)
        if instance.message_type == MessageType.VOICE and not data.get("audioMimeType"):
            data.pop("audioMimeType", None)
        return data


def to_wire_message(message: Message) -> dict[str, Any]:
    """Plain-dict wire projection, safe to put on the channel layer."""
    return dict(WireMessageSerializer(message).data)


class ConversationSerializer(serializers.ModelSerializer):
    """Conversation with both participants shown by username."""

    initiator = serializers.CharField(source="initiator.username", read_only=True)
    counterpart = serializers.CharField(source="counterpart.username", read_only=True)

    class Meta:
        model = Conversation
        fields = [
            "id",
            "name",
            "initiator",
            "counterpart",
            "counterpart_name",
            "is_ai_enabled",
            "created_at",
        ]
        read_only_fields = fields


class ConversationCreateSerializer(serializers.Serializer):
    name = serializers.CharField(
        max_length=255,
        help_text="Display name for the conversation",
    )
    counterpart_username = serializers.CharField(
        max_length=150,
        help_text="Username of the other participant",
    )

