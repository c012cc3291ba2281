"""
Typed message bodies for inbound chat payloads.

Each variant validates itself on construction and raises
``core.exceptions.ValidationError`` with a specific error code, so an
instance that exists is always storable:

    TextPayload      EMPTY_CONTENT, CONTENT_TOO_LONG
    VoicePayload     EMPTY_CONTENT, INVALID_ENCODING, VOICE_TOO_LARGE
    FileUrlPayload   MISSING_FIELD, INVALID_URL

``parse_payload`` picks the variant from the wire ``type`` tag
(UNKNOWN_TYPE for anything else).

Usage:
    body = parse_payload({"type": "TEXT", "sender": "alice", "content": "hi"})
    Message.objects.create(conversation=c, sender="alice", **body.to_model_fields())
"""

from __future__ import annotations

import base64
import binascii
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, ClassVar, Union

from django.core.exceptions import ValidationError as DjangoValidationError
from django.core.validators import URLValidator

from chat.constants import MESSAGE_CONFIG
from chat.models import MessageType
from core.exceptions import ValidationError

_url_validator = URLValidator(schemes=["http", "https"])


def _is_blank(value: Any) -> bool:
    return value is None or not isinstance(value, str) or not value.strip()


@dataclass(frozen=True)
class TextPayload:
    content: str

    message_type: ClassVar[str] = MessageType.TEXT

    def __post_init__(self):
        if _is_blank(self.content):
            raise ValidationError(
                "Message content cannot be empty", error_code="EMPTY_CONTENT"
            )
        if len(self.content) > MESSAGE_CONFIG.MAX_CONTENT_LENGTH:
            raise ValidationError(
                f"Message content exceeds {MESSAGE_CONFIG.MAX_CONTENT_LENGTH} characters",
                error_code="CONTENT_TOO_LONG",
            )

    def to_model_fields(self) -> dict[str, Any]:
        return {"message_type": self.message_type, "content": self.content}


@dataclass(frozen=True)
class VoicePayload:
    """
    Voice note. ``content`` is standard base64; the decoded bytes are
    kept in ``audio_data``.
    """

    content: str
    audio_mime_type: str = ""
    audio_data: bytes = field(init=False, repr=False)

    message_type: ClassVar[str] = MessageType.VOICE

    def __post_init__(self):
        if _is_blank(self.content):
            raise ValidationError(
                "Voice message has no audio data", error_code="EMPTY_CONTENT"
            )
        try:
            decoded = base64.b64decode(self.content, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise ValidationError(
                "Voice message audio is not valid base64",
                error_code="INVALID_ENCODING",
                details={"reason": str(exc)},
            ) from exc
        if len(decoded) > MESSAGE_CONFIG.MAX_VOICE_BYTES:
            raise ValidationError(
                "Voice message is too large", error_code="VOICE_TOO_LARGE"
            )
        mime_type = self.audio_mime_type if isinstance(self.audio_mime_type, str) else ""
        mime_type = mime_type.strip()[: MESSAGE_CONFIG.MAX_MIME_TYPE_LENGTH]
        object.__setattr__(self, "audio_mime_type", mime_type)
        object.__setattr__(self, "audio_data", decoded)

    def to_model_fields(self) -> dict[str, Any]:
        return {
            "message_type": self.message_type,
            "content": "",
            "audio_data": self.audio_data,
            "audio_mime_type": self.audio_mime_type,
        }


@dataclass(frozen=True)
class FileUrlPayload:
    """Link to an uploaded attachment; all three fields are required."""

    content: str
    file_name: str
    file_type: str

    message_type: ClassVar[str] = MessageType.FILE_URL

    def __post_init__(self):
        missing = [
            name
            for name, value in (
                ("content", self.content),
                ("fileName", self.file_name),
                ("fileType", self.file_type),
            )
            if _is_blank(value)
        ]
        if missing:
            raise ValidationError(
                f"File message is missing: {', '.join(missing)}",
                error_code="MISSING_FIELD",
                details={"fields": missing},
            )
        if len(self.file_name) > MESSAGE_CONFIG.MAX_FILE_NAME_LENGTH or len(
            self.file_type
        ) > MESSAGE_CONFIG.MAX_FILE_TYPE_LENGTH:
            raise ValidationError(
                "File name or type is too long", error_code="FIELD_TOO_LONG"
            )
        if len(self.content) > MESSAGE_CONFIG.MAX_URL_LENGTH:
            raise ValidationError("File URL is too long", error_code="INVALID_URL")
        try:
            _url_validator(self.content.strip())
        except DjangoValidationError as exc:
            raise ValidationError(
                "File URL is not a valid URL", error_code="INVALID_URL"
            ) from exc

    def to_model_fields(self) -> dict[str, Any]:
        return {
            "message_type": self.message_type,
            "content": self.content.strip(),
            "file_name": self.file_name,
            "file_type": self.file_type,
        }


MessagePayload = Union[TextPayload, VoicePayload, FileUrlPayload]


def parse_payload(data: Mapping[str, Any]) -> MessagePayload:
    """
    Build the variant named by ``data["type"]``.

    Raises:
        ValidationError: Unknown type, or the variant rejected its fields
    """
    message_type = data.get("type")

    if message_type == MessageType.TEXT:
        return TextPayload(content=data.get("content"))
    if message_type == MessageType.VOICE:
        return VoicePayload(
            content=data.get("content"),
            audio_mime_type=data.get("audioMimeType") or "",
        )
    if message_type == MessageType.FILE_URL:
        return FileUrlPayload(
            content=data.get("content"),
            file_name=data.get("fileName"),
            file_type=data.get("fileType"),
        )

    raise ValidationError(
        f"Unsupported message type: {message_type}",
        error_code="UNKNOWN_TYPE",
    )
