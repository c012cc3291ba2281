"""
Attachment validators.

Provides content-based MIME type detection and validation using python-magic,
so the type reported for an upload comes from its bytes rather than the
client's Content-Type header or file extension.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import BinaryIO

from django.conf import settings


# =============================================================================
# Configuration
# =============================================================================

ALLOWED_MIME_TYPES: dict[str, set[str]] = {
    "image": {
        "image/jpeg",
        "image/png",
        "image/gif",
        "image/webp",
    },
    "audio": {
        "audio/mpeg",
        "audio/ogg",
        "audio/wav",
    },
    "document": {
        "application/pdf",
        "application/msword",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        "text/plain",
    },
}

# libmagic spellings that mean an allowed type
MIME_ALIASES: dict[str, str] = {
    "audio/x-wav": "audio/wav",
    "audio/vnd.wave": "audio/wav",
    "audio/mp3": "audio/mpeg",
}

UNSAFE_FILE_NAME_CHARS = re.compile(r"[^a-zA-Z0-9.\-_]")

DEFAULT_FILE_NAME = "upload"


# =============================================================================
# Data Classes
# =============================================================================


@dataclass
class ValidationResult:
    """Result of file validation.

    Attributes:
        is_valid: Whether the file passed validation.
        media_type: Category of the file (image, audio, document).
        mime_type: Detected MIME type of the file.
        size: File size in bytes.
        error: Human-readable error message if validation failed.
        error_code: Machine-readable error code if validation failed.
    """

    is_valid: bool
    media_type: str | None = None
    mime_type: str | None = None
    size: int = 0
    error: str | None = None
    error_code: str | None = None


# =============================================================================
# Helpers
# =============================================================================


def sanitize_file_name(file_name: str | None) -> str:
    """Replace anything outside ``[a-zA-Z0-9.-_]`` with an underscore.

    Example:
        sanitize_file_name("my report (v2).pdf") -> "my_report__v2_.pdf"
    """
    if not file_name:
        return DEFAULT_FILE_NAME
    return UNSAFE_FILE_NAME_CHARS.sub("_", file_name)


# =============================================================================
# Validator Class
# =============================================================================


class MediaValidator:
    """Validates attachments using content-based MIME detection.

    Example:
        validator = MediaValidator()
        result = validator.validate(uploaded_file)
        if result.is_valid:
            print(f"File type: {result.media_type}, MIME: {result.mime_type}")
        else:
            print(f"Validation failed: {result.error}")
    """

    def __init__(
        self,
        allowed_mime_types: dict[str, set[str]] | None = None,
        max_size: int | None = None,
    ) -> None:
        self._allowed_mime_types = allowed_mime_types or ALLOWED_MIME_TYPES
        self._max_size = max_size or settings.MEDIA_MAX_UPLOAD_SIZE
        self._magic = None

    def validate(self, file: BinaryIO) -> ValidationResult:
        """Validate a file upload.

        Performs the following checks in order:
        1. Empty file check
        2. Size limit check
        3. MIME type detection from content
        4. MIME type allowlist check

        Args:
            file: File-like object to validate. Must support read() and seek().
        """
        file.seek(0, 2)
        file_size = file.tell()
        file.seek(0)

        if file_size == 0:
            return ValidationResult(
                is_valid=False,
                error="No file provided.",
                error_code="EMPTY_FILE",
            )

        if file_size > self._max_size:
            limit_mb = self._max_size // (1024 * 1024)
            return ValidationResult(
                is_valid=False,
                size=file_size,
                error=f"File size exceeds {limit_mb}MB limit",
                error_code="FILE_TOO_LARGE",
            )

        mime_type = self._detect_mime_type(file)
        if mime_type is None:
            return ValidationResult(
                is_valid=False,
                size=file_size,
                error="Could not detect file type",
                error_code="MIME_TYPE_NOT_ALLOWED",
            )
        mime_type = MIME_ALIASES.get(mime_type, mime_type)

        media_type = self._get_media_type(mime_type)
        if media_type is None:
            return ValidationResult(
                is_valid=False,
                mime_type=mime_type,
                size=file_size,
                error=f"Invalid file type: {mime_type}",
                error_code="MIME_TYPE_NOT_ALLOWED",
            )

        return ValidationResult(
            is_valid=True,
            media_type=media_type,
            mime_type=mime_type,
            size=file_size,
        )

    def _detect_mime_type(self, file: BinaryIO) -> str | None:
        """Detect MIME type from the first 2048 bytes using libmagic."""
        file.seek(0)
        header = file.read(2048)
        file.seek(0)

        if not header:
            return None

        if self._magic is None:
            import magic

            self._magic = magic.Magic(mime=True)

        try:
            return self._magic.from_buffer(header)
        except Exception:
            return None

    def _get_media_type(self, mime_type: str) -> str | None:
        for media_type, allowed_types in self._allowed_mime_types.items():
            if mime_type in allowed_types:
                return media_type
        return None
