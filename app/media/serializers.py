"""
Serializers for attachment uploads.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rest_framework import serializers

from media.validators import MediaValidator

if TYPE_CHECKING:
    from django.core.files.uploadedfile import UploadedFile


class AttachmentUploadSerializer(serializers.Serializer):
    """
    Multipart upload of one attachment.

    After is_valid(), ``validation_result`` holds the detected MIME type
    and size.
    """

    file = serializers.FileField(
        required=True,
        allow_empty_file=True,
        help_text="The file to upload",
    )

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._validator = MediaValidator()
        self.validation_result = None

    def validate_file(self, file: "UploadedFile") -> "UploadedFile":
        result = self._validator.validate(file)
        if not result.is_valid:
            raise serializers.ValidationError(result.error, code=result.error_code)
        self.validation_result = result
        return file


class AttachmentSerializer(serializers.Serializer):
    """Response body of a successful upload."""

    message = serializers.CharField()
    fileName = serializers.CharField()
    fileUrl = serializers.URLField()
    fileType = serializers.CharField()
    fileSize = serializers.IntegerField()
    uploadedBy = serializers.CharField()
