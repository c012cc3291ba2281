"""
Attachment upload service.

Files are stored on Cloudinary; the chat only keeps the returned URL in a
FILE_URL message, so nothing is written to the local database here.

Configuration:
    CLOUDINARY_CLOUD_NAME, CLOUDINARY_API_KEY, CLOUDINARY_API_SECRET
    CLOUDINARY_UPLOAD_FOLDER: Folder for chat uploads (default "chat_uploads")

Error codes:
    UPLOAD_NOT_CONFIGURED: Cloudinary credentials missing
    UPLOAD_FAILED: Cloudinary rejected the upload or returned no URL
    DELETE_FAILED: Cloudinary rejected the delete
    INVALID_REQUEST: Missing public id
"""

from __future__ import annotations

from typing import Any, BinaryIO

import cloudinary
import cloudinary.uploader
from django.conf import settings

from core.services import BaseService, ServiceResult


class AttachmentUploadService(BaseService):
    """
    Upload chat attachments to Cloudinary.

    Usage:
        result = AttachmentUploadService.upload(file, file_name="a.pdf", uploaded_by="alice")
        if result:
            url = result.data["secure_url"]
    """

    @classmethod
    def is_configured(cls) -> bool:
        return all(
            (
                settings.CLOUDINARY_CLOUD_NAME,
                settings.CLOUDINARY_API_KEY,
                settings.CLOUDINARY_API_SECRET,
            )
        )

    @classmethod
    def configure(cls) -> None:
        cloudinary.config(
            cloud_name=settings.CLOUDINARY_CLOUD_NAME,
            api_key=settings.CLOUDINARY_API_KEY,
            api_secret=settings.CLOUDINARY_API_SECRET,
            secure=True,
        )

    @classmethod
    def upload(
        cls,
        file: BinaryIO,
        file_name: str,
        uploaded_by: str,
    ) -> ServiceResult[dict[str, Any]]:
        """
        Upload one file.

        Returns:
            ServiceResult with secure_url, public_id, resource_type, format
            and bytes from the Cloudinary response.
        """
        logger = cls.get_logger()

        if not cls.is_configured():
            logger.error("Cloudinary credentials are not configured")
            return ServiceResult.failure(
                "File storage is not configured.",
                error_code="UPLOAD_NOT_CONFIGURED",
            )

        cls.configure()
        logger.info(f"Uploading '{file_name}' to Cloudinary for {uploaded_by}")

        file.seek(0)
        try:
            response = cloudinary.uploader.upload(
                file,
                resource_type="auto",
                folder=settings.CLOUDINARY_UPLOAD_FOLDER,
                filename=file_name,
                use_filename=True,
                unique_filename=False,
            )
        except Exception as e:
            return cls.handle_exception(
                e,
                f"Cloudinary upload failed for '{file_name}' by {uploaded_by}",
                error_code="UPLOAD_FAILED",
            )

        secure_url = response.get("secure_url")
        if not secure_url:
            logger.error(
                f"Cloudinary upload for '{file_name}' returned no secure_url: {response}"
            )
            return ServiceResult.failure(
                "File upload failed: Could not retrieve file URL.",
                error_code="UPLOAD_FAILED",
            )

        logger.info(
            f"Uploaded '{file_name}' to {secure_url} "
            f"(public_id={response.get('public_id')}, bytes={response.get('bytes')})"
        )
        return ServiceResult.success(
            {
                "secure_url": secure_url,
                "public_id": response.get("public_id", ""),
                "resource_type": response.get("resource_type", ""),
                "format": response.get("format") or "",
                "bytes": response.get("bytes") or 0,
            }
        )

    @classmethod
    def delete(
        cls,
        public_id: str,
        resource_type: str | None = None,
    ) -> ServiceResult[str]:
        """
        Delete an uploaded file. ``resource_type`` defaults to "image".

        Returns:
            ServiceResult with Cloudinary's result string ("ok", "not found")
        """
        if not public_id or not public_id.strip():
            return ServiceResult.failure(
                "A public id is required.", error_code="INVALID_REQUEST"
            )
        if not cls.is_configured():
            return ServiceResult.failure(
                "File storage is not configured.",
                error_code="UPLOAD_NOT_CONFIGURED",
            )

        cls.configure()
        resource_type = resource_type or "image"
        try:
            response = cloudinary.uploader.destroy(public_id, resource_type=resource_type)
        except Exception as e:
            return cls.handle_exception(
                e,
                f"Cloudinary delete failed for {public_id}",
                error_code="DELETE_FAILED",
            )

        outcome = response.get("result", "")
        cls.get_logger().info(f"Cloudinary delete of {public_id}: {outcome}")
        return ServiceResult.success(outcome)
