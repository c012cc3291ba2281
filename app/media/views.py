"""
API views for attachment uploads.

Provides:
- AttachmentUploadView: Upload a file and get back the URL to send in a
  FILE_URL or VOICE chat message
"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from media.serializers import AttachmentSerializer, AttachmentUploadSerializer
from media.services import AttachmentUploadService
from media.validators import sanitize_file_name

ERROR_STATUS = {
    "UPLOAD_FAILED": status.HTTP_502_BAD_GATEWAY,
    "UPLOAD_NOT_CONFIGURED": status.HTTP_503_SERVICE_UNAVAILABLE,
}


class AttachmentUploadView(APIView):
    """
    Upload a chat attachment.

    POST /api/v1/media/upload/

    Request:
        Content-Type: multipart/form-data
        - file (required): The file to upload

    Response:
        201 Created: {message, fileName, fileUrl, fileType, fileSize, uploadedBy}
        400 Bad Request: Empty file, disallowed type or too large
        401 Unauthorized: Not authenticated
        502 Bad Gateway: Cloudinary rejected the upload
    """

    permission_classes = [IsAuthenticated]
    parser_classes = [MultiPartParser, FormParser]

    @extend_schema(
        operation_id="upload_attachment",
        summary="Upload attachment",
        description=(
            "Upload an image, audio clip or document. The MIME type is detected "
            "from the file content and must be on the allow list."
        ),
        request=AttachmentUploadSerializer,
        responses={
            201: AttachmentSerializer,
            400: OpenApiResponse(description="Empty file, disallowed type or too large"),
            401: OpenApiResponse(description="Authentication required"),
            502: OpenApiResponse(description="Upstream storage failure"),
        },
        tags=["Media - Upload"],
    )
    def post(self, request):
        serializer = AttachmentUploadSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        upload = serializer.validated_data["file"]
        file_name = sanitize_file_name(upload.name)
        detected = serializer.validation_result

        result = AttachmentUploadService.upload(
            upload,
            file_name=file_name,
            uploaded_by=request.user.username,
        )
        if not result:
            return Response(
                result.to_response(),
                status=ERROR_STATUS.get(result.error_code, status.HTTP_502_BAD_GATEWAY),
            )

        return Response(
            {
                "message": "File uploaded successfully",
                "fileName": file_name,
                "fileUrl": result.data["secure_url"],
                "fileType": detected.mime_type,
                "fileSize": result.data["bytes"] or detected.size,
                "uploadedBy": request.user.username,
            },
            status=status.HTTP_201_CREATED,
        )
