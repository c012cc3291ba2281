"""
Fixtures for attachment upload tests.
"""

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from authentication.tests.factories import UserFactory

PDF_BYTES = b"%PDF-1.4\n1 0 obj\n<< /Type /Catalog >>\nendobj\ntrailer\n%%EOF\n"


@pytest.fixture
def cloudinary_settings(settings):
    settings.CLOUDINARY_CLOUD_NAME = "demo-cloud"
    settings.CLOUDINARY_API_KEY = "123456"
    settings.CLOUDINARY_API_SECRET = "secret"
    settings.CLOUDINARY_UPLOAD_FOLDER = "chat_uploads"
    return settings


@pytest.fixture
def uploader(db):
    return UserFactory(username="alice")


@pytest.fixture
def uploader_client(uploader):
    client = APIClient()
    refresh = RefreshToken.for_user(uploader)
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {refresh.access_token}")
    return client


@pytest.fixture
def pdf_file():
    return SimpleUploadedFile(
        "quarterly report.pdf", PDF_BYTES, content_type="application/pdf"
    )


@pytest.fixture
def cloudinary_response():
    return {
        "secure_url": "https://res.cloudinary.com/demo-cloud/raw/upload/v1/chat_uploads/quarterly_report.pdf",
        "public_id": "chat_uploads/quarterly_report.pdf",
        "resource_type": "raw",
        "format": "pdf",
        "bytes": len(PDF_BYTES),
    }


@pytest.fixture
def api_client():
    return APIClient()
