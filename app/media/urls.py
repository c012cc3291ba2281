"""
URL configuration for media app.

Media - Upload:
    POST /upload/    - Upload a chat attachment
"""

from django.urls import path

from media.views import AttachmentUploadView

app_name = "media"

urlpatterns = [
    path("upload/", AttachmentUploadView.as_view(), name="upload"),
]
