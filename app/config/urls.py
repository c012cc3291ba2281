"""
Root URL configuration.

URL Structure:
    /                                  - ReDoc API documentation
    /schema/                           - OpenAPI schema
    /admin/                            - Django admin
    /health/                           - Health check
    /api/v1/auth/
        register/                      - Create an account
        login/                         - Obtain JWT access/refresh pair
        token/refresh/                 - Refresh access token
        logout/                        - Blacklist refresh token
        session/                       - Is the caller logged in?
        me/                            - Current user
    /api/v1/chat/
        conversations/                 - List / create conversations
        conversations/{id}/            - Retrieve / delete a conversation
        conversations/{id}/messages/   - Message history (ascending)
    /api/v1/media/
        upload/                        - Upload an attachment

WebSocket routes live in ``chat.routing``.
"""

from django.contrib import admin
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView, SpectacularRedocView

from core.views import health_check

api_v1_patterns = [
    path("auth/", include("authentication.urls")),
    path("chat/", include("chat.urls")),
    path("media/", include("media.urls")),
]

urlpatterns = [
    path("", SpectacularRedocView.as_view(url_name="schema"), name="redoc"),
    path("schema/", SpectacularAPIView.as_view(), name="schema"),
    path("admin/", admin.site.urls),
    path("health/", health_check, name="health_check"),
    path("api/v1/", include(api_v1_patterns)),
]

admin.site.site_header = "Chat Admin"
admin.site.site_title = "Chat Admin"
admin.site.index_title = "Users, conversations and messages"
