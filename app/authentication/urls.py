"""
URL configuration for the authentication app.

Included under /api/v1/auth/ in config/urls.py.
"""

from django.urls import path

from authentication.views import (
    LoginView,
    LogoutView,
    MeView,
    RefreshView,
    RegisterView,
    SessionView,
)

app_name = "authentication"

urlpatterns = [
    path("register/", RegisterView.as_view(), name="register"),
    path("login/", LoginView.as_view(), name="login"),
    path("token/refresh/", RefreshView.as_view(), name="token-refresh"),
    path("logout/", LogoutView.as_view(), name="logout"),
    path("session/", SessionView.as_view(), name="session"),
    path("me/", MeView.as_view(), name="me"),
]
