"""
Authentication views.

Endpoints:
    /api/v1/auth/register/        POST  Create an account
    /api/v1/auth/login/           POST  Username/password -> JWT pair
    /api/v1/auth/token/refresh/   POST  Refresh the access token
    /api/v1/auth/logout/          POST  Blacklist a refresh token
    /api/v1/auth/session/         GET   Logged-in state of the caller
    /api/v1/auth/me/              GET   Current user

Related files:
    - serializers.py: Request/response serialization
    - services.py: AuthService
"""

import logging

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import RefreshToken
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from authentication.serializers import (
    LoginSerializer,
    LogoutSerializer,
    RegisterSerializer,
    SessionSerializer,
    UserSerializer,
)
from authentication.services import AuthService

logger = logging.getLogger(__name__)


# =============================================================================
# Registration
# =============================================================================


@extend_schema(
    summary="Register",
    request=RegisterSerializer,
    responses={
        201: UserSerializer,
        400: OpenApiResponse(description="Invalid input or username taken"),
    },
    tags=["Auth"],
)
class RegisterView(APIView):
    """
    POST: Create an account.

    Request body:
        {"username": "alice", "password": "a-long-password"}

    Returns 201:
        {"message": "User registered successfully!", "user": {...}}
    """

    permission_classes = [AllowAny]
    authentication_classes = []

    def post(self, request):
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = AuthService.register(
            username=serializer.validated_data["username"],
            password=serializer.validated_data["password"],
        )
        if not result:
            return Response(
                result.to_response(),
                status=status.HTTP_400_BAD_REQUEST,
            )

        return Response(
            {
                "message": "User registered successfully!",
                "user": UserSerializer(result.data).data,
            },
            status=status.HTTP_201_CREATED,
        )


# =============================================================================
# Tokens
# =============================================================================


@extend_schema(summary="Log in", tags=["Auth"])
class LoginView(TokenObtainPairView):
    """
    POST: Exchange username and password for a JWT pair.

    Returns:
        {"access": "...", "refresh": "...", "user": {...}}
    """

    serializer_class = LoginSerializer


@extend_schema(summary="Refresh access token", tags=["Auth"])
class RefreshView(TokenRefreshView):
    pass


@extend_schema(
    summary="Log out",
    request=LogoutSerializer,
    responses={
        205: OpenApiResponse(description="Refresh token blacklisted"),
        400: OpenApiResponse(description="Token invalid or already blacklisted"),
    },
    tags=["Auth"],
)
class LogoutView(APIView):
    """POST: Blacklist the given refresh token."""

    permission_classes = [IsAuthenticated]

    def post(self, request):
        serializer = LogoutSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            RefreshToken(serializer.validated_data["refresh"]).blacklist()
        except TokenError as e:
            logger.info(f"Logout with unusable refresh token by user {request.user.id}: {e}")
            return Response(
                {"error": str(e), "error_code": "INVALID_TOKEN"},
                status=status.HTTP_400_BAD_REQUEST,
            )

        logger.info(f"User {request.user.id} logged out")
        return Response(status=status.HTTP_205_RESET_CONTENT)


# =============================================================================
# Current user
# =============================================================================


@extend_schema(summary="Session state", responses={200: SessionSerializer}, tags=["Auth"])
class SessionView(APIView):
    """
    GET: Whether the caller is logged in.

    Anonymous callers get {"logged_in": false, "username": null}.
    """

    permission_classes = [AllowAny]

    def get(self, request):
        user = request.user
        if user.is_authenticated:
            return Response({"logged_in": True, "username": user.username})
        return Response({"logged_in": False, "username": None})


@extend_schema(summary="Current user", responses={200: UserSerializer}, tags=["Auth"])
class MeView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        return Response(UserSerializer(request.user).data)
