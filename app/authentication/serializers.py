"""
Authentication serializers.

- UserSerializer: Public user representation
- RegisterSerializer: Username/password sign-up
- LoginSerializer: simplejwt token pair plus the user
- LogoutSerializer: Refresh token to blacklist
- SessionSerializer: Logged-in state (schema only)
"""

from django.contrib.auth import password_validation
from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import serializers
from rest_framework_simplejwt.serializers import TokenObtainPairSerializer

from authentication.models import (
    User,
    validate_username_format,
    validate_username_not_reserved,
)


class UserSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ["id", "username", "date_joined"]
        read_only_fields = fields


class RegisterSerializer(serializers.Serializer):
    """
    Serializer for user registration.

    Uniqueness is checked by AuthService so the duplicate case carries
    its own error code.
    """

    username = serializers.CharField(
        max_length=150,
        validators=[validate_username_format, validate_username_not_reserved],
    )
    password = serializers.CharField(
        write_only=True,
        min_length=8,
        style={"input_type": "password"},
        help_text="Password must be at least 8 characters.",
    )

    def validate(self, attrs):
        candidate = User(username=attrs["username"])
        try:
            password_validation.validate_password(attrs["password"], user=candidate)
        except DjangoValidationError as e:
            raise serializers.ValidationError({"password": list(e.messages)})
        return attrs


class LoginSerializer(TokenObtainPairSerializer):
    """Token pair response extended with the authenticated user."""

    def validate(self, attrs):
        data = super().validate(attrs)
        data["user"] = UserSerializer(self.user).data
        return data


class LogoutSerializer(serializers.Serializer):
    refresh = serializers.CharField(help_text="Refresh token to invalidate")


class SessionSerializer(serializers.Serializer):
    logged_in = serializers.BooleanField()
    username = serializers.CharField(allow_null=True)
