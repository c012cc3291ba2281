"""
Application exception hierarchy.

Exception Hierarchy:
    BaseApplicationError (base)
    ├── ValidationError - Malformed input (empty text, bad encoding, bad URL)
    └── ExternalServiceError - Text-generation or media host failures

Services convert these to ``ServiceResult`` failures; only constructors
and provider clients raise them directly.

Usage:
    from core.exceptions import ValidationError

    raise ValidationError("Message content cannot be empty", error_code="EMPTY_CONTENT")
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import Any


class BaseApplicationError(Exception):
    """
    Base exception for all application-specific errors.

    Attributes:
        message: Human-readable error description
        error_code: Machine-readable code for client-side handling
        details: Additional error context
    """

    default_error_code: str = "APPLICATION_ERROR"

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.error_code = error_code or self.default_error_code
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"error_code={self.error_code!r}, "
            f"details={self.details!r})"
        )


class ValidationError(BaseApplicationError):
    """
    Raised when input is malformed.

    Chat payload constructors raise this with a specific code so callers
    can tell an empty message from an undecodable one.
    """

    default_error_code: str = "VALIDATION_ERROR"


class ExternalServiceError(BaseApplicationError):
    """
    Raised when a third-party call fails (timeout, HTTP error, bad body).

    Example:
        raise ExternalServiceError(
            "Gemini request timed out",
            error_code="GEMINI_TIMEOUT",
            details={"service": "gemini"},
        )

    Note:
        Log the upstream error, but do not return its details to clients.
    """

    default_error_code: str = "EXTERNAL_SERVICE_ERROR"
