"""
Service layer primitives shared by every app.

- ServiceResult: explicit success/failure value returned by service methods
- BaseService: per-class logger, transaction helper and exception conversion

Services keep business rules out of views and consumers. Expected failures
(unknown counterpart, duplicate conversation, caller not a participant) come
back as ``ServiceResult.failure(...)`` with a machine-readable ``error_code``;
bugs and infrastructure problems are logged and converted with
``BaseService.handle_exception``.

Usage:
    from core.services import BaseService, ServiceResult

    class ConversationService(BaseService):
        @classmethod
        def create(cls, initiator, name, counterpart_username):
            counterpart = User.objects.filter(username=counterpart_username).first()
            if counterpart is None:
                return ServiceResult.failure(
                    f"Receiver user not found: {counterpart_username}",
                    error_code="COUNTERPART_NOT_FOUND",
                )
            with cls.atomic():
                conversation = Conversation.objects.create(...)
            return ServiceResult.success(conversation)
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Generic, TypeVar

from django.db import transaction

if TYPE_CHECKING:
    from collections.abc import Generator
    from typing import Any

T = TypeVar("T")


@dataclass
class ServiceResult(Generic[T]):
    """
    Result wrapper for service operations.

    Attributes:
        success: Whether the operation succeeded
        data: Result payload when successful
        error: Human-readable message when failed
        error_code: Machine-readable code, mapped to HTTP status by views
        errors: Optional field-level errors
    """

    success: bool
    data: T | None = None
    error: str | None = None
    error_code: str | None = None
    errors: dict[str, list[str]] | None = field(default=None)

    @classmethod
    def success(cls, data: T) -> ServiceResult[T]:
        return cls(success=True, data=data)

    ok = success

    @classmethod
    def failure(
        cls,
        error: str,
        error_code: str | None = None,
        errors: dict[str, list[str]] | None = None,
    ) -> ServiceResult[T]:
        return cls(success=False, error=error, error_code=error_code, errors=errors)

    @classmethod
    def from_exception(
        cls, exc: Exception, error_code: str | None = None
    ) -> ServiceResult[T]:
        """
        Build a failure from a caught exception.

        Application errors carry their own code; anything else falls back to
        the exception class name.
        """
        code = error_code or getattr(exc, "error_code", None)
        message = getattr(exc, "message", None) or str(exc)
        return cls(
            success=False,
            error=message,
            error_code=code or exc.__class__.__name__.upper(),
        )

    def to_response(self) -> dict[str, Any]:
        """Error body in the shape every view returns: error + error_code."""
        if self.success:
            return {"success": True, "data": self.data}

        response: dict[str, Any] = {"error": self.error}
        if self.error_code:
            response["error_code"] = self.error_code
        if self.errors:
            response["errors"] = self.errors
        return response

    def __bool__(self) -> bool:
        return self.success


class BaseService:
    """
    Base class for stateless service classes.

    Subclasses expose classmethods only. Each gets a logger named after
    the concrete class so log lines can be filtered per service.
    """

    @classmethod
    def get_logger(cls) -> logging.Logger:
        return logging.getLogger(f"{cls.__module__}.{cls.__name__}")

    @classmethod
    @contextmanager
    def atomic(cls) -> Generator[None, None, None]:
        """Wrap the block in ``transaction.atomic()``."""
        with transaction.atomic():
            yield

    @classmethod
    def handle_exception(
        cls,
        exc: Exception,
        context: str = "",
        error_code: str | None = None,
        log_level: int = logging.ERROR,
    ) -> ServiceResult:
        """
        Log an exception with traceback and convert it to a failure.

        Example:
            try:
                message = Message.objects.create(...)
            except DatabaseError as e:
                return cls.handle_exception(e, "persist message", "PERSISTENCE_FAILED")
        """
        message = f"{context}: {exc}" if context else str(exc)
        cls.get_logger().log(log_level, message, exc_info=True)
        return ServiceResult.from_exception(exc, error_code)
