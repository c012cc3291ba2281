"""
Base provider protocol definition.

Defines the interface that text-generation providers implement.
Uses Python Protocol for structural subtyping.

Usage:
    from ai.providers.base import BaseProvider

    class MyProvider(BaseProvider):
        def complete(self, prompt, **kwargs):
            ...
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class BaseProvider(Protocol):
    """
    Protocol for AI provider implementations.

    Response Format:
        complete() returns:
        {
            "content": str,  # Response text, may be blank
            "model": str,  # Model used
            "finish_reason": str,  # "STOP", "MAX_TOKENS", etc.
        }

    Failures (timeout, HTTP error, malformed body) raise
    core.exceptions.ExternalServiceError.
    """

    def complete(
        self,
        prompt: str,
        model: str | None = None,
        **kwargs: Any,
    ) -> dict:
        """
        Generate a single-turn completion.

        Args:
            prompt: User prompt
            model: Model to use
            **kwargs: Provider-specific options

        Returns:
            Response dict with content, model, finish_reason
        """
        ...


class BaseProviderImpl:
    """
    Base implementation with shared functionality.

    Attributes:
        api_key: API key for authentication
        base_url: API endpoint root
        default_model: Default model if not specified
        timeout: Seconds to wait for the upstream response
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        default_model: str | None = None,
        timeout: float = 30.0,
    ):
        self.api_key = api_key
        self.base_url = base_url
        self.default_model = default_model
        self.timeout = timeout

    def _get_model(self, model: str | None) -> str:
        """Get model, using default if not specified."""
        return model or self.default_model or ""
