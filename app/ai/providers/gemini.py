"""
Google Gemini provider implementation.

Calls the ``generateContent`` REST endpoint with a single user turn.

Configuration:
    GEMINI_API_KEY, GEMINI_MODEL, GEMINI_BASE_URL, GEMINI_TIMEOUT_SECONDS

Usage:
    from ai.providers.gemini import GeminiProvider

    provider = GeminiProvider()
    response = provider.complete(prompt="Hello")
    print(response["content"])
"""

from __future__ import annotations

import logging
from typing import Any

import requests
from django.conf import settings

from core.exceptions import ExternalServiceError

from .base import BaseProviderImpl

logger = logging.getLogger(__name__)


class GeminiProvider(BaseProviderImpl):
    """
    Gemini API provider.

    Error codes (ExternalServiceError):
        GEMINI_NOT_CONFIGURED: No API key
        GEMINI_TIMEOUT: No response within the timeout
        GEMINI_UNAVAILABLE: Connection-level failure
        GEMINI_HTTP_ERROR: Non-2xx response
        GEMINI_BAD_RESPONSE: Body is not JSON or has no candidate text
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        default_model: str | None = None,
        timeout: float | None = None,
    ):
        super().__init__(
            api_key=api_key if api_key is not None else settings.GEMINI_API_KEY,
            base_url=(base_url or settings.GEMINI_BASE_URL).rstrip("/"),
            default_model=default_model or settings.GEMINI_MODEL,
            timeout=timeout if timeout is not None else settings.GEMINI_TIMEOUT_SECONDS,
        )

    def _endpoint(self, model: str) -> str:
        return f"{self.base_url}/models/{model}:generateContent"

    def _build_payload(self, prompt: str) -> dict:
        return {"contents": [{"parts": [{"text": prompt}]}]}

    def complete(
        self,
        prompt: str,
        model: str | None = None,
        **kwargs: Any,
    ) -> dict:
        if not self.api_key:
            raise ExternalServiceError(
                "Gemini API key is not configured",
                error_code="GEMINI_NOT_CONFIGURED",
                details={"service": "gemini"},
            )

        model = self._get_model(model)
        headers = {
            "Content-Type": "application/json",
            "X-goog-api-key": self.api_key,
        }

        try:
            response = requests.post(
                self._endpoint(model),
                json=self._build_payload(prompt),
                headers=headers,
                timeout=self.timeout,
            )
        except requests.Timeout as e:
            raise ExternalServiceError(
                f"Gemini request timed out after {self.timeout}s",
                error_code="GEMINI_TIMEOUT",
                details={"service": "gemini"},
            ) from e
        except requests.RequestException as e:
            raise ExternalServiceError(
                f"Gemini request failed: {e}",
                error_code="GEMINI_UNAVAILABLE",
                details={"service": "gemini"},
            ) from e

        if response.status_code >= 400:
            logger.error(
                f"Gemini returned HTTP {response.status_code}: {response.text[:500]}"
            )
            raise ExternalServiceError(
                f"Gemini returned HTTP {response.status_code}",
                error_code="GEMINI_HTTP_ERROR",
                details={"service": "gemini", "status": response.status_code},
            )

        try:
            body = response.json()
        except ValueError as e:
            raise ExternalServiceError(
                "Gemini response is not JSON",
                error_code="GEMINI_BAD_RESPONSE",
                details={"service": "gemini"},
            ) from e

        return {
            "content": self.extract_text(body),
            "model": model,
            "finish_reason": self._finish_reason(body),
        }

    @staticmethod
    def extract_text(body: Any) -> str:
        """
        Text of the first part of the first candidate.

        Raises:
            ExternalServiceError: GEMINI_BAD_RESPONSE if the path is missing
        """
        try:
            text = body["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError) as e:
            raise ExternalServiceError(
                "Gemini response has no candidate text",
                error_code="GEMINI_BAD_RESPONSE",
                details={"service": "gemini"},
            ) from e
        if not isinstance(text, str):
            raise ExternalServiceError(
                "Gemini candidate text is not a string",
                error_code="GEMINI_BAD_RESPONSE",
                details={"service": "gemini"},
            )
        return text

    @staticmethod
    def _finish_reason(body: dict) -> str:
        try:
            return body["candidates"][0].get("finishReason", "")
        except (KeyError, IndexError, AttributeError):
            return ""
