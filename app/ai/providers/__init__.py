"""
AI provider implementations.

This package contains provider-specific implementations:
- base.py: BaseProvider protocol definition
- gemini.py: Google Gemini implementation

Provider Selection:
    Providers are selected by type string (e.g., "gemini").
    Use get_provider() factory function; with no argument it returns
    settings.AI_DEFAULT_PROVIDER.

Usage:
    from ai.providers import get_provider

    provider = get_provider("gemini")
    response = provider.complete(prompt="Hello")

Adding New Providers:
    1. Create new file (e.g., openai.py)
    2. Implement BaseProvider protocol
    3. Register in PROVIDERS dict below
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from django.conf import settings

from .gemini import GeminiProvider

if TYPE_CHECKING:
    from .base import BaseProvider

# Maps provider type string to provider class
PROVIDERS: dict[str, type] = {
    "gemini": GeminiProvider,
}


def get_provider(provider_type: str | None = None, **kwargs) -> BaseProvider:
    """
    Get provider instance by type.

    Raises:
        ValueError: If provider type unknown
    """
    provider_type = provider_type or settings.AI_DEFAULT_PROVIDER
    provider_class = PROVIDERS.get(provider_type)
    if not provider_class:
        raise ValueError(f"Unknown provider type: {provider_type}")
    return provider_class(**kwargs)


def list_providers() -> list[str]:
    """Get list of available provider types."""
    return list(PROVIDERS.keys())
