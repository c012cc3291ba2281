"""
Fixtures for AI auto-responder tests.
"""

from unittest.mock import MagicMock

import pytest

from authentication.tests.factories import UserFactory
from chat.tests.factories import ConversationFactory


@pytest.fixture
def human(db):
    return UserFactory(username="alice")


@pytest.fixture
def ai_conversation(human, bot_user):
    return ConversationFactory(
        name="Gemini AI",
        initiator=human,
        counterpart=bot_user,
        is_ai_enabled=True,
    )


@pytest.fixture
def fake_provider():
    """Provider double answering every prompt with a fixed reply."""
    provider = MagicMock()
    provider.complete.return_value = {
        "content": "Hi there!",
        "model": "gemini-2.0-flash",
        "finish_reason": "STOP",
    }
    return provider


@pytest.fixture
def gemini_body():
    def _body(text="Hello from Gemini"):
        return {
            "candidates": [
                {
                    "content": {"parts": [{"text": text}], "role": "model"},
                    "finishReason": "STOP",
                }
            ]
        }

    return _body
