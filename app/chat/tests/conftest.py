"""
Test configuration and fixtures for chat tests.

This module provides:
- Users in each role relative to a conversation
- Conversation fixtures (human pair and AI-enabled)
- API client helpers for authenticated requests
- A recording broadcaster for dispatcher tests

Usage:
    def test_example(conversation, initiator_client):
        response = initiator_client.get(f"/api/v1/chat/conversations/{conversation.id}/messages/")
        assert response.status_code == 200
"""

import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from authentication.tests.factories import UserFactory
from chat.tests.factories import ConversationFactory


# =============================================================================
# User Fixtures
# =============================================================================


@pytest.fixture
def initiator(db):
    """User who created the conversation."""
    return UserFactory(username="alice")


@pytest.fixture
def counterpart(db):
    """The other participant."""
    return UserFactory(username="bob")


@pytest.fixture
def outsider(db):
    """A user with no part in the conversation."""
    return UserFactory(username="mallory")


# =============================================================================
# Conversation Fixtures
# =============================================================================


@pytest.fixture
def conversation(initiator, counterpart):
    return ConversationFactory(
        name="Alice and Bob",
        initiator=initiator,
        counterpart=counterpart,
    )


@pytest.fixture
def ai_conversation(initiator, bot_user):
    return ConversationFactory(
        name="Gemini AI",
        initiator=initiator,
        counterpart=bot_user,
        is_ai_enabled=True,
    )


# =============================================================================
# API Client Fixtures
# =============================================================================


def _client_for(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {refresh.access_token}")
    return client


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def initiator_client(initiator):
    return _client_for(initiator)


@pytest.fixture
def counterpart_client(counterpart):
    return _client_for(counterpart)


@pytest.fixture
def outsider_client(outsider):
    return _client_for(outsider)


@pytest.fixture
def access_token_for():
    """Factory returning a JWT access token string for a user."""

    def _token(user):
        return str(RefreshToken.for_user(user).access_token)

    return _token


# =============================================================================
# Broadcast Fixtures
# =============================================================================


class RecordingBroadcaster:
    """Stands in for BroadcastChannel; remembers what was published."""

    def __init__(self):
        self.published = []

    def publish_sync(self, topic, payload):
        self.published.append((topic, payload))


@pytest.fixture
def broadcaster():
    return RecordingBroadcaster()
