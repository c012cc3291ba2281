"""
Tests for AutoResponderService.
"""

from unittest.mock import patch

import pytest

from ai.services import APOLOGY_TEXT, AutoResponderService
from chat.constants import MESSAGE_CONFIG
from chat.models import Message, MessageType
from core.exceptions import ExternalServiceError


@pytest.mark.django_db
class TestRespond:
    def test_posts_provider_reply_as_bot(self, ai_conversation, fake_provider):
        result = AutoResponderService.respond(
            ai_conversation.id, "Hello bot", provider=fake_provider
        )

        assert result
        message = result.data
        assert message.sender == "GeminiAI"
        assert message.message_type == MessageType.TEXT
        assert message.content == "Hi there!"
        fake_provider.complete.assert_called_once_with(prompt="Hello bot")

    def test_reply_is_published(self, ai_conversation, fake_provider):
        with patch("chat.services.get_broadcast_channel") as mock_channel:
            AutoResponderService.respond(
                ai_conversation.id, "Hello bot", provider=fake_provider
            )

        topic, payload = mock_channel.return_value.publish_sync.call_args[0]
        assert topic == f"conversation/{ai_conversation.id}"
        assert payload["sender"] == "GeminiAI"
        assert payload["content"] == "Hi there!"

    def test_provider_failure_posts_apology(self, ai_conversation, fake_provider):
        fake_provider.complete.side_effect = ExternalServiceError(
            "timed out", error_code="GEMINI_TIMEOUT"
        )

        result = AutoResponderService.respond(
            ai_conversation.id, "Hello bot", provider=fake_provider
        )

        assert result.data.content == APOLOGY_TEXT
        assert Message.objects.filter(conversation=ai_conversation).count() == 1

    def test_blank_reply_posts_apology(self, ai_conversation, fake_provider):
        fake_provider.complete.return_value = {"content": "   "}

        result = AutoResponderService.respond(
            ai_conversation.id, "Hello bot", provider=fake_provider
        )

        assert result.data.content == APOLOGY_TEXT

    def test_overlong_reply_is_cut_to_message_limit(self, ai_conversation, fake_provider):
        fake_provider.complete.return_value = {"content": "x" * 10001}

        result = AutoResponderService.respond(
            ai_conversation.id, "Write me an essay", provider=fake_provider
        )

        assert result
        assert result.data.content == "x" * MESSAGE_CONFIG.MAX_CONTENT_LENGTH
        assert Message.objects.filter(
            conversation=ai_conversation, sender="GeminiAI"
        ).count() == 1

    def test_deleted_conversation_stores_nothing(self, ai_conversation, fake_provider):
        conversation_id = ai_conversation.id
        ai_conversation.delete()

        result = AutoResponderService.respond(
            conversation_id, "Hello bot", provider=fake_provider
        )

        assert result
        assert result.data is None
        fake_provider.complete.assert_not_called()
        assert not Message.objects.filter(conversation_id=conversation_id).exists()

    def test_typing_delay(self, settings, ai_conversation, fake_provider):
        settings.AI_TYPING_DELAY_SECONDS = 1.5

        with patch("ai.services.time.sleep") as mock_sleep:
            AutoResponderService.respond(
                ai_conversation.id, "Hello bot", provider=fake_provider
            )

        mock_sleep.assert_called_once_with(1.5)

    def test_no_delay_when_zero(self, ai_conversation, fake_provider):
        with patch("ai.services.time.sleep") as mock_sleep:
            AutoResponderService.respond(
                ai_conversation.id, "Hello bot", provider=fake_provider
            )

        mock_sleep.assert_not_called()


class TestGenerateReply:
    def test_strips_whitespace(self, fake_provider):
        fake_provider.complete.return_value = {"content": "  Sure!\n"}

        assert AutoResponderService.generate_reply(1, "hi", provider=fake_provider) == "Sure!"

    def test_non_string_content(self, fake_provider):
        fake_provider.complete.return_value = {"content": ["not", "text"]}

        assert AutoResponderService.generate_reply(1, "hi", provider=fake_provider) == APOLOGY_TEXT

    def test_missing_content_key(self, fake_provider):
        fake_provider.complete.return_value = {}

        assert AutoResponderService.generate_reply(1, "hi", provider=fake_provider) == APOLOGY_TEXT

    def test_unexpected_error(self, fake_provider):
        fake_provider.complete.side_effect = RuntimeError("boom")

        assert AutoResponderService.generate_reply(1, "hi", provider=fake_provider) == APOLOGY_TEXT

    def test_default_provider_without_key(self, settings):
        settings.GEMINI_API_KEY = ""

        assert AutoResponderService.generate_reply(1, "hi") == APOLOGY_TEXT
