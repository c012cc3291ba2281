"""
Tests for the Wire Message and conversation projections.
"""

import pytest

from chat.serializers import ConversationSerializer, to_wire_message
from chat.tests.factories import FileMessageFactory, MessageFactory, VoiceMessageFactory


@pytest.mark.django_db
class TestWireMessage:
    def test_text_message_omits_file_and_audio_keys(self, conversation):
        message = MessageFactory(conversation=conversation, sender="alice", content="hello")

        data = to_wire_message(message)

        assert set(data) == {"id", "conversationId", "sender", "type", "content", "timestamp"}
        assert data["conversationId"] == conversation.id
        assert data["sender"] == "alice"
        assert data["type"] == "TEXT"
        assert data["content"] == "hello"

    def test_voice_message_content_is_base64_audio(self, conversation):
        message = VoiceMessageFactory(
            conversation=conversation, audio_data=b"abc", audio_mime_type="audio/ogg"
        )

        data = to_wire_message(message)

        assert data["type"] == "VOICE"
        assert data["content"] == "YWJj"
        assert data["audioMimeType"] == "audio/ogg"
        assert "fileName" not in data
        assert "fileType" not in data

    def test_voice_message_without_mime_type_omits_key(self, conversation):
        message = VoiceMessageFactory(conversation=conversation, audio_mime_type="")

        assert "audioMimeType" not in to_wire_message(message)

    def test_file_message_keeps_file_keys(self, conversation):
        message = FileMessageFactory(conversation=conversation)

        data = to_wire_message(message)

        assert data["type"] == "FILE_URL"
        assert data["content"] == message.content
        assert data["fileName"] == "report.pdf"
        assert data["fileType"] == "application/pdf"
        assert "audioMimeType" not in data

    def test_wire_message_is_a_plain_dict(self, conversation):
        data = to_wire_message(MessageFactory(conversation=conversation))

        assert type(data) is dict
        assert isinstance(data["timestamp"], str)


@pytest.mark.django_db
class TestConversationSerializer:
    def test_participants_shown_by_username(self, conversation):
        data = ConversationSerializer(conversation).data

        assert data["id"] == conversation.id
        assert data["name"] == "Alice and Bob"
        assert data["initiator"] == "alice"
        assert data["counterpart"] == "bob"
        assert data["counterpart_name"] == "bob"
        assert data["is_ai_enabled"] is False
