"""
Tests for MessageDispatcher.handle, the inbound real-time path.

Each gate must stop processing on failure: nothing stored, nothing
published, no auto-reply.
"""

import base64
from unittest.mock import MagicMock, patch

import pytest

from chat.dispatcher import MessageDispatcher, enqueue_auto_reply
from chat.models import Message
from core.services import ServiceResult


@pytest.fixture
def auto_reply():
    return MagicMock()


@pytest.fixture
def dispatcher(broadcaster, auto_reply):
    return MessageDispatcher(broadcaster=broadcaster, auto_reply=auto_reply)


def text_frame(sender="alice", content="hello"):
    return {"type": "TEXT", "sender": sender, "content": content}


@pytest.mark.django_db
class TestHappyPath:
    def test_text_is_stored_and_broadcast(self, dispatcher, broadcaster, conversation):
        result = dispatcher.handle(conversation.id, text_frame(), "alice")

        assert result.success is True
        stored = Message.objects.get()
        assert stored.sender == "alice"
        assert stored.content == "hello"
        assert broadcaster.published == [(f"conversation/{conversation.id}", result.data)]
        assert result.data["id"] == stored.id

    def test_counterpart_may_send(self, dispatcher, conversation):
        result = dispatcher.handle(conversation.id, text_frame(sender="bob"), "bob")

        assert result.success is True

    def test_voice_is_stored_decoded_and_broadcast_encoded(
        self, dispatcher, broadcaster, conversation
    ):
        audio = base64.b64encode(b"voice").decode()
        frame = {"type": "VOICE", "sender": "alice", "content": audio, "audioMimeType": "audio/webm"}

        result = dispatcher.handle(conversation.id, frame, "alice")

        assert bytes(Message.objects.get().audio_data) == b"voice"
        assert result.data["content"] == audio
        assert result.data["audioMimeType"] == "audio/webm"

    def test_file_url_is_stored(self, dispatcher, conversation):
        frame = {
            "type": "FILE_URL",
            "sender": "alice",
            "content": "https://cdn.example.com/a.pdf",
            "fileName": "a.pdf",
            "fileType": "application/pdf",
        }

        result = dispatcher.handle(conversation.id, frame, "alice")

        assert result.data["fileName"] == "a.pdf"
        assert Message.objects.get().file_type == "application/pdf"


@pytest.mark.django_db
class TestSenderIdentity:
    def test_declared_sender_is_replaced_by_identity(self, dispatcher, broadcaster, conversation):
        result = dispatcher.handle(conversation.id, text_frame(sender="bob"), "alice")

        assert result.success is True
        assert Message.objects.get().sender == "alice"
        assert broadcaster.published[0][1]["sender"] == "alice"

    def test_missing_identity_rejected(self, dispatcher, broadcaster, conversation):
        result = dispatcher.handle(conversation.id, text_frame(), None)

        assert result.error_code == "UNAUTHENTICATED"
        assert Message.objects.count() == 0
        assert broadcaster.published == []


@pytest.mark.django_db
class TestRejections:
    @pytest.mark.parametrize(
        "payload",
        [
            None,
            "hello",
            ["TEXT"],
            {"sender": "alice", "content": "hi"},
            {"type": "TEXT", "content": "hi"},
            {"type": None, "sender": "alice"},
        ],
    )
    def test_malformed_payload(self, dispatcher, broadcaster, conversation, payload):
        result = dispatcher.handle(conversation.id, payload, "alice")

        assert result.error_code == "MALFORMED_PAYLOAD"
        assert Message.objects.count() == 0
        assert broadcaster.published == []

    def test_outsider_rejected(self, dispatcher, broadcaster, conversation, outsider):
        result = dispatcher.handle(conversation.id, text_frame(sender="mallory"), "mallory")

        assert result.error_code == "NOT_PARTICIPANT"
        assert Message.objects.count() == 0
        assert broadcaster.published == []

    def test_outsider_cannot_spoof_a_participant(self, dispatcher, conversation, outsider):
        result = dispatcher.handle(conversation.id, text_frame(sender="alice"), "mallory")

        assert result.error_code == "NOT_PARTICIPANT"
        assert Message.objects.count() == 0

    def test_unknown_conversation_rejected(self, dispatcher, initiator):
        result = dispatcher.handle(999999, text_frame(), "alice")

        assert result.error_code == "NOT_PARTICIPANT"

    @pytest.mark.parametrize(
        "frame, code",
        [
            ({"type": "TEXT", "sender": "alice", "content": "   "}, "EMPTY_CONTENT"),
            ({"type": "VOICE", "sender": "alice", "content": "%%%"}, "INVALID_ENCODING"),
            (
                {"type": "FILE_URL", "sender": "alice", "content": "https://x.io/a", "fileName": "a"},
                "MISSING_FIELD",
            ),
            (
                {
                    "type": "FILE_URL",
                    "sender": "alice",
                    "content": "nope",
                    "fileName": "a",
                    "fileType": "text/plain",
                },
                "INVALID_URL",
            ),
            ({"type": "STICKER", "sender": "alice", "content": "x"}, "UNKNOWN_TYPE"),
        ],
    )
    def test_invalid_body(self, dispatcher, broadcaster, conversation, frame, code):
        result = dispatcher.handle(conversation.id, frame, "alice")

        assert result.error_code == code
        assert Message.objects.count() == 0
        assert broadcaster.published == []

    def test_persistence_failure_publishes_nothing(self, dispatcher, broadcaster, conversation):
        failure = ServiceResult.failure("db down", error_code="PERSISTENCE_FAILED")
        with patch("chat.dispatcher.MessageService.persist", return_value=failure):
            result = dispatcher.handle(conversation.id, text_frame(), "alice")

        assert result.error_code == "PERSISTENCE_FAILED"
        assert broadcaster.published == []


@pytest.mark.django_db
class TestAutoReplyTrigger:
    def test_text_in_ai_conversation_triggers_reply(self, dispatcher, auto_reply, ai_conversation):
        dispatcher.handle(ai_conversation.id, text_frame(content="what is 2+2?"), "alice")

        auto_reply.assert_called_once_with(ai_conversation.id, "what is 2+2?")

    def test_reply_scheduled_after_broadcast(self, broadcaster, ai_conversation):
        calls = []
        broadcaster.publish_sync = lambda topic, payload: calls.append("broadcast")
        dispatcher = MessageDispatcher(
            broadcaster=broadcaster,
            auto_reply=lambda conversation_id, text: calls.append("auto_reply"),
        )

        dispatcher.handle(ai_conversation.id, text_frame(), "alice")

        assert calls == ["broadcast", "auto_reply"]

    def test_human_conversation_does_not_trigger(self, dispatcher, auto_reply, conversation):
        dispatcher.handle(conversation.id, text_frame(), "alice")

        auto_reply.assert_not_called()

    def test_non_text_does_not_trigger(self, dispatcher, auto_reply, ai_conversation):
        frame = {"type": "VOICE", "sender": "alice", "content": base64.b64encode(b"x").decode()}

        dispatcher.handle(ai_conversation.id, frame, "alice")

        auto_reply.assert_not_called()

    def test_rejected_message_does_not_trigger(self, dispatcher, auto_reply, ai_conversation):
        dispatcher.handle(ai_conversation.id, text_frame(content=""), "alice")

        auto_reply.assert_not_called()

    def test_enqueue_failure_does_not_affect_broadcast(
        self, broadcaster, ai_conversation
    ):
        dispatcher = MessageDispatcher(
            broadcaster=broadcaster,
            auto_reply=MagicMock(side_effect=ConnectionError("broker down")),
        )

        result = dispatcher.handle(ai_conversation.id, text_frame(), "alice")

        assert result.success is True
        assert len(broadcaster.published) == 1

    def test_default_hand_off_enqueues_celery_task(self):
        with patch("ai.tasks.generate_auto_reply.delay") as delay:
            enqueue_auto_reply(7, "hi")

        delay.assert_called_once_with(7, "hi")
