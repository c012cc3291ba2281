"""
Tests for the membership checks used by REST calls and every real-time send.
"""

import pytest

from chat.authorization import ChatAuthorizationService, require_conversation_participant
from core.services import ServiceResult


@pytest.mark.django_db
class TestIsParticipant:
    def test_initiator_is_participant(self, conversation, initiator):
        assert ChatAuthorizationService.is_participant(initiator.username, conversation.id)

    def test_counterpart_is_participant(self, conversation, counterpart):
        assert ChatAuthorizationService.is_participant(counterpart.username, conversation.id)

    def test_outsider_is_not_participant(self, conversation, outsider):
        assert not ChatAuthorizationService.is_participant(outsider.username, conversation.id)

    def test_unknown_conversation(self, initiator):
        assert not ChatAuthorizationService.is_participant(initiator.username, 999999)

    def test_unknown_user(self, conversation):
        assert not ChatAuthorizationService.is_participant("ghost", conversation.id)

    @pytest.mark.parametrize("identity", [None, ""])
    def test_missing_identity(self, conversation, identity):
        assert not ChatAuthorizationService.is_participant(identity, conversation.id)

    def test_missing_conversation_id(self, initiator):
        assert not ChatAuthorizationService.is_participant(initiator.username, None)

    def test_malformed_conversation_id(self, conversation, initiator):
        assert not ChatAuthorizationService.is_participant(initiator.username, "abc")

    def test_membership_not_cached_after_delete(self, conversation, initiator):
        conversation_id = conversation.id
        assert ChatAuthorizationService.is_participant(initiator.username, conversation_id)

        conversation.delete()

        assert not ChatAuthorizationService.is_participant(initiator.username, conversation_id)


@pytest.mark.django_db
class TestUserLevelChecks:
    def test_is_conversation_participant(self, conversation, counterpart, outsider):
        assert ChatAuthorizationService.is_conversation_participant(counterpart, conversation.id)
        assert not ChatAuthorizationService.is_conversation_participant(outsider, conversation.id)

    def test_anonymous_user_is_not_participant(self, conversation):
        from django.contrib.auth.models import AnonymousUser

        assert not ChatAuthorizationService.is_conversation_participant(
            AnonymousUser(), conversation.id
        )

    def test_is_initiator(self, conversation, initiator, counterpart):
        assert ChatAuthorizationService.is_initiator(initiator, conversation.id)
        assert not ChatAuthorizationService.is_initiator(counterpart, conversation.id)


@require_conversation_participant()
def _guarded(user=None, conversation_id=None):
    return ServiceResult.success("ran")


@pytest.mark.django_db
class TestRequireConversationParticipant:
    def test_participant_passes_through(self, conversation, initiator):
        result = _guarded(user=initiator, conversation_id=conversation.id)

        assert result.success is True
        assert result.data == "ran"

    def test_outsider_gets_not_participant(self, conversation, outsider):
        result = _guarded(user=outsider, conversation_id=conversation.id)

        assert result.error_code == "NOT_PARTICIPANT"

    def test_missing_kwargs_get_invalid_request(self, initiator):
        result = _guarded(user=initiator)

        assert result.error_code == "INVALID_REQUEST"
