"""
Tests for ServiceResult and BaseService helpers.
"""

import logging

import pytest
from django.db import DatabaseError

from core.exceptions import ExternalServiceError, ValidationError
from core.services import BaseService, ServiceResult


class SampleService(BaseService):
    @classmethod
    def explode(cls):
        try:
            raise DatabaseError("connection lost")
        except DatabaseError as exc:
            return cls.handle_exception(exc, "Saving sample", "PERSISTENCE_FAILED")


class TestServiceResult:
    def test_success_is_truthy(self):
        result = ServiceResult.success({"id": 1})

        assert result
        assert result.success is True
        assert result.data == {"id": 1}
        assert result.error is None

    def test_ok_alias(self):
        assert ServiceResult.ok(5).data == 5

    def test_failure_is_falsy(self):
        result = ServiceResult.failure("Nope", error_code="NOPE")

        assert not result
        assert result.error == "Nope"
        assert result.error_code == "NOPE"

    def test_success_with_none_is_still_success(self):
        assert ServiceResult.success(None)

    def test_from_application_error_keeps_code(self):
        exc = ValidationError("File URL is too long", error_code="INVALID_URL")

        result = ServiceResult.from_exception(exc)

        assert result.error == "File URL is too long"
        assert result.error_code == "INVALID_URL"

    def test_from_plain_exception_uses_class_name(self):
        result = ServiceResult.from_exception(RuntimeError("boom"))

        assert result.error == "boom"
        assert result.error_code == "RUNTIMEERROR"

    def test_explicit_code_wins(self):
        exc = ExternalServiceError("timed out", error_code="GEMINI_TIMEOUT")

        result = ServiceResult.from_exception(exc, error_code="UPLOAD_FAILED")

        assert result.error_code == "UPLOAD_FAILED"

    def test_to_response_failure_shape(self):
        result = ServiceResult.failure(
            "Invalid input", error_code="BAD", errors={"name": ["Required"]}
        )

        assert result.to_response() == {
            "error": "Invalid input",
            "error_code": "BAD",
            "errors": {"name": ["Required"]},
        }

    def test_to_response_omits_missing_code(self):
        assert ServiceResult.failure("Nope").to_response() == {"error": "Nope"}


class TestBaseService:
    def test_logger_is_named_after_service(self):
        assert SampleService.get_logger().name == f"{__name__}.SampleService"

    def test_handle_exception_converts_and_logs(self, caplog):
        with caplog.at_level(logging.ERROR):
            result = SampleService.explode()

        assert not result
        assert result.error_code == "PERSISTENCE_FAILED"
        assert "Saving sample: connection lost" in caplog.text

    @pytest.mark.django_db
    def test_atomic_rolls_back(self):
        from authentication.models import User

        with pytest.raises(RuntimeError):
            with BaseService.atomic():
                User.objects.create_user(username="rollback", password="x" * 12)
                raise RuntimeError("abort")

        assert not User.objects.filter(username="rollback").exists()
