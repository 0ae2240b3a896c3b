"""
Tests for configuration and API error mapping.
"""

from uuid import uuid4

import pytest
from pydantic import ValidationError

from clinic_scheduler.api.errors import ApiError, status_for_code
from clinic_scheduler.config.settings import Settings, get_settings
from clinic_scheduler.domains.scheduling.api.routes import build_update_request
from clinic_scheduler.domains.scheduling.api.schemas import AppointmentUpdateSchema
from clinic_scheduler.domains.scheduling.application.dto import UNSET, OperationError
from clinic_scheduler.domains.scheduling.domain.exceptions import TimeConflictException


class TestSettings:
    def test_defaults(self):
        settings = Settings(DB_PASSWORD="secret")

        assert settings.FREE_PLAN_MAX_ADMINS == 1
        assert settings.FREE_PLAN_MAX_DOCTORS == 3
        assert settings.FREE_PLAN_MAX_PATIENTS == 15
        assert settings.DEFAULT_PAGE_SIZE == 50
        assert settings.MAX_PAGE_SIZE == 100
        assert settings.AUTO_PAYMENT_NOTE == "Pago en consulta"

    def test_async_url_uses_asyncpg(self):
        settings = Settings(DB_USER="clinic", DB_PASSWORD="pw", DB_HOST="db", DB_PORT=5433, DB_NAME="agenda")

        assert settings.database_url == "postgresql://clinic:pw@db:5433/agenda"
        assert settings.async_database_url == "postgresql+asyncpg://clinic:pw@db:5433/agenda"

    def test_negative_plan_limit_is_rejected(self):
        with pytest.raises(ValidationError):
            Settings(FREE_PLAN_MAX_DOCTORS=-1)

    def test_settings_are_read_from_environment(self, monkeypatch):
        monkeypatch.setenv("FREE_PLAN_MAX_PATIENTS", "40")

        assert get_settings().FREE_PLAN_MAX_PATIENTS == 40

    def test_cors_origins_list(self):
        settings = Settings(CORS_ORIGINS="https://a.example, https://b.example,")

        assert settings.cors_origins_list == ["https://a.example", "https://b.example"]


class TestErrorMapping:
    @pytest.mark.parametrize(
        "code,expected",
        [
            ("NOT_FOUND", 404),
            ("INVALID_PATIENT", 400),
            ("INVALID_DOCTOR", 400),
            ("INVALID_TIME_RANGE", 400),
            ("INVALID_PAYLOAD", 400),
            ("TIME_CONFLICT", 409),
            ("ALREADY_INACTIVE", 400),
            ("ALREADY_ACTIVE", 400),
            ("PLAN_LIMIT_EXCEEDED", 403),
            ("DUPLICATE_EMAIL", 409),
            ("DUPLICATE_LICENSE", 409),
            ("UNAUTHENTICATED", 401),
            ("FORBIDDEN", 403),
            ("SOMETHING_ELSE", 400),
        ],
    )
    def test_status_for_code(self, code, expected):
        assert status_for_code(code) == expected

    def test_api_error_from_operation_error(self):
        error = OperationError.from_exception(TimeConflictException(conflicting_appointment_id=uuid4()))

        api_error = ApiError.from_operation_error(error)

        assert api_error.status_code == 409
        body = api_error.to_body()
        assert body["success"] is False
        assert body["error"]["code"] == "TIME_CONFLICT"
        assert "conflicting_appointment_id" in body["error"]["details"]


class TestBuildUpdateRequest:
    def test_only_sent_fields_are_mapped(self):
        tenant_id, appointment_id = uuid4(), uuid4()
        body = AppointmentUpdateSchema.model_validate({"type": "Control", "duration": 45, "notes": None})

        request = build_update_request(tenant_id, appointment_id, body)

        assert request.appointment_type == "Control"
        assert request.duration_minutes == 45
        assert request.notes is None
        assert request.cost is UNSET
        assert request.start_time is UNSET

    def test_null_on_required_field_is_ignored(self):
        body = AppointmentUpdateSchema.model_validate({"doctor_id": None, "status": None})

        request = build_update_request(uuid4(), uuid4(), body)

        assert request.doctor_id is UNSET
        assert request.status is UNSET

    def test_is_paid_is_not_accepted(self):
        with pytest.raises(ValidationError):
            AppointmentUpdateSchema.model_validate({"is_paid": True})
