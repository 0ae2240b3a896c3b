"""
API tests for the scheduling routes.

The real application is used with its use case providers overridden by
in-memory implementations, so requests go through middleware, role
checks, validation and error mapping without a database.
"""

from datetime import datetime
from decimal import Decimal
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from clinic_scheduler.core.app_factory import create_app
from clinic_scheduler.domains.scheduling.api import dependencies as deps
from clinic_scheduler.domains.scheduling.domain.value_objects import AppointmentStatus
from tests.utils.builders import at, make_appointment, make_doctor

API = "/api/v1"


def override_use_cases(app, harness) -> None:
    providers = {
        deps.get_create_appointment_use_case: harness.create_appointment,
        deps.get_update_appointment_use_case: harness.update_appointment,
        deps.get_delete_appointment_use_case: harness.delete_appointment,
        deps.get_restore_appointment_use_case: harness.restore_appointment,
        deps.get_mark_done_use_case: harness.mark_appointment_done,
        deps.get_appointment_use_case: harness.get_appointment,
        deps.get_list_appointments_use_case: harness.list_appointments,
        deps.get_count_appointments_use_case: harness.count_appointments,
        deps.get_calendar_use_case: harness.calendar,
        deps.get_stats_use_case: harness.appointment_stats,
        deps.get_doctor_appointments_use_case: harness.doctor_appointments,
        deps.get_patient_appointments_use_case: harness.patient_appointments,
        deps.get_create_doctor_use_case: harness.create_doctor,
        deps.get_delete_doctor_use_case: harness.delete_doctor,
        deps.get_restore_doctor_use_case: harness.restore_doctor,
        deps.get_create_patient_use_case: harness.create_patient,
        deps.get_delete_patient_use_case: harness.delete_patient,
        deps.get_restore_patient_use_case: harness.restore_patient,
        deps.get_plan_limit_status_use_case: harness.plan_limit_status,
        deps.get_check_role_limit_use_case: harness.check_role_limit,
    }
    for provider, factory in providers.items():
        app.dependency_overrides[provider] = factory


# ============================================================================
# FIXTURES
# ============================================================================


@pytest.fixture
def app(scheduling):
    application = create_app()
    override_use_cases(application, scheduling)
    return application


@pytest.fixture
def client(app):
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def admin_headers(tenant_id):
    return {"X-Tenant-ID": str(tenant_id), "X-User-Role": "CLINIC_ADMIN", "X-User-ID": str(uuid4())}


@pytest.fixture
def staff_headers(tenant_id):
    return {"X-Tenant-ID": str(tenant_id), "X-User-Role": "staff"}


@pytest.fixture
def booking_body(doctor, patient):
    return {
        "patient_id": str(patient.id),
        "doctor_id": str(doctor.id),
        "start_time": "2026-03-10T09:00:00Z",
        "end_time": "2026-03-10T09:30:00Z",
        "type": "Limpieza",
        "cost": 8000,
    }


@pytest.fixture
def booked(scheduling, tenant_id, doctor, patient):
    appointment = make_appointment(tenant_id, doctor.id, patient.id, start=at(9), minutes=30, notes="Control")
    scheduling.store.seed(appointment)
    return appointment


def error_code(response) -> str:
    body = response.json()
    assert body["success"] is False
    return body["error"]["code"]


# ============================================================================
# Health and identity
# ============================================================================


@pytest.mark.api
def test_health_needs_no_identity(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


@pytest.mark.api
def test_missing_tenant_is_unauthenticated(client):
    response = client.get(f"{API}/appointments")

    assert response.status_code == 401
    assert error_code(response) == "UNAUTHENTICATED"


@pytest.mark.api
def test_malformed_tenant_is_unauthenticated(client):
    response = client.get(f"{API}/appointments", headers={"X-Tenant-ID": "clinic-1", "X-User-Role": "OWNER"})

    assert response.status_code == 401
    assert error_code(response) == "UNAUTHENTICATED"


@pytest.mark.api
def test_staff_cannot_book(client, staff_headers, booking_body):
    response = client.post(f"{API}/appointments", json=booking_body, headers=staff_headers)

    assert response.status_code == 403
    assert error_code(response) == "FORBIDDEN"


@pytest.mark.api
def test_unknown_role_is_forbidden(client, tenant_id):
    response = client.get(f"{API}/appointments", headers={"X-Tenant-ID": str(tenant_id), "X-User-Role": "GUEST"})

    assert response.status_code == 403


@pytest.mark.api
def test_responses_carry_correlation_id(client, staff_headers):
    response = client.get(f"{API}/appointments", headers={**staff_headers, "X-Correlation-ID": "abc123"})

    assert response.headers["X-Correlation-ID"] == "abc123"
    assert "X-Response-Time-Ms" in response.headers


# ============================================================================
# Create
# ============================================================================


@pytest.mark.api
def test_create_appointment(client, admin_headers, booking_body, scheduling):
    response = client.post(f"{API}/appointments", json=booking_body, headers=admin_headers)

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["status"] == "SCHEDULED"
    assert data["type"] == "Limpieza"
    assert data["duration"] == 30
    assert data["is_paid"] is False
    assert data["is_active"] is True
    assert Decimal(data["cost"]) == Decimal("8000")
    assert datetime.fromisoformat(data["start_time"]) == at(9)
    assert data["patient"]["first_name"] == "Juan"
    assert data["patient"]["last_name"] == "Pérez"
    assert data["doctor"]["specialty"] == "Ortodoncia"
    assert len(scheduling.store.committed["appointments"]) == 1


@pytest.mark.api
def test_create_overlapping_appointment_is_conflict(client, admin_headers, booking_body, booked):
    response = client.post(
        f"{API}/appointments",
        json={**booking_body, "start_time": "2026-03-10T09:15:00Z", "end_time": "2026-03-10T09:45:00Z"},
        headers=admin_headers,
    )

    assert response.status_code == 409
    body = response.json()
    assert body["error"]["code"] == "TIME_CONFLICT"
    assert body["error"]["details"]["conflicting_appointment_id"] == str(booked.id)


@pytest.mark.api
def test_create_with_inverted_range(client, admin_headers, booking_body):
    response = client.post(
        f"{API}/appointments",
        json={**booking_body, "end_time": "2026-03-10T08:00:00Z"},
        headers=admin_headers,
    )

    assert response.status_code == 400
    assert error_code(response) == "INVALID_TIME_RANGE"


@pytest.mark.api
def test_create_with_missing_field_is_invalid_payload(client, admin_headers, booking_body):
    body = dict(booking_body)
    del body["patient_id"]

    response = client.post(f"{API}/appointments", json=body, headers=admin_headers)

    assert response.status_code == 400
    assert error_code(response) == "INVALID_PAYLOAD"
    fields = [e["field"] for e in response.json()["error"]["details"]["errors"]]
    assert "body.patient_id" in fields


@pytest.mark.api
def test_create_with_unknown_patient(client, admin_headers, booking_body):
    response = client.post(
        f"{API}/appointments", json={**booking_body, "patient_id": str(uuid4())}, headers=admin_headers
    )

    assert response.status_code == 400
    assert error_code(response) == "INVALID_PATIENT"


# ============================================================================
# Read
# ============================================================================


@pytest.mark.api
def test_get_appointment(client, staff_headers, booked, doctor, patient):
    response = client.get(f"{API}/appointments/{booked.id}", headers=staff_headers)

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["id"] == str(booked.id)
    assert data["patient"] == {
        "id": str(patient.id),
        "first_name": "Juan",
        "last_name": "Pérez",
        "email": "juan@example.com",
        "phone": "+5491155550000",
    }
    assert data["doctor"] == {
        "id": str(doctor.id),
        "first_name": "Laura",
        "last_name": "Gómez",
        "specialty": "Ortodoncia",
        "email": doctor.email,
    }


@pytest.mark.api
def test_get_appointment_of_other_tenant_is_not_found(client, booked):
    headers = {"X-Tenant-ID": str(uuid4()), "X-User-Role": "OWNER"}

    response = client.get(f"{API}/appointments/{booked.id}", headers=headers)

    assert response.status_code == 404
    assert error_code(response) == "NOT_FOUND"


@pytest.mark.api
def test_list_appointments_with_status_filter(client, staff_headers, booked, scheduling, tenant_id, doctor, patient):
    scheduling.store.seed(
        make_appointment(tenant_id, doctor.id, patient.id, start=at(11), status=AppointmentStatus.CONFIRMED)
    )

    response = client.get(f"{API}/appointments", params={"status": "CONFIRMED"}, headers=staff_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["total"] == 1
    assert body["data"][0]["status"] == "CONFIRMED"
    assert body["data"][0]["doctor"]["id"] == str(doctor.id)
    assert body["data"][0]["patient"]["id"] == str(patient.id)


@pytest.mark.api
def test_count_appointments(client, staff_headers, booked, scheduling, tenant_id, doctor, patient):
    scheduling.store.seed(
        make_appointment(tenant_id, doctor.id, patient.id, start=at(11), status=AppointmentStatus.NO_SHOW)
    )

    everything = client.get(f"{API}/appointments/count", headers=staff_headers)
    no_shows = client.get(f"{API}/appointments/count", params={"status": "NO_SHOW"}, headers=staff_headers)

    assert everything.json()["data"] == {"count": 2}
    assert no_shows.json()["data"] == {"count": 1}


@pytest.mark.api
def test_list_with_invalid_status_is_invalid_payload(client, staff_headers):
    response = client.get(f"{API}/appointments", params={"status": "LATE"}, headers=staff_headers)

    assert response.status_code == 400
    assert error_code(response) == "INVALID_PAYLOAD"


@pytest.mark.api
def test_calendar_requires_window(client, staff_headers):
    response = client.get(f"{API}/appointments/calendar", params={"from": "2026-03-10T00:00:00Z"}, headers=staff_headers)

    assert response.status_code == 400


@pytest.mark.api
def test_calendar(client, staff_headers, booked):
    response = client.get(
        f"{API}/appointments/calendar",
        params={"from": "2026-03-10T00:00:00Z", "to": "2026-03-11T00:00:00Z"},
        headers=staff_headers,
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert [a["id"] for a in data] == [str(booked.id)]
    assert data[0]["patient"]["last_name"] == "Pérez"
    assert data[0]["doctor"]["last_name"] == "Gómez"


@pytest.mark.api
def test_stats(client, staff_headers, booked):
    response = client.get(f"{API}/appointments/stats", headers=staff_headers)

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["total"] == 1
    assert data["scheduled"] == 1


# ============================================================================
# Update and lifecycle
# ============================================================================


@pytest.mark.api
def test_update_with_is_paid_is_rejected(client, admin_headers, booked, scheduling):
    response = client.put(f"{API}/appointments/{booked.id}", json={"is_paid": True}, headers=admin_headers)

    assert response.status_code == 400
    assert error_code(response) == "INVALID_PAYLOAD"
    assert scheduling.store.appointment(booked.id).is_paid is False


@pytest.mark.api
def test_update_applies_only_sent_fields(client, admin_headers, booked, scheduling):
    response = client.put(
        f"{API}/appointments/{booked.id}",
        json={"type": "Extracción", "notes": None, "start_time": None},
        headers=admin_headers,
    )

    assert response.status_code == 200
    stored = scheduling.store.appointment(booked.id)
    assert stored.appointment_type == "Extracción"
    assert stored.notes is None
    assert stored.start_time == at(9)
    assert response.json()["data"]["patient"]["first_name"] == "Juan"


@pytest.mark.api
def test_update_to_other_doctor_returns_new_doctor(client, admin_headers, booked, scheduling, tenant_id):
    other = make_doctor(tenant_id, first_name="Sofía", last_name="Ramos", specialty="Endodoncia")
    scheduling.store.seed(other)

    response = client.put(f"{API}/appointments/{booked.id}", json={"doctor_id": str(other.id)}, headers=admin_headers)

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["doctor_id"] == str(other.id)
    assert data["doctor"]["first_name"] == "Sofía"
    assert data["doctor"]["specialty"] == "Endodoncia"
    assert data["patient"]["first_name"] == "Juan"


@pytest.mark.api
def test_update_into_taken_slot(client, admin_headers, booked, scheduling, tenant_id, doctor, patient):
    scheduling.store.seed(make_appointment(tenant_id, doctor.id, patient.id, start=at(10)))

    response = client.put(
        f"{API}/appointments/{booked.id}",
        json={"start_time": "2026-03-10T10:00:00Z", "end_time": "2026-03-10T10:30:00Z"},
        headers=admin_headers,
    )

    assert response.status_code == 409


@pytest.mark.api
def test_delete_restore_and_done(client, admin_headers, booked):
    deleted = client.delete(f"{API}/appointments/{booked.id}", headers=admin_headers)
    deleted_again = client.delete(f"{API}/appointments/{booked.id}", headers=admin_headers)
    restored = client.post(f"{API}/appointments/{booked.id}/restore", headers=admin_headers)
    done = client.post(f"{API}/appointments/{booked.id}/done", json={"notes": "Listo"}, headers=admin_headers)

    assert deleted.status_code == 200
    assert deleted.json()["data"]["status"] == "CANCELLED"
    assert deleted_again.status_code == 400
    assert error_code(deleted_again) == "ALREADY_INACTIVE"
    assert restored.json()["data"]["status"] == "SCHEDULED"
    assert done.json()["data"]["status"] == "COMPLETED"
    assert done.json()["data"]["notes"] == "Listo"


@pytest.mark.api
def test_mark_done_without_body(client, admin_headers, booked):
    response = client.post(f"{API}/appointments/{booked.id}/done", headers=admin_headers)

    assert response.status_code == 200
    assert response.json()["data"]["notes"] == "Control"


# ============================================================================
# Doctors, patients and plan limits
# ============================================================================


@pytest.mark.api
def test_doctor_over_plan_limit(client, admin_headers, scheduling, tenant_id):
    scheduling.store.seed(*[make_doctor(tenant_id) for _ in range(3)])

    response = client.post(f"{API}/doctors", json={"first_name": "Ana", "last_name": "Ruiz"}, headers=admin_headers)

    assert response.status_code == 403
    assert error_code(response) == "PLAN_LIMIT_EXCEEDED"
    details = response.json()["error"]["details"]
    assert details["resource"] == "doctor"
    assert details["current_count"] == 3
    assert details["limit"] == 3


@pytest.mark.api
def test_duplicate_doctor_email(client, admin_headers, doctor):
    response = client.post(
        f"{API}/doctors",
        json={"first_name": "Ana", "last_name": "Ruiz", "email": doctor.email.upper()},
        headers=admin_headers,
    )

    assert response.status_code == 409
    assert error_code(response) == "DUPLICATE_EMAIL"


@pytest.mark.api
def test_create_patient_and_agenda(client, admin_headers, staff_headers, booked, patient, doctor):
    created = client.post(f"{API}/patients", json={"first_name": "Eva", "last_name": "Sosa"}, headers=admin_headers)
    history = client.get(f"{API}/patients/{patient.id}/appointments", headers=staff_headers)
    agenda = client.get(f"{API}/doctors/{doctor.id}/appointments", headers=staff_headers)

    assert created.status_code == 201
    assert created.json()["data"]["is_active"] is True
    assert [a["id"] for a in history.json()["data"]] == [str(booked.id)]
    assert [a["id"] for a in agenda.json()["data"]] == [str(booked.id)]
    assert history.json()["data"][0]["doctor"]["id"] == str(doctor.id)
    assert agenda.json()["data"][0]["patient"]["id"] == str(patient.id)


@pytest.mark.api
def test_plan_limit_status(client, staff_headers, doctor):
    response = client.get(f"{API}/plan-limits", headers=staff_headers)

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["plan"]["name"] == "free"
    assert data["plan"]["is_fallback"] is True
    assert data["doctors"] == {"allowed": True, "current": 1, "limit": 3, "remaining": 2, "message": None}


@pytest.mark.api
def test_role_limit_with_unknown_role(client, staff_headers):
    response = client.get(f"{API}/plan-limits/roles/dentist", headers=staff_headers)

    assert response.status_code == 400
    assert error_code(response) == "INVALID_PAYLOAD"


@pytest.mark.api
def test_role_limit_for_staff(client, staff_headers):
    response = client.get(f"{API}/plan-limits/roles/staff", headers=staff_headers)

    assert response.json()["data"]["allowed"] is True
    assert response.json()["data"]["limit"] is None


# ============================================================================
# Unexpected errors
# ============================================================================


class ExplodingUseCase:
    async def execute(self, request):
        raise RuntimeError("database unavailable")


@pytest.mark.api
def test_unexpected_error_is_internal_error(app, client, staff_headers):
    app.dependency_overrides[deps.get_list_appointments_use_case] = ExplodingUseCase

    response = client.get(f"{API}/appointments", headers=staff_headers)

    assert response.status_code == 500
    assert error_code(response) == "INTERNAL_ERROR"
    assert "database unavailable" not in response.text
