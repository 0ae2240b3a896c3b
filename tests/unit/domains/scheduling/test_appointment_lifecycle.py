"""
Unit tests for appointment soft delete, restore and mark-done.
"""

from uuid import uuid4

import pytest

from clinic_scheduler.domains.scheduling.application.use_cases import (
    AppointmentCommand,
    CreateAppointmentRequest,
    MarkAppointmentDoneRequest,
)
from clinic_scheduler.domains.scheduling.domain.value_objects import AppointmentStatus
from tests.utils.builders import at, make_appointment


@pytest.fixture
def booked(scheduling, tenant_id, doctor, patient):
    appointment = make_appointment(tenant_id, doctor.id, patient.id, start=at(9), minutes=30, notes="Control")
    scheduling.store.seed(appointment)
    return appointment


# ============================================================================
# Delete
# ============================================================================


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_delete_cancels_and_deactivates(scheduling, tenant_id, booked):
    response = await scheduling.delete_appointment().execute(AppointmentCommand(tenant_id, booked.id))

    assert response.success is True
    stored = scheduling.store.appointment(booked.id)
    assert stored.is_active is False
    assert stored.status == AppointmentStatus.CANCELLED
    assert scheduling.store.locks == [("appointment", booked.id)]


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_second_delete_reports_already_inactive(scheduling, tenant_id, booked):
    await scheduling.delete_appointment().execute(AppointmentCommand(tenant_id, booked.id))
    before = scheduling.store.appointment(booked.id)

    response = await scheduling.delete_appointment().execute(AppointmentCommand(tenant_id, booked.id))

    assert response.success is False
    assert response.error.code == "ALREADY_INACTIVE"
    after = scheduling.store.appointment(booked.id)
    assert (after.is_active, after.status, after.updated_at) == (before.is_active, before.status, before.updated_at)


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_delete_of_other_tenant_is_not_found(scheduling, other_tenant_id, booked):
    response = await scheduling.delete_appointment().execute(AppointmentCommand(other_tenant_id, booked.id))

    assert response.error.code == "NOT_FOUND"
    assert scheduling.store.appointment(booked.id).is_active is True


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_deleted_appointment_frees_the_slot(scheduling, tenant_id, booked, doctor, patient):
    await scheduling.delete_appointment().execute(AppointmentCommand(tenant_id, booked.id))

    response = await scheduling.create_appointment().execute(
        CreateAppointmentRequest(
            tenant_id=tenant_id,
            patient_id=patient.id,
            doctor_id=doctor.id,
            start_time=at(9),
            end_time=at(9, 30),
        )
    )

    assert response.success is True


# ============================================================================
# Restore
# ============================================================================


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_delete_then_restore_round_trip(scheduling, tenant_id, booked):
    await scheduling.delete_appointment().execute(AppointmentCommand(tenant_id, booked.id))

    response = await scheduling.restore_appointment().execute(AppointmentCommand(tenant_id, booked.id))

    assert response.success is True
    stored = scheduling.store.appointment(booked.id)
    assert stored.is_active is True
    assert stored.status == AppointmentStatus.SCHEDULED
    assert (stored.start_time, stored.end_time) == (booked.start_time, booked.end_time)


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_restore_active_reports_already_active(scheduling, tenant_id, booked):
    response = await scheduling.restore_appointment().execute(AppointmentCommand(tenant_id, booked.id))

    assert response.success is False
    assert response.error.code == "ALREADY_ACTIVE"


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_restore_into_taken_slot_is_rejected(scheduling, tenant_id, booked, doctor, patient):
    """Another booking took the slot while the appointment was deleted."""
    # Arrange
    await scheduling.delete_appointment().execute(AppointmentCommand(tenant_id, booked.id))
    scheduling.store.seed(make_appointment(tenant_id, doctor.id, patient.id, start=at(9, 15), minutes=30))

    # Act
    response = await scheduling.restore_appointment().execute(AppointmentCommand(tenant_id, booked.id))

    # Assert
    assert response.success is False
    assert response.error.code == "TIME_CONFLICT"
    stored = scheduling.store.appointment(booked.id)
    assert stored.is_active is False
    assert stored.status == AppointmentStatus.CANCELLED


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_restore_locks_appointment_before_doctor(scheduling, tenant_id, booked):
    scheduling.store.committed["appointments"][booked.id].soft_delete()

    await scheduling.restore_appointment().execute(AppointmentCommand(tenant_id, booked.id))

    assert scheduling.store.locks == [("appointment", booked.id), ("doctor", booked.doctor_id)]


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_restore_unknown_is_not_found(scheduling, tenant_id):
    response = await scheduling.restore_appointment().execute(AppointmentCommand(tenant_id, uuid4()))

    assert response.error.code == "NOT_FOUND"


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_restore_with_deleted_doctor_is_rejected(scheduling, tenant_id, booked, doctor):
    scheduling.store.committed["appointments"][booked.id].soft_delete()
    scheduling.store.committed["doctors"][doctor.id].soft_delete()

    response = await scheduling.restore_appointment().execute(AppointmentCommand(tenant_id, booked.id))

    assert response.success is False
    assert response.error.code == "INVALID_DOCTOR"
    stored = scheduling.store.appointment(booked.id)
    assert stored.is_active is False
    assert stored.status == AppointmentStatus.CANCELLED
    assert scheduling.uow.commits == 0


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_restore_with_deleted_patient_is_rejected(scheduling, tenant_id, booked, patient):
    scheduling.store.committed["appointments"][booked.id].soft_delete()
    scheduling.store.committed["patients"][patient.id].soft_delete()

    response = await scheduling.restore_appointment().execute(AppointmentCommand(tenant_id, booked.id))

    assert response.success is False
    assert response.error.code == "INVALID_PATIENT"
    assert scheduling.store.appointment(booked.id).is_active is False


# ============================================================================
# Mark done
# ============================================================================


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_mark_done_with_notes(scheduling, tenant_id, booked):
    response = await scheduling.mark_appointment_done().execute(
        MarkAppointmentDoneRequest(tenant_id, booked.id, notes="Tratamiento finalizado")
    )

    assert response.success is True
    stored = scheduling.store.appointment(booked.id)
    assert stored.status == AppointmentStatus.COMPLETED
    assert stored.notes == "Tratamiento finalizado"
    assert scheduling.appointments.overlap_queries == 0


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_mark_done_without_notes_keeps_existing(scheduling, tenant_id, booked):
    response = await scheduling.mark_appointment_done().execute(MarkAppointmentDoneRequest(tenant_id, booked.id))

    assert response.appointment.notes == "Control"


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_mark_done_on_deleted_is_rejected(scheduling, tenant_id, booked):
    scheduling.store.committed["appointments"][booked.id].soft_delete()

    response = await scheduling.mark_appointment_done().execute(MarkAppointmentDoneRequest(tenant_id, booked.id))

    assert response.error.code == "ALREADY_INACTIVE"
    assert scheduling.store.appointment(booked.id).status == AppointmentStatus.CANCELLED


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_mark_done_on_no_show_rechecks_slot(scheduling, tenant_id, doctor, patient):
    no_show = make_appointment(tenant_id, doctor.id, patient.id, start=at(9), status=AppointmentStatus.NO_SHOW)
    scheduling.store.seed(no_show, make_appointment(tenant_id, doctor.id, patient.id, start=at(9)))

    response = await scheduling.mark_appointment_done().execute(MarkAppointmentDoneRequest(tenant_id, no_show.id))

    assert response.error.code == "TIME_CONFLICT"
    assert scheduling.store.appointment(no_show.id).status == AppointmentStatus.NO_SHOW
