"""
Unit tests for UpdateAppointmentUseCase.
"""

from decimal import Decimal
from uuid import uuid4

import pytest

from clinic_scheduler.domains.scheduling.application.use_cases import UpdateAppointmentRequest
from clinic_scheduler.domains.scheduling.domain.value_objects import AppointmentStatus
from tests.utils.builders import at, make_appointment, make_doctor, make_patient


@pytest.fixture
def booked(scheduling, tenant_id, doctor, patient):
    """09:00 - 09:30 with the fixture doctor."""
    appointment = make_appointment(
        tenant_id, doctor.id, patient.id, start=at(9), minutes=30, cost=Decimal("3000"), notes="Control"
    )
    scheduling.store.seed(appointment)
    return appointment


@pytest.fixture
def neighbour(scheduling, tenant_id, doctor, patient):
    """10:00 - 11:00 with the fixture doctor."""
    appointment = make_appointment(tenant_id, doctor.id, patient.id, start=at(10), minutes=60)
    scheduling.store.seed(appointment)
    return appointment


async def update(scheduling, tenant_id, appointment_id, **changes):
    request = UpdateAppointmentRequest(tenant_id=tenant_id, appointment_id=appointment_id, **changes)
    return await scheduling.update_appointment().execute(request)


# ============================================================================
# Rescheduling
# ============================================================================


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_reschedule_to_free_slot(scheduling, tenant_id, booked, neighbour):
    # Act
    response = await update(scheduling, tenant_id, booked.id, start_time=at(11), end_time=at(11, 45))

    # Assert
    assert response.success is True
    stored = scheduling.store.appointment(booked.id)
    assert stored.start_time == at(11)
    assert stored.end_time == at(11, 45)
    assert stored.duration_minutes == 45
    assert scheduling.store.locks == [("appointment", booked.id), ("doctor", booked.doctor_id)]


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_reschedule_into_taken_slot_is_rejected(scheduling, tenant_id, booked, neighbour):
    response = await update(scheduling, tenant_id, booked.id, start_time=at(10, 15), end_time=at(10, 45))

    assert response.success is False
    assert response.error.code == "TIME_CONFLICT"
    assert scheduling.store.appointment(booked.id).start_time == at(9)


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_shift_overlapping_its_own_slot_is_allowed(scheduling, tenant_id, booked):
    response = await update(scheduling, tenant_id, booked.id, start_time=at(9, 15), end_time=at(9, 45))

    assert response.success is True


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_changing_only_end_time_recomputes_duration(scheduling, tenant_id, booked):
    response = await update(scheduling, tenant_id, booked.id, end_time=at(10))

    assert response.success is True
    assert response.appointment.duration_minutes == 60


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_end_before_start_is_rejected(scheduling, tenant_id, booked):
    response = await update(scheduling, tenant_id, booked.id, end_time=at(8))

    assert response.success is False
    assert response.error.code == "INVALID_TIME_RANGE"


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_duration_mismatch_is_rejected(scheduling, tenant_id, booked):
    response = await update(scheduling, tenant_id, booked.id, duration_minutes=45)

    assert response.success is False
    assert response.error.code == "INVALID_TIME_RANGE"


# ============================================================================
# References
# ============================================================================


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_move_to_other_doctor_checks_that_doctors_agenda(scheduling, tenant_id, booked, patient):
    other_doctor = make_doctor(tenant_id)
    scheduling.store.seed(other_doctor, make_appointment(tenant_id, other_doctor.id, patient.id, start=at(9)))

    response = await update(scheduling, tenant_id, booked.id, doctor_id=other_doctor.id)

    assert response.success is False
    assert response.error.code == "TIME_CONFLICT"


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_move_to_free_doctor(scheduling, tenant_id, booked):
    other_doctor = make_doctor(tenant_id)
    scheduling.store.seed(other_doctor)

    response = await update(scheduling, tenant_id, booked.id, doctor_id=other_doctor.id)

    assert response.success is True
    assert scheduling.store.appointment(booked.id).doctor_id == other_doctor.id
    assert scheduling.store.locks == [("appointment", booked.id), ("doctor", other_doctor.id)]


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_move_to_inactive_doctor_is_rejected(scheduling, tenant_id, booked):
    retired = make_doctor(tenant_id, is_active=False)
    scheduling.store.seed(retired)

    response = await update(scheduling, tenant_id, booked.id, doctor_id=retired.id)

    assert response.error.code == "INVALID_DOCTOR"


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_patient_of_other_tenant_is_rejected(scheduling, tenant_id, other_tenant_id, booked):
    foreign = make_patient(other_tenant_id)
    scheduling.store.seed(foreign)

    response = await update(scheduling, tenant_id, booked.id, patient_id=foreign.id)

    assert response.error.code == "INVALID_PATIENT"
    assert scheduling.store.appointment(booked.id).patient_id == booked.patient_id


# ============================================================================
# Details and status
# ============================================================================


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_details_only_change_skips_conflict_check(scheduling, tenant_id, booked):
    response = await update(scheduling, tenant_id, booked.id, notes="Traer radiografías", appointment_type="Control")

    assert response.success is True
    assert scheduling.appointments.overlap_queries == 0
    assert scheduling.store.appointment(booked.id).notes == "Traer radiografías"


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_none_clears_nullable_fields(scheduling, tenant_id, booked):
    response = await update(scheduling, tenant_id, booked.id, cost=None, notes=None)

    assert response.success is True
    stored = scheduling.store.appointment(booked.id)
    assert stored.cost is None
    assert stored.notes is None


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_update_never_changes_paid_flag(scheduling, tenant_id, booked):
    scheduling.store.committed["appointments"][booked.id].is_paid = True

    response = await update(scheduling, tenant_id, booked.id, cost=Decimal("4500"))

    assert response.success is True
    assert scheduling.store.appointment(booked.id).is_paid is True


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_cancelling_through_update_skips_conflict_check(scheduling, tenant_id, booked):
    response = await update(scheduling, tenant_id, booked.id, status=AppointmentStatus.CANCELLED)

    assert response.success is True
    assert response.appointment.status == AppointmentStatus.CANCELLED
    assert response.appointment.is_active is True
    assert scheduling.appointments.overlap_queries == 0


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_reopening_no_show_into_taken_slot_is_rejected(scheduling, tenant_id, doctor, patient):
    no_show = make_appointment(tenant_id, doctor.id, patient.id, start=at(9), status=AppointmentStatus.NO_SHOW)
    replacement = make_appointment(tenant_id, doctor.id, patient.id, start=at(9))
    scheduling.store.seed(no_show, replacement)

    response = await update(scheduling, tenant_id, no_show.id, status=AppointmentStatus.SCHEDULED)

    assert response.success is False
    assert response.error.code == "TIME_CONFLICT"
    assert scheduling.store.appointment(no_show.id).status == AppointmentStatus.NO_SHOW


# ============================================================================
# Missing and deleted
# ============================================================================


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_unknown_appointment_is_not_found(scheduling, tenant_id):
    response = await update(scheduling, tenant_id, uuid4(), notes="x")

    assert response.error.code == "NOT_FOUND"


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_appointment_of_other_tenant_is_not_found(scheduling, other_tenant_id, booked):
    response = await update(scheduling, other_tenant_id, booked.id, notes="x")

    assert response.error.code == "NOT_FOUND"
    assert scheduling.store.appointment(booked.id).notes == "Control"


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_deleted_appointment_cannot_be_updated(scheduling, tenant_id, booked):
    scheduling.store.committed["appointments"][booked.id].soft_delete()

    response = await update(scheduling, tenant_id, booked.id, notes="x")

    assert response.success is False
    assert response.error.code == "ALREADY_INACTIVE"
