"""
Unit tests for doctor and patient management use cases.

Create and restore are capacity-gated under the tenant lock; the free
plan allows 3 doctors and 15 patients.
"""

from uuid import uuid4

import pytest

from clinic_scheduler.domains.scheduling.application.use_cases import (
    CreateDoctorRequest,
    CreatePatientRequest,
    DoctorCommand,
    PatientCommand,
)
from tests.utils.builders import make_doctor, make_patient


def new_doctor(tenant_id, **overrides) -> CreateDoctorRequest:
    values = {"tenant_id": tenant_id, "first_name": "Ana", "last_name": "Ruiz"}
    values.update(overrides)
    return CreateDoctorRequest(**values)


# ============================================================================
# Doctors
# ============================================================================


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_create_doctor(scheduling, tenant_id):
    response = await scheduling.create_doctor().execute(
        new_doctor(tenant_id, email="  Ana.Ruiz@Clinic.test ", license_number="MP-1234")
    )

    assert response.success is True
    doctor = scheduling.store.doctor(response.doctor.id)
    assert doctor.email == "ana.ruiz@clinic.test"
    assert doctor.is_active is True
    assert scheduling.store.locks == [("tenant", tenant_id)]


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_fourth_doctor_exceeds_free_plan(scheduling, tenant_id):
    """Scenario: three active doctors on the free plan, a fourth is rejected."""
    # Arrange
    scheduling.store.seed(*[make_doctor(tenant_id) for _ in range(3)])

    # Act
    response = await scheduling.create_doctor().execute(new_doctor(tenant_id))

    # Assert
    assert response.success is False
    assert response.error.code == "PLAN_LIMIT_EXCEEDED"
    assert response.error.details["limit"] == 3
    assert len(scheduling.store.committed["doctors"]) == 3


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_inactive_doctors_do_not_use_seats(scheduling, tenant_id):
    scheduling.store.seed(*[make_doctor(tenant_id) for _ in range(2)], make_doctor(tenant_id, is_active=False))

    response = await scheduling.create_doctor().execute(new_doctor(tenant_id))

    assert response.success is True


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_duplicate_doctor_email_is_rejected(scheduling, tenant_id):
    scheduling.store.seed(make_doctor(tenant_id, email="ana@clinic.test"))

    response = await scheduling.create_doctor().execute(new_doctor(tenant_id, email="ANA@clinic.test"))

    assert response.error.code == "DUPLICATE_EMAIL"


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_duplicate_license_is_rejected(scheduling, tenant_id):
    scheduling.store.seed(make_doctor(tenant_id, license_number="MP-9", is_active=False))

    response = await scheduling.create_doctor().execute(new_doctor(tenant_id, license_number="MP-9"))

    assert response.error.code == "DUPLICATE_LICENSE"


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_same_email_in_other_tenant_is_allowed(scheduling, tenant_id, other_tenant_id):
    scheduling.store.seed(make_doctor(other_tenant_id, email="ana@clinic.test"))

    response = await scheduling.create_doctor().execute(new_doctor(tenant_id, email="ana@clinic.test"))

    assert response.success is True


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_delete_doctor_twice(scheduling, tenant_id, doctor):
    first = await scheduling.delete_doctor().execute(DoctorCommand(tenant_id, doctor.id))
    second = await scheduling.delete_doctor().execute(DoctorCommand(tenant_id, doctor.id))

    assert first.success is True
    assert scheduling.store.doctor(doctor.id).is_active is False
    assert second.error.code == "ALREADY_INACTIVE"


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_delete_doctor_of_other_tenant_is_not_found(scheduling, other_tenant_id, doctor):
    response = await scheduling.delete_doctor().execute(DoctorCommand(other_tenant_id, doctor.id))

    assert response.error.code == "NOT_FOUND"


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_restore_doctor_rechecks_limit(scheduling, tenant_id):
    retired = make_doctor(tenant_id, is_active=False)
    scheduling.store.seed(retired, *[make_doctor(tenant_id) for _ in range(3)])

    response = await scheduling.restore_doctor().execute(DoctorCommand(tenant_id, retired.id))

    assert response.error.code == "PLAN_LIMIT_EXCEEDED"
    assert scheduling.store.doctor(retired.id).is_active is False


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_restore_doctor(scheduling, tenant_id):
    retired = make_doctor(tenant_id, is_active=False)
    scheduling.store.seed(retired)

    response = await scheduling.restore_doctor().execute(DoctorCommand(tenant_id, retired.id))

    assert response.success is True
    assert scheduling.store.doctor(retired.id).is_active is True
    assert scheduling.store.locks == [("tenant", tenant_id), ("doctor", retired.id)]


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_restore_active_doctor_is_rejected(scheduling, tenant_id, doctor):
    response = await scheduling.restore_doctor().execute(DoctorCommand(tenant_id, doctor.id))

    assert response.error.code == "ALREADY_ACTIVE"


# ============================================================================
# Patients
# ============================================================================


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_create_patient(scheduling, tenant_id):
    response = await scheduling.create_patient().execute(
        CreatePatientRequest(tenant_id, "María", "López", email="Maria@Example.com", document_number="30111222")
    )

    assert response.success is True
    patient = scheduling.store.patient(response.patient.id)
    assert patient.email == "maria@example.com"
    assert patient.tenant_id == tenant_id


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_sixteenth_patient_exceeds_free_plan(scheduling, tenant_id):
    scheduling.store.seed(*[make_patient(tenant_id) for _ in range(15)])

    response = await scheduling.create_patient().execute(CreatePatientRequest(tenant_id, "María", "López"))

    assert response.success is False
    assert response.error.code == "PLAN_LIMIT_EXCEEDED"
    assert len(scheduling.store.committed["patients"]) == 15
    assert scheduling.uow.rollbacks == 1


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_delete_and_restore_patient(scheduling, tenant_id, patient):
    deleted = await scheduling.delete_patient().execute(PatientCommand(tenant_id, patient.id))
    restored = await scheduling.restore_patient().execute(PatientCommand(tenant_id, patient.id))

    assert deleted.success is True
    assert restored.success is True
    assert scheduling.store.patient(patient.id).is_active is True


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_restore_patient_when_plan_is_full(scheduling, tenant_id):
    former = make_patient(tenant_id, is_active=False)
    scheduling.store.seed(former, *[make_patient(tenant_id) for _ in range(15)])

    response = await scheduling.restore_patient().execute(PatientCommand(tenant_id, former.id))

    assert response.error.code == "PLAN_LIMIT_EXCEEDED"


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_unknown_patient_is_not_found(scheduling, tenant_id):
    deleted = await scheduling.delete_patient().execute(PatientCommand(tenant_id, uuid4()))
    restored = await scheduling.restore_patient().execute(PatientCommand(tenant_id, uuid4()))

    assert deleted.error.code == "NOT_FOUND"
    assert restored.error.code == "NOT_FOUND"
