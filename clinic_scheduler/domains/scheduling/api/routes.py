"""
Scheduling API Routes

FastAPI routers for appointments, doctors, patients and plan limits.
Reads require STAFF or higher; mutations require CLINIC_ADMIN or higher.
"""

from datetime import datetime
from typing import Any
from uuid import UUID

from fastapi import APIRouter, Body, Depends, Query, status

from clinic_scheduler.api.errors import ApiError, raise_for_error
from clinic_scheduler.core.tenancy import TenantContext
from clinic_scheduler.domains.scheduling.api.dependencies import (
    get_appointment_use_case,
    get_calendar_use_case,
    get_check_role_limit_use_case,
    get_count_appointments_use_case,
    get_create_appointment_use_case,
    get_create_doctor_use_case,
    get_create_patient_use_case,
    get_delete_appointment_use_case,
    get_delete_doctor_use_case,
    get_delete_patient_use_case,
    get_doctor_appointments_use_case,
    get_list_appointments_use_case,
    get_mark_done_use_case,
    get_patient_appointments_use_case,
    get_plan_limit_status_use_case,
    get_restore_appointment_use_case,
    get_restore_doctor_use_case,
    get_restore_patient_use_case,
    get_stats_use_case,
    get_update_appointment_use_case,
    require_clinic_admin,
    require_staff,
)
from clinic_scheduler.domains.scheduling.api.schemas import (
    AppointmentCreateSchema,
    AppointmentSchema,
    AppointmentStatsSchema,
    AppointmentUpdateSchema,
    DoctorCreateSchema,
    DoctorSchema,
    LimitSchema,
    MarkDoneSchema,
    PatientCreateSchema,
    PatientSchema,
    PlanLimitStatusSchema,
)
from clinic_scheduler.domains.scheduling.application.use_cases import (
    AppointmentCommand,
    AppointmentListResponse,
    AppointmentStatsRequest,
    CalendarRequest,
    CheckRoleLimitRequest,
    CheckRoleLimitUseCase,
    CountAppointmentsRequest,
    CountAppointmentsUseCase,
    CreateAppointmentRequest,
    CreateAppointmentUseCase,
    CreateDoctorRequest,
    CreateDoctorUseCase,
    CreatePatientRequest,
    CreatePatientUseCase,
    DeleteAppointmentUseCase,
    DeleteDoctorUseCase,
    DeletePatientUseCase,
    DoctorAppointmentsRequest,
    DoctorCommand,
    GetAppointmentRequest,
    GetAppointmentStatsUseCase,
    GetAppointmentUseCase,
    GetCalendarAppointmentsUseCase,
    GetDoctorAppointmentsUseCase,
    GetPatientAppointmentsUseCase,
    GetPlanLimitStatusUseCase,
    ListAppointmentsRequest,
    ListAppointmentsUseCase,
    MarkAppointmentDoneRequest,
    MarkAppointmentDoneUseCase,
    PatientAppointmentsRequest,
    PatientCommand,
    RestoreAppointmentUseCase,
    RestoreDoctorUseCase,
    RestorePatientUseCase,
    UpdateAppointmentRequest,
    UpdateAppointmentUseCase,
)
from clinic_scheduler.domains.scheduling.domain.value_objects import AppointmentStatus, UserRole

appointments_router = APIRouter(prefix="/appointments", tags=["Appointments"])
doctors_router = APIRouter(prefix="/doctors", tags=["Doctors"])
patients_router = APIRouter(prefix="/patients", tags=["Patients"])
plan_limits_router = APIRouter(prefix="/plan-limits", tags=["Plan Limits"])


def ok(data: Any) -> dict[str, Any]:
    return {"success": True, "data": data}


def appointment_data(appointment) -> dict[str, Any]:
    return AppointmentSchema.from_entity(appointment).model_dump(mode="json")


def appointment_list(result: AppointmentListResponse) -> dict[str, Any]:
    raise_for_error(result.error)
    body = ok([appointment_data(a) for a in result.appointments])
    if result.total is not None:
        body["total"] = result.total
    return body


# Update fields that cannot be cleared: null means "not sent"
_REQUIRED_UPDATE_FIELDS = {"patient_id", "doctor_id", "start_time", "end_time", "duration", "status"}
_UPDATE_FIELD_NAMES = {"type": "appointment_type", "duration": "duration_minutes"}


def build_update_request(tenant_id: UUID, appointment_id: UUID, body: AppointmentUpdateSchema) -> UpdateAppointmentRequest:
    """Map the fields present in the body onto an UpdateAppointmentRequest."""
    changes: dict[str, Any] = {}
    for name in body.model_fields_set:
        value = getattr(body, name)
        if value is None and name in _REQUIRED_UPDATE_FIELDS:
            continue
        changes[_UPDATE_FIELD_NAMES.get(name, name)] = value
    return UpdateAppointmentRequest(tenant_id=tenant_id, appointment_id=appointment_id, **changes)


# ============================================================================
# Appointments
# ============================================================================


@appointments_router.get("")
async def list_appointments(
    limit: int | None = Query(default=None, ge=1),
    offset: int = Query(default=0, ge=0),
    include_inactive: bool = False,
    doctor_id: UUID | None = None,
    patient_id: UUID | None = None,
    status_filter: AppointmentStatus | None = Query(default=None, alias="status"),
    start_from: datetime | None = Query(default=None, alias="from"),
    start_to: datetime | None = Query(default=None, alias="to"),
    caller: TenantContext = Depends(require_staff),
    use_case: ListAppointmentsUseCase = Depends(get_list_appointments_use_case),
):
    """List appointments ordered by start time."""
    result = await use_case.execute(
        ListAppointmentsRequest(
            tenant_id=caller.tenant_id,
            limit=limit,
            offset=offset,
            include_inactive=include_inactive,
            doctor_id=doctor_id,
            patient_id=patient_id,
            status=status_filter,
            start_from=start_from,
            start_to=start_to,
        )
    )
    return appointment_list(result)


@appointments_router.get("/calendar")
async def calendar(
    range_start: datetime = Query(..., alias="from"),
    range_end: datetime = Query(..., alias="to"),
    doctor_id: UUID | None = None,
    patient_id: UUID | None = None,
    include_inactive: bool = False,
    caller: TenantContext = Depends(require_staff),
    use_case: GetCalendarAppointmentsUseCase = Depends(get_calendar_use_case),
):
    """Appointments overlapping the ``[from, to)`` window."""
    result = await use_case.execute(
        CalendarRequest(
            tenant_id=caller.tenant_id,
            range_start=range_start,
            range_end=range_end,
            doctor_id=doctor_id,
            patient_id=patient_id,
            include_inactive=include_inactive,
        )
    )
    return appointment_list(result)


@appointments_router.get("/count")
async def count_appointments(
    status_filter: AppointmentStatus | None = Query(default=None, alias="status"),
    start_from: datetime | None = Query(default=None, alias="from"),
    start_to: datetime | None = Query(default=None, alias="to"),
    caller: TenantContext = Depends(require_staff),
    use_case: CountAppointmentsUseCase = Depends(get_count_appointments_use_case),
):
    count = await use_case.execute(
        CountAppointmentsRequest(
            tenant_id=caller.tenant_id,
            status=status_filter,
            start_from=start_from,
            start_to=start_to,
        )
    )
    return ok({"count": count})


@appointments_router.get("/stats")
async def appointment_stats(
    start_from: datetime | None = Query(default=None, alias="from"),
    start_to: datetime | None = Query(default=None, alias="to"),
    doctor_id: UUID | None = None,
    caller: TenantContext = Depends(require_staff),
    use_case: GetAppointmentStatsUseCase = Depends(get_stats_use_case),
):
    stats = await use_case.execute(
        AppointmentStatsRequest(
            tenant_id=caller.tenant_id,
            start_from=start_from,
            start_to=start_to,
            doctor_id=doctor_id,
        )
    )
    return ok(AppointmentStatsSchema.from_stats(stats).model_dump(mode="json"))


@appointments_router.get("/{appointment_id}")
async def get_appointment(
    appointment_id: UUID,
    caller: TenantContext = Depends(require_staff),
    use_case: GetAppointmentUseCase = Depends(get_appointment_use_case),
):
    result = await use_case.execute(GetAppointmentRequest(tenant_id=caller.tenant_id, appointment_id=appointment_id))
    raise_for_error(result.error)
    return ok(appointment_data(result.appointment))


@appointments_router.post("", status_code=status.HTTP_201_CREATED)
async def create_appointment(
    body: AppointmentCreateSchema,
    caller: TenantContext = Depends(require_clinic_admin),
    use_case: CreateAppointmentUseCase = Depends(get_create_appointment_use_case),
):
    """Book an appointment."""
    result = await use_case.execute(
        CreateAppointmentRequest(
            tenant_id=caller.tenant_id,
            patient_id=body.patient_id,
            doctor_id=body.doctor_id,
            start_time=body.start_time,
            end_time=body.end_time,
            duration_minutes=body.duration,
            status=body.status,
            appointment_type=body.type,
            notes=body.notes,
            private_notes=body.private_notes,
            cost=body.cost,
            is_paid=body.is_paid,
        )
    )
    raise_for_error(result.error)
    return ok(appointment_data(result.appointment))


@appointments_router.put("/{appointment_id}")
async def update_appointment(
    appointment_id: UUID,
    body: AppointmentUpdateSchema,
    caller: TenantContext = Depends(require_clinic_admin),
    use_case: UpdateAppointmentUseCase = Depends(get_update_appointment_use_case),
):
    """Apply a partial update."""
    result = await use_case.execute(build_update_request(caller.tenant_id, appointment_id, body))
    raise_for_error(result.error)
    return ok(appointment_data(result.appointment))


@appointments_router.delete("/{appointment_id}")
async def delete_appointment(
    appointment_id: UUID,
    caller: TenantContext = Depends(require_clinic_admin),
    use_case: DeleteAppointmentUseCase = Depends(get_delete_appointment_use_case),
):
    """Soft-delete (cancel) an appointment."""
    result = await use_case.execute(AppointmentCommand(tenant_id=caller.tenant_id, appointment_id=appointment_id))
    raise_for_error(result.error)
    return ok(appointment_data(result.appointment))


@appointments_router.post("/{appointment_id}/restore")
async def restore_appointment(
    appointment_id: UUID,
    caller: TenantContext = Depends(require_clinic_admin),
    use_case: RestoreAppointmentUseCase = Depends(get_restore_appointment_use_case),
):
    result = await use_case.execute(AppointmentCommand(tenant_id=caller.tenant_id, appointment_id=appointment_id))
    raise_for_error(result.error)
    return ok(appointment_data(result.appointment))


@appointments_router.post("/{appointment_id}/done")
async def mark_appointment_done(
    appointment_id: UUID,
    body: MarkDoneSchema | None = Body(default=None),
    caller: TenantContext = Depends(require_clinic_admin),
    use_case: MarkAppointmentDoneUseCase = Depends(get_mark_done_use_case),
):
    result = await use_case.execute(
        MarkAppointmentDoneRequest(
            tenant_id=caller.tenant_id,
            appointment_id=appointment_id,
            notes=body.notes if body else None,
        )
    )
    raise_for_error(result.error)
    return ok(appointment_data(result.appointment))


# ============================================================================
# Doctors
# ============================================================================


@doctors_router.post("", status_code=status.HTTP_201_CREATED)
async def create_doctor(
    body: DoctorCreateSchema,
    caller: TenantContext = Depends(require_clinic_admin),
    use_case: CreateDoctorUseCase = Depends(get_create_doctor_use_case),
):
    result = await use_case.execute(CreateDoctorRequest(tenant_id=caller.tenant_id, **body.model_dump()))
    raise_for_error(result.error)
    return ok(DoctorSchema.from_entity(result.doctor).model_dump(mode="json"))


@doctors_router.delete("/{doctor_id}")
async def delete_doctor(
    doctor_id: UUID,
    caller: TenantContext = Depends(require_clinic_admin),
    use_case: DeleteDoctorUseCase = Depends(get_delete_doctor_use_case),
):
    result = await use_case.execute(DoctorCommand(tenant_id=caller.tenant_id, doctor_id=doctor_id))
    raise_for_error(result.error)
    return ok(DoctorSchema.from_entity(result.doctor).model_dump(mode="json"))


@doctors_router.post("/{doctor_id}/restore")
async def restore_doctor(
    doctor_id: UUID,
    caller: TenantContext = Depends(require_clinic_admin),
    use_case: RestoreDoctorUseCase = Depends(get_restore_doctor_use_case),
):
    result = await use_case.execute(DoctorCommand(tenant_id=caller.tenant_id, doctor_id=doctor_id))
    raise_for_error(result.error)
    return ok(DoctorSchema.from_entity(result.doctor).model_dump(mode="json"))


@doctors_router.get("/{doctor_id}/appointments")
async def doctor_appointments(
    doctor_id: UUID,
    start_from: datetime | None = Query(default=None, alias="from"),
    start_to: datetime | None = Query(default=None, alias="to"),
    limit: int | None = Query(default=None, ge=1),
    caller: TenantContext = Depends(require_staff),
    use_case: GetDoctorAppointmentsUseCase = Depends(get_doctor_appointments_use_case),
):
    result = await use_case.execute(
        DoctorAppointmentsRequest(
            tenant_id=caller.tenant_id,
            doctor_id=doctor_id,
            start_from=start_from,
            start_to=start_to,
            limit=limit,
        )
    )
    return appointment_list(result)


# ============================================================================
# Patients
# ============================================================================


@patients_router.post("", status_code=status.HTTP_201_CREATED)
async def create_patient(
    body: PatientCreateSchema,
    caller: TenantContext = Depends(require_clinic_admin),
    use_case: CreatePatientUseCase = Depends(get_create_patient_use_case),
):
    result = await use_case.execute(CreatePatientRequest(tenant_id=caller.tenant_id, **body.model_dump()))
    raise_for_error(result.error)
    return ok(PatientSchema.from_entity(result.patient).model_dump(mode="json"))


@patients_router.delete("/{patient_id}")
async def delete_patient(
    patient_id: UUID,
    caller: TenantContext = Depends(require_clinic_admin),
    use_case: DeletePatientUseCase = Depends(get_delete_patient_use_case),
):
    result = await use_case.execute(PatientCommand(tenant_id=caller.tenant_id, patient_id=patient_id))
    raise_for_error(result.error)
    return ok(PatientSchema.from_entity(result.patient).model_dump(mode="json"))


@patients_router.post("/{patient_id}/restore")
async def restore_patient(
    patient_id: UUID,
    caller: TenantContext = Depends(require_clinic_admin),
    use_case: RestorePatientUseCase = Depends(get_restore_patient_use_case),
):
    result = await use_case.execute(PatientCommand(tenant_id=caller.tenant_id, patient_id=patient_id))
    raise_for_error(result.error)
    return ok(PatientSchema.from_entity(result.patient).model_dump(mode="json"))


@patients_router.get("/{patient_id}/appointments")
async def patient_appointments(
    patient_id: UUID,
    include_inactive: bool = False,
    limit: int | None = Query(default=None, ge=1),
    caller: TenantContext = Depends(require_staff),
    use_case: GetPatientAppointmentsUseCase = Depends(get_patient_appointments_use_case),
):
    result = await use_case.execute(
        PatientAppointmentsRequest(
            tenant_id=caller.tenant_id,
            patient_id=patient_id,
            include_inactive=include_inactive,
            limit=limit,
        )
    )
    return appointment_list(result)


# ============================================================================
# Plan limits
# ============================================================================


@plan_limits_router.get("")
async def plan_limit_status(
    caller: TenantContext = Depends(require_staff),
    use_case: GetPlanLimitStatusUseCase = Depends(get_plan_limit_status_use_case),
):
    status_ = await use_case.execute(caller.tenant_id)
    return ok(PlanLimitStatusSchema.from_status(status_).model_dump(mode="json"))


@plan_limits_router.get("/roles/{role}")
async def check_role_limit(
    role: str,
    caller: TenantContext = Depends(require_staff),
    use_case: CheckRoleLimitUseCase = Depends(get_check_role_limit_use_case),
):
    """Whether one more user with ``role`` fits the plan."""
    try:
        user_role = UserRole.from_string(role)
    except ValueError as e:
        raise ApiError("INVALID_PAYLOAD", f"Unknown role: {role}", {"allowed": UserRole.values()}) from e

    result = await use_case.execute(CheckRoleLimitRequest(tenant_id=caller.tenant_id, role=user_role))
    return ok(LimitSchema.from_result(result).model_dump(mode="json"))


routers = [appointments_router, doctors_router, patients_router, plan_limits_router]

__all__ = ["routers"]
