"""
Scheduling API Dependencies

FastAPI dependencies for caller identity, role checks and use cases.
"""

from typing import Awaitable, Callable

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from clinic_scheduler.api.errors import ApiError
from clinic_scheduler.core.container import SchedulingContainer, get_container
from clinic_scheduler.core.tenancy import TenantContext, get_tenant_context
from clinic_scheduler.database import get_async_db
from clinic_scheduler.domains.scheduling.application.use_cases import (
    CheckRoleLimitUseCase,
    CountAppointmentsUseCase,
    CreateAppointmentUseCase,
    CreateDoctorUseCase,
    CreatePatientUseCase,
    DeleteAppointmentUseCase,
    DeleteDoctorUseCase,
    DeletePatientUseCase,
    GetAppointmentStatsUseCase,
    GetAppointmentUseCase,
    GetCalendarAppointmentsUseCase,
    GetDoctorAppointmentsUseCase,
    GetPatientAppointmentsUseCase,
    GetPlanLimitStatusUseCase,
    ListAppointmentsUseCase,
    MarkAppointmentDoneUseCase,
    RestoreAppointmentUseCase,
    RestoreDoctorUseCase,
    RestorePatientUseCase,
    UpdateAppointmentUseCase,
)
from clinic_scheduler.domains.scheduling.domain.value_objects import UserRole

# ============================================================
# CALLER IDENTITY
# ============================================================


async def get_caller() -> TenantContext:
    """Caller identity resolved by TenantContextMiddleware; 401 when absent."""
    context = get_tenant_context()
    if context is None:
        raise ApiError("UNAUTHENTICATED", "Tenant context is required")
    return context


def require_min_role(minimum: UserRole) -> Callable[..., Awaitable[TenantContext]]:
    """
    Build a dependency that admits callers with ``minimum`` role or higher.

    Example:
        ```python
        @router.post("", dependencies=[Depends(require_min_role(UserRole.CLINIC_ADMIN))])
        ```
    """

    async def checker(caller: TenantContext = Depends(get_caller)) -> TenantContext:
        try:
            role = UserRole.from_string(caller.role) if caller.role else None
        except ValueError:
            role = None
        if role is None or not role.is_at_least(minimum):
            raise ApiError(
                "FORBIDDEN",
                "Insufficient permissions",
                {"required_role": minimum.value, "role": caller.role},
            )
        return caller

    return checker


require_staff = require_min_role(UserRole.STAFF)
require_clinic_admin = require_min_role(UserRole.CLINIC_ADMIN)


# ============================================================
# USE CASES
# ============================================================


def get_scheduling_container() -> SchedulingContainer:
    return get_container().scheduling


def get_create_appointment_use_case(
    db: AsyncSession = Depends(get_async_db),
    container: SchedulingContainer = Depends(get_scheduling_container),
) -> CreateAppointmentUseCase:
    return container.create_create_appointment_use_case(db)


def get_update_appointment_use_case(
    db: AsyncSession = Depends(get_async_db),
    container: SchedulingContainer = Depends(get_scheduling_container),
) -> UpdateAppointmentUseCase:
    return container.create_update_appointment_use_case(db)


def get_delete_appointment_use_case(
    db: AsyncSession = Depends(get_async_db),
    container: SchedulingContainer = Depends(get_scheduling_container),
) -> DeleteAppointmentUseCase:
    return container.create_delete_appointment_use_case(db)


def get_restore_appointment_use_case(
    db: AsyncSession = Depends(get_async_db),
    container: SchedulingContainer = Depends(get_scheduling_container),
) -> RestoreAppointmentUseCase:
    return container.create_restore_appointment_use_case(db)


def get_mark_done_use_case(
    db: AsyncSession = Depends(get_async_db),
    container: SchedulingContainer = Depends(get_scheduling_container),
) -> MarkAppointmentDoneUseCase:
    return container.create_mark_appointment_done_use_case(db)


def get_appointment_use_case(
    db: AsyncSession = Depends(get_async_db),
    container: SchedulingContainer = Depends(get_scheduling_container),
) -> GetAppointmentUseCase:
    return container.create_get_appointment_use_case(db)


def get_list_appointments_use_case(
    db: AsyncSession = Depends(get_async_db),
    container: SchedulingContainer = Depends(get_scheduling_container),
) -> ListAppointmentsUseCase:
    return container.create_list_appointments_use_case(db)


def get_count_appointments_use_case(
    db: AsyncSession = Depends(get_async_db),
    container: SchedulingContainer = Depends(get_scheduling_container),
) -> CountAppointmentsUseCase:
    return container.create_count_appointments_use_case(db)


def get_calendar_use_case(
    db: AsyncSession = Depends(get_async_db),
    container: SchedulingContainer = Depends(get_scheduling_container),
) -> GetCalendarAppointmentsUseCase:
    return container.create_calendar_use_case(db)


def get_stats_use_case(
    db: AsyncSession = Depends(get_async_db),
    container: SchedulingContainer = Depends(get_scheduling_container),
) -> GetAppointmentStatsUseCase:
    return container.create_appointment_stats_use_case(db)


def get_doctor_appointments_use_case(
    db: AsyncSession = Depends(get_async_db),
    container: SchedulingContainer = Depends(get_scheduling_container),
) -> GetDoctorAppointmentsUseCase:
    return container.create_doctor_appointments_use_case(db)


def get_patient_appointments_use_case(
    db: AsyncSession = Depends(get_async_db),
    container: SchedulingContainer = Depends(get_scheduling_container),
) -> GetPatientAppointmentsUseCase:
    return container.create_patient_appointments_use_case(db)


def get_create_doctor_use_case(
    db: AsyncSession = Depends(get_async_db),
    container: SchedulingContainer = Depends(get_scheduling_container),
) -> CreateDoctorUseCase:
    return container.create_create_doctor_use_case(db)


def get_delete_doctor_use_case(
    db: AsyncSession = Depends(get_async_db),
    container: SchedulingContainer = Depends(get_scheduling_container),
) -> DeleteDoctorUseCase:
    return container.create_delete_doctor_use_case(db)


def get_restore_doctor_use_case(
    db: AsyncSession = Depends(get_async_db),
    container: SchedulingContainer = Depends(get_scheduling_container),
) -> RestoreDoctorUseCase:
    return container.create_restore_doctor_use_case(db)


def get_create_patient_use_case(
    db: AsyncSession = Depends(get_async_db),
    container: SchedulingContainer = Depends(get_scheduling_container),
) -> CreatePatientUseCase:
    return container.create_create_patient_use_case(db)


def get_delete_patient_use_case(
    db: AsyncSession = Depends(get_async_db),
    container: SchedulingContainer = Depends(get_scheduling_container),
) -> DeletePatientUseCase:
    return container.create_delete_patient_use_case(db)


def get_restore_patient_use_case(
    db: AsyncSession = Depends(get_async_db),
    container: SchedulingContainer = Depends(get_scheduling_container),
) -> RestorePatientUseCase:
    return container.create_restore_patient_use_case(db)


def get_plan_limit_status_use_case(
    db: AsyncSession = Depends(get_async_db),
    container: SchedulingContainer = Depends(get_scheduling_container),
) -> GetPlanLimitStatusUseCase:
    return container.create_plan_limit_status_use_case(db)


def get_check_role_limit_use_case(
    db: AsyncSession = Depends(get_async_db),
    container: SchedulingContainer = Depends(get_scheduling_container),
) -> CheckRoleLimitUseCase:
    return container.create_check_role_limit_use_case(db)
