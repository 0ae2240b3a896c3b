"""
Appointment Query Use Cases

Read-only views over a tenant's appointments: single lookup, filtered
listing, calendar window and per-doctor / per-patient agendas.
Reads take no locks.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from clinic_scheduler.config.settings import get_settings
from clinic_scheduler.core.domain import DomainException
from clinic_scheduler.domains.scheduling.application.dto import (
    AppointmentFilter,
    AppointmentResponse,
    OperationError,
)
from clinic_scheduler.domains.scheduling.application.ports import (
    IAppointmentRepository,
    IDoctorRepository,
    IPatientRepository,
)
from clinic_scheduler.domains.scheduling.domain.entities import Appointment
from clinic_scheduler.domains.scheduling.domain.exceptions import AppointmentNotFoundException
from clinic_scheduler.domains.scheduling.domain.value_objects import AppointmentStatus, TimeInterval

logger = logging.getLogger(__name__)


def clamp_page_size(limit: int | None) -> int:
    """Apply the default page size and the configured maximum."""
    settings = get_settings()
    if limit is None or limit < 1:
        return settings.DEFAULT_PAGE_SIZE
    return min(limit, settings.MAX_PAGE_SIZE)


@dataclass
class AppointmentListResponse:
    """Response containing appointments."""

    success: bool
    appointments: list[Appointment] = field(default_factory=list)
    total: int | None = None
    error: OperationError | None = None

    @classmethod
    def failed(cls, error: DomainException) -> "AppointmentListResponse":
        return cls(success=False, error=OperationError.from_exception(error))


# ============================================================================
# Single appointment
# ============================================================================


@dataclass
class GetAppointmentRequest:
    tenant_id: UUID
    appointment_id: UUID


class GetAppointmentUseCase:
    """Fetch one appointment; another tenant's appointment is NOT_FOUND."""

    def __init__(self, appointment_repository: IAppointmentRepository):
        self.appointment_repo = appointment_repository

    async def execute(self, request: GetAppointmentRequest) -> AppointmentResponse:
        appointment = await self.appointment_repo.get_by_id(request.tenant_id, request.appointment_id)
        if appointment is None:
            return AppointmentResponse.failed(AppointmentNotFoundException(request.appointment_id))
        return AppointmentResponse.ok(appointment)


# ============================================================================
# Listing
# ============================================================================


@dataclass
class ListAppointmentsRequest:
    """Request for a filtered page of appointments, ordered by start time."""

    tenant_id: UUID
    limit: int | None = None
    offset: int = 0
    include_inactive: bool = False
    doctor_id: UUID | None = None
    patient_id: UUID | None = None
    status: AppointmentStatus | None = None
    start_from: datetime | None = None
    start_to: datetime | None = None

    def to_filter(self) -> AppointmentFilter:
        return AppointmentFilter(
            doctor_id=self.doctor_id,
            patient_id=self.patient_id,
            status=self.status,
            start_from=self.start_from,
            start_to=self.start_to,
            include_inactive=self.include_inactive,
            limit=clamp_page_size(self.limit),
            offset=max(0, self.offset),
            order="asc",
        )


class ListAppointmentsUseCase:
    """List appointments with filters and pagination."""

    def __init__(self, appointment_repository: IAppointmentRepository):
        self.appointment_repo = appointment_repository

    async def execute(self, request: ListAppointmentsRequest) -> AppointmentListResponse:
        filters = request.to_filter()
        appointments = await self.appointment_repo.find(request.tenant_id, filters)
        total = await self.appointment_repo.count(request.tenant_id, filters)
        return AppointmentListResponse(success=True, appointments=appointments, total=total)


@dataclass
class CountAppointmentsRequest:
    tenant_id: UUID
    status: AppointmentStatus | None = None
    start_from: datetime | None = None
    start_to: datetime | None = None


class CountAppointmentsUseCase:
    """Count active appointments, optionally by status and start window."""

    def __init__(self, appointment_repository: IAppointmentRepository):
        self.appointment_repo = appointment_repository

    async def execute(self, request: CountAppointmentsRequest) -> int:
        filters = AppointmentFilter(
            status=request.status,
            start_from=request.start_from,
            start_to=request.start_to,
        )
        return await self.appointment_repo.count(request.tenant_id, filters)


# ============================================================================
# Calendar
# ============================================================================


@dataclass
class CalendarRequest:
    """Appointments overlapping ``[range_start, range_end)``."""

    tenant_id: UUID
    range_start: datetime
    range_end: datetime
    doctor_id: UUID | None = None
    patient_id: UUID | None = None
    include_inactive: bool = False


class GetCalendarAppointmentsUseCase:
    """
    Calendar view.

    Returns every appointment whose interval overlaps the window, so a
    visit that started before the window but ends inside it is shown.
    """

    def __init__(self, appointment_repository: IAppointmentRepository):
        self.appointment_repo = appointment_repository

    async def execute(self, request: CalendarRequest) -> AppointmentListResponse:
        try:
            window = TimeInterval(start=request.range_start, end=request.range_end)
        except DomainException as e:
            return AppointmentListResponse.failed(e)

        appointments = await self.appointment_repo.find_in_range(
            request.tenant_id,
            range_start=window.start,
            range_end=window.end,
            doctor_id=request.doctor_id,
            patient_id=request.patient_id,
            include_inactive=request.include_inactive,
        )
        return AppointmentListResponse(success=True, appointments=appointments, total=len(appointments))


# ============================================================================
# Agendas
# ============================================================================


@dataclass
class DoctorAppointmentsRequest:
    tenant_id: UUID
    doctor_id: UUID
    start_from: datetime | None = None
    start_to: datetime | None = None
    limit: int | None = None


class GetDoctorAppointmentsUseCase:
    """
    Active appointments of a doctor, earliest first.

    A doctor that is missing, inactive or of another tenant yields an
    empty list.
    """

    def __init__(self, appointment_repository: IAppointmentRepository, doctor_repository: IDoctorRepository):
        self.appointment_repo = appointment_repository
        self.doctor_repo = doctor_repository

    async def execute(self, request: DoctorAppointmentsRequest) -> AppointmentListResponse:
        doctor = await self.doctor_repo.get_by_id(request.tenant_id, request.doctor_id)
        if doctor is None or not doctor.is_valid_for(request.tenant_id):
            logger.debug(f"Doctor {request.doctor_id} not valid for tenant {request.tenant_id}")
            return AppointmentListResponse(success=True)

        filters = AppointmentFilter(
            doctor_id=request.doctor_id,
            start_from=request.start_from,
            start_to=request.start_to,
            limit=clamp_page_size(request.limit),
            order="asc",
        )
        appointments = await self.appointment_repo.find(request.tenant_id, filters)
        return AppointmentListResponse(success=True, appointments=appointments, total=len(appointments))


@dataclass
class PatientAppointmentsRequest:
    tenant_id: UUID
    patient_id: UUID
    include_inactive: bool = False
    limit: int | None = None


class GetPatientAppointmentsUseCase:
    """
    Appointment history of a patient, newest first.

    A patient that is missing, inactive or of another tenant yields an
    empty list.
    """

    def __init__(self, appointment_repository: IAppointmentRepository, patient_repository: IPatientRepository):
        self.appointment_repo = appointment_repository
        self.patient_repo = patient_repository

    async def execute(self, request: PatientAppointmentsRequest) -> AppointmentListResponse:
        patient = await self.patient_repo.get_by_id(request.tenant_id, request.patient_id)
        if patient is None or not patient.is_valid_for(request.tenant_id):
            logger.debug(f"Patient {request.patient_id} not valid for tenant {request.tenant_id}")
            return AppointmentListResponse(success=True)

        filters = AppointmentFilter(
            patient_id=request.patient_id,
            include_inactive=request.include_inactive,
            limit=clamp_page_size(request.limit),
            order="desc",
        )
        appointments = await self.appointment_repo.find(request.tenant_id, filters)
        return AppointmentListResponse(success=True, appointments=appointments, total=len(appointments))
