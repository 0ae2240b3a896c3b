"""
Appointment Lifecycle Use Cases

Soft delete, restore and completion of appointments.
"""

from dataclasses import dataclass
from uuid import UUID

from clinic_scheduler.core.domain import DomainException
from clinic_scheduler.core.shared import get_use_case_logger
from clinic_scheduler.domains.scheduling.application.dto import AppointmentResponse
from clinic_scheduler.domains.scheduling.application.ports import (
    IAppointmentRepository,
    IDoctorRepository,
    IPatientRepository,
    IUnitOfWork,
)
from clinic_scheduler.domains.scheduling.application.services import ConflictDetector
from clinic_scheduler.domains.scheduling.domain.entities import Appointment
from clinic_scheduler.domains.scheduling.domain.exceptions import (
    AppointmentNotFoundException,
    InvalidDoctorException,
    InvalidPatientException,
)

from .base import TransactionalUseCase

logger = get_use_case_logger("appointment_lifecycle")


@dataclass
class AppointmentCommand:
    """Identifies one appointment of a tenant."""

    tenant_id: UUID
    appointment_id: UUID


@dataclass
class MarkAppointmentDoneRequest(AppointmentCommand):
    notes: str | None = None


class _AppointmentLifecycleUseCase(TransactionalUseCase):
    operation = ""

    def __init__(self, appointment_repository: IAppointmentRepository, unit_of_work: IUnitOfWork):
        super().__init__(unit_of_work)
        self.appointment_repo = appointment_repository

    async def execute(self, request: AppointmentCommand) -> AppointmentResponse:
        log = logger.with_context(
            tenant_id=str(request.tenant_id),
            appointment_id=str(request.appointment_id),
            operation=self.operation,
        )
        try:
            appointment = await self._in_transaction(lambda: self._run(request))
        except DomainException as e:
            log.warning(f"Appointment {self.operation} rejected: {e.message}", code=e.code)
            return AppointmentResponse.failed(e)

        log.info(f"Appointment {self.operation} done: {appointment.id}")
        return AppointmentResponse.ok(appointment)

    async def _locked_appointment(self, request: AppointmentCommand) -> Appointment:
        appointment = await self.appointment_repo.get_by_id(
            request.tenant_id, request.appointment_id, for_update=True
        )
        if appointment is None:
            raise AppointmentNotFoundException(request.appointment_id)
        return appointment

    async def _run(self, request: AppointmentCommand) -> Appointment:
        raise NotImplementedError


class DeleteAppointmentUseCase(_AppointmentLifecycleUseCase):
    """Soft-delete: deactivate and cancel. Repeating it returns ALREADY_INACTIVE."""

    operation = "delete"

    async def _run(self, request: AppointmentCommand) -> Appointment:
        appointment = await self._locked_appointment(request)
        appointment.soft_delete()
        return await self.appointment_repo.save(appointment)


class RestoreAppointmentUseCase(_AppointmentLifecycleUseCase):
    """
    Bring a deleted appointment back as SCHEDULED.

    Patient and doctor must still be active in the tenant, and the slot
    is re-checked against the doctor's agenda, since another booking may
    have taken it while the appointment was deleted.
    """

    operation = "restore"

    def __init__(
        self,
        appointment_repository: IAppointmentRepository,
        patient_repository: IPatientRepository,
        doctor_repository: IDoctorRepository,
        conflict_detector: ConflictDetector,
        unit_of_work: IUnitOfWork,
    ):
        super().__init__(appointment_repository, unit_of_work)
        self.patient_repo = patient_repository
        self.doctor_repo = doctor_repository
        self.conflict_detector = conflict_detector

    async def _run(self, request: AppointmentCommand) -> Appointment:
        appointment = await self._locked_appointment(request)
        appointment.restore()

        patient = await self.patient_repo.get_by_id(request.tenant_id, appointment.patient_id)
        if patient is None or not patient.is_valid_for(request.tenant_id):
            raise InvalidPatientException(appointment.patient_id)

        doctor = await self.doctor_repo.get_by_id(request.tenant_id, appointment.doctor_id, for_update=True)
        if doctor is None or not doctor.is_valid_for(request.tenant_id):
            raise InvalidDoctorException(appointment.doctor_id)

        await self.conflict_detector.ensure_available(
            request.tenant_id,
            appointment.doctor_id,
            appointment.interval,
            exclude_appointment_id=appointment.id,
        )
        return await self.appointment_repo.save(appointment)


class MarkAppointmentDoneUseCase(_AppointmentLifecycleUseCase):
    """
    Complete an active appointment.

    An active CANCELLED or NO_SHOW appointment takes its slot back when
    completed, so its agenda is re-checked in that case.
    """

    operation = "mark_done"

    def __init__(
        self,
        appointment_repository: IAppointmentRepository,
        doctor_repository: IDoctorRepository,
        conflict_detector: ConflictDetector,
        unit_of_work: IUnitOfWork,
    ):
        super().__init__(appointment_repository, unit_of_work)
        self.doctor_repo = doctor_repository
        self.conflict_detector = conflict_detector

    async def _run(self, request: MarkAppointmentDoneRequest) -> Appointment:
        appointment = await self._locked_appointment(request)
        was_blocking = appointment.blocks_slot()
        appointment.mark_done(request.notes)

        if not was_blocking:
            await self.doctor_repo.get_by_id(request.tenant_id, appointment.doctor_id, for_update=True)
            await self.conflict_detector.ensure_available(
                request.tenant_id,
                appointment.doctor_id,
                appointment.interval,
                exclude_appointment_id=appointment.id,
            )
        return await self.appointment_repo.save(appointment)
