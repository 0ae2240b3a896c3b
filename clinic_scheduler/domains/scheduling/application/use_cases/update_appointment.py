"""
Update Appointment Use Case

Applies a partial change to an active appointment, re-validating only
what the change touches.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any
from uuid import UUID

from clinic_scheduler.core.domain import DomainException
from clinic_scheduler.core.shared import get_use_case_logger
from clinic_scheduler.domains.scheduling.application.dto import UNSET, AppointmentResponse, is_set
from clinic_scheduler.domains.scheduling.application.ports import (
    IAppointmentRepository,
    IDoctorRepository,
    IPatientRepository,
    IUnitOfWork,
)
from clinic_scheduler.domains.scheduling.application.services import ConflictDetector
from clinic_scheduler.domains.scheduling.domain.entities import Appointment
from clinic_scheduler.domains.scheduling.domain.exceptions import (
    AlreadyInactiveException,
    AppointmentNotFoundException,
    InvalidDoctorException,
    InvalidPatientException,
)
from clinic_scheduler.domains.scheduling.domain.value_objects import TimeInterval

from .base import TransactionalUseCase

logger = get_use_case_logger("update_appointment")


@dataclass
class UpdateAppointmentRequest:
    """
    Partial appointment update.

    Fields left as UNSET are not changed. ``appointment_type``, ``notes``,
    ``private_notes`` and ``cost`` accept None to clear the value.
    There is no ``is_paid`` field: payment status is owned by the ledger.
    """

    tenant_id: UUID
    appointment_id: UUID
    patient_id: Any = UNSET
    doctor_id: Any = UNSET
    start_time: Any = UNSET
    end_time: Any = UNSET
    duration_minutes: Any = UNSET
    status: Any = UNSET
    appointment_type: Any = UNSET
    notes: Any = UNSET
    private_notes: Any = UNSET
    cost: Any = UNSET

    @property
    def changes_time(self) -> bool:
        return is_set(self.start_time) or is_set(self.end_time)


class UpdateAppointmentUseCase(TransactionalUseCase):
    """
    Use case for editing appointments.

    The conflict check runs, excluding the appointment itself, when the
    resulting appointment blocks its slot and either its time, its doctor,
    or a move out of CANCELLED/NO_SHOW changed. Locks are taken on the
    appointment row first, then on the target doctor row.
    """

    def __init__(
        self,
        appointment_repository: IAppointmentRepository,
        patient_repository: IPatientRepository,
        doctor_repository: IDoctorRepository,
        conflict_detector: ConflictDetector,
        unit_of_work: IUnitOfWork,
    ):
        super().__init__(unit_of_work)
        self.appointment_repo = appointment_repository
        self.patient_repo = patient_repository
        self.doctor_repo = doctor_repository
        self.conflict_detector = conflict_detector

    async def execute(self, request: UpdateAppointmentRequest) -> AppointmentResponse:
        """
        Execute appointment update.

        Returns:
            AppointmentResponse with the updated appointment or a typed error
        """
        log = logger.with_context(tenant_id=str(request.tenant_id), appointment_id=str(request.appointment_id))
        try:
            appointment = await self._in_transaction(lambda: self._update(request))
        except DomainException as e:
            log.warning(f"Appointment not updated: {e.message}", code=e.code)
            return AppointmentResponse.failed(e)

        log.info(f"Appointment updated: {appointment.id}")
        return AppointmentResponse.ok(appointment)

    async def _update(self, request: UpdateAppointmentRequest) -> Appointment:
        appointment = await self.appointment_repo.get_by_id(
            request.tenant_id, request.appointment_id, for_update=True
        )
        if appointment is None:
            raise AppointmentNotFoundException(request.appointment_id)
        if not appointment.is_active:
            raise AlreadyInactiveException("Appointment", "update", "Cannot update a deleted appointment")

        start: datetime = request.start_time if is_set(request.start_time) else appointment.start_time
        end: datetime = request.end_time if is_set(request.end_time) else appointment.end_time
        interval = TimeInterval(start=start, end=end)

        duration = request.duration_minutes if is_set(request.duration_minutes) else None
        if request.changes_time or duration is not None:
            appointment.reschedule(interval, duration)

        if is_set(request.patient_id) and request.patient_id != appointment.patient_id:
            patient = await self.patient_repo.get_by_id(request.tenant_id, request.patient_id)
            if patient is None or not patient.is_valid_for(request.tenant_id):
                raise InvalidPatientException(request.patient_id)
            appointment.patient_id = request.patient_id
            appointment.patient = patient.summary()

        doctor_changed = is_set(request.doctor_id) and request.doctor_id != appointment.doctor_id
        if doctor_changed:
            doctor = await self.doctor_repo.get_by_id(request.tenant_id, request.doctor_id, for_update=True)
            if doctor is None or not doctor.is_valid_for(request.tenant_id):
                raise InvalidDoctorException(request.doctor_id)
            appointment.doctor_id = request.doctor_id
            appointment.doctor = doctor.summary()

        previous_blocked = appointment.blocks_slot()
        if is_set(request.status) and request.status is not None:
            appointment.change_status(request.status)

        reopened = appointment.blocks_slot() and not previous_blocked
        if appointment.blocks_slot() and (request.changes_time or doctor_changed or reopened):
            if not doctor_changed:
                await self.doctor_repo.get_by_id(request.tenant_id, appointment.doctor_id, for_update=True)
            await self.conflict_detector.ensure_available(
                request.tenant_id,
                appointment.doctor_id,
                interval,
                exclude_appointment_id=appointment.id,
            )

        self._apply_details(appointment, request)
        return await self.appointment_repo.save(appointment)

    @staticmethod
    def _apply_details(appointment: Appointment, request: UpdateAppointmentRequest) -> None:
        if is_set(request.appointment_type):
            appointment.appointment_type = request.appointment_type
        if is_set(request.notes):
            appointment.notes = request.notes
        if is_set(request.private_notes):
            appointment.private_notes = request.private_notes
        if is_set(request.cost):
            appointment.cost = Decimal(str(request.cost)) if request.cost is not None else None
        appointment.touch()
