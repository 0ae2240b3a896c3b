"""
Create Appointment Use Case

Books a new appointment after validating interval, patient, doctor and
the doctor's agenda. Optionally records the payment the caller announced.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from uuid import UUID

from clinic_scheduler.config.settings import get_settings
from clinic_scheduler.core.domain import DomainException, Money
from clinic_scheduler.core.shared import get_use_case_logger
from clinic_scheduler.domains.scheduling.application.dto import AppointmentResponse
from clinic_scheduler.domains.scheduling.application.ports import (
    IAppointmentRepository,
    IDoctorRepository,
    IPatientRepository,
    IPaymentGateway,
    IUnitOfWork,
)
from clinic_scheduler.domains.scheduling.application.services import ConflictDetector
from clinic_scheduler.domains.scheduling.domain.entities import Appointment
from clinic_scheduler.domains.scheduling.domain.exceptions import InvalidDoctorException, InvalidPatientException
from clinic_scheduler.domains.scheduling.domain.value_objects import AppointmentStatus, TimeInterval

from .base import TransactionalUseCase

logger = get_use_case_logger("create_appointment")


@dataclass
class CreateAppointmentRequest:
    """
    Request for booking an appointment.

    ``is_paid`` is a payment intent: with a positive cost it triggers a
    payment record. The appointment itself is always stored unpaid.
    """

    tenant_id: UUID
    patient_id: UUID
    doctor_id: UUID
    start_time: datetime
    end_time: datetime
    duration_minutes: int | None = None
    status: AppointmentStatus | None = None
    appointment_type: str | None = None
    notes: str | None = None
    private_notes: str | None = None
    cost: Decimal | None = None
    is_paid: bool = False

    @property
    def wants_payment(self) -> bool:
        return self.is_paid and self.cost is not None and self.cost > 0


class CreateAppointmentUseCase(TransactionalUseCase):
    """
    Use case for booking appointments.

    Order of checks: time range, patient, doctor, conflict. The doctor row
    stays locked from the conflict check until commit.
    """

    def __init__(
        self,
        appointment_repository: IAppointmentRepository,
        patient_repository: IPatientRepository,
        doctor_repository: IDoctorRepository,
        conflict_detector: ConflictDetector,
        payment_gateway: IPaymentGateway,
        unit_of_work: IUnitOfWork,
        payment_note: str | None = None,
    ):
        """
        Initialize use case with dependencies.

        Args:
            appointment_repository: Appointment data access
            patient_repository: Patient data access
            doctor_repository: Doctor data access (row locks)
            conflict_detector: Agenda overlap checks
            payment_gateway: Payment ledger
            unit_of_work: Transaction boundary
            payment_note: Note stored on auto-created payments
        """
        super().__init__(unit_of_work)
        self.appointment_repo = appointment_repository
        self.patient_repo = patient_repository
        self.doctor_repo = doctor_repository
        self.conflict_detector = conflict_detector
        self.payment_gateway = payment_gateway
        self.payment_note = payment_note or get_settings().AUTO_PAYMENT_NOTE

    async def execute(self, request: CreateAppointmentRequest) -> AppointmentResponse:
        """
        Execute appointment booking.

        Returns:
            AppointmentResponse with the stored appointment or a typed error
        """
        log = logger.with_context(tenant_id=str(request.tenant_id), doctor_id=str(request.doctor_id))
        try:
            appointment = await self._in_transaction(lambda: self._create(request))
        except DomainException as e:
            log.warning(f"Appointment not created: {e.message}", code=e.code)
            return AppointmentResponse.failed(e)

        log.info(f"Appointment created: {appointment.id}", appointment_id=str(appointment.id))

        if request.wants_payment:
            appointment = await self._record_payment(appointment, request)

        return AppointmentResponse.ok(appointment)

    async def _create(self, request: CreateAppointmentRequest) -> Appointment:
        interval = TimeInterval(start=request.start_time, end=request.end_time)

        appointment = Appointment.schedule(
            tenant_id=request.tenant_id,
            patient_id=request.patient_id,
            doctor_id=request.doctor_id,
            interval=interval,
            duration_minutes=request.duration_minutes,
            status=request.status or AppointmentStatus.SCHEDULED,
            appointment_type=request.appointment_type,
            notes=request.notes,
            private_notes=request.private_notes,
            cost=request.cost,
        )

        patient = await self.patient_repo.get_by_id(request.tenant_id, request.patient_id)
        if patient is None or not patient.is_valid_for(request.tenant_id):
            raise InvalidPatientException(request.patient_id)

        doctor = await self.doctor_repo.get_by_id(request.tenant_id, request.doctor_id, for_update=True)
        if doctor is None or not doctor.is_valid_for(request.tenant_id):
            raise InvalidDoctorException(request.doctor_id)

        await self.conflict_detector.ensure_available(request.tenant_id, request.doctor_id, interval)

        appointment.patient = patient.summary()
        appointment.doctor = doctor.summary()
        return await self.appointment_repo.add(appointment)

    async def _record_payment(self, appointment: Appointment, request: CreateAppointmentRequest) -> Appointment:
        """
        Create the announced payment in its own transaction.

        The booking is already committed; a failure here is logged and the
        unpaid appointment is returned.
        """
        try:
            await self.payment_gateway.create_payment(
                tenant_id=request.tenant_id,
                patient_id=request.patient_id,
                amount=Money(amount=request.cost),
                paid_at=appointment.start_time,
                note=self.payment_note,
            )
            await self.uow.commit()
        except Exception as e:
            await self.uow.rollback()
            logger.warning(
                f"Auto-payment creation failed for appointment {appointment.id}: {e}",
                appointment_id=str(appointment.id),
                tenant_id=str(request.tenant_id),
            )
            return appointment

        # is_paid comes from the ledger
        refreshed = await self.appointment_repo.get_by_id(request.tenant_id, appointment.id)
        return refreshed or appointment
