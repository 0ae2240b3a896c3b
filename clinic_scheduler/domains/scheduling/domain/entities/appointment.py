"""
Appointment Entity for Scheduling Domain

Represents one encounter between a patient and a doctor of the same tenant.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from uuid import UUID

from clinic_scheduler.core.domain import SoftDeletableEntity

from ..exceptions import AlreadyActiveException, AlreadyInactiveException, InvalidTimeRangeException
from ..value_objects.appointment_status import AppointmentStatus, TimeInterval
from ..value_objects.participants import DoctorSummary, PatientSummary


@dataclass
class Appointment(SoftDeletableEntity[UUID]):
    """
    Appointment aggregate for the scheduling domain.

    Soft delete and status move together: an inactive appointment is always
    CANCELLED, and restore brings it back as SCHEDULED. ``is_paid`` mirrors
    the payment ledger and is never written by scheduling operations.

    Example:
        ```python
        appointment = Appointment.schedule(
            tenant_id=tenant_id,
            patient_id=patient_id,
            doctor_id=doctor_id,
            interval=TimeInterval(start, end),
        )
        appointment.mark_done(notes="Limpieza completa")
        ```
    """

    # References
    patient_id: UUID | None = None
    doctor_id: UUID | None = None

    # Scheduling
    start_time: datetime | None = None
    end_time: datetime | None = None
    duration_minutes: int = 0

    # Status
    status: AppointmentStatus = AppointmentStatus.SCHEDULED

    # Details
    appointment_type: str | None = None
    notes: str | None = None
    private_notes: str | None = None

    # Billing (is_paid is a ledger projection)
    cost: Decimal | None = None
    is_paid: bool = False

    # Read side only, filled by repositories that load the participants
    patient: PatientSummary | None = field(default=None, compare=False)
    doctor: DoctorSummary | None = field(default=None, compare=False)

    @property
    def interval(self) -> TimeInterval:
        """Get the booked time range."""
        return TimeInterval(start=self.start_time, end=self.end_time)

    def blocks_slot(self) -> bool:
        """Check if this appointment occupies its doctor's time."""
        return self.is_active and self.status.blocks_slot()

    # Mutations

    def reschedule(self, interval: TimeInterval, duration_minutes: int | None = None) -> None:
        """Move the appointment, keeping duration consistent with the interval."""
        if duration_minutes is not None and duration_minutes != interval.duration_minutes:
            raise InvalidTimeRangeException(
                interval.start,
                interval.end,
                message=(
                    f"Duration of {duration_minutes} minutes does not match "
                    f"the {interval.duration_minutes} minute interval"
                ),
            )
        self.start_time = interval.start
        self.end_time = interval.end
        self.duration_minutes = interval.duration_minutes
        self.touch()

    def change_status(self, status: AppointmentStatus) -> None:
        """Set a caller-chosen status on an active appointment."""
        if not self.is_active:
            raise AlreadyInactiveException("Appointment", "update", "Cannot update a deleted appointment")
        self.status = status
        self.touch()

    def soft_delete(self) -> None:
        """Deactivate and cancel the appointment."""
        if not self.is_active:
            raise AlreadyInactiveException("Appointment")
        self.status = AppointmentStatus.CANCELLED
        super().soft_delete()

    def restore(self) -> None:
        """Reactivate a deleted appointment as SCHEDULED."""
        if self.is_active:
            raise AlreadyActiveException("Appointment")
        self.status = AppointmentStatus.SCHEDULED
        super().restore()

    def mark_done(self, notes: str | None = None) -> None:
        """Complete the appointment, replacing notes when new ones are given."""
        if not self.is_active:
            raise AlreadyInactiveException("Appointment", "mark_done", "Cannot complete a deleted appointment")
        self.status = AppointmentStatus.COMPLETED
        if notes:
            self.notes = notes
        self.touch()

    @classmethod
    def schedule(
        cls,
        tenant_id: UUID,
        patient_id: UUID,
        doctor_id: UUID,
        interval: TimeInterval,
        duration_minutes: int | None = None,
        status: AppointmentStatus = AppointmentStatus.SCHEDULED,
        appointment_type: str | None = None,
        notes: str | None = None,
        private_notes: str | None = None,
        cost: Decimal | None = None,
    ) -> "Appointment":
        """Factory method for a new, unpaid, active appointment."""
        appointment = cls(
            tenant_id=tenant_id,
            patient_id=patient_id,
            doctor_id=doctor_id,
            status=status,
            appointment_type=appointment_type,
            notes=notes,
            private_notes=private_notes,
            cost=cost,
            is_paid=False,
        )
        appointment.reschedule(interval, duration_minutes)
        return appointment
