"""
Doctor Entity for Scheduling Domain

Doctors are referenced by appointments and count toward the plan's doctor seats.
"""

from dataclasses import dataclass
from uuid import UUID

from clinic_scheduler.core.domain import SoftDeletableEntity

from ..exceptions import AlreadyActiveException, AlreadyInactiveException
from ..value_objects.participants import DoctorSummary


@dataclass
class Doctor(SoftDeletableEntity[UUID]):
    """Practitioner of a clinic."""

    first_name: str = ""
    last_name: str = ""
    email: str | None = None
    phone: str | None = None
    specialty: str | None = None
    license_number: str | None = None
    user_id: UUID | None = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def summary(self) -> DoctorSummary:
        return DoctorSummary(
            id=self.id,
            first_name=self.first_name,
            last_name=self.last_name,
            specialty=self.specialty,
            email=self.email,
        )

    def soft_delete(self) -> None:
        if not self.is_active:
            raise AlreadyInactiveException("Doctor")
        super().soft_delete()

    def restore(self) -> None:
        if self.is_active:
            raise AlreadyActiveException("Doctor")
        super().restore()
