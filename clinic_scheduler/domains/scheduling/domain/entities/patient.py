"""
Patient Entity for Scheduling Domain
"""

from dataclasses import dataclass
from uuid import UUID

from clinic_scheduler.core.domain import SoftDeletableEntity

from ..exceptions import AlreadyActiveException, AlreadyInactiveException
from ..value_objects.participants import PatientSummary


@dataclass
class Patient(SoftDeletableEntity[UUID]):
    """Patient registered in a clinic."""

    first_name: str = ""
    last_name: str = ""
    email: str | None = None
    phone: str | None = None
    document_number: str | None = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def summary(self) -> PatientSummary:
        return PatientSummary(
            id=self.id,
            first_name=self.first_name,
            last_name=self.last_name,
            email=self.email,
            phone=self.phone,
        )

    def soft_delete(self) -> None:
        if not self.is_active:
            raise AlreadyInactiveException("Patient")
        super().soft_delete()

    def restore(self) -> None:
        if self.is_active:
            raise AlreadyActiveException("Patient")
        super().restore()
