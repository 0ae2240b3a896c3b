"""
Participant summaries embedded in appointment reads.
"""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class PatientSummary:
    """Contact card of the patient an appointment belongs to."""

    id: UUID
    first_name: str
    last_name: str
    email: str | None = None
    phone: str | None = None


@dataclass(frozen=True)
class DoctorSummary:
    """Who attends an appointment."""

    id: UUID
    first_name: str
    last_name: str
    specialty: str | None = None
    email: str | None = None
