"""
Appointment DTOs

Data shapes shared between appointment use cases, repositories and the API.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any, Literal
from uuid import UUID

from clinic_scheduler.core.domain import DomainException

from ...domain.entities.appointment import Appointment
from ...domain.value_objects.appointment_status import AppointmentStatus


class _Unset:
    """Marker for update fields the caller did not send."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNSET"


UNSET: Any = _Unset()


def is_set(value: Any) -> bool:
    """Check whether an update field was provided."""
    return value is not UNSET


@dataclass
class OperationError:
    """Typed error returned by a failed operation."""

    code: str
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_exception(cls, error: DomainException) -> "OperationError":
        return cls(code=error.code, message=error.message, details=dict(error.details))

    def to_dict(self) -> dict[str, Any]:
        return {"code": self.code, "message": self.message, "details": self.details}


@dataclass
class AppointmentResponse:
    """Result of an appointment mutation."""

    success: bool
    appointment: Appointment | None = None
    error: OperationError | None = None

    @classmethod
    def ok(cls, appointment: Appointment) -> "AppointmentResponse":
        return cls(success=True, appointment=appointment)

    @classmethod
    def failed(cls, error: DomainException) -> "AppointmentResponse":
        return cls(success=False, error=OperationError.from_exception(error))


@dataclass
class AppointmentFilter:
    """
    Filters for appointment queries.

    ``start_from``/``start_to`` bound the start instant (inclusive);
    ``start_before`` is an exclusive upper bound.
    Inactive appointments are excluded unless ``include_inactive``.
    """

    doctor_id: UUID | None = None
    patient_id: UUID | None = None
    status: AppointmentStatus | None = None
    start_from: datetime | None = None
    start_to: datetime | None = None
    start_before: datetime | None = None
    include_inactive: bool = False
    limit: int | None = None
    offset: int = 0
    order: Literal["asc", "desc"] = "asc"


@dataclass
class AppointmentStats:
    """Aggregated appointment figures for a tenant."""

    total: int = 0
    scheduled: int = 0
    completed: int = 0
    cancelled: int = 0
    no_show: int = 0
    today_count: int = 0
    week_count: int = 0
    revenue: Decimal = Decimal("0")
    pending_payment: Decimal = Decimal("0")
