"""
Scheduling Domain Value Objects

Status enums and value objects for the appointment scheduling domain.
"""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from clinic_scheduler.core.domain import StatusEnum, ValueObject


class AppointmentStatus(StatusEnum):
    """
    Appointment lifecycle states.

    - SCHEDULED: initial state of every new or restored appointment
    - CONFIRMED, IN_PROGRESS, RESCHEDULED: working states
    - COMPLETED: terminal, reached through mark-done
    - CANCELLED: terminal, also the state of every soft-deleted appointment
    - NO_SHOW: terminal

    CANCELLED and NO_SHOW appointments do not hold their time slot.
    """

    SCHEDULED = "SCHEDULED"
    CONFIRMED = "CONFIRMED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"
    NO_SHOW = "NO_SHOW"
    RESCHEDULED = "RESCHEDULED"

    def is_terminal(self) -> bool:
        """Check if this is a terminal state."""
        return self in _TERMINAL_STATUSES

    def blocks_slot(self) -> bool:
        """Check if an active appointment in this state occupies the doctor's time."""
        return self not in NON_BLOCKING_STATUSES


NON_BLOCKING_STATUSES = frozenset({AppointmentStatus.CANCELLED, AppointmentStatus.NO_SHOW})
_TERMINAL_STATUSES = frozenset(
    {AppointmentStatus.COMPLETED, AppointmentStatus.CANCELLED, AppointmentStatus.NO_SHOW}
)


class UserRole(StatusEnum):
    """
    Clinic staff roles, highest first.

    OWNER > ADMIN > CLINIC_ADMIN > DOCTOR > STAFF
    """

    OWNER = "OWNER"
    ADMIN = "ADMIN"
    CLINIC_ADMIN = "CLINIC_ADMIN"
    DOCTOR = "DOCTOR"
    STAFF = "STAFF"

    @property
    def rank(self) -> int:
        """Position in the hierarchy (higher means more privileges)."""
        return _ROLE_RANKS[self]

    def is_at_least(self, other: "UserRole") -> bool:
        """Check if this role is equal to or above another."""
        return self.rank >= other.rank

    def counts_toward_admin_limit(self) -> bool:
        """OWNER, ADMIN and CLINIC_ADMIN share the plan's admin seats."""
        return self in ADMIN_ROLES


_ROLE_RANKS = {
    UserRole.OWNER: 5,
    UserRole.ADMIN: 4,
    UserRole.CLINIC_ADMIN: 3,
    UserRole.DOCTOR: 2,
    UserRole.STAFF: 1,
}

ADMIN_ROLES = frozenset({UserRole.OWNER, UserRole.ADMIN, UserRole.CLINIC_ADMIN})


class ResourceKind(StatusEnum):
    """Capacity-limited resource kinds."""

    ADMIN = "admin"
    DOCTOR = "doctor"
    PATIENT = "patient"


class SubscriptionStatus(StatusEnum):
    """Billing subscription states."""

    ACTIVE = "ACTIVE"
    TRIALING = "TRIALING"
    PAST_DUE = "PAST_DUE"
    CANCELED = "CANCELED"


class SchedulingErrorCode(StatusEnum):
    """Machine-readable error codes returned by scheduling operations."""

    NOT_FOUND = "NOT_FOUND"
    INVALID_PATIENT = "INVALID_PATIENT"
    INVALID_DOCTOR = "INVALID_DOCTOR"
    INVALID_TIME_RANGE = "INVALID_TIME_RANGE"
    INVALID_PAYLOAD = "INVALID_PAYLOAD"
    TIME_CONFLICT = "TIME_CONFLICT"
    ALREADY_INACTIVE = "ALREADY_INACTIVE"
    ALREADY_ACTIVE = "ALREADY_ACTIVE"
    PLAN_LIMIT_EXCEEDED = "PLAN_LIMIT_EXCEEDED"
    DUPLICATE_EMAIL = "DUPLICATE_EMAIL"
    DUPLICATE_LICENSE = "DUPLICATE_LICENSE"


MIN_INTERVAL = timedelta(minutes=1)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


@dataclass(frozen=True)
class TimeInterval(ValueObject):
    """
    Half-open time range ``[start, end)``.

    Naive datetimes are taken as UTC. Intervals last at least one minute.
    Touching intervals (``a.end == b.start``) do not overlap.
    """

    start: datetime
    end: datetime

    def _validate(self) -> None:
        """Validate interval constraints."""
        from ..exceptions import InvalidTimeRangeException

        object.__setattr__(self, "start", _as_utc(self.start))
        object.__setattr__(self, "end", _as_utc(self.end))
        if self.start >= self.end:
            raise InvalidTimeRangeException(self.start, self.end)
        if self.end - self.start < MIN_INTERVAL:
            raise InvalidTimeRangeException(self.start, self.end, message="Interval must last at least one minute")

    @property
    def duration_minutes(self) -> int:
        """Length of the interval rounded to whole minutes."""
        return round((self.end - self.start).total_seconds() / 60)

    def overlaps(self, other: "TimeInterval") -> bool:
        """Check if two half-open intervals share any instant."""
        return self.start < other.end and self.end > other.start

    def __str__(self) -> str:
        return f"{self.start.isoformat()} - {self.end.isoformat()}"


@dataclass(frozen=True)
class PlanLimits(ValueObject):
    """Maximum number of active resources a tenant may hold."""

    max_admins: int
    max_doctors: int
    max_patients: int

    def _validate(self) -> None:
        if min(self.max_admins, self.max_doctors, self.max_patients) < 0:
            raise ValueError("Plan limits cannot be negative")

    def limit_for(self, kind: ResourceKind) -> int:
        """Get the ceiling for a resource kind."""
        return {
            ResourceKind.ADMIN: self.max_admins,
            ResourceKind.DOCTOR: self.max_doctors,
            ResourceKind.PATIENT: self.max_patients,
        }[kind]
