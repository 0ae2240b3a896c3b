"""
Scheduling Domain Value Objects
"""

from .appointment_status import (
    ADMIN_ROLES,
    NON_BLOCKING_STATUSES,
    AppointmentStatus,
    PlanLimits,
    ResourceKind,
    SchedulingErrorCode,
    SubscriptionStatus,
    TimeInterval,
    UserRole,
)
from .participants import DoctorSummary, PatientSummary

__all__ = [
    "ADMIN_ROLES",
    "NON_BLOCKING_STATUSES",
    "AppointmentStatus",
    "DoctorSummary",
    "PatientSummary",
    "PlanLimits",
    "ResourceKind",
    "SchedulingErrorCode",
    "SubscriptionStatus",
    "TimeInterval",
    "UserRole",
]
