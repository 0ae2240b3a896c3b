"""
Scheduling DTOs
"""

from .appointment_dto import (
    UNSET,
    AppointmentFilter,
    AppointmentResponse,
    AppointmentStats,
    OperationError,
    is_set,
)
from .capacity_dto import LimitCheckResult, PlanLimitStatus, ResolvedPlan

__all__ = [
    "UNSET",
    "AppointmentFilter",
    "AppointmentResponse",
    "AppointmentStats",
    "LimitCheckResult",
    "OperationError",
    "PlanLimitStatus",
    "ResolvedPlan",
    "is_set",
]
