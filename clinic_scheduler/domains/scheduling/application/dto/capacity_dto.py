"""
Capacity DTOs

Results of plan limit checks.
"""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from ...domain.value_objects.appointment_status import PlanLimits, ResourceKind, SubscriptionStatus


@dataclass
class LimitCheckResult:
    """
    Outcome of a capacity check.

    ``limit`` and ``current_count`` are None for unlimited resources
    (STAFF users).
    """

    allowed: bool
    kind: ResourceKind | None = None
    current_count: int | None = None
    limit: int | None = None
    message: str | None = None

    @property
    def remaining(self) -> int | None:
        if self.limit is None or self.current_count is None:
            return None
        return max(0, self.limit - self.current_count)

    @classmethod
    def unlimited(cls) -> "LimitCheckResult":
        return cls(allowed=True)


@dataclass
class ResolvedPlan:
    """Plan in force for a tenant after the free-plan fallback."""

    name: str
    display_name: str
    limits: PlanLimits
    plan_id: UUID | None = None
    subscription_status: SubscriptionStatus | None = None
    current_period_end: datetime | None = None

    @property
    def is_fallback(self) -> bool:
        return self.plan_id is None


@dataclass
class PlanLimitStatus:
    """Usage of every capacity-limited resource of a tenant."""

    plan: ResolvedPlan
    doctors: LimitCheckResult
    patients: LimitCheckResult
    admins: LimitCheckResult
