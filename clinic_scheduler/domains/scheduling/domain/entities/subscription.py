"""
Plan and Subscription Entities

Read-only views of the billing collaborator's data, used to resolve
capacity limits.
"""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from clinic_scheduler.core.domain import Entity, TenantScopedEntity

from ..value_objects.appointment_status import PlanLimits, SubscriptionStatus


@dataclass
class Plan(Entity[UUID]):
    """Subscription tier."""

    name: str = ""
    display_name: str = ""
    max_admins: int = 0
    max_doctors: int = 0
    max_patients: int = 0

    @property
    def limits(self) -> PlanLimits:
        return PlanLimits(
            max_admins=self.max_admins,
            max_doctors=self.max_doctors,
            max_patients=self.max_patients,
        )


@dataclass
class Subscription(TenantScopedEntity[UUID]):
    """A tenant's subscription to a plan."""

    plan: Plan | None = None
    status: SubscriptionStatus = SubscriptionStatus.ACTIVE
    current_period_end: datetime | None = None

    def is_current(self, now: datetime | None = None) -> bool:
        """
        Check if the subscription grants its plan right now.

        A canceled subscription, or one whose period has ended, does not.
        """
        if self.plan is None or self.status == SubscriptionStatus.CANCELED:
            return False
        if self.current_period_end is None:
            return True
        now = now or datetime.now(UTC)
        period_end = self.current_period_end
        if period_end.tzinfo is None:
            period_end = period_end.replace(tzinfo=UTC)
        return period_end > now
