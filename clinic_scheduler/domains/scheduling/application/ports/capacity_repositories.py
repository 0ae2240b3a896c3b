"""
Capacity Ports

Read access to billing and staff data used by the capacity policy,
plus the tenant row lock that serializes capacity-gated writes.
"""

from typing import Protocol, runtime_checkable
from uuid import UUID

from clinic_scheduler.domains.scheduling.domain.entities import Subscription
from clinic_scheduler.domains.scheduling.domain.value_objects import UserRole


@runtime_checkable
class ISubscriptionRepository(Protocol):
    """Subscription lookups (billing collaborator)."""

    async def get_by_tenant(self, tenant_id: UUID) -> Subscription | None:
        """Get the tenant's subscription with its plan, if any."""
        ...


@runtime_checkable
class IUserRepository(Protocol):
    """Staff user counts."""

    async def count_active_by_role(self, tenant_id: UUID) -> dict[UserRole, int]:
        """
        Count active users of a tenant per role.

        Returns:
            Mapping with every UserRole as key (0 when no users)
        """
        ...


@runtime_checkable
class ITenantRepository(Protocol):
    """Tenant row access."""

    async def lock(self, tenant_id: UUID) -> bool:
        """
        Lock the tenant row until the transaction ends.

        Returns:
            True if the tenant exists
        """
        ...
