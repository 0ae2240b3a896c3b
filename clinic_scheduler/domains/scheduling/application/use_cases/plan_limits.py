"""
Plan Limit Use Cases

Expose the capacity policy to the API: usage overview and the pre-check
run before a staff user with a given role is added.
"""

from dataclasses import dataclass
from uuid import UUID

from clinic_scheduler.domains.scheduling.application.dto import LimitCheckResult, PlanLimitStatus
from clinic_scheduler.domains.scheduling.application.services import CapacityPolicy
from clinic_scheduler.domains.scheduling.domain.value_objects import UserRole


class GetPlanLimitStatusUseCase:
    """Plan in force and seat usage of a tenant."""

    def __init__(self, capacity_policy: CapacityPolicy):
        self.capacity = capacity_policy

    async def execute(self, tenant_id: UUID) -> PlanLimitStatus:
        return await self.capacity.get_plan_limit_status(tenant_id)


@dataclass
class CheckRoleLimitRequest:
    tenant_id: UUID
    role: UserRole


class CheckRoleLimitUseCase:
    """Whether one more user with a role fits the tenant's plan."""

    def __init__(self, capacity_policy: CapacityPolicy):
        self.capacity = capacity_policy

    async def execute(self, request: CheckRoleLimitRequest) -> LimitCheckResult:
        return await self.capacity.check_role_limit_for_new_user(request.tenant_id, request.role)
