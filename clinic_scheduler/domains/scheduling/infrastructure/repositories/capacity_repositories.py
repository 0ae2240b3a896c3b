"""
Capacity Repository Implementations

Tenant lock, subscription lookup and staff counts used by the capacity policy.
"""

from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from clinic_scheduler.core.shared import get_repository_logger
from clinic_scheduler.domains.scheduling.application.ports import (
    ISubscriptionRepository,
    ITenantRepository,
    IUserRepository,
)
from clinic_scheduler.domains.scheduling.domain.entities import Plan, Subscription
from clinic_scheduler.domains.scheduling.domain.value_objects import SubscriptionStatus, UserRole
from clinic_scheduler.domains.scheduling.infrastructure.persistence.sqlalchemy import (
    PlanModel,
    SubscriptionModel,
    TenantModel,
    UserModel,
)

logger = get_repository_logger("capacity")


class SQLAlchemyTenantRepository(ITenantRepository):
    def __init__(self, session: AsyncSession):
        self.session = session

    async def lock(self, tenant_id: UUID) -> bool:
        result = await self.session.execute(
            select(TenantModel.id).where(TenantModel.id == tenant_id).with_for_update()
        )
        locked = result.scalar_one_or_none() is not None
        if not locked:
            logger.warning(f"Tenant {tenant_id} not found while taking capacity lock")
        return locked


class SQLAlchemySubscriptionRepository(ISubscriptionRepository):
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_tenant(self, tenant_id: UUID) -> Subscription | None:
        result = await self.session.execute(
            select(SubscriptionModel)
            .options(joinedload(SubscriptionModel.plan))
            .where(SubscriptionModel.tenant_id == tenant_id)
        )
        model = result.scalar_one_or_none()
        if model is None:
            return None

        try:
            status = SubscriptionStatus(model.status)
        except ValueError:
            logger.warning(f"Unknown subscription status '{model.status}' for tenant {tenant_id}")
            status = SubscriptionStatus.CANCELED

        return Subscription(
            id=model.id,  # type: ignore[arg-type]
            tenant_id=model.tenant_id,  # type: ignore[arg-type]
            plan=self._plan_to_entity(model.plan) if model.plan else None,
            status=status,
            current_period_end=model.current_period_end,  # type: ignore[arg-type]
        )

    @staticmethod
    def _plan_to_entity(model: PlanModel) -> Plan:
        return Plan(
            id=model.id,  # type: ignore[arg-type]
            name=model.name,  # type: ignore[arg-type]
            display_name=model.display_name,  # type: ignore[arg-type]
            max_admins=model.max_admins,  # type: ignore[arg-type]
            max_doctors=model.max_doctors,  # type: ignore[arg-type]
            max_patients=model.max_patients,  # type: ignore[arg-type]
        )


class SQLAlchemyUserRepository(IUserRepository):
    def __init__(self, session: AsyncSession):
        self.session = session

    async def count_active_by_role(self, tenant_id: UUID) -> dict[UserRole, int]:
        result = await self.session.execute(
            select(UserModel.role, func.count(UserModel.id))
            .where(UserModel.tenant_id == tenant_id, UserModel.is_active.is_(True))
            .group_by(UserModel.role)
        )
        counts = {role: 0 for role in UserRole}
        for role, count in result.all():
            try:
                counts[UserRole(role)] = count
            except ValueError:
                logger.warning(f"Ignoring users with unknown role '{role}'")
        return counts
