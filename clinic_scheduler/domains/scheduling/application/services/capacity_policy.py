"""
Capacity Policy

Resolves the plan in force for a tenant and compares its limits with the
tenant's active doctors, patients and admin users.

Checks are reads. Writers that act on them call ``lock_tenant`` first so
that counting and inserting happen inside one serialized transaction.
"""

import logging
from datetime import UTC, datetime
from typing import Callable
from uuid import UUID

from clinic_scheduler.config.settings import get_settings
from clinic_scheduler.domains.scheduling.application.dto import (
    LimitCheckResult,
    PlanLimitStatus,
    ResolvedPlan,
)
from clinic_scheduler.domains.scheduling.application.ports import (
    IDoctorRepository,
    IPatientRepository,
    ISubscriptionRepository,
    ITenantRepository,
    IUserRepository,
)
from clinic_scheduler.domains.scheduling.domain.exceptions import PlanLimitExceededException
from clinic_scheduler.domains.scheduling.domain.value_objects import (
    ADMIN_ROLES,
    PlanLimits,
    ResourceKind,
    UserRole,
)

logger = logging.getLogger(__name__)

_LIMIT_LABELS = {
    ResourceKind.ADMIN: "Admin",
    ResourceKind.DOCTOR: "Doctor",
    ResourceKind.PATIENT: "Patient",
}


def free_plan_from_settings() -> ResolvedPlan:
    """Build the fallback plan from configuration."""
    settings = get_settings()
    return ResolvedPlan(
        name=settings.FREE_PLAN_NAME,
        display_name=settings.FREE_PLAN_NAME.capitalize(),
        limits=PlanLimits(
            max_admins=settings.FREE_PLAN_MAX_ADMINS,
            max_doctors=settings.FREE_PLAN_MAX_DOCTORS,
            max_patients=settings.FREE_PLAN_MAX_PATIENTS,
        ),
    )


def limit_reached_message(kind: ResourceKind, limit: int) -> str:
    label = _LIMIT_LABELS[kind]
    return f"{label} limit reached. Your plan allows {limit} {label.lower()}(s). Upgrade to add more."


class CapacityPolicy:
    """
    Plan-based capacity checks.

    Example:
        ```python
        policy = CapacityPolicy(subscriptions, doctors, patients, users, tenants)
        await policy.lock_tenant(tenant_id)
        await policy.ensure_can_add(tenant_id, ResourceKind.DOCTOR)
        ```
    """

    def __init__(
        self,
        subscription_repository: ISubscriptionRepository,
        doctor_repository: IDoctorRepository,
        patient_repository: IPatientRepository,
        user_repository: IUserRepository,
        tenant_repository: ITenantRepository,
        free_plan: ResolvedPlan | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        """
        Initialize policy with dependencies.

        Args:
            subscription_repository: Billing subscriptions
            doctor_repository: Doctor counts
            patient_repository: Patient counts
            user_repository: Staff user counts
            tenant_repository: Tenant row lock
            free_plan: Fallback plan (defaults to the configured free plan)
            clock: Current time provider
        """
        self.subscription_repo = subscription_repository
        self.doctor_repo = doctor_repository
        self.patient_repo = patient_repository
        self.user_repo = user_repository
        self.tenant_repo = tenant_repository
        self.free_plan = free_plan or free_plan_from_settings()
        self._clock = clock or (lambda: datetime.now(UTC))

    async def lock_tenant(self, tenant_id: UUID) -> None:
        """Serialize capacity-gated writes of a tenant."""
        await self.tenant_repo.lock(tenant_id)

    async def resolve_plan(self, tenant_id: UUID) -> ResolvedPlan:
        """
        Get the plan in force for a tenant.

        Falls back to the free plan when there is no subscription or it is
        no longer current.
        """
        subscription = await self.subscription_repo.get_by_tenant(tenant_id)
        if subscription is None or subscription.plan is None or not subscription.is_current(self._clock()):
            return self.free_plan

        plan = subscription.plan
        return ResolvedPlan(
            name=plan.name,
            display_name=plan.display_name or plan.name,
            limits=plan.limits,
            plan_id=plan.id,
            subscription_status=subscription.status,
            current_period_end=subscription.current_period_end,
        )

    async def resolve_limits(self, tenant_id: UUID) -> PlanLimits:
        plan = await self.resolve_plan(tenant_id)
        return plan.limits

    async def count_usage(self, tenant_id: UUID, kind: ResourceKind) -> int:
        """Count active resources of a kind."""
        if kind == ResourceKind.DOCTOR:
            return await self.doctor_repo.count_active(tenant_id)
        if kind == ResourceKind.PATIENT:
            return await self.patient_repo.count_active(tenant_id)
        counts = await self.user_repo.count_active_by_role(tenant_id)
        return sum(counts.get(role, 0) for role in ADMIN_ROLES)

    async def check_limit(self, tenant_id: UUID, kind: ResourceKind) -> LimitCheckResult:
        """Check if one more resource of a kind fits the tenant's plan."""
        limits = await self.resolve_limits(tenant_id)
        current = await self.count_usage(tenant_id, kind)
        return self._evaluate(kind, current, limits.limit_for(kind))

    async def check_doctor_limit(self, tenant_id: UUID) -> LimitCheckResult:
        return await self.check_limit(tenant_id, ResourceKind.DOCTOR)

    async def check_patient_limit(self, tenant_id: UUID) -> LimitCheckResult:
        return await self.check_limit(tenant_id, ResourceKind.PATIENT)

    async def check_admin_limit(self, tenant_id: UUID) -> LimitCheckResult:
        return await self.check_limit(tenant_id, ResourceKind.ADMIN)

    async def check_role_limit_for_new_user(self, tenant_id: UUID, role: UserRole) -> LimitCheckResult:
        """
        Check if a user with ``role`` can be added.

        OWNER, ADMIN and CLINIC_ADMIN share the admin seats. DOCTOR users are
        checked against the doctor seats. STAFF is unlimited.
        """
        if role == UserRole.STAFF:
            return LimitCheckResult.unlimited()

        limits = await self.resolve_limits(tenant_id)
        counts = await self.user_repo.count_active_by_role(tenant_id)

        if role.counts_toward_admin_limit():
            current = sum(counts.get(r, 0) for r in ADMIN_ROLES)
            return self._evaluate(ResourceKind.ADMIN, current, limits.max_admins)

        return self._evaluate(ResourceKind.DOCTOR, counts.get(UserRole.DOCTOR, 0), limits.max_doctors)

    async def ensure_can_add(self, tenant_id: UUID, kind: ResourceKind) -> LimitCheckResult:
        """
        Raise if the tenant has no free seat of a kind.

        Raises:
            PlanLimitExceededException: With current count and limit
        """
        result = await self.check_limit(tenant_id, kind)
        if not result.allowed:
            logger.warning(
                f"Plan limit reached for tenant {tenant_id}: {kind.value} {result.current_count}/{result.limit}"
            )
            raise PlanLimitExceededException(
                kind=kind,
                current_count=result.current_count or 0,
                limit=result.limit or 0,
                message=result.message or limit_reached_message(kind, result.limit or 0),
            )
        return result

    async def get_plan_limit_status(self, tenant_id: UUID) -> PlanLimitStatus:
        """Get plan and usage of every limited resource."""
        plan = await self.resolve_plan(tenant_id)
        limits = plan.limits
        doctors = await self.count_usage(tenant_id, ResourceKind.DOCTOR)
        patients = await self.count_usage(tenant_id, ResourceKind.PATIENT)
        admins = await self.count_usage(tenant_id, ResourceKind.ADMIN)
        return PlanLimitStatus(
            plan=plan,
            doctors=self._evaluate(ResourceKind.DOCTOR, doctors, limits.max_doctors),
            patients=self._evaluate(ResourceKind.PATIENT, patients, limits.max_patients),
            admins=self._evaluate(ResourceKind.ADMIN, admins, limits.max_admins),
        )

    @staticmethod
    def _evaluate(kind: ResourceKind, current: int, limit: int) -> LimitCheckResult:
        if current >= limit:
            return LimitCheckResult(
                allowed=False,
                kind=kind,
                current_count=current,
                limit=limit,
                message=limit_reached_message(kind, limit),
            )
        return LimitCheckResult(allowed=True, kind=kind, current_count=current, limit=limit)
