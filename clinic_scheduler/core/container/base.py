# ============================================================================
# SCOPE: GLOBAL
# Description: Contenedor base con configuración compartida.
# Tenant-Aware: No - la configuración es la misma para todos los tenants.
# ============================================================================
"""
Base Container - Shared configuration.
"""

import logging

from clinic_scheduler.config.settings import Settings, get_settings
from clinic_scheduler.domains.scheduling.application.dto import ResolvedPlan
from clinic_scheduler.domains.scheduling.application.services import free_plan_from_settings

logger = logging.getLogger(__name__)


class BaseContainer:
    """
    Base container for shared, request-independent objects.
    """

    def __init__(self, settings: Settings | None = None):
        """
        Initialize base container.

        Args:
            settings: Optional settings (defaults to the global settings)
        """
        self.settings = settings or get_settings()
        self._free_plan: ResolvedPlan | None = None

        logger.info("BaseContainer initialized")

    def get_free_plan(self) -> ResolvedPlan:
        """Get the fallback plan (singleton)."""
        if self._free_plan is None:
            self._free_plan = free_plan_from_settings()
            logger.info(
                f"Free plan limits: admins={self._free_plan.limits.max_admins}, "
                f"doctors={self._free_plan.limits.max_doctors}, "
                f"patients={self._free_plan.limits.max_patients}"
            )
        return self._free_plan
