"""
Tenancy - request-scoped caller identity.
"""

from clinic_scheduler.core.tenancy.context import (
    TenantContext,
    get_tenant_context,
    set_tenant_context,
)
from clinic_scheduler.core.tenancy.middleware import TenantContextMiddleware, TenantResolutionError

__all__ = [
    "TenantContext",
    "TenantContextMiddleware",
    "TenantResolutionError",
    "get_tenant_context",
    "set_tenant_context",
]
