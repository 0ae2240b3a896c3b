# ============================================================================
# SCOPE: MULTI-TENANT
# Description: Contexto de tenant usando contextvars de Python.
#              Propaga la identidad del llamador a través de llamadas async.
# Tenant-Aware: Yes - ESTE ES el mecanismo central de tenant-awareness.
# ============================================================================
"""
TenantContext - Request-scoped caller identity using Python's contextvars.

The authentication gateway in front of this service resolves the caller
and forwards tenant id, role and user id. The middleware stores them here
for the duration of the request.

Usage:
    ctx = TenantContext(tenant_id=uuid, role="ADMIN")
    set_tenant_context(ctx)

    ctx = get_tenant_context()
    tenant_id = ctx.tenant_id
"""

from __future__ import annotations

import uuid
from contextvars import ContextVar
from dataclasses import dataclass

# Context variable for tenant context - thread-safe and async-safe
_tenant_context: ContextVar[TenantContext | None] = ContextVar("tenant_context", default=None)


@dataclass(frozen=True)
class TenantContext:
    """
    Request-scoped caller identity.

    Attributes:
        tenant_id: The clinic (tenant) UUID
        role: Caller role name as sent by the gateway (e.g. "ADMIN")
        user_id: Calling user UUID (optional)
    """

    tenant_id: uuid.UUID
    role: str | None = None
    user_id: uuid.UUID | None = None


def get_tenant_context() -> TenantContext | None:
    """
    Get the current tenant context.

    Returns:
        TenantContext if set, None otherwise.
    """
    return _tenant_context.get()


def set_tenant_context(context: TenantContext | None) -> None:
    """
    Set the tenant context for the current request.

    Should typically be called from middleware at the start of request processing.

    Args:
        context: TenantContext to set, or None to clear.
    """
    _tenant_context.set(context)
