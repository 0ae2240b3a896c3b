# ============================================================================
# SCOPE: MULTI-TENANT
# Description: Middleware que resuelve la identidad del llamador en cada request.
#              Punto de entrada para la propagación del contexto de tenant.
# Tenant-Aware: Yes - es el INICIADOR del tenant-awareness en cada request.
# ============================================================================
"""
TenantContextMiddleware - resolves the caller identity from gateway headers.

Headers (names configurable in settings):
- X-Tenant-ID: tenant UUID (required for API paths)
- X-User-Role: caller role
- X-User-ID: caller user UUID

Requests without a tenant header pass through with no context; the API
dependencies reject them with 401. A malformed header is rejected here.
"""

from __future__ import annotations

import logging
import uuid
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from clinic_scheduler.config.settings import get_settings

from .context import TenantContext, set_tenant_context

logger = logging.getLogger(__name__)


class TenantResolutionError(Exception):
    """Raised when identity headers are present but malformed."""


class TenantContextMiddleware(BaseHTTPMiddleware):
    """
    FastAPI middleware for caller identity resolution.

    The context is automatically cleared after the request completes.
    """

    # Paths that should skip tenant resolution
    SKIP_PATHS = {
        "/health",
        "/healthz",
        "/docs",
        "/redoc",
        "/openapi.json",
        "/favicon.ico",
    }

    def __init__(self, app: Callable):
        """
        Initialize middleware.

        Args:
            app: ASGI application.
        """
        super().__init__(app)
        self.settings = get_settings()

    async def dispatch(
        self,
        request: Request,
        call_next: Callable,
    ) -> Response:
        """
        Process request and resolve tenant context.

        Args:
            request: Incoming HTTP request.
            call_next: Next middleware/handler in chain.

        Returns:
            HTTP response.
        """
        if request.url.path in self.SKIP_PATHS:
            return await call_next(request)

        try:
            context = self._resolve_context(request)
        except TenantResolutionError as e:
            logger.warning(f"Tenant resolution failed: {e}")
            return JSONResponse(
                status_code=401,
                content={
                    "success": False,
                    "error": {"code": "UNAUTHENTICATED", "message": str(e), "details": {}},
                },
            )

        set_tenant_context(context)
        try:
            if context:
                logger.debug(f"Tenant context set: tenant_id={context.tenant_id}, role={context.role}")
            return await call_next(request)
        finally:
            # Clear context after request
            set_tenant_context(None)

    def _resolve_context(self, request: Request) -> TenantContext | None:
        raw_tenant = request.headers.get(self.settings.TENANT_HEADER)
        if not raw_tenant:
            return None

        tenant_id = self._parse_uuid(raw_tenant, self.settings.TENANT_HEADER)
        raw_user = request.headers.get(self.settings.USER_HEADER)
        user_id = self._parse_uuid(raw_user, self.settings.USER_HEADER) if raw_user else None
        role = request.headers.get(self.settings.ROLE_HEADER)

        return TenantContext(
            tenant_id=tenant_id,
            role=role.strip().upper() if role else None,
            user_id=user_id,
        )

    @staticmethod
    def _parse_uuid(value: str, header: str) -> uuid.UUID:
        try:
            return uuid.UUID(value.strip())
        except ValueError as e:
            raise TenantResolutionError(f"Invalid {header} header") from e
