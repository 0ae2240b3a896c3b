"""
Application lifecycle management using the FastAPI lifespan pattern.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from clinic_scheduler.config.settings import get_settings
from clinic_scheduler.database import close_async_engine

logger = logging.getLogger(__name__)


class LifecycleManager:
    """
    Manages application startup and graceful shutdown.
    """

    def __init__(self) -> None:
        self._initialized = False

    async def startup(self) -> None:
        if self._initialized:
            logger.warning("Lifecycle already initialized, skipping startup")
            return

        logger.info("Starting application lifecycle...")
        self._verify_configurations()
        self._initialized = True
        logger.info("Application lifecycle startup completed")

    async def shutdown(self) -> None:
        if not self._initialized:
            logger.warning("Lifecycle not initialized, skipping shutdown")
            return

        logger.info("Stopping application lifecycle...")
        await close_async_engine()
        self._initialized = False
        logger.info("Application lifecycle shutdown completed")

    def _verify_configurations(self) -> None:
        """Warn about settings that are valid but likely unintended."""
        settings = get_settings()
        if not settings.DB_PASSWORD:
            logger.warning("DB_PASSWORD not configured - connecting without password")
        if settings.DEFAULT_PAGE_SIZE > settings.MAX_PAGE_SIZE:
            logger.warning(
                f"DEFAULT_PAGE_SIZE ({settings.DEFAULT_PAGE_SIZE}) exceeds MAX_PAGE_SIZE "
                f"({settings.MAX_PAGE_SIZE}); listings are capped at {settings.MAX_PAGE_SIZE}"
            )
        if not settings.SENTRY_DSN:
            logger.info("Sentry disabled (SENTRY_DSN not set)")


# Global lifecycle manager instance
_lifecycle_manager: LifecycleManager | None = None


def get_lifecycle_manager() -> LifecycleManager:
    """Get or create the global lifecycle manager instance."""
    global _lifecycle_manager
    if _lifecycle_manager is None:
        _lifecycle_manager = LifecycleManager()
    return _lifecycle_manager


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI lifespan context manager.

    Usage:
        app = FastAPI(lifespan=lifespan)
    """
    lifecycle = get_lifecycle_manager()

    await lifecycle.startup()

    yield

    await lifecycle.shutdown()
