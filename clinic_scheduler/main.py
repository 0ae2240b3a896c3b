"""
Application entry point.
"""

import logging

import sentry_sdk

from clinic_scheduler.config.settings import get_settings
from clinic_scheduler.core.app_factory import create_app
from clinic_scheduler.core.shared import configure_logging

settings = get_settings()

configure_logging(level=settings.LOG_LEVEL, format_type=settings.LOG_FORMAT)
logger = logging.getLogger(__name__)

if settings.SENTRY_DSN:
    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        send_default_pii=False,
        environment=settings.ENVIRONMENT,
    )

app = create_app()

if __name__ == "__main__":
    import uvicorn

    logger.info(f"Starting application in {settings.ENVIRONMENT} mode")
    uvicorn.run(
        "clinic_scheduler.main:app",
        host="0.0.0.0",
        port=8001,
        reload=settings.DEBUG,
    )
