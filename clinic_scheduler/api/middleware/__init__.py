"""
Middleware package for the FastAPI application.
"""

from clinic_scheduler.api.middleware.logging_middleware import RequestLoggingMiddleware

__all__ = ["RequestLoggingMiddleware"]
