"""
Scheduling API

FastAPI routers, schemas and dependencies for the scheduling domain.
"""

from clinic_scheduler.domains.scheduling.api.routes import routers

__all__ = ["routers"]
