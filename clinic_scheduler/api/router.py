from fastapi import APIRouter

from clinic_scheduler.domains.scheduling.api import routers as scheduling_routers

api_router = APIRouter()

for router in scheduling_routers:
    api_router.include_router(router)
