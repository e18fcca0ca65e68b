from fastapi import APIRouter

from farmplan.api.v1.endpoints import agenda, schedules, tasks

api_router = APIRouter()

api_router.include_router(tasks.router)
api_router.include_router(schedules.router)
api_router.include_router(agenda.router)
