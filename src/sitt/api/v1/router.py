from fastapi import APIRouter

from src.sitt.api.v1 import projects, time_tracks

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(projects.router)
api_router.include_router(time_tracks.router)
