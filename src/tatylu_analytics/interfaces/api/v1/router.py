"""Router principal v1."""
from fastapi import APIRouter

from tatylu_analytics.interfaces.api.v1.endpoints import cache, health, projections, reports

api_router = APIRouter()

api_router.include_router(health.router)
api_router.include_router(reports.router)
api_router.include_router(projections.router)
api_router.include_router(cache.router)
