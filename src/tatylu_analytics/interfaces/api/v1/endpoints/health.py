"""Endpoint de health check."""
from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from tatylu_analytics.infrastructure.cache.redis_cache import redis_cache
from tatylu_analytics.infrastructure.config.settings import get_settings
from tatylu_analytics.infrastructure.database.connection import get_db_session
from tatylu_analytics.interfaces.api.v1.schemas import HealthResponse

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(session: AsyncSession = Depends(get_db_session)):
    """Health check del servicio."""
    settings = get_settings()
    
    # Verificar base de datos
    db_status = "connected"
    try:
        await session.execute(text("SELECT 1"))
    except Exception:
        db_status = "disconnected"
    
    # Sin Redis el servicio funciona sin caché
    redis_status = "connected" if await redis_cache.ping() else "disconnected"
    
    status = "healthy" if db_status == "connected" else "unhealthy"
    if status == "healthy" and redis_status != "connected":
        status = "degraded"
    
    return HealthResponse(
        status=status,
        service=settings.app_name,
        version=settings.app_version,
        database=db_status,
        redis=redis_status,
    )
