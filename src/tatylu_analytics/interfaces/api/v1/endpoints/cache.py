"""Endpoint de administración del caché."""
from fastapi import APIRouter, Query

from tatylu_analytics.infrastructure.cache.redis_cache import redis_cache
from tatylu_analytics.interfaces.api.v1.schemas import CacheClearResponse

router = APIRouter(prefix="/cache", tags=["Cache"])


@router.delete("/clear", response_model=CacheClearResponse)
async def limpiar_cache(
    pattern: str = Query(
        "*",
        description="Patrón de keys a eliminar",
        examples=["report*"],
    )
):
    """Limpia el caché de reportes y proyecciones."""
    deleted = await redis_cache.clear_pattern(pattern)
    
    return CacheClearResponse(
        message="Cache limpiado exitosamente",
        keys_deleted=deleted,
    )
