"""Endpoints de proyecciones financieras."""
from collections.abc import Callable
from datetime import datetime

from fastapi import APIRouter, Depends, Header, HTTPException, Path

from tatylu_analytics.application.ports.catalogo_repository import CatalogoRepository
from tatylu_analytics.application.ports.pedido_repository import PedidoRepository
from tatylu_analytics.application.ports.reporte_repository import ReporteRepository
from tatylu_analytics.application.use_cases import (
    ConsultarRegistros,
    GenerarProyeccionFinanciera,
)
from tatylu_analytics.domain.value_objects.filtros_reporte import flag_activo
from tatylu_analytics.infrastructure.cache.redis_cache import redis_cache
from tatylu_analytics.infrastructure.config.logging import logger
from tatylu_analytics.interfaces.api.v1.dependencies import (
    get_catalogo_repository,
    get_pedido_repository,
    get_proyeccion_repository,
    get_reloj,
)
from tatylu_analytics.interfaces.api.v1.schemas import (
    DetalleProyeccionResponse,
    EliminacionResponse,
    ListaProyeccionesResponse,
    ProyeccionRequest,
    ProyeccionResponse,
)

router = APIRouter(prefix="/projections", tags=["Projections"])

CACHE_LISTA = "projections:list"

# Las vistas previas dependen de los pedidos actuales: TTL corto y clave por día
TTL_VISTA_PREVIA = 60


def _cache_detalle(proyeccion_id: int) -> str:
    return f"projection:{proyeccion_id}"


@router.post("", response_model=ProyeccionResponse)
async def generar_proyeccion(
    body: ProyeccionRequest | None = None,
    x_user_email: str | None = Header(None, description="Email del usuario autenticado"),
    pedido_repo: PedidoRepository = Depends(get_pedido_repository),
    catalogo_repo: CatalogoRepository = Depends(get_catalogo_repository),
    proyeccion_repo: ReporteRepository = Depends(get_proyeccion_repository),
    reloj: Callable[[], datetime] = Depends(get_reloj),
):
    """
    Genera una proyección de ventas mensual.
    
    Modelos:
    - linear: último mes + cambio promedio positivo × i
    - average: promedio histórico constante
    
    Con `save: false` el resultado es una vista previa cacheada por parámetros
    y día durante `TTL_VISTA_PREVIA` segundos.
    """
    body = body or ProyeccionRequest()
    guardar = flag_activo(body.save)
    
    cache_key = None
    if not guardar:
        cache_key = (
            f"projection:preview:{reloj():%Y-%m-%d}:{body.months or 'default'}:"
            f"{body.forecast_months or 'default'}:{body.model or 'linear'}"
        )
        cached = await redis_cache.get(cache_key)
        if cached:
            return ProyeccionResponse(projection=cached)
    
    try:
        use_case = GenerarProyeccionFinanciera(
            pedido_repo, catalogo_repo, proyeccion_repo, reloj=reloj
        )
        resultado = await use_case.execute(
            meses=body.months,
            meses_pronostico=body.forecast_months,
            modelo=body.model,
            guardar=guardar,
            nombre=body.name,
            creado_por=x_user_email or "",
        )
    except Exception as e:
        logger.error(f"Error generando proyección: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Error al generar la proyección")
    
    if cache_key:
        await redis_cache.set(cache_key, resultado["projection"], ttl=TTL_VISTA_PREVIA)
    if resultado["saved"]:
        await redis_cache.delete(CACHE_LISTA)
    
    return ProyeccionResponse(**resultado)


@router.get("", response_model=ListaProyeccionesResponse)
async def listar_proyecciones(
    proyeccion_repo: ReporteRepository = Depends(get_proyeccion_repository),
):
    """Proyecciones guardadas, más recientes primero."""
    cached = await redis_cache.get(CACHE_LISTA)
    if cached is not None:
        return ListaProyeccionesResponse(projections=cached)
    
    try:
        proyecciones = await ConsultarRegistros(proyeccion_repo).listar()
    except Exception as e:
        logger.error(f"Error listando proyecciones: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Error al listar proyecciones")
    
    await redis_cache.set(CACHE_LISTA, proyecciones)
    
    return ListaProyeccionesResponse(projections=proyecciones)


@router.get("/{proyeccion_id}", response_model=DetalleProyeccionResponse)
async def obtener_proyeccion(
    proyeccion_id: int = Path(..., ge=1, description="ID de la proyección"),
    proyeccion_repo: ReporteRepository = Depends(get_proyeccion_repository),
):
    """Detalle de una proyección guardada."""
    cache_key = _cache_detalle(proyeccion_id)
    cached = await redis_cache.get(cache_key)
    if cached:
        return DetalleProyeccionResponse(projection=cached)
    
    try:
        proyeccion = await ConsultarRegistros(proyeccion_repo).obtener(proyeccion_id)
    except Exception as e:
        logger.error(f"Error obteniendo proyección {proyeccion_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Error al obtener la proyección")
    
    if proyeccion is None:
        raise HTTPException(status_code=404, detail="Proyección no encontrada")
    
    await redis_cache.set(cache_key, proyeccion, ttl=1800)
    
    return DetalleProyeccionResponse(projection=proyeccion)


@router.delete("/{proyeccion_id}", response_model=EliminacionResponse)
async def eliminar_proyeccion(
    proyeccion_id: int = Path(..., ge=1, description="ID de la proyección"),
    proyeccion_repo: ReporteRepository = Depends(get_proyeccion_repository),
):
    """Elimina una proyección guardada."""
    try:
        eliminado = await ConsultarRegistros(proyeccion_repo).eliminar(proyeccion_id)
    except Exception as e:
        logger.error(f"Error eliminando proyección {proyeccion_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Error al eliminar la proyección")
    
    if not eliminado:
        raise HTTPException(status_code=404, detail="Proyección no encontrada")
    
    await redis_cache.delete(_cache_detalle(proyeccion_id), CACHE_LISTA)
    
    return EliminacionResponse()
