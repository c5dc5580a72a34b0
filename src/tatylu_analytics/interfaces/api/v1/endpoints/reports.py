"""Endpoints de reportes de ventas."""
from collections.abc import Callable
from datetime import datetime

from fastapi import APIRouter, Depends, Header, HTTPException, Path

from tatylu_analytics.application.ports.catalogo_repository import CatalogoRepository
from tatylu_analytics.application.ports.pedido_repository import PedidoRepository
from tatylu_analytics.application.ports.reporte_repository import ReporteRepository
from tatylu_analytics.application.use_cases import (
    ConsultarRegistros,
    GenerarReportePersonalizado,
    GenerarReporteSnapshot,
)
from tatylu_analytics.domain.value_objects.filtros_reporte import flag_activo
from tatylu_analytics.infrastructure.cache.redis_cache import redis_cache
from tatylu_analytics.infrastructure.config.logging import logger
from tatylu_analytics.interfaces.api.v1.dependencies import (
    get_catalogo_repository,
    get_pedido_repository,
    get_reloj,
    get_reporte_repository,
)
from tatylu_analytics.interfaces.api.v1.schemas import (
    DetalleReporteResponse,
    EliminacionResponse,
    ListaReportesResponse,
    ReportePersonalizadoRequest,
    ReporteResponse,
    ReporteSnapshotRequest,
)

router = APIRouter(prefix="/reports", tags=["Reports"])

CACHE_LISTA = "reports:list"


def _cache_detalle(reporte_id: int) -> str:
    return f"report:{reporte_id}"


@router.post("", response_model=ReporteResponse)
async def generar_reporte_snapshot(
    body: ReporteSnapshotRequest | None = None,
    x_user_email: str | None = Header(None, description="Email del usuario autenticado"),
    pedido_repo: PedidoRepository = Depends(get_pedido_repository),
    catalogo_repo: CatalogoRepository = Depends(get_catalogo_repository),
    reporte_repo: ReporteRepository = Depends(get_reporte_repository),
    reloj: Callable[[], datetime] = Depends(get_reloj),
):
    """
    Genera el reporte snapshot sobre todos los pedidos.
    
    Incluye totales, ventas de hoy/semana/mes, top de productos e ingresos
    por categoría. Se guarda salvo `save: false`.
    """
    body = body or ReporteSnapshotRequest()
    guardar = flag_activo(body.save)
    
    try:
        use_case = GenerarReporteSnapshot(pedido_repo, catalogo_repo, reporte_repo, reloj=reloj)
        resultado = await use_case.execute(
            guardar=guardar,
            nombre=body.name,
            creado_por=x_user_email or "",
        )
    except Exception as e:
        logger.error(f"Error generando reporte snapshot: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Error al generar el reporte")
    
    if resultado["saved"]:
        await redis_cache.delete(CACHE_LISTA)
    
    return ReporteResponse(**resultado)


@router.get("/snapshot", response_model=ReporteResponse)
async def previsualizar_reporte_snapshot(
    pedido_repo: PedidoRepository = Depends(get_pedido_repository),
    catalogo_repo: CatalogoRepository = Depends(get_catalogo_repository),
    reloj: Callable[[], datetime] = Depends(get_reloj),
):
    """Snapshot sin persistir."""
    try:
        use_case = GenerarReporteSnapshot(pedido_repo, catalogo_repo, reloj=reloj)
        resultado = await use_case.execute(guardar=False)
    except Exception as e:
        logger.error(f"Error generando snapshot: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Error al generar el reporte")
    
    return ReporteResponse(**resultado)


@router.post("/custom", response_model=ReporteResponse)
async def generar_reporte_personalizado(
    body: ReportePersonalizadoRequest | None = None,
    x_user_email: str | None = Header(None, description="Email del usuario autenticado"),
    pedido_repo: PedidoRepository = Depends(get_pedido_repository),
    catalogo_repo: CatalogoRepository = Depends(get_catalogo_repository),
    reporte_repo: ReporteRepository = Depends(get_reporte_repository),
    reloj: Callable[[], datetime] = Depends(get_reloj),
):
    """
    Genera un reporte personalizado.
    
    Filtros:
    - periodStart / periodEnd: rango inclusivo (default: mes en curso)
    - status: estado exacto del pedido
    - category: solo líneas de esa categoría
    - groupBy: day | week | month
    - topN: tamaño de rankings (1-50)
    - includeTaxes / includeShipping: componentes del total
    - minTotal / maxTotal: límites de ingreso por pedido
    - type: sales | products | users | custom
    """
    body = body or ReportePersonalizadoRequest()
    guardar = flag_activo(body.save)
    
    try:
        use_case = GenerarReportePersonalizado(pedido_repo, catalogo_repo, reporte_repo, reloj=reloj)
        resultado = await use_case.execute(
            datos=body.filtros(),
            guardar=guardar,
            nombre=body.name,
            creado_por=x_user_email or "",
        )
    except Exception as e:
        logger.error(f"Error generando reporte personalizado: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Error al generar el reporte")
    
    if resultado["saved"]:
        await redis_cache.delete(CACHE_LISTA)
    
    return ReporteResponse(**resultado)


@router.get("/list", response_model=ListaReportesResponse)
async def listar_reportes(
    reporte_repo: ReporteRepository = Depends(get_reporte_repository),
):
    """Reportes guardados, más recientes primero."""
    cached = await redis_cache.get(CACHE_LISTA)
    if cached is not None:
        return ListaReportesResponse(reports=cached)
    
    try:
        reportes = await ConsultarRegistros(reporte_repo).listar()
    except Exception as e:
        logger.error(f"Error listando reportes: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Error al listar reportes")
    
    await redis_cache.set(CACHE_LISTA, reportes)
    
    return ListaReportesResponse(reports=reportes)


@router.get("/{reporte_id}", response_model=DetalleReporteResponse)
async def obtener_reporte(
    reporte_id: int = Path(..., ge=1, description="ID del reporte"),
    reporte_repo: ReporteRepository = Depends(get_reporte_repository),
):
    """Detalle de un reporte guardado."""
    cache_key = _cache_detalle(reporte_id)
    cached = await redis_cache.get(cache_key)
    if cached:
        return DetalleReporteResponse(report=cached)
    
    try:
        reporte = await ConsultarRegistros(reporte_repo).obtener(reporte_id)
    except Exception as e:
        logger.error(f"Error obteniendo reporte {reporte_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Error al obtener el reporte")
    
    if reporte is None:
        raise HTTPException(status_code=404, detail="Reporte no encontrado")
    
    # Los registros son inmutables: se cachean con TTL largo
    await redis_cache.set(cache_key, reporte, ttl=1800)
    
    return DetalleReporteResponse(report=reporte)


@router.delete("/{reporte_id}", response_model=EliminacionResponse)
async def eliminar_reporte(
    reporte_id: int = Path(..., ge=1, description="ID del reporte"),
    reporte_repo: ReporteRepository = Depends(get_reporte_repository),
):
    """Elimina un reporte guardado."""
    try:
        eliminado = await ConsultarRegistros(reporte_repo).eliminar(reporte_id)
    except Exception as e:
        logger.error(f"Error eliminando reporte {reporte_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Error al eliminar el reporte")
    
    if not eliminado:
        raise HTTPException(status_code=404, detail="Reporte no encontrado")
    
    await redis_cache.delete(_cache_detalle(reporte_id), CACHE_LISTA)
    
    return EliminacionResponse()
