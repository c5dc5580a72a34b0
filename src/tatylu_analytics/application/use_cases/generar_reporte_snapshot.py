"""Caso de uso: Generar reporte snapshot (estado actual de ventas)."""
from collections.abc import Callable
from datetime import datetime
from typing import Any

from tatylu_analytics.application.ports.catalogo_repository import CatalogoRepository
from tatylu_analytics.application.ports.pedido_repository import PedidoRepository
from tatylu_analytics.application.ports.reporte_repository import ReporteRepository
from tatylu_analytics.application.use_cases.contexto import (
    cargar_productos,
    guardar_registro,
    nombre_por_defecto,
)
from tatylu_analytics.domain.services.agregador_ventas import AgregadorVentas
from tatylu_analytics.domain.services.normalizador import NormalizadorPedidos
from tatylu_analytics.domain.value_objects.tipo_reporte import TipoReporte
from tatylu_analytics.infrastructure.config.logging import logger
from tatylu_analytics.infrastructure.config.settings import get_settings


class GenerarReporteSnapshot:
    """Caso de uso para el reporte snapshot sobre todos los pedidos."""
    
    def __init__(
        self,
        pedido_repo: PedidoRepository,
        catalogo_repo: CatalogoRepository,
        reporte_repo: ReporteRepository | None = None,
        reloj: Callable[[], datetime] = datetime.now,
    ):
        self.pedido_repo = pedido_repo
        self.catalogo_repo = catalogo_repo
        self.reporte_repo = reporte_repo
        self.reloj = reloj
        self.settings = get_settings()
    
    async def execute(
        self,
        guardar: bool = False,
        nombre: str | None = None,
        creado_por: str = "",
    ) -> dict[str, Any]:
        """
        Ejecuta la agregación completa.
        
        Cualquier error de lectura se propaga: no hay reportes parciales.
        
        Returns:
            {"report": payload, "saved": registro guardado o None}
        """
        ahora = self.reloj()
        
        documentos = await self.pedido_repo.listar_pedidos()
        logger.info(f"[snapshot] {len(documentos)} pedidos encontrados")
        
        productos = await cargar_productos(self.catalogo_repo)
        normalizador = NormalizadorPedidos(productos)
        pedidos = normalizador.normalizar_todos(documentos)
        
        if normalizador.registros_incompletos:
            logger.warning(
                f"[snapshot] {normalizador.registros_incompletos} registros incompletos "
                "normalizados con valores por defecto"
            )
        
        reporte = AgregadorVentas.snapshot(
            pedidos,
            ahora,
            top_productos=self.settings.snapshot_top_products,
        )
        
        guardado = None
        if guardar:
            guardado = await guardar_registro(
                self.reporte_repo,
                nombre=nombre or nombre_por_defecto("snapshot", ahora),
                tipo=TipoReporte.SNAPSHOT.value,
                payload=reporte,
                creado_por=creado_por,
                idioma=self.settings.report_language,
            )
        
        return {
            "report": reporte,
            "saved": guardado.a_dict() if guardado else None,
        }
