"""Caso de uso: Generar reporte personalizado con filtros."""
from collections.abc import Callable, Mapping
from datetime import datetime
from typing import Any

from tatylu_analytics.application.ports.catalogo_repository import CatalogoRepository
from tatylu_analytics.application.ports.pedido_repository import PedidoRepository
from tatylu_analytics.application.ports.reporte_repository import ReporteRepository
from tatylu_analytics.application.use_cases.contexto import (
    cargar_productos,
    cargar_usuarios,
    guardar_registro,
    nombre_por_defecto,
)
from tatylu_analytics.domain.services.agregador_ventas import AgregadorVentas
from tatylu_analytics.domain.services.normalizador import NormalizadorPedidos
from tatylu_analytics.domain.value_objects.filtros_reporte import FiltrosReporte
from tatylu_analytics.infrastructure.config.logging import logger
from tatylu_analytics.infrastructure.config.settings import get_settings


class GenerarReportePersonalizado:
    """Caso de uso para reportes filtrables (sales, products, users, custom)."""
    
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
        datos: Mapping[str, Any] | None = None,
        guardar: bool = False,
        nombre: str | None = None,
        creado_por: str = "",
    ) -> dict[str, Any]:
        """
        Ejecuta el reporte personalizado.
        
        Args:
            datos: Filtros crudos (periodStart, periodEnd, status, category,
                groupBy, topN, includeTaxes, includeShipping, minTotal,
                maxTotal, type, focus). Se interpretan de forma permisiva.
            guardar: Persistir el resultado
            nombre: Nombre del reporte guardado
            creado_por: Email de quien lo generó
        
        Returns:
            {"report": payload, "saved": registro guardado o None}
        """
        ahora = self.reloj()
        filtros = FiltrosReporte.desde_dict(
            datos,
            ahora,
            top_n_default=self.settings.custom_top_n_default,
            top_n_max=self.settings.custom_top_n_max,
        )
        
        documentos = await self.pedido_repo.listar_pedidos(
            desde=filtros.periodo_inicio,
            hasta=filtros.periodo_fin,
            estado=filtros.estado or None,
        )
        logger.info(
            f"[custom:{filtros.tipo.value}] {len(documentos)} pedidos entre "
            f"{filtros.periodo_inicio:%Y-%m-%d} y {filtros.periodo_fin:%Y-%m-%d}"
        )
        
        productos = await cargar_productos(self.catalogo_repo)
        usuarios = await cargar_usuarios(self.catalogo_repo)
        
        normalizador = NormalizadorPedidos(productos)
        pedidos = normalizador.normalizar_todos(documentos)
        
        reporte = AgregadorVentas.personalizado(pedidos, filtros, ahora, usuarios)
        
        guardado = None
        if guardar:
            guardado = await guardar_registro(
                self.reporte_repo,
                nombre=nombre or nombre_por_defecto("custom", ahora),
                tipo=filtros.tipo.value,
                payload=reporte,
                creado_por=creado_por,
                idioma=self.settings.report_language,
            )
        
        return {
            "report": reporte,
            "saved": guardado.a_dict() if guardado else None,
        }
