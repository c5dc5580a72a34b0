"""Caso de uso: Generar proyección financiera mensual."""
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
from tatylu_analytics.domain.services.montos import to_number
from tatylu_analytics.domain.services.normalizador import NormalizadorPedidos
from tatylu_analytics.domain.services.proyeccion_financiera import ProyeccionFinanciera
from tatylu_analytics.domain.value_objects.modelo_proyeccion import ModeloProyeccion
from tatylu_analytics.domain.value_objects.tipo_reporte import TipoReporte
from tatylu_analytics.infrastructure.config.logging import logger
from tatylu_analytics.infrastructure.config.settings import get_settings

MAX_MESES_HISTORIA = 120
MAX_MESES_PRONOSTICO = 60


class GenerarProyeccionFinanciera:
    """Caso de uso para proyecciones de ventas."""
    
    def __init__(
        self,
        pedido_repo: PedidoRepository,
        catalogo_repo: CatalogoRepository,
        proyeccion_repo: ReporteRepository | None = None,
        reloj: Callable[[], datetime] = datetime.now,
    ):
        self.pedido_repo = pedido_repo
        self.catalogo_repo = catalogo_repo
        self.proyeccion_repo = proyeccion_repo
        self.reloj = reloj
        self.settings = get_settings()
    
    async def execute(
        self,
        meses: Any = None,
        meses_pronostico: Any = None,
        modelo: Any = None,
        guardar: bool = False,
        nombre: str | None = None,
        creado_por: str = "",
    ) -> dict[str, Any]:
        """
        Ejecuta la proyección.
        
        Parámetros inválidos toman el default configurado; el modelo
        desconocido es LINEAR.
        
        Returns:
            {"projection": payload, "saved": registro guardado o None}
        """
        ahora = self.reloj()
        meses = int(to_number(meses, self.settings.projection_months_default))
        meses = min(max(0, meses), MAX_MESES_HISTORIA)
        meses_pronostico = int(to_number(meses_pronostico, self.settings.projection_forecast_default))
        meses_pronostico = min(max(0, meses_pronostico), MAX_MESES_PRONOSTICO)
        modelo = ModeloProyeccion.desde_valor(modelo)
        
        documentos = await self.pedido_repo.listar_pedidos()
        logger.info(
            f"[projection:{modelo.value}] {len(documentos)} pedidos, "
            f"{meses_pronostico} meses a proyectar"
        )
        
        productos = await cargar_productos(self.catalogo_repo)
        pedidos = NormalizadorPedidos(productos).normalizar_todos(documentos)
        
        proyeccion = ProyeccionFinanciera.construir(
            pedidos,
            ahora,
            meses=meses,
            meses_pronostico=meses_pronostico,
            modelo=modelo,
        )
        
        guardado = None
        if guardar:
            guardado = await guardar_registro(
                self.proyeccion_repo,
                nombre=nombre or nombre_por_defecto("projection", ahora),
                tipo=TipoReporte.FINANCIAL.value,
                payload=proyeccion,
                creado_por=creado_por,
                idioma=self.settings.report_language,
            )
        
        return {
            "projection": proyeccion,
            "saved": guardado.a_dict() if guardado else None,
        }
