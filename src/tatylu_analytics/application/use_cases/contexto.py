"""Utilidades compartidas por los casos de uso de reportes."""
from datetime import datetime
from typing import Any

from tatylu_analytics.application.ports.catalogo_repository import CatalogoRepository
from tatylu_analytics.application.ports.reporte_repository import ReporteRepository
from tatylu_analytics.domain.entities.pedido import ProductoInfo, UsuarioInfo
from tatylu_analytics.domain.entities.registro_reporte import RegistroReporte
from tatylu_analytics.infrastructure.config.logging import logger


async def cargar_productos(catalogo_repo: CatalogoRepository) -> dict[str, ProductoInfo]:
    """Catálogo de productos indexado por id."""
    productos = await catalogo_repo.listar_productos()
    return {producto.id: producto for producto in productos}


async def cargar_usuarios(catalogo_repo: CatalogoRepository) -> dict[str, UsuarioInfo]:
    """Usuarios indexados por id."""
    usuarios = await catalogo_repo.listar_usuarios()
    return {usuario.id: usuario for usuario in usuarios}


def nombre_por_defecto(prefijo: str, ahora: datetime) -> str:
    """Nombre tipo `snapshot-1718040000000` (epoch en milisegundos)."""
    return f"{prefijo}-{int(ahora.timestamp() * 1000)}"


async def guardar_registro(
    reporte_repo: ReporteRepository | None,
    nombre: str,
    tipo: str,
    payload: dict[str, Any],
    creado_por: str = "",
    idioma: str = "en",
) -> RegistroReporte:
    """Persiste el resultado de una corrida."""
    if reporte_repo is None:
        raise RuntimeError("No hay repositorio configurado para guardar reportes")

    registro = await reporte_repo.guardar(
        RegistroReporte(
            name=nombre,
            type=tipo,
            payload=payload,
            created_by=creado_por,
            language=idioma,
        )
    )
    logger.info(f"Registro guardado: {registro.type} '{registro.name}' (id={registro.id})")
    return registro
