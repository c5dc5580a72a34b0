"""Caso de uso: Consultar y eliminar reportes o proyecciones guardadas."""
from typing import Any

from tatylu_analytics.application.ports.reporte_repository import ReporteRepository


class ConsultarRegistros:
    """Listado, detalle y borrado de registros guardados."""
    
    def __init__(self, repo: ReporteRepository):
        self.repo = repo
    
    async def listar(self) -> list[dict[str, Any]]:
        registros = await self.repo.listar()
        return [registro.a_dict() for registro in registros]
    
    async def obtener(self, registro_id: int) -> dict[str, Any] | None:
        registro = await self.repo.obtener(registro_id)
        return registro.a_dict() if registro else None
    
    async def eliminar(self, registro_id: int) -> bool:
        return await self.repo.eliminar(registro_id)
