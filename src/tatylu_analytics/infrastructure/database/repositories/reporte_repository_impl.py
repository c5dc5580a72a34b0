"""Implementación de los repositorios de reportes y proyecciones."""
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from tatylu_analytics.application.ports.reporte_repository import ReporteRepository
from tatylu_analytics.domain.entities.registro_reporte import RegistroReporte
from tatylu_analytics.infrastructure.database.models import Proyeccion, Reporte


class ReporteRepositoryImpl(ReporteRepository):
    """Repositorio sobre la tabla `reportes`."""
    
    modelo = Reporte
    
    def __init__(self, session: AsyncSession):
        self.session = session
    
    async def guardar(self, registro: RegistroReporte) -> RegistroReporte:
        fila = self.modelo(
            name=registro.name,
            type=registro.type,
            payload=registro.payload,
            created_by=registro.created_by,
            language=registro.language,
        )
        self.session.add(fila)
        await self.session.flush()
        await self.session.refresh(fila)
        # Confirmado antes de que el endpoint invalide el listado en caché
        await self.session.commit()
        return self._a_registro(fila)
    
    async def listar(self) -> list[RegistroReporte]:
        result = await self.session.execute(
            select(self.modelo).order_by(self.modelo.created_at.desc(), self.modelo.id.desc())
        )
        return [self._a_registro(fila) for fila in result.scalars().all()]
    
    async def obtener(self, registro_id: int) -> RegistroReporte | None:
        fila = await self.session.get(self.modelo, registro_id)
        return self._a_registro(fila) if fila else None
    
    async def eliminar(self, registro_id: int) -> bool:
        result = await self.session.execute(
            delete(self.modelo).where(self.modelo.id == registro_id)
        )
        await self.session.commit()
        return result.rowcount > 0
    
    @staticmethod
    def _a_registro(fila: Reporte | Proyeccion) -> RegistroReporte:
        return RegistroReporte(
            id=fila.id,
            name=fila.name,
            type=fila.type or "",
            payload=fila.payload or {},
            created_by=fila.created_by or "",
            language=fila.language or "en",
            created_at=fila.created_at,
        )


class ProyeccionRepositoryImpl(ReporteRepositoryImpl):
    """Repositorio sobre la tabla `proyecciones`."""
    
    modelo = Proyeccion
