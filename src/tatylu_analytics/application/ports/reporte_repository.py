"""Puerto (interfaz) para persistencia de reportes y proyecciones."""
from abc import ABC, abstractmethod

from tatylu_analytics.domain.entities.registro_reporte import RegistroReporte


class ReporteRepository(ABC):
    """Interfaz para guardar y consultar reportes generados."""
    
    @abstractmethod
    async def guardar(self, registro: RegistroReporte) -> RegistroReporte:
        """Guarda el registro y lo retorna con id y fecha de creación."""
        pass
    
    @abstractmethod
    async def listar(self) -> list[RegistroReporte]:
        """Lista los registros, más recientes primero."""
        pass
    
    @abstractmethod
    async def obtener(self, registro_id: int) -> RegistroReporte | None:
        """Obtiene un registro por id."""
        pass
    
    @abstractmethod
    async def eliminar(self, registro_id: int) -> bool:
        """Elimina un registro; retorna False si no existía."""
        pass
