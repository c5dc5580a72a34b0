"""Puerto (interfaz) para catálogos de productos y usuarios."""
from abc import ABC, abstractmethod

from tatylu_analytics.domain.entities.pedido import ProductoInfo, UsuarioInfo


class CatalogoRepository(ABC):
    """Interfaz de solo lectura para completar datos faltantes en pedidos."""
    
    @abstractmethod
    async def listar_productos(self) -> list[ProductoInfo]:
        """Obtiene todos los productos con id, nombre, categoría y precio."""
        pass
    
    @abstractmethod
    async def listar_usuarios(self) -> list[UsuarioInfo]:
        """Obtiene todos los usuarios con id, nombre y email."""
        pass
