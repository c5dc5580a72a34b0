"""Puerto (interfaz) para repositorio de pedidos."""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any


class PedidoRepository(ABC):
    """Interfaz de solo lectura sobre la colección de pedidos."""
    
    @abstractmethod
    async def listar_pedidos(
        self,
        desde: datetime | None = None,
        hasta: datetime | None = None,
        estado: str | None = None,
    ) -> list[dict[str, Any]]:
        """
        Obtiene los documentos crudos de pedidos.
        
        Con `desde`/`hasta` se incluyen pedidos cuya `fecha` o `createdAt`
        cae dentro del rango (ambos extremos inclusive).
        """
        pass
