"""Implementación del repositorio de pedidos."""
from datetime import datetime
from typing import Any

from sqlalchemy import and_, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from tatylu_analytics.application.ports.pedido_repository import PedidoRepository
from tatylu_analytics.infrastructure.database.models import Pedido


class PedidoRepositoryImpl(PedidoRepository):
    """Implementación de repositorio de pedidos."""
    
    def __init__(self, session: AsyncSession):
        self.session = session
    
    async def listar_pedidos(
        self,
        desde: datetime | None = None,
        hasta: datetime | None = None,
        estado: str | None = None,
    ) -> list[dict[str, Any]]:
        """Obtiene pedidos como documentos, opcionalmente filtrados por fecha y estado."""
        
        query = select(Pedido)
        
        if desde is not None or hasta is not None:
            query = query.where(
                or_(
                    self._en_rango(Pedido.fecha, desde, hasta),
                    self._en_rango(Pedido.created_at, desde, hasta),
                )
            )
        
        if estado:
            query = query.where(Pedido.estado == estado)
        
        result = await self.session.execute(query.order_by(Pedido.id))
        return [self._a_documento(pedido) for pedido in result.scalars().all()]
    
    @staticmethod
    def _en_rango(columna, desde: datetime | None, hasta: datetime | None):
        condiciones = []
        if desde is not None:
            condiciones.append(columna >= desde)
        if hasta is not None:
            condiciones.append(columna <= hasta)
        return and_(*condiciones)
    
    @staticmethod
    def _a_documento(pedido: Pedido) -> dict[str, Any]:
        """Documento original con las columnas indexadas como fuente de verdad."""
        documento = dict(pedido.documento or {})
        documento["_id"] = str(pedido.id)
        
        if pedido.codigo:
            documento["id"] = pedido.codigo
        if pedido.user_id is not None:
            documento["userId"] = str(pedido.user_id)
        if pedido.estado:
            documento["estado"] = pedido.estado
        if pedido.fecha is not None:
            documento["fecha"] = pedido.fecha
        if pedido.created_at is not None:
            documento["createdAt"] = pedido.created_at
        
        return documento
