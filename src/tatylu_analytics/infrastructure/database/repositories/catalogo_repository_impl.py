"""Implementación del repositorio de catálogos."""
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tatylu_analytics.application.ports.catalogo_repository import CatalogoRepository
from tatylu_analytics.domain.entities.pedido import ProductoInfo, UsuarioInfo
from tatylu_analytics.domain.services.montos import to_number
from tatylu_analytics.infrastructure.database.models import Producto, Usuario


class CatalogoRepositoryImpl(CatalogoRepository):
    """Implementación de repositorio de productos y usuarios."""
    
    def __init__(self, session: AsyncSession):
        self.session = session
    
    async def listar_productos(self) -> list[ProductoInfo]:
        result = await self.session.execute(select(Producto))
        
        return [
            ProductoInfo(
                id=str(producto.id),
                codigo=producto.codigo or "",
                nombre=producto.nombre or "",
                categoria=producto.categoria or "",
                precio=to_number(producto.precio, 0.0),
            )
            for producto in result.scalars().all()
        ]
    
    async def listar_usuarios(self) -> list[UsuarioInfo]:
        result = await self.session.execute(
            select(Usuario.id, Usuario.nombre, Usuario.apellido, Usuario.email)
        )
        
        usuarios = []
        for row in result.all():
            nombre_completo = " ".join([row.nombre or "", row.apellido or ""]).strip()
            usuarios.append(
                UsuarioInfo(id=str(row.id), nombre=nombre_completo, email=row.email or "")
            )
        return usuarios
