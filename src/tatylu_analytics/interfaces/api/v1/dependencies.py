"""Dependencias compartidas por los endpoints v1."""
from collections.abc import Callable
from datetime import datetime

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from tatylu_analytics.application.ports.catalogo_repository import CatalogoRepository
from tatylu_analytics.application.ports.pedido_repository import PedidoRepository
from tatylu_analytics.application.ports.reporte_repository import ReporteRepository
from tatylu_analytics.infrastructure.database.connection import get_db_session
from tatylu_analytics.infrastructure.database.repositories.catalogo_repository_impl import (
    CatalogoRepositoryImpl,
)
from tatylu_analytics.infrastructure.database.repositories.pedido_repository_impl import (
    PedidoRepositoryImpl,
)
from tatylu_analytics.infrastructure.database.repositories.reporte_repository_impl import (
    ProyeccionRepositoryImpl,
    ReporteRepositoryImpl,
)


def get_pedido_repository(session: AsyncSession = Depends(get_db_session)) -> PedidoRepository:
    return PedidoRepositoryImpl(session)


def get_catalogo_repository(session: AsyncSession = Depends(get_db_session)) -> CatalogoRepository:
    return CatalogoRepositoryImpl(session)


def get_reporte_repository(session: AsyncSession = Depends(get_db_session)) -> ReporteRepository:
    return ReporteRepositoryImpl(session)


def get_proyeccion_repository(session: AsyncSession = Depends(get_db_session)) -> ReporteRepository:
    return ProyeccionRepositoryImpl(session)


def get_reloj() -> Callable[[], datetime]:
    """Reloj de referencia para ventanas de tiempo (hora local)."""
    return datetime.now
