"""Gestión de conexiones a la base de datos."""
import asyncio
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from tatylu_analytics.infrastructure.config.logging import logger
from tatylu_analytics.infrastructure.config.settings import get_settings


class DatabaseManager:
    """Gestor de conexiones a base de datos."""
    
    def __init__(self):
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None
    
    def initialize(self) -> None:
        """Inicializa el motor de base de datos."""
        settings = get_settings()
        
        self._engine = create_async_engine(
            settings.database_url,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_recycle=settings.db_pool_recycle,
            echo=settings.debug,
            pool_pre_ping=True,
        )
        
        self._session_factory = async_sessionmaker(
            self._engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
    
    async def connect_with_retry(self) -> None:
        """
        Verifica la conexión con reintentos acotados.
        
        La espera crece linealmente (delay × intento). Si se agotan los
        intentos se relanza el último error.
        """
        if not self._engine:
            raise RuntimeError("Database no inicializada")
        
        settings = get_settings()
        intentos = max(1, settings.db_connect_retries)
        
        for intento in range(1, intentos + 1):
            try:
                async with self._engine.connect() as conn:
                    await conn.execute(text("SELECT 1"))
                return
            except Exception as e:
                logger.error(f"Error conectando a base de datos (intento {intento}/{intentos}): {e}")
                if intento == intentos:
                    raise
                espera = settings.db_retry_delay_seconds * intento
                logger.info(f"Reintentando conexión en {espera:.1f}s...")
                await asyncio.sleep(espera)
    
    async def close(self) -> None:
        """Cierra las conexiones."""
        if self._engine:
            await self._engine.dispose()
    
    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        """Context manager para obtener sesión de BD."""
        if not self._session_factory:
            raise RuntimeError("Database no inicializada")
        
        async with self._session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise


# Instancia global
db_manager = DatabaseManager()


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Dependency para FastAPI."""
    async with db_manager.get_session() as session:
        yield session
