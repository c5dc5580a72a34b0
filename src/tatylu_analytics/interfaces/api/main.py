"""Aplicación principal FastAPI."""
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tatylu_analytics.infrastructure.cache.redis_cache import redis_cache
from tatylu_analytics.infrastructure.config.logging import logger, setup_logging
from tatylu_analytics.infrastructure.config.settings import get_settings
from tatylu_analytics.infrastructure.database.connection import db_manager
from tatylu_analytics.interfaces.api.v1.router import api_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Gestiona el ciclo de vida de la aplicación."""
    settings = get_settings()
    
    setup_logging(level="DEBUG" if settings.debug else "INFO")
    
    logger.info(f"🚀 Iniciando {settings.app_name} v{settings.app_version}")
    
    # Base de datos: obligatoria, con reintentos
    logger.info("📊 Conectando a base de datos...")
    try:
        db_manager.initialize()
        await db_manager.connect_with_retry()
        logger.info("✅ Base de datos conectada")
    except Exception as e:
        logger.error(f"❌ Error conectando a base de datos: {e}")
        raise
    
    # Redis: opcional
    logger.info("🔴 Conectando a Redis...")
    try:
        await redis_cache.initialize()
        logger.info("✅ Redis conectado")
    except Exception as e:
        logger.warning(f"⚠️ Redis no disponible, se continúa sin caché: {e}")
    
    logger.info("🎉 Servicios iniciados correctamente")
    
    yield
    
    logger.info("🛑 Cerrando conexiones...")
    await db_manager.close()
    await redis_cache.close()
    logger.info("👋 Servicios detenidos")


def create_app() -> FastAPI:
    """Factory de la aplicación."""
    settings = get_settings()
    
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Microservicio de reportes de ventas y proyecciones financieras para Tatylu",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    
    app.include_router(api_router, prefix="/api/v1")
    
    return app


app = create_app()
