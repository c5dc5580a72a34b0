"""Configuración de logging estructurado."""
import logging
import sys


def setup_logging(level: str = "INFO") -> logging.Logger:
    """
    Configura logging para toda la aplicación.
    
    Args:
        level: Nivel de logging (DEBUG, INFO, WARNING, ERROR)
    
    Returns:
        Logger configurado
    """
    log_format = (
        "%(asctime)s | %(levelname)-8s | %(name)-30s | "
        "%(funcName)-20s | %(message)s"
    )
    
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(log_format, datefmt="%Y-%m-%d %H:%M:%S"))
    
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))
    # Un solo handler a stdout aunque la app se recree (tests, reload)
    if not any(
        isinstance(h, logging.StreamHandler) and h.stream is sys.stdout
        for h in root_logger.handlers
    ):
        root_logger.addHandler(handler)
    
    # Reducir ruido de librerías externas
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.error").setLevel(logging.INFO)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiomysql").setLevel(logging.WARNING)
    
    app_logger = logging.getLogger("tatylu_analytics")
    app_logger.setLevel(getattr(logging, level.upper()))
    
    return app_logger


# Logger global de la aplicación
logger = logging.getLogger("tatylu_analytics")
