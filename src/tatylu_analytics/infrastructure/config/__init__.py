"""Módulo de configuración."""
from tatylu_analytics.infrastructure.config.settings import get_settings
from tatylu_analytics.infrastructure.config.logging import setup_logging, logger

__all__ = ["get_settings", "setup_logging", "logger"]
