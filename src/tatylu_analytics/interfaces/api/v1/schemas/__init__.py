"""Schemas de la API v1."""
from tatylu_analytics.interfaces.api.v1.schemas.requests import (
    ProyeccionRequest,
    ReportePersonalizadoRequest,
    ReporteSnapshotRequest,
)
from tatylu_analytics.interfaces.api.v1.schemas.responses import (
    CacheClearResponse,
    DetalleProyeccionResponse,
    DetalleReporteResponse,
    EliminacionResponse,
    HealthResponse,
    ListaProyeccionesResponse,
    ListaReportesResponse,
    ProyeccionResponse,
    RegistroResponse,
    ReporteResponse,
)

__all__ = [
    "ReporteSnapshotRequest",
    "ReportePersonalizadoRequest",
    "ProyeccionRequest",
    "RegistroResponse",
    "ReporteResponse",
    "ProyeccionResponse",
    "ListaReportesResponse",
    "DetalleReporteResponse",
    "ListaProyeccionesResponse",
    "DetalleProyeccionResponse",
    "EliminacionResponse",
    "CacheClearResponse",
    "HealthResponse",
]
