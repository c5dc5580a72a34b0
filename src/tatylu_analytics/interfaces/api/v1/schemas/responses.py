"""Schemas de response."""
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class RegistroResponse(BaseModel):
    """Reporte o proyección guardada."""
    
    model_config = ConfigDict(populate_by_name=True)
    
    id: int | None = Field(None, description="ID del registro")
    name: str = Field(..., description="Nombre", examples=["snapshot-1718040000000"])
    type: str = Field(..., description="Tipo de registro", examples=["snapshot"])
    payload: dict[str, Any] = Field(..., description="Resultado calculado")
    created_by: str = Field("", alias="createdBy", description="Email de quien lo generó")
    language: str = Field("en", description="Idioma del payload")
    created_at: str | None = Field(None, alias="createdAt", description="Fecha de creación (ISO-8601)")


class ReporteResponse(BaseModel):
    """Response de generación de reporte."""
    
    success: bool = True
    report: dict[str, Any] = Field(..., description="Payload del reporte")
    saved: RegistroResponse | None = Field(None, description="Registro guardado, si aplica")


class ProyeccionResponse(BaseModel):
    """Response de generación de proyección."""
    
    success: bool = True
    projection: dict[str, Any] = Field(..., description="Payload de la proyección")
    saved: RegistroResponse | None = Field(None, description="Registro guardado, si aplica")


class ListaReportesResponse(BaseModel):
    success: bool = True
    reports: list[RegistroResponse]


class DetalleReporteResponse(BaseModel):
    success: bool = True
    report: RegistroResponse


class ListaProyeccionesResponse(BaseModel):
    success: bool = True
    projections: list[RegistroResponse]


class DetalleProyeccionResponse(BaseModel):
    success: bool = True
    projection: RegistroResponse


class EliminacionResponse(BaseModel):
    success: bool = True


class CacheClearResponse(BaseModel):
    """Respuesta de limpieza de cache."""
    
    message: str = Field(..., description="Mensaje de confirmación")
    keys_deleted: int = Field(..., description="Cantidad de keys eliminadas", ge=0)


class HealthResponse(BaseModel):
    """Response del health check."""
    
    status: str = Field(..., examples=["healthy"])
    service: str = Field(..., examples=["Tatylu Analytics"])
    version: str = Field(..., examples=["0.1.0"])
    database: str = Field(..., examples=["connected"])
    redis: str = Field(..., examples=["connected"])
