"""Schemas de request.

Los campos de filtros se aceptan sin tipar: la interpretación es permisiva
(valores inválidos toman el default) y ocurre en el dominio.
"""
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ReporteSnapshotRequest(BaseModel):
    """Request para generar el reporte snapshot."""
    
    model_config = ConfigDict(populate_by_name=True, extra="ignore")
    
    name: str | None = Field(None, description="Nombre del reporte guardado")
    save: Any = Field(True, description="Guardar el reporte (false para no persistir)")


class ReportePersonalizadoRequest(BaseModel):
    """Request para generar un reporte personalizado."""
    
    model_config = ConfigDict(populate_by_name=True, extra="ignore")
    
    name: str | None = Field(None, description="Nombre del reporte guardado")
    save: Any = Field(True, description="Guardar el reporte (false para no persistir)")
    type: Any = Field(None, description="sales | products | users | custom", examples=["sales"])
    period_start: Any = Field(None, alias="periodStart", description="Inicio (default: inicio de mes)", examples=["2024-10-01"])
    period_end: Any = Field(None, alias="periodEnd", description="Fin (default: ahora)", examples=["2024-10-31T23:59:59"])
    status: Any = Field(None, description="Estado exacto del pedido", examples=["confirmado"])
    category: Any = Field(None, description="Categoría (sin distinguir mayúsculas)", examples=["bebidas"])
    group_by: Any = Field(None, alias="groupBy", description="day | week | month", examples=["week"])
    top_n: Any = Field(None, alias="topN", description="Tamaño de rankings (1-50)", examples=[5])
    include_taxes: Any = Field(True, alias="includeTaxes", description="Incluir impuestos en totales")
    include_shipping: Any = Field(True, alias="includeShipping", description="Incluir envío en totales")
    min_total: Any = Field(None, alias="minTotal", description="Ingreso mínimo por pedido")
    max_total: Any = Field(None, alias="maxTotal", description="Ingreso máximo por pedido")
    focus: Any = Field(None, description="Enfoque informado en el payload")
    
    def filtros(self) -> dict[str, Any]:
        """Filtros con las claves camelCase que espera el dominio."""
        return self.model_dump(by_alias=True, exclude={"name", "save"})


class ProyeccionRequest(BaseModel):
    """Request para generar una proyección financiera."""
    
    model_config = ConfigDict(populate_by_name=True, extra="ignore")
    
    name: str | None = Field(None, description="Nombre de la proyección guardada")
    save: Any = Field(True, description="Guardar la proyección (false para no persistir)")
    months: Any = Field(None, description="Meses hacia atrás si no hay pedidos", examples=[6])
    forecast_months: Any = Field(None, alias="forecastMonths", description="Meses a proyectar", examples=[6])
    model: Any = Field(None, description="linear | average", examples=["linear"])
