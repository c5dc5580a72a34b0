"""Value Object para tipos de reporte."""
from enum import Enum


class TipoReporte(str, Enum):
    """Tipo de reporte; determina la forma del payload."""
    
    SNAPSHOT = "snapshot"
    SALES = "sales"
    PRODUCTS = "products"
    USERS = "users"
    CUSTOM = "custom"
    FINANCIAL = "financial"
    
    @classmethod
    def personalizado_desde_valor(cls, valor: object) -> "TipoReporte":
        """Tipos aceptados por el reporte personalizado (desconocido = CUSTOM)."""
        try:
            tipo = cls(str(valor).strip().lower())
        except ValueError:
            return cls.CUSTOM
        if tipo in (cls.SALES, cls.PRODUCTS, cls.USERS):
            return tipo
        return cls.CUSTOM
    
    @property
    def enfoque_por_defecto(self) -> str:
        """Enfoque (focus) que se informa cuando el cliente no envía uno."""
        enfoques = {
            TipoReporte.USERS: "most_active",
            TipoReporte.PRODUCTS: "top_sold",
        }
        return enfoques.get(self, "top_revenue")
