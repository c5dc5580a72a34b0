"""Value Object para la granularidad de series de tiempo."""
from enum import Enum


class Granularidad(str, Enum):
    """Agrupación temporal de una serie de ventas."""
    
    DIA = "day"  # YYYY-MM-DD
    SEMANA = "week"  # YYYY-Www (ISO-8601)
    MES = "month"  # YYYY-MM
    
    @classmethod
    def desde_valor(cls, valor: object) -> "Granularidad":
        """Interpreta un valor crudo; cualquier valor desconocido es MES."""
        try:
            return cls(str(valor).strip().lower())
        except ValueError:
            return cls.MES
