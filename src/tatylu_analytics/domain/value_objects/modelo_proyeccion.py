"""Value Object para modelos de proyección financiera."""
from enum import Enum


class ModeloProyeccion(str, Enum):
    """Modelo de extrapolación de la serie mensual."""
    
    LINEAR = "linear"  # último valor + tendencia positiva × i
    AVERAGE = "average"  # promedio histórico constante
    
    @classmethod
    def desde_valor(cls, valor: object) -> "ModeloProyeccion":
        """Interpreta un valor crudo; cualquier valor desconocido es LINEAR."""
        try:
            return cls(str(valor).strip().lower())
        except ValueError:
            return cls.LINEAR
