"""Entidad de reporte o proyección persistida."""
from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class RegistroReporte:
    """Reporte con nombre, tipo y payload calculado. Inmutable una vez creado."""

    name: str
    type: str
    payload: dict[str, Any]
    created_by: str = ""
    language: str = "en"
    id: int | None = None
    created_at: datetime | None = None

    def a_dict(self) -> dict[str, Any]:
        """Representación JSON-serializable."""
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "payload": self.payload,
            "createdBy": self.created_by,
            "language": self.language,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
