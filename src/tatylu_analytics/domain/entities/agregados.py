"""Acumuladores mutables usados durante una pasada de agregación."""
from dataclasses import dataclass

from tatylu_analytics.domain.services.montos import round_money


@dataclass
class VentaProducto:
    """Ventas acumuladas de un producto."""

    producto_id: str
    codigo: str
    nombre: str
    categoria: str
    en_catalogo: bool
    cantidad: int | float = 0
    ingreso: float = 0.0

    def acumular(self, cantidad: int | float, ingreso: float) -> None:
        self.cantidad += cantidad
        self.ingreso = round_money(self.ingreso + ingreso)

    def a_dict(self, incluir_categoria: bool = False) -> dict:
        resultado = {
            "productId": self.producto_id if self.en_catalogo else None,
            "id": self.codigo,
            "name": self.nombre,
            "quantity": self.cantidad,
            "revenue": round_money(self.ingreso),
        }
        if incluir_categoria:
            resultado["category"] = self.categoria
        return resultado


@dataclass
class ClienteAcumulado:
    """Gasto acumulado de un cliente."""

    clave: str
    nombre: str
    email: str
    pedidos: int = 0
    gastado: float = 0.0

    def acumular(self, ingreso: float) -> None:
        self.pedidos += 1
        self.gastado = round_money(self.gastado + ingreso)

    def a_dict(self) -> dict:
        return {
            "name": self.nombre,
            "email": self.email,
            "orders": self.pedidos,
            "spent": round_money(self.gastado),
        }


@dataclass
class PuntoSerie:
    """Un período de la serie de tiempo."""

    periodo: str
    ventas: float = 0.0
    pedidos: int = 0

    def acumular(self, ingreso: float) -> None:
        self.pedidos += 1
        self.ventas = round_money(self.ventas + ingreso)

    @property
    def valor_promedio(self) -> float:
        return round_money(self.ventas / self.pedidos) if self.pedidos else 0.0
