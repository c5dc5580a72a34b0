"""Entidades de pedido normalizado y catálogos de apoyo."""
from dataclasses import dataclass
from datetime import datetime

from tatylu_analytics.domain.services.montos import round_money


@dataclass(frozen=True)
class ProductoInfo:
    """Producto del catálogo, usado solo para completar líneas."""

    id: str
    codigo: str
    nombre: str
    categoria: str
    precio: float


@dataclass(frozen=True)
class UsuarioInfo:
    """Usuario, usado solo para completar nombre/email de clientes."""

    id: str
    nombre: str
    email: str


@dataclass(frozen=True)
class ClienteSnapshot:
    """Copia del cliente embebida en el pedido al momento de la compra."""

    id: str
    nombre: str
    apellido: str
    email: str
    telefono: str

    @property
    def nombre_completo(self) -> str:
        return f"{self.nombre} {self.apellido}".strip()


@dataclass(frozen=True)
class LineaPedido:
    """Línea de pedido con cantidad, precio e ingreso ya resueltos."""

    producto_id: str
    codigo: str
    nombre: str
    categoria: str
    cantidad: int | float
    precio_unitario: float
    ingreso: float
    en_catalogo: bool = False

    @property
    def categoria_normalizada(self) -> str:
        return self.categoria.strip().lower()


@dataclass(frozen=True)
class PedidoNormalizado:
    """Pedido en forma canónica, independiente de la versión del esquema."""

    id: str
    codigo: str
    fecha: datetime | None
    estado: str
    usuario_ref: str
    cliente: ClienteSnapshot | None
    lineas: tuple[LineaPedido, ...]
    total_explicito: float
    subtotal: float
    impuestos: float
    envio: float
    descuento: float

    @property
    def tiene_componentes(self) -> bool:
        """Indica si hay algún componente de totales distinto de cero."""
        return any((self.subtotal, self.impuestos, self.envio, self.descuento))

    @property
    def items_vendidos(self) -> int | float:
        return sum(linea.cantidad for linea in self.lineas)

    @property
    def total_lineas(self) -> float:
        """Total reconstruido desde las líneas."""
        total = 0.0
        for linea in self.lineas:
            total = round_money(total + linea.ingreso)
        return total

    def total_componentes(
        self,
        incluir_impuestos: bool = True,
        incluir_envio: bool = True,
    ) -> float:
        """subtotal − descuento + impuestos + envío, nunca negativo."""
        total = self.subtotal - self.descuento
        if incluir_impuestos:
            total += self.impuestos
        if incluir_envio:
            total += self.envio
        return round_money(max(0.0, total))

    def total(
        self,
        incluir_impuestos: bool = True,
        incluir_envio: bool = True,
    ) -> float:
        """
        Ingreso total del pedido (primer valor distinto de cero).

        Orden por defecto: total explícito, componentes, suma de líneas.
        Si se excluyen impuestos o envío, el total explícito no sirve y se
        prueba primero con componentes, luego líneas y por último el
        total explícito.

        Returns:
            Total no negativo redondeado a 2 decimales
        """
        componentes = (
            self.total_componentes(incluir_impuestos, incluir_envio)
            if self.tiene_componentes
            else 0.0
        )

        if incluir_impuestos and incluir_envio:
            candidatos = (self.total_explicito, componentes, self.total_lineas)
        else:
            candidatos = (componentes, self.total_lineas, self.total_explicito)

        for candidato in candidatos:
            if candidato:
                return round_money(max(0.0, candidato))
        return 0.0
