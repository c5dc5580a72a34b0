"""Servicio de dominio para normalizar montos, cantidades y pedidos heredados.

Los pedidos llegan con campos de distintas épocas del esquema (nombres en
español/inglés, totales anidados en `resumen` o al nivel raíz). La tabla
`ALIAS_CAMPOS` declara, para cada campo canónico, la lista ordenada de rutas
de origen; `resolver` y `resolver_numero` son los únicos puntos de lectura.
"""
from collections.abc import Mapping
from typing import Any

from tatylu_analytics.domain.entities.pedido import (
    ClienteSnapshot,
    LineaPedido,
    PedidoNormalizado,
    ProductoInfo,
)
from tatylu_analytics.domain.services.montos import round_money, to_number, to_quantity
from tatylu_analytics.domain.services.periodos import parse_fecha


CATEGORIA_POR_DEFECTO = "otros"
PRODUCTO_DESCONOCIDO = "Unknown product"


# Campo canónico -> rutas de origen en orden de prioridad
ALIAS_CAMPOS: dict[str, tuple[str, ...]] = {
    # Línea de pedido
    "item.producto_id": ("productId", "id", "_id"),
    "item.cantidad": ("cantidad", "quantity", "qty", "unidades"),
    "item.precio_unitario": (
        "precio", "unitPrice", "price", "precioUnitario",
        "precio_unitario", "unit_price", "priceUnit",
    ),
    "item.ingreso": (
        "subtotal", "lineTotal", "total", "totalPrice",
        "precioTotal", "precio_total",
    ),
    "item.nombre": ("nombre", "productName", "name"),
    "item.categoria": ("categoria", "category"),
    # Pedido
    "pedido.id": ("_id",),
    "pedido.codigo": ("id", "codigo"),
    "pedido.fecha": ("fecha", "createdAt"),
    "pedido.estado": ("estado", "status"),
    "pedido.usuario": ("userId", "user"),
    "pedido.cliente": ("resumen.cliente", "cliente"),
    "pedido.items": ("resumen.productos", "productos", "items"),
    "pedido.total": (
        "resumen.totales.total", "resumen.total", "totales.total",
        "total", "totalAmount",
    ),
    "pedido.totales": ("resumen.totales", "resumen", "totales"),
    # Componentes de totales (relativos al contenedor de totales)
    "totales.subtotal": ("subtotal", "subTotal"),
    "totales.impuestos": ("iva", "tax"),
    "totales.envio": ("envio", "shipping"),
    "totales.descuento": ("discount", "descuento"),
}


def _valor_en_ruta(documento: Mapping, ruta: str) -> Any:
    actual: Any = documento
    for parte in ruta.split("."):
        if not isinstance(actual, Mapping):
            return None
        actual = actual.get(parte)
    return actual


def resolver(documento: Mapping | None, campo: str) -> Any:
    """Primer alias presente (no None ni string vacío) para el campo canónico."""
    if not isinstance(documento, Mapping):
        return None
    for ruta in ALIAS_CAMPOS[campo]:
        valor = _valor_en_ruta(documento, ruta)
        if valor is not None and valor != "":
            return valor
    return None


def resolver_numero(documento: Mapping | None, campo: str, fallback: float = 0.0) -> float:
    """Primer alias cuyo valor numérico es distinto de cero."""
    if not isinstance(documento, Mapping):
        return fallback
    for ruta in ALIAS_CAMPOS[campo]:
        numero = to_number(_valor_en_ruta(documento, ruta), 0.0)
        if numero != 0:
            return numero
    return fallback


def _texto(valor: Any) -> str:
    return "" if valor is None else str(valor).strip()


class NormalizadorPedidos:
    """
    Convierte documentos de pedido heredados en `PedidoNormalizado`.

    El catálogo de productos (id -> ProductoInfo) se usa para completar
    precio, nombre y categoría ausentes en las líneas.
    """

    def __init__(self, productos: Mapping[str, ProductoInfo] | None = None):
        self.productos = productos or {}
        self.registros_incompletos = 0

    def normalizar_linea(self, item: Mapping) -> LineaPedido:
        """Resuelve cantidad, precio, ingreso, nombre y categoría de una línea."""
        producto_id = _texto(resolver(item, "item.producto_id")) or "unknown"
        producto = self.productos.get(producto_id)

        cantidad = to_quantity(resolver_numero(item, "item.cantidad"))
        precio_unitario = resolver_numero(item, "item.precio_unitario")
        if precio_unitario == 0 and producto and producto.precio:
            precio_unitario = producto.precio

        ingreso = resolver_numero(item, "item.ingreso")
        if ingreso == 0 and precio_unitario > 0:
            ingreso = round_money(precio_unitario * cantidad)
        if ingreso == 0 and cantidad:
            self.registros_incompletos += 1

        nombre = (producto.nombre if producto else "") or _texto(resolver(item, "item.nombre"))
        categoria = (producto.categoria if producto else "") or _texto(resolver(item, "item.categoria"))

        return LineaPedido(
            producto_id=producto_id,
            codigo=producto.codigo if producto else "",
            nombre=nombre or PRODUCTO_DESCONOCIDO,
            categoria=categoria or CATEGORIA_POR_DEFECTO,
            cantidad=cantidad,
            precio_unitario=precio_unitario,
            ingreso=ingreso,
            en_catalogo=producto is not None,
        )

    def normalizar(self, documento: Mapping) -> PedidoNormalizado:
        """Normaliza un documento de pedido completo."""
        items = resolver(documento, "pedido.items")
        if not isinstance(items, (list, tuple)):
            items = []
        lineas = tuple(
            self.normalizar_linea(item) for item in items if isinstance(item, Mapping)
        )

        totales = resolver(documento, "pedido.totales")

        fecha = parse_fecha(resolver(documento, "pedido.fecha"))
        if fecha is None:
            self.registros_incompletos += 1

        return PedidoNormalizado(
            id=_texto(resolver(documento, "pedido.id")),
            codigo=_texto(resolver(documento, "pedido.codigo")),
            fecha=fecha,
            estado=_texto(resolver(documento, "pedido.estado")),
            usuario_ref=_texto(resolver(documento, "pedido.usuario")),
            cliente=self._cliente(resolver(documento, "pedido.cliente")),
            lineas=lineas,
            total_explicito=resolver_numero(documento, "pedido.total"),
            subtotal=resolver_numero(totales, "totales.subtotal"),
            impuestos=resolver_numero(totales, "totales.impuestos"),
            envio=resolver_numero(totales, "totales.envio"),
            descuento=resolver_numero(totales, "totales.descuento"),
        )

    def normalizar_todos(self, documentos: list[Mapping]) -> list[PedidoNormalizado]:
        return [self.normalizar(doc) for doc in documentos if isinstance(doc, Mapping)]

    @staticmethod
    def _cliente(datos: Any) -> ClienteSnapshot | None:
        if not isinstance(datos, Mapping):
            return None
        return ClienteSnapshot(
            id=_texto(datos.get("id")),
            nombre=_texto(datos.get("nombre")),
            apellido=_texto(datos.get("apellido")),
            email=_texto(datos.get("email")),
            telefono=_texto(datos.get("telefono")),
        )
