"""Servicio de dominio para agregar ventas sobre pedidos normalizados."""
from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any

from tatylu_analytics.domain.entities.agregados import (
    ClienteAcumulado,
    PuntoSerie,
    VentaProducto,
)
from tatylu_analytics.domain.entities.pedido import (
    LineaPedido,
    PedidoNormalizado,
    UsuarioInfo,
)
from tatylu_analytics.domain.services.montos import round_money
from tatylu_analytics.domain.services.periodos import (
    period_key,
    start_of_day,
    start_of_month,
    start_of_week,
)
from tatylu_analytics.domain.value_objects.filtros_reporte import FiltrosReporte
from tatylu_analytics.domain.value_objects.tipo_reporte import TipoReporte


class _Acumulador:
    """Acumula ventas por producto y por categoría en orden de aparición."""

    def __init__(self):
        self.productos: dict[str, VentaProducto] = {}
        self.categorias: dict[str, float] = {}

    def agregar_linea(self, linea: LineaPedido) -> None:
        venta = self.productos.get(linea.producto_id)
        if venta is None:
            venta = VentaProducto(
                producto_id=linea.producto_id,
                codigo=linea.codigo,
                nombre=linea.nombre,
                categoria=linea.categoria,
                en_catalogo=linea.en_catalogo,
            )
            self.productos[linea.producto_id] = venta
        venta.acumular(linea.cantidad, linea.ingreso)

        self.categorias[linea.categoria] = round_money(
            self.categorias.get(linea.categoria, 0.0) + linea.ingreso
        )

    def top_productos(self, limite: int) -> list[VentaProducto]:
        """Ranking por cantidad descendente; empates en orden de aparición."""
        return sorted(self.productos.values(), key=lambda v: v.cantidad, reverse=True)[:limite]

    def ingresos_por_categoria(self) -> dict[str, float]:
        return {categoria: round_money(total) for categoria, total in self.categorias.items()}


class AgregadorVentas:
    """
    Reduce una lista de pedidos normalizados a payloads de reporte.

    Es una pasada única en memoria y no tiene efectos secundarios: el mismo
    conjunto de pedidos y el mismo `ahora` producen el mismo resultado.
    """

    @staticmethod
    def snapshot(
        pedidos: Iterable[PedidoNormalizado],
        ahora: datetime,
        top_productos: int = 10,
    ) -> dict[str, Any]:
        """
        Reporte del estado actual sobre todos los pedidos registrados.

        Args:
            pedidos: Todos los pedidos, ya normalizados
            ahora: Momento de referencia para las ventanas hoy/semana/mes
            top_productos: Tamaño del ranking de productos

        Returns:
            Payload del reporte snapshot
        """
        inicio_dia = start_of_day(ahora)
        inicio_semana = start_of_week(ahora)
        inicio_mes = start_of_month(ahora)

        acumulador = _Acumulador()
        ventas = {"total": 0.0, "today": 0.0, "week": 0.0, "month": 0.0}
        ordenes = {"total": 0, "today": 0, "week": 0, "month": 0}
        items_vendidos = 0

        for pedido in pedidos:
            total = pedido.total()
            ventas["total"] = round_money(ventas["total"] + total)
            ordenes["total"] += 1

            # Pedidos sin fecha cuentan en totales pero en ninguna ventana
            if pedido.fecha is not None:
                for ventana, inicio in (
                    ("today", inicio_dia),
                    ("week", inicio_semana),
                    ("month", inicio_mes),
                ):
                    if pedido.fecha >= inicio:
                        ventas[ventana] = round_money(ventas[ventana] + total)
                        ordenes[ventana] += 1

            for linea in pedido.lineas:
                items_vendidos += linea.cantidad
                acumulador.agregar_linea(linea)

        total_ordenes = ordenes["total"]
        return {
            "type": TipoReporte.SNAPSHOT.value,
            "generatedAt": ahora.isoformat(),
            "periodStart": inicio_mes.isoformat(),
            "periodEnd": ahora.isoformat(),
            "totals": {
                "sales": round_money(ventas["total"]),
                "orders": total_ordenes,
                "itemsSold": items_vendidos,
                "averageOrderValue": (
                    round_money(ventas["total"] / total_ordenes) if total_ordenes else 0
                ),
            },
            "sales": {
                "today": round_money(ventas["today"]),
                "week": round_money(ventas["week"]),
                "month": round_money(ventas["month"]),
            },
            "orders": {
                "today": ordenes["today"],
                "week": ordenes["week"],
                "month": ordenes["month"],
            },
            "topProducts": [v.a_dict() for v in acumulador.top_productos(top_productos)],
            "topCustomers": [],
            "revenueByCategory": acumulador.ingresos_por_categoria(),
        }

    @staticmethod
    def personalizado(
        pedidos: Iterable[PedidoNormalizado],
        filtros: FiltrosReporte,
        ahora: datetime,
        usuarios: Mapping[str, UsuarioInfo] | None = None,
    ) -> dict[str, Any]:
        """
        Reporte filtrable por rango, estado, categoría y monto.

        Con filtro de categoría el ingreso de cada pedido es la suma de sus
        líneas coincidentes; sin él, el total resuelto del pedido respetando
        `incluir_impuestos` / `incluir_envio`. Los límites de monto se aplican
        sobre ese ingreso.
        """
        usuarios = usuarios or {}
        acumulador = _Acumulador()
        clientes: dict[str, ClienteAcumulado] = {}
        serie: dict[str, PuntoSerie] = {}

        total_ventas = 0.0
        total_ordenes = 0
        items_vendidos = 0

        for pedido in pedidos:
            if not filtros.en_rango(pedido.fecha):
                continue
            if filtros.estado and pedido.estado != filtros.estado:
                continue

            if filtros.categoria:
                lineas = [
                    linea for linea in pedido.lineas
                    if linea.categoria_normalizada == filtros.categoria
                ]
                if not lineas:
                    continue
                ingreso = 0.0
                for linea in lineas:
                    ingreso = round_money(ingreso + linea.ingreso)
            else:
                lineas = list(pedido.lineas)
                ingreso = pedido.total(filtros.incluir_impuestos, filtros.incluir_envio)

            if not filtros.permite_total(ingreso):
                continue

            total_ventas = round_money(total_ventas + ingreso)
            total_ordenes += 1
            for linea in lineas:
                items_vendidos += linea.cantidad
                acumulador.agregar_linea(linea)

            cliente = AgregadorVentas._cliente_de(pedido, usuarios)
            if cliente is not None:
                cliente = clientes.setdefault(cliente.clave, cliente)
                cliente.acumular(ingreso)

            clave = period_key(pedido.fecha, filtros.agrupar_por)
            serie.setdefault(clave, PuntoSerie(periodo=clave)).acumular(ingreso)

        top_clientes = sorted(clientes.values(), key=lambda c: c.gastado, reverse=True)

        payload = {
            "type": filtros.tipo.value,
            "generatedAt": ahora.isoformat(),
            "periodStart": filtros.periodo_inicio.isoformat(),
            "periodEnd": filtros.periodo_fin.isoformat(),
            "filters": filtros.a_dict(),
            "totals": {
                "sales": round_money(total_ventas),
                "orders": total_ordenes,
                "itemsSold": items_vendidos,
                "averageOrderValue": (
                    round_money(total_ventas / total_ordenes) if total_ordenes else 0
                ),
            },
            "timeSeries": [
                {"period": punto.periodo, "sales": round_money(punto.ventas), "orders": punto.pedidos}
                for punto in sorted(serie.values(), key=lambda p: p.periodo)
            ],
            "topProducts": [
                v.a_dict(incluir_categoria=True)
                for v in acumulador.top_productos(filtros.top_n)
            ],
            "topCustomers": [c.a_dict() for c in top_clientes[: filtros.top_n]],
            "revenueByCategory": acumulador.ingresos_por_categoria(),
        }

        return AgregadorVentas.dar_forma(payload, filtros.tipo)

    @staticmethod
    def dar_forma(payload: dict[str, Any], tipo: TipoReporte) -> dict[str, Any]:
        """Recorta el payload genérico según el tipo de reporte."""
        totales = payload["totals"]

        if tipo == TipoReporte.PRODUCTS:
            payload["totals"] = {"itemsSold": totales["itemsSold"], "sales": totales["sales"]}
            payload["topCustomers"] = []
            payload["timeSeries"] = []
        elif tipo == TipoReporte.USERS:
            payload["totals"] = {"orders": totales["orders"], "sales": totales["sales"]}
            payload["topProducts"] = []
            payload["revenueByCategory"] = {}
            payload["timeSeries"] = []
        elif tipo == TipoReporte.SALES:
            payload["topCustomers"] = []
            payload["revenueByCategory"] = {}

        return payload

    @staticmethod
    def _cliente_de(
        pedido: PedidoNormalizado,
        usuarios: Mapping[str, UsuarioInfo],
    ) -> ClienteAcumulado | None:
        """Cliente del pedido: email del snapshot, id del snapshot o referencia de usuario."""
        snapshot = pedido.cliente
        clave = (
            (snapshot.email if snapshot else "")
            or (snapshot.id if snapshot else "")
            or pedido.usuario_ref
        )
        if not clave:
            return None

        usuario = usuarios.get(pedido.usuario_ref) if pedido.usuario_ref else None
        nombre = snapshot.nombre_completo if snapshot and snapshot.nombre else ""
        email = snapshot.email if snapshot else ""

        return ClienteAcumulado(
            clave=clave,
            nombre=nombre or (usuario.nombre if usuario else ""),
            email=email or (usuario.email if usuario else ""),
        )
