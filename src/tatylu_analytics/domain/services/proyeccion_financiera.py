"""Servicio de dominio para la proyección financiera mensual."""
from collections.abc import Iterable
from datetime import datetime
from typing import Any

import polars as pl

from tatylu_analytics.domain.entities.agregados import PuntoSerie
from tatylu_analytics.domain.entities.pedido import PedidoNormalizado
from tatylu_analytics.domain.services.montos import round_half_up, round_money
from tatylu_analytics.domain.services.periodos import (
    desplazar_mes,
    month_key,
)
from tatylu_analytics.domain.value_objects.modelo_proyeccion import ModeloProyeccion


class ProyeccionFinanciera:
    """
    Proyección ingenua de ventas a partir de la serie mensual histórica.

    Modelos:
    - LINEAR: último mes observado + max(0, cambio promedio) × i
    - AVERAGE: promedio histórico para todos los meses futuros

    La tendencia negativa se recorta a cero: con LINEAR la proyección nunca
    baja del último valor observado.
    """

    @staticmethod
    def serie_mensual(pedidos: Iterable[PedidoNormalizado]) -> list[dict[str, Any]]:
        """
        Serie mensual {month, total, orders, avgOrderValue} ordenada por mes.

        La serie empieza en el mes del pedido fechado más antiguo y solo
        incluye meses con pedidos. Pedidos sin fecha se ignoran; sin pedidos
        fechados la serie es vacía.
        """
        fechados = [p for p in pedidos if p.fecha is not None]
        if not fechados:
            return []

        meses_acumulados: dict[str, PuntoSerie] = {}
        for pedido in fechados:
            clave = month_key(pedido.fecha)
            meses_acumulados.setdefault(clave, PuntoSerie(periodo=clave)).acumular(pedido.total())

        return [
            {
                "month": punto.periodo,
                "total": round_money(punto.ventas),
                "orders": punto.pedidos,
                "avgOrderValue": punto.valor_promedio,
            }
            for punto in sorted(meses_acumulados.values(), key=lambda p: p.periodo)
        ]

    @staticmethod
    def construir(
        pedidos: Iterable[PedidoNormalizado],
        ahora: datetime,
        meses: int = 6,
        meses_pronostico: int = 6,
        modelo: ModeloProyeccion = ModeloProyeccion.LINEAR,
    ) -> dict[str, Any]:
        """
        Construye serie histórica y pronóstico.

        Args:
            pedidos: Pedidos normalizados
            ahora: Momento de referencia; los meses proyectados son ahora + i
            meses: Ventana histórica solicitada (se informa en el payload)
            meses_pronostico: Cantidad de meses a proyectar
            modelo: LINEAR o AVERAGE

        Returns:
            Payload de la proyección
        """
        serie = ProyeccionFinanciera.serie_mensual(pedidos)

        if not serie:
            return {
                "generatedAt": ahora.isoformat(),
                "months": meses,
                "forecastMonths": meses_pronostico,
                "model": modelo.value,
                "series": [],
                "projectionSales": [],
                "projectionOrders": [],
                "projectionAvgOrderValue": [],
            }

        df = pl.DataFrame(
            {
                "total": [float(punto["total"]) for punto in serie],
                "orders": [int(punto["orders"]) for punto in serie],
            }
        )
        cambio_total, cambio_ordenes, promedio_total, promedio_ordenes = df.select(
            pl.col("total").diff().mean().alias("cambio_total"),
            pl.col("orders").cast(pl.Float64).diff().mean().alias("cambio_ordenes"),
            pl.col("total").mean().alias("promedio_total"),
            pl.col("orders").cast(pl.Float64).mean().alias("promedio_ordenes"),
        ).row(0)

        # Con un solo mes no hay cambios (diff -> null)
        cambio_total = cambio_total or 0.0
        cambio_ordenes = cambio_ordenes or 0.0
        tendencia_total = max(0.0, cambio_total)
        tendencia_ordenes = max(0.0, cambio_ordenes)

        ultimo_total = serie[-1]["total"]
        ultimas_ordenes = serie[-1]["orders"]

        proyeccion_ventas = []
        proyeccion_ordenes = []
        proyeccion_valor_promedio = []

        for i in range(1, meses_pronostico + 1):
            mes = month_key(desplazar_mes(ahora, i))

            if modelo == ModeloProyeccion.AVERAGE:
                total_proyectado = max(0.0, round_money(promedio_total))
                ordenes_proyectadas = max(0, round_half_up(promedio_ordenes))
            else:
                total_proyectado = max(0.0, round_money(ultimo_total + tendencia_total * i))
                ordenes_proyectadas = max(0, round_half_up(ultimas_ordenes + tendencia_ordenes * i))

            proyeccion_ventas.append({"month": mes, "projectedTotal": total_proyectado})
            proyeccion_ordenes.append({"month": mes, "projectedOrders": ordenes_proyectadas})
            proyeccion_valor_promedio.append({
                "month": mes,
                "projectedAvgOrderValue": (
                    round_money(total_proyectado / ordenes_proyectadas)
                    if ordenes_proyectadas else 0
                ),
            })

        return {
            "generatedAt": ahora.isoformat(),
            "months": meses,
            "forecastMonths": meses_pronostico,
            "model": modelo.value,
            "series": serie,
            "projectionSales": proyeccion_ventas,
            "projectionOrders": proyeccion_ordenes,
            "projectionAvgOrderValue": proyeccion_valor_promedio,
            "avgChange": round_money(cambio_total),
            "avgOrderChange": round_money(cambio_ordenes),
            "lastMonth": {
                "total": round_money(ultimo_total),
                "orders": ultimas_ordenes,
                "avgOrderValue": (
                    round_money(ultimo_total / ultimas_ordenes) if ultimas_ordenes else 0
                ),
            },
        }
