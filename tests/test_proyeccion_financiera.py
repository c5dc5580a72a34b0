from datetime import datetime

import pytest

from conftest import pedido
from tatylu_analytics.domain.services.normalizador import NormalizadorPedidos
from tatylu_analytics.domain.services.proyeccion_financiera import ProyeccionFinanciera
from tatylu_analytics.domain.value_objects import ModeloProyeccion

ABRIL = datetime(2024, 4, 15, 12, 0)


def pedidos_trimestre():
    return NormalizadorPedidos().normalizar_todos(
        [
            pedido(100, fecha="2024-01-10T10:00:00"),
            pedido(120, fecha="2024-02-03T10:00:00"),
            pedido(80, fecha="2024-02-20T10:00:00"),
            pedido(150, fecha="2024-03-28T10:00:00"),
            pedido(500, fecha=None),
        ]
    )


def test_serie_mensual_desde_el_primer_pedido():
    serie = ProyeccionFinanciera.serie_mensual(pedidos_trimestre())

    assert serie == [
        {"month": "2024-01", "total": 100.0, "orders": 1, "avgOrderValue": 100.0},
        {"month": "2024-02", "total": 200.0, "orders": 2, "avgOrderValue": 100.0},
        {"month": "2024-03", "total": 150.0, "orders": 1, "avgOrderValue": 150.0},
    ]


def test_modelo_lineal():
    resultado = ProyeccionFinanciera.construir(
        pedidos_trimestre(), ABRIL, meses_pronostico=2, modelo=ModeloProyeccion.LINEAR
    )

    # Cambios: +100, -50 -> promedio 25
    assert resultado["avgChange"] == pytest.approx(25.0)
    assert resultado["projectionSales"] == [
        {"month": "2024-05", "projectedTotal": 175.0},
        {"month": "2024-06", "projectedTotal": 200.0},
    ]
    # Órdenes: +1, -1 -> promedio 0
    assert resultado["projectionOrders"] == [
        {"month": "2024-05", "projectedOrders": 1},
        {"month": "2024-06", "projectedOrders": 1},
    ]
    assert resultado["projectionAvgOrderValue"][1] == {
        "month": "2024-06",
        "projectedAvgOrderValue": 200.0,
    }
    assert resultado["lastMonth"] == {"total": 150.0, "orders": 1, "avgOrderValue": 150.0}


def test_modelo_promedio():
    resultado = ProyeccionFinanciera.construir(
        pedidos_trimestre(), ABRIL, meses_pronostico=3, modelo=ModeloProyeccion.AVERAGE
    )

    assert resultado["model"] == "average"
    assert [p["projectedTotal"] for p in resultado["projectionSales"]] == [150.0, 150.0, 150.0]
    # 4 órdenes en 3 meses -> 1.33 -> 1
    assert [p["projectedOrders"] for p in resultado["projectionOrders"]] == [1, 1, 1]


def test_tendencia_negativa_no_reduce_la_proyeccion():
    pedidos = NormalizadorPedidos().normalizar_todos(
        [pedido(200, fecha="2024-01-10T10:00:00"), pedido(100, fecha="2024-02-10T10:00:00")]
    )

    resultado = ProyeccionFinanciera.construir(pedidos, datetime(2024, 3, 10), meses_pronostico=3)

    assert resultado["avgChange"] == pytest.approx(-100.0)
    assert [p["projectedTotal"] for p in resultado["projectionSales"]] == [100.0, 100.0, 100.0]


def test_un_solo_mes_sin_cambio():
    pedidos = NormalizadorPedidos().normalizar_todos([pedido(80, fecha="2024-03-01T10:00:00")])

    resultado = ProyeccionFinanciera.construir(pedidos, ABRIL, meses_pronostico=1)

    assert resultado["avgChange"] == 0.0
    assert resultado["projectionSales"] == [{"month": "2024-05", "projectedTotal": 80.0}]


def test_sin_pedidos_resultado_vacio():
    resultado = ProyeccionFinanciera.construir([], ABRIL, meses=6, meses_pronostico=4)

    assert resultado["series"] == []
    assert resultado["projectionSales"] == []
    assert resultado["projectionOrders"] == []
    assert resultado["projectionAvgOrderValue"] == []
    assert resultado["months"] == 6
    assert resultado["forecastMonths"] == 4


def test_meses_proyectados_cruzan_el_año():
    pedidos = NormalizadorPedidos().normalizar_todos([pedido(10, fecha="2024-11-01T10:00:00")])

    resultado = ProyeccionFinanciera.construir(pedidos, datetime(2024, 11, 20), meses_pronostico=3)

    assert [p["month"] for p in resultado["projectionSales"]] == ["2024-12", "2025-01", "2025-02"]


def test_sin_pedidos_con_ventana_historica_enorme():
    resultado = ProyeccionFinanciera.construir([], ABRIL, meses=30000, meses_pronostico=3)

    assert resultado["series"] == []
    assert resultado["projectionSales"] == []
    assert resultado["months"] == 30000
