import asyncio
from datetime import datetime

import pytest

from conftest import AHORA, CatalogoRepositoryStub, PedidoRepositoryStub, pedido, reloj
from tatylu_analytics.application.use_cases import (
    ConsultarRegistros,
    GenerarProyeccionFinanciera,
    GenerarReportePersonalizado,
    GenerarReporteSnapshot,
)


@pytest.fixture
def pedido_repo():
    return PedidoRepositoryStub(
        [
            pedido(100, fecha="2024-06-12T09:00:00", productos=[{"productId": "p1", "cantidad": 3}]),
            pedido("50,50", fecha="2024-06-03T10:00:00", productos=[{"productId": "p2", "cantidad": 5}]),
        ]
    )


def test_snapshot_sin_guardar(pedido_repo, catalogo_repo):
    use_case = GenerarReporteSnapshot(pedido_repo, catalogo_repo, reloj=reloj)

    resultado = asyncio.run(use_case.execute())

    assert resultado["saved"] is None
    assert resultado["report"]["totals"]["sales"] == 150.5
    assert resultado["report"]["orders"]["month"] == 2
    assert pedido_repo.llamadas == [{"desde": None, "hasta": None, "estado": None}]


def test_snapshot_guardado_con_nombre_por_defecto(pedido_repo, catalogo_repo, reporte_repo):
    use_case = GenerarReporteSnapshot(pedido_repo, catalogo_repo, reporte_repo, reloj=reloj)

    resultado = asyncio.run(use_case.execute(guardar=True, creado_por="admin@tatylu.com"))

    guardado = resultado["saved"]
    assert guardado["id"] == 1
    assert guardado["type"] == "snapshot"
    assert guardado["name"] == f"snapshot-{int(AHORA.timestamp() * 1000)}"
    assert guardado["createdBy"] == "admin@tatylu.com"
    assert guardado["language"] == "en"
    assert guardado["payload"] == resultado["report"]


def test_guardar_sin_repositorio_falla(pedido_repo, catalogo_repo):
    use_case = GenerarReporteSnapshot(pedido_repo, catalogo_repo, reloj=reloj)

    with pytest.raises(RuntimeError):
        asyncio.run(use_case.execute(guardar=True))


def test_error_de_lectura_se_propaga(catalogo_repo):
    use_case = GenerarReporteSnapshot(
        PedidoRepositoryStub(error=ConnectionError("db caída")), catalogo_repo, reloj=reloj
    )

    with pytest.raises(ConnectionError):
        asyncio.run(use_case.execute())


def test_personalizado_consulta_con_rango_y_estado(pedido_repo, catalogo_repo, reporte_repo):
    use_case = GenerarReportePersonalizado(pedido_repo, catalogo_repo, reporte_repo, reloj=reloj)

    resultado = asyncio.run(
        use_case.execute(
            {"periodStart": "2024-06-01", "status": "confirmado", "type": "products", "topN": 1},
            guardar=True,
            nombre="Productos junio",
        )
    )

    assert pedido_repo.llamadas == [
        {"desde": datetime(2024, 6, 1), "hasta": AHORA, "estado": "confirmado"}
    ]
    assert resultado["report"]["type"] == "products"
    assert len(resultado["report"]["topProducts"]) == 1
    assert resultado["saved"]["name"] == "Productos junio"
    assert resultado["saved"]["type"] == "products"


def test_proyeccion_parametros_permisivos(pedido_repo, catalogo_repo, reporte_repo):
    use_case = GenerarProyeccionFinanciera(pedido_repo, catalogo_repo, reporte_repo, reloj=reloj)

    resultado = asyncio.run(
        use_case.execute(meses="abc", meses_pronostico=1000, modelo="magic", guardar=True)
    )

    proyeccion = resultado["projection"]
    assert proyeccion["months"] == 6
    assert proyeccion["forecastMonths"] == 60
    assert proyeccion["model"] == "linear"
    assert len(proyeccion["projectionSales"]) == 60
    assert resultado["saved"]["type"] == "financial"


def test_proyeccion_sin_pedidos():
    use_case = GenerarProyeccionFinanciera(
        PedidoRepositoryStub(), CatalogoRepositoryStub(), reloj=reloj
    )

    resultado = asyncio.run(use_case.execute(meses_pronostico=-2))

    assert resultado["projection"]["series"] == []
    assert resultado["projection"]["forecastMonths"] == 0
    assert resultado["saved"] is None


def test_consultar_registros(pedido_repo, catalogo_repo, reporte_repo):
    use_case = GenerarReporteSnapshot(pedido_repo, catalogo_repo, reporte_repo, reloj=reloj)
    asyncio.run(use_case.execute(guardar=True, nombre="primero"))
    asyncio.run(use_case.execute(guardar=True, nombre="segundo"))

    consulta = ConsultarRegistros(reporte_repo)

    assert [r["name"] for r in asyncio.run(consulta.listar())] == ["segundo", "primero"]
    assert asyncio.run(consulta.obtener(1))["name"] == "primero"
    assert asyncio.run(consulta.obtener(99)) is None
    assert asyncio.run(consulta.eliminar(1)) is True
    assert asyncio.run(consulta.eliminar(1)) is False


def test_proyeccion_acota_la_ventana_historica():
    use_case = GenerarProyeccionFinanciera(
        PedidoRepositoryStub(), CatalogoRepositoryStub(), reloj=reloj
    )

    resultado = asyncio.run(use_case.execute(meses=10**6, meses_pronostico=3))

    assert resultado["projection"]["months"] == 120
    assert resultado["projection"]["series"] == []


def test_personalizado_con_numeros_desbordados_usa_defaults(pedido_repo, catalogo_repo):
    use_case = GenerarReportePersonalizado(pedido_repo, catalogo_repo, reloj=reloj)

    resultado = asyncio.run(use_case.execute({"topN": 10**400, "minTotal": 10**400}))

    filtros = resultado["report"]["filters"]
    assert filtros["topN"] == 5
    assert filtros["minTotal"] == 0.0
    assert resultado["report"]["totals"]["orders"] == 2
