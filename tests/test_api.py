from datetime import timedelta

import pytest
from fastapi.testclient import TestClient

from conftest import AHORA, PedidoRepositoryStub, ReporteRepositoryStub, pedido, reloj
from tatylu_analytics.infrastructure.database.connection import get_db_session
from tatylu_analytics.interfaces.api.main import create_app
from tatylu_analytics.interfaces.api.v1.endpoints import projections
from tatylu_analytics.interfaces.api.v1.dependencies import (
    get_catalogo_repository,
    get_pedido_repository,
    get_proyeccion_repository,
    get_reloj,
    get_reporte_repository,
)


class SesionStub:
    async def execute(self, statement):
        return None


@pytest.fixture
def pedido_repo():
    return PedidoRepositoryStub(
        [
            pedido(100, fecha="2024-06-12T09:00:00", productos=[{"productId": "p1", "cantidad": 3}]),
            pedido("50,50", fecha="2024-06-03T10:00:00", productos=[{"productId": "p2", "cantidad": 5}]),
        ]
    )


@pytest.fixture
def proyeccion_repo():
    return ReporteRepositoryStub()


@pytest.fixture
def client(pedido_repo, catalogo_repo, reporte_repo, proyeccion_repo):
    # Sin context manager: el lifespan (BD y Redis reales) no se ejecuta
    app = create_app()
    app.dependency_overrides[get_pedido_repository] = lambda: pedido_repo
    app.dependency_overrides[get_catalogo_repository] = lambda: catalogo_repo
    app.dependency_overrides[get_reporte_repository] = lambda: reporte_repo
    app.dependency_overrides[get_proyeccion_repository] = lambda: proyeccion_repo
    app.dependency_overrides[get_reloj] = lambda: reloj
    app.dependency_overrides[get_db_session] = lambda: SesionStub()
    return TestClient(app)


def test_health(client):
    r = client.get("/api/v1/health")

    assert r.status_code == 200
    body = r.json()
    assert body["database"] == "connected"
    assert body["redis"] == "disconnected"
    assert body["status"] == "degraded"


def test_snapshot_se_guarda_por_defecto(client, reporte_repo):
    r = client.post("/api/v1/reports", json={"name": "Cierre"}, headers={"X-User-Email": "ana@tatylu.com"})

    assert r.status_code == 200
    body = r.json()
    assert body["success"] is True
    assert body["report"]["totals"]["sales"] == 150.5
    assert body["saved"]["name"] == "Cierre"
    assert body["saved"]["createdBy"] == "ana@tatylu.com"
    assert len(reporte_repo.registros) == 1


def test_snapshot_sin_body_y_save_false(client, reporte_repo):
    assert client.post("/api/v1/reports").status_code == 200
    assert len(reporte_repo.registros) == 1

    r = client.post("/api/v1/reports", json={"save": "false"})

    assert r.status_code == 200
    assert r.json()["saved"] is None
    assert len(reporte_repo.registros) == 1


def test_vista_previa_snapshot_no_persiste(client, reporte_repo):
    r = client.get("/api/v1/reports/snapshot")

    assert r.status_code == 200
    assert r.json()["report"]["orders"] == {"today": 1, "week": 1, "month": 2}
    assert reporte_repo.registros == {}


def test_reporte_personalizado(client):
    r = client.post(
        "/api/v1/reports/custom",
        json={"type": "products", "minTotal": 100, "topN": 99, "save": False},
    )

    assert r.status_code == 200
    report = r.json()["report"]
    assert report["type"] == "products"
    assert report["totals"] == {"itemsSold": 3, "sales": 100.0}
    assert report["filters"]["topN"] == 50
    assert report["filters"]["minTotal"] == 100


def test_listar_obtener_y_eliminar_reportes(client):
    client.post("/api/v1/reports", json={"name": "uno"})
    client.post("/api/v1/reports/custom", json={"name": "dos"})

    lista = client.get("/api/v1/reports/list").json()["reports"]
    assert [r["name"] for r in lista] == ["dos", "uno"]

    detalle = client.get("/api/v1/reports/1")
    assert detalle.status_code == 200
    assert detalle.json()["report"]["type"] == "snapshot"

    assert client.delete("/api/v1/reports/1").status_code == 200
    assert client.get("/api/v1/reports/1").status_code == 404
    assert client.delete("/api/v1/reports/1").status_code == 404


def test_error_de_datos_responde_500(client, pedido_repo):
    pedido_repo.error = ConnectionError("db caída")

    r = client.post("/api/v1/reports/custom", json={})

    assert r.status_code == 500


def test_proyecciones(client, proyeccion_repo):
    r = client.post(
        "/api/v1/projections",
        json={"forecastMonths": 2, "model": "average", "name": "Q3"},
    )

    assert r.status_code == 200
    body = r.json()
    assert body["projection"]["model"] == "average"
    assert len(body["projection"]["projectionSales"]) == 2
    assert body["saved"]["type"] == "financial"

    lista = client.get("/api/v1/projections").json()["projections"]
    assert [p["name"] for p in lista] == ["Q3"]
    assert client.get("/api/v1/projections/1").json()["projection"]["name"] == "Q3"
    assert client.delete("/api/v1/projections/1").status_code == 200
    assert client.get("/api/v1/projections/1").status_code == 404


def test_vista_previa_de_proyeccion(client, proyeccion_repo):
    r = client.post("/api/v1/projections", json={"save": False})

    assert r.status_code == 200
    assert r.json()["saved"] is None
    assert proyeccion_repo.registros == {}


def test_limpiar_cache_sin_redis(client):
    r = client.delete("/api/v1/cache/clear", params={"pattern": "report*"})

    assert r.status_code == 200
    assert r.json()["keys_deleted"] == 0


class CacheEnMemoria:
    def __init__(self):
        self.valores = {}
        self.ttls = {}

    async def get(self, key):
        return self.valores.get(key)

    async def set(self, key, value, ttl=None):
        self.valores[key] = value
        self.ttls[key] = ttl
        return True

    async def delete(self, *keys):
        for key in keys:
            self.valores.pop(key, None)
        return True


def test_vista_previa_de_proyeccion_se_cachea_por_dia(client, pedido_repo, monkeypatch):
    cache = CacheEnMemoria()
    monkeypatch.setattr(projections, "redis_cache", cache)

    primera = client.post("/api/v1/projections", json={"save": False}).json()
    segunda = client.post("/api/v1/projections", json={"save": False}).json()

    clave = "projection:preview:2024-06-12:default:default:linear"
    assert list(cache.valores) == [clave]
    assert cache.ttls[clave] == projections.TTL_VISTA_PREVIA
    assert segunda["projection"] == primera["projection"]
    assert len(pedido_repo.llamadas) == 1

    manana = AHORA + timedelta(days=1)
    client.app.dependency_overrides[get_reloj] = lambda: (lambda: manana)
    client.post("/api/v1/projections", json={"save": False})

    assert "projection:preview:2024-06-13:default:default:linear" in cache.valores
    assert len(pedido_repo.llamadas) == 2
