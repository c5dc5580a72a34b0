"""Fixtures y repositorios en memoria compartidos por los tests."""
from dataclasses import replace
from datetime import datetime

import pytest

from tatylu_analytics.application.ports.catalogo_repository import CatalogoRepository
from tatylu_analytics.application.ports.pedido_repository import PedidoRepository
from tatylu_analytics.application.ports.reporte_repository import ReporteRepository
from tatylu_analytics.domain.entities.pedido import ProductoInfo, UsuarioInfo

# Miércoles; la semana empezó el lunes 10
AHORA = datetime(2024, 6, 12, 15, 30)


class PedidoRepositoryStub(PedidoRepository):
    def __init__(self, documentos=None, error=None):
        self.documentos = list(documentos or [])
        self.error = error
        self.llamadas = []

    async def listar_pedidos(self, desde=None, hasta=None, estado=None):
        self.llamadas.append({"desde": desde, "hasta": hasta, "estado": estado})
        if self.error:
            raise self.error
        return list(self.documentos)


class CatalogoRepositoryStub(CatalogoRepository):
    def __init__(self, productos=None, usuarios=None):
        self.productos = list(productos or [])
        self.usuarios = list(usuarios or [])

    async def listar_productos(self):
        return list(self.productos)

    async def listar_usuarios(self):
        return list(self.usuarios)


class ReporteRepositoryStub(ReporteRepository):
    def __init__(self):
        self.registros = {}
        self._siguiente_id = 1

    async def guardar(self, registro):
        guardado = replace(registro, id=self._siguiente_id, created_at=AHORA)
        self.registros[guardado.id] = guardado
        self._siguiente_id += 1
        return guardado

    async def listar(self):
        return sorted(self.registros.values(), key=lambda r: r.id, reverse=True)

    async def obtener(self, registro_id):
        return self.registros.get(registro_id)

    async def eliminar(self, registro_id):
        return self.registros.pop(registro_id, None) is not None


def pedido(total, fecha="2024-06-05T10:00:00", **extra):
    """Documento de pedido con el esquema actual (resumen anidado)."""
    documento = {
        "_id": extra.pop("_id", "ord-1"),
        "fecha": fecha,
        "estado": extra.pop("estado", "confirmado"),
        "resumen": {
            "productos": extra.pop("productos", []),
            "totales": {"total": total},
        },
    }
    documento.update(extra)
    return documento


@pytest.fixture
def productos():
    return [
        ProductoInfo(id="p1", codigo="TAT-001", nombre="Café molido", categoria="Bebidas", precio=10.0),
        ProductoInfo(id="p2", codigo="TAT-002", nombre="Pan integral", categoria="Panadería", precio=2.5),
    ]


@pytest.fixture
def usuarios():
    return [UsuarioInfo(id="u1", nombre="Ana Pérez", email="ana@example.com")]


@pytest.fixture
def catalogo_repo(productos, usuarios):
    return CatalogoRepositoryStub(productos, usuarios)


@pytest.fixture
def reporte_repo():
    return ReporteRepositoryStub()


def reloj():
    return AHORA
