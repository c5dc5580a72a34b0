import asyncio
from types import SimpleNamespace

from conftest import AHORA
from tatylu_analytics.domain.entities.registro_reporte import RegistroReporte
from tatylu_analytics.infrastructure.database.models import Proyeccion, Reporte
from tatylu_analytics.infrastructure.database.repositories.reporte_repository_impl import (
    ProyeccionRepositoryImpl,
    ReporteRepositoryImpl,
)


class SesionRegistro:
    """Sesión en memoria que registra el orden de las operaciones."""

    def __init__(self, filas_eliminadas=1):
        self.llamadas = []
        self.filas = []
        self.filas_eliminadas = filas_eliminadas

    def add(self, fila):
        self.llamadas.append("add")
        self.filas.append(fila)

    async def flush(self):
        self.llamadas.append("flush")

    async def refresh(self, fila):
        self.llamadas.append("refresh")
        fila.id = len(self.filas)
        fila.created_at = AHORA

    async def commit(self):
        self.llamadas.append("commit")

    async def execute(self, statement):
        self.llamadas.append("execute")
        return SimpleNamespace(rowcount=self.filas_eliminadas)


def registro():
    return RegistroReporte(
        name="Cierre", type="snapshot", payload={"totals": {"sales": 1.5}}, created_by="ana@tatylu.com"
    )


def test_guardar_confirma_antes_de_retornar():
    sesion = SesionRegistro()

    guardado = asyncio.run(ReporteRepositoryImpl(sesion).guardar(registro()))

    assert sesion.llamadas == ["add", "flush", "refresh", "commit"]
    assert isinstance(sesion.filas[0], Reporte)
    assert guardado.id == 1
    assert guardado.created_at == AHORA
    assert guardado.created_by == "ana@tatylu.com"
    assert guardado.payload == {"totals": {"sales": 1.5}}


def test_proyecciones_usan_su_tabla():
    sesion = SesionRegistro()

    asyncio.run(ProyeccionRepositoryImpl(sesion).guardar(registro()))

    assert isinstance(sesion.filas[0], Proyeccion)


def test_eliminar_confirma_el_borrado():
    sesion = SesionRegistro()

    assert asyncio.run(ReporteRepositoryImpl(sesion).eliminar(1)) is True
    assert sesion.llamadas == ["execute", "commit"]


def test_eliminar_inexistente():
    sesion = SesionRegistro(filas_eliminadas=0)

    assert asyncio.run(ReporteRepositoryImpl(sesion).eliminar(99)) is False
