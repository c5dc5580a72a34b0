"""Servicio de dominio para ventanas de tiempo y claves de período.

Todas las funciones trabajan en hora local del host: los datetimes con zona
horaria se convierten a hora local y se vuelven naive; los naive se asumen
locales. No hay normalización a UTC.
"""
from datetime import date, datetime, timedelta

from tatylu_analytics.domain.value_objects.granularidad import Granularidad


def a_hora_local(fecha: datetime) -> datetime:
    """Convierte a datetime naive en hora local."""
    if fecha.tzinfo is not None:
        return fecha.astimezone().replace(tzinfo=None)
    return fecha


def parse_fecha(valor: object) -> datetime | None:
    """
    Interpreta una fecha cruda de un documento de pedido.

    Acepta datetime, date, strings ISO-8601 (con o sin "Z") y epoch en
    milisegundos. Cualquier otro valor retorna None.
    """
    if valor is None or isinstance(valor, bool):
        return None
    if isinstance(valor, datetime):
        return a_hora_local(valor)
    if isinstance(valor, date):
        return datetime(valor.year, valor.month, valor.day)
    if isinstance(valor, (int, float)):
        try:
            return datetime.fromtimestamp(valor / 1000)
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(valor, str):
        texto = valor.strip()
        if not texto:
            return None
        try:
            return a_hora_local(datetime.fromisoformat(texto))
        except ValueError:
            return None
    return None


def start_of_day(fecha: datetime) -> datetime:
    """Medianoche local del día."""
    return fecha.replace(hour=0, minute=0, second=0, microsecond=0)


def start_of_week(fecha: datetime) -> datetime:
    """Lunes 00:00 de la semana (domingo pertenece a la semana que empezó 6 días antes)."""
    return start_of_day(fecha) - timedelta(days=fecha.weekday())


def start_of_month(fecha: datetime) -> datetime:
    """Día 1 del mes a medianoche."""
    return start_of_day(fecha).replace(day=1)


def desplazar_mes(fecha: datetime, meses: int) -> datetime:
    """Inicio del mes ubicado `meses` meses antes (negativo) o después de `fecha`."""
    indice = fecha.year * 12 + (fecha.month - 1) + meses
    return datetime(indice // 12, indice % 12 + 1, 1)


def month_key(fecha: datetime) -> str:
    return f"{fecha.year}-{fecha.month:02d}"


def iso_week_key(fecha: datetime) -> str:
    """Semana ISO-8601 (anclada al jueves) como YYYY-Www."""
    año, semana, _ = fecha.isocalendar()
    return f"{año}-W{semana:02d}"


def period_key(fecha: datetime, granularidad: Granularidad | str = Granularidad.MES) -> str:
    """
    Clave de agrupación para series de tiempo.

    Las claves ordenadas lexicográficamente quedan en orden cronológico.
    """
    if not isinstance(granularidad, Granularidad):
        granularidad = Granularidad.desde_valor(granularidad)

    if granularidad == Granularidad.DIA:
        return f"{fecha.year}-{fecha.month:02d}-{fecha.day:02d}"
    if granularidad == Granularidad.SEMANA:
        return iso_week_key(fecha)
    return month_key(fecha)
