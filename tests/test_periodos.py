from datetime import date, datetime, timezone

from tatylu_analytics.domain.services.periodos import (
    desplazar_mes,
    iso_week_key,
    month_key,
    parse_fecha,
    period_key,
    start_of_day,
    start_of_month,
    start_of_week,
)
from tatylu_analytics.domain.value_objects import Granularidad


def test_semana_empieza_lunes():
    miercoles = datetime(2024, 6, 12, 15, 30)
    assert start_of_week(miercoles) == datetime(2024, 6, 10)


def test_domingo_pertenece_a_la_semana_anterior():
    domingo = datetime(2024, 6, 16, 23, 59)
    assert start_of_week(domingo) == datetime(2024, 6, 10)


def test_inicio_de_dia_y_mes():
    fecha = datetime(2024, 2, 29, 18, 45, 12, 500)
    assert start_of_day(fecha) == datetime(2024, 2, 29)
    assert start_of_month(fecha) == datetime(2024, 2, 1)


def test_iso_week_en_bordes_de_año():
    assert iso_week_key(datetime(2021, 1, 1)) == "2020-W53"
    assert iso_week_key(datetime(2024, 12, 30)) == "2025-W01"
    assert iso_week_key(datetime(2024, 1, 1)) == "2024-W01"


def test_period_key_por_granularidad():
    fecha = datetime(2024, 3, 7, 9, 0)
    assert period_key(fecha, Granularidad.DIA) == "2024-03-07"
    assert period_key(fecha, Granularidad.SEMANA) == "2024-W10"
    assert period_key(fecha, Granularidad.MES) == "2024-03"
    assert period_key(fecha, "year") == "2024-03"
    assert month_key(fecha) == "2024-03"


def test_claves_ordenan_cronologicamente():
    fechas = [datetime(2023, 12, 31), datetime(2024, 1, 8), datetime(2024, 11, 2)]
    for granularidad in Granularidad:
        claves = [period_key(f, granularidad) for f in fechas]
        assert claves == sorted(claves)


def test_desplazar_mes_cruza_años():
    assert desplazar_mes(datetime(2024, 1, 15), -1) == datetime(2023, 12, 1)
    assert desplazar_mes(datetime(2024, 1, 31), 13) == datetime(2025, 2, 1)
    assert desplazar_mes(datetime(2024, 6, 12), -6) == datetime(2023, 12, 1)


def test_parse_fecha_formatos():
    assert parse_fecha("2024-06-01T10:00:00") == datetime(2024, 6, 1, 10)
    assert parse_fecha("2024-06-01") == datetime(2024, 6, 1)
    assert parse_fecha(date(2024, 6, 1)) == datetime(2024, 6, 1)

    epoch_ms = int(datetime(2024, 6, 1, 8).timestamp() * 1000)
    assert parse_fecha(epoch_ms) == datetime(2024, 6, 1, 8)


def test_parse_fecha_con_zona_se_convierte_a_local():
    esperado = datetime(2024, 6, 1, 12, tzinfo=timezone.utc).astimezone().replace(tzinfo=None)
    assert parse_fecha("2024-06-01T12:00:00+00:00") == esperado


def test_parse_fecha_invalida():
    for valor in [None, "", "ayer", True, {"$date": 1}]:
        assert parse_fecha(valor) is None
