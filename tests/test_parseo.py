import datetime as dt

import pytest

from nomina_mx.services.parseo import celda, es_sueldo, es_variable, parse_fecha_ingreso, parse_numero


@pytest.mark.parametrize("valor, esperado", [
    ("$ 1,234.50", 1234.5),
    (" 500 ", 500.0),
    ("-100", -100.0),
    (750, 750.0),
    (12.5, 12.5),
    ("abc", 0.0),
    ("", 0.0),
    (None, 0.0),
    ("1.2.3", 1.2),
    ("1,500.00-", 1500.0),
    ("12-3", 12.0),
    (".5", 0.5),
    ("-", 0.0),
    ("--5", 0.0),
])
def test_parse_numero(valor, esperado):
    assert parse_numero(valor) == esperado


@pytest.mark.parametrize("texto, esperado", [
    ("15/03/2020", dt.date(2020, 3, 15)),
    ("1-2-2019", dt.date(2019, 2, 1)),
    ("2020/03/15", dt.date(2020, 3, 15)),
    ("2020-03-15", dt.date(2020, 3, 15)),
    ("2020-03-15T08:30:00", dt.date(2020, 3, 15)),
])
def test_parse_fecha_ingreso(texto, esperado):
    assert parse_fecha_ingreso(texto) == esperado


@pytest.mark.parametrize("texto", ["03/15/2020", "2020/13/01", "hola", "", None, "15/03"])
def test_parse_fecha_ingreso_invalid(texto):
    assert parse_fecha_ingreso(texto) is None


def test_parse_fecha_ingreso_accepts_date_cells():
    assert parse_fecha_ingreso(dt.datetime(2021, 5, 4, 10, 0)) == dt.date(2021, 5, 4)
    assert parse_fecha_ingreso(dt.date(2021, 5, 4)) == dt.date(2021, 5, 4)


def test_perception_classification_is_case_insensitive():
    assert es_sueldo("Sueldo Mensual")
    assert es_sueldo("  VACACIONES A TIEMPO ")
    assert not es_sueldo("Bono")
    assert not es_variable("Despensa")
    assert not es_variable("Sueldo")
    assert es_variable("Comisiones")
    assert es_variable("")


def test_celda_out_of_range_is_missing():
    fila = ["a", "b"]
    assert celda(fila, 1) == "b"
    assert celda(fila, 2) is None
    assert celda(fila, -1) is None


@pytest.mark.parametrize("texto, esperado", [
    ("31/04/2020", dt.date(2020, 5, 1)),
    ("31/02/2021", dt.date(2021, 3, 3)),
    ("2020-02-30", dt.date(2020, 3, 1)),
])
def test_parse_fecha_ingreso_rolls_over_past_month_end(texto, esperado):
    assert parse_fecha_ingreso(texto) == esperado


def test_names_collapse_inner_whitespace():
    assert es_sueldo("Sueldo   Base")
    assert not es_variable(" Seguro\tde  Vida ")
