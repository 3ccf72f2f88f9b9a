import pytest

from conftest import hacer_entrada
from nomina_mx.services.calculo import calcular_directo, calcular_inverso


@pytest.mark.parametrize("percepciones", [
    [],
    [("Bono", "2000")],
    [("Sueldo", "25000"), ("Despensa", "1200"), ("Comisiones", "3000")],
])
def test_round_trip_recovers_net(percepciones):
    e = hacer_entrada(percepciones=percepciones)
    directo = calcular_directo(e)
    inverso = calcular_inverso(e, directo.salario_neto)
    assert abs(inverso.salario_neto - directo.salario_neto) <= 0.001
    assert inverso.sueldo_mensual_base == pytest.approx(directo.sueldo_mensual_base, abs=0.01)


def test_high_target_converges():
    e = hacer_entrada()
    r = calcular_inverso(e, 150000)
    assert abs(r.salario_neto - 150000) <= 0.001
    assert r.detalle.sdi_topado == r.detalle.tope_sdi


def test_override_drops_salary_columns_from_detail():
    e = hacer_entrada(percepciones=[("Sueldo", "18000"), ("Bono", "500")])
    r = calcular_inverso(e, 20000)
    assert [p.nombre for p in r.percepciones_detalladas] == ["Bono"]
    assert r.total_percepciones == pytest.approx(r.sueldo_mensual_base + 500)


def test_zero_target_never_returns_negative_base():
    e = hacer_entrada(salario_diario="0", percepciones=[("Bono", "1000")])
    r = calcular_inverso(e, 0)
    assert r.sueldo_mensual_base == 0
    assert r.salario_neto > 0


def test_zero_target_from_salaried_row():
    e = hacer_entrada(percepciones=[("Vales", "500")])
    r = calcular_inverso(e, 0)
    assert r.sueldo_mensual_base >= 0
    assert r.sueldo_mensual_base < 1


def test_invalid_row_still_returns_nothing():
    e = hacer_entrada(fecha_ingreso="xx")
    assert calcular_inverso(e, 10000) is None


def test_solver_parameters_are_tunable():
    e = hacer_entrada()
    objetivo = calcular_directo(e).salario_neto
    r = calcular_inverso(e, objetivo, max_iteraciones=1)
    # una sola iteracion: se devuelve la mejor estimacion sin error
    assert r is not None
    assert r.sueldo_mensual_base >= 0


def test_zero_target_on_salary_only_row_has_no_result():
    # base 0 sin otras percepciones: la fila no tiene ingreso y se rechaza
    e = hacer_entrada()
    assert calcular_directo(e) is not None
    assert calcular_inverso(e, 0) is None
