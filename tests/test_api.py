import pytest
from fastapi.testclient import TestClient

from nomina_mx.main import app

client = TestClient(app)

MAPEO = {"col_id": 0, "col_nombre": 1, "col_fecha_ingreso": 2, "col_salario_diario": 3, "cols_percepciones": [4]}
ENCABEZADOS = ["ID", "Nombre", "Fecha Ingreso", "Salario Diario", "Bono"]


def _body(**extra):
    body = {
        "encabezados": ENCABEZADOS,
        "mapeo": MAPEO,
        "config": {"uma": 117.31, "riesgo_trabajo_pct": 7.58875, "isn_pct": 4.0},
        "esquema": "ley",
        "fecha_calculo": "2026-03-15",
    }
    body.update(extra)
    return body


def test_health():
    assert client.get("/health").json() == {"ok": True}


def test_meta_lists_schemes():
    data = client.get("/api/meta").json()
    assert [e["clave"] for e in data["esquemas"]] == ["ley", "antes1991", "gerentes"]
    assert data["anios_cesantia"] == [2023, 2030]


def test_calc_forward():
    resp = client.post("/api/calc", json=_body(fila=["E1", "Ana", "15/03/2026", "$500.00", "1000"]))
    assert resp.status_code == 200
    data = resp.json()
    assert data["id_empleado"] == "E1"
    assert data["esquema"] == "ley"
    assert data["sueldo_mensual_base"] == pytest.approx(15200)
    assert data["detalle"]["dias_vacaciones"] == 12
    assert data["salario_neto"] == pytest.approx(
        data["total_percepciones"] - data["detalle"]["isr"] - data["detalle"]["imss_obrero"]
    )


def test_calc_inverse():
    resp = client.post("/api/calc", json=_body(fila=["E1", "Ana", "15/03/2026", 500, 1000], neto_deseado=20000))
    assert resp.status_code == 200
    assert resp.json()["salario_neto"] == pytest.approx(20000, abs=0.001)


def test_calc_rejected_row_is_422():
    resp = client.post("/api/calc", json=_body(fila=["E1", "Ana", "sin fecha", 500, 0]))
    assert resp.status_code == 422


def test_calc_invalid_config_is_422():
    body = _body(fila=["E1", "Ana", "15/03/2026", 500, 0])
    body["config"]["uma"] = 0
    assert client.post("/api/calc", json=body).status_code == 422


def test_calc_lote():
    filas = [
        ["E1", "Ana", "15/03/2026", 500, 0],
        ["E2", "Beto", "", 500, 0],
        ["", "Caro", "2019-07-01", "800", "2,500"],
    ]
    resp = client.post("/api/calc/lote", json=_body(filas=filas))
    assert resp.status_code == 200
    data = resp.json()
    assert [r["id_empleado"] for r in data["resultados"]] == ["E1", "row-2"]
    assert data["rechazadas"] == [1]


def test_calc_lote_per_row_scheme_and_target():
    filas = [
        ["E1", "Ana", "01/01/2015", 500, 0],
        ["E2", "Beto", "01/01/2015", 500, 0],
    ]
    resp = client.post("/api/calc/lote", json=_body(
        filas=filas,
        esquemas={"1": "gerentes"},
        netos_deseados={"1": 25000},
    ))
    assert resp.status_code == 200
    ana, beto = resp.json()["resultados"]
    assert ana["esquema"] == "ley"
    assert ana["sueldo_mensual_base"] == pytest.approx(15200)
    assert beto["esquema"] == "gerentes"
    assert beto["salario_neto"] == pytest.approx(25000, abs=0.001)
