import datetime as dt

import pytest

from nomina_mx.models import ConfigCalculo, MapeoColumnas
from nomina_mx.services.calculo import EntradaCalculo
from nomina_mx.services.esquemas import EsquemaPrestaciones

FECHA = dt.date(2026, 3, 15)
CONFIG = ConfigCalculo(uma=117.31, riesgo_trabajo_pct=7.58875, isn_pct=4.0)
ENCABEZADOS_BASE = ["ID", "Nombre", "Fecha Ingreso", "Salario Diario"]


def hacer_entrada(salario_diario="500", fecha_ingreso="15/03/2026", percepciones=None,
                  esquema=EsquemaPrestaciones.LEY, fecha_calculo=FECHA, config=CONFIG):
    """Build an EntradaCalculo; `percepciones` is a list of (header, value) pairs."""
    percepciones = percepciones or []
    encabezados = ENCABEZADOS_BASE + [h for h, _ in percepciones]
    fila = ["E001", "Ana Lopez", fecha_ingreso, salario_diario] + [v for _, v in percepciones]
    mapeo = MapeoColumnas(
        col_id=0,
        col_nombre=1,
        col_fecha_ingreso=2,
        col_salario_diario=3,
        cols_percepciones=tuple(range(4, 4 + len(percepciones))),
    )
    return EntradaCalculo(fila, mapeo, encabezados, config, esquema, fecha_calculo)


@pytest.fixture
def entrada():
    return hacer_entrada()
