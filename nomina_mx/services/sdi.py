from __future__ import annotations

from typing import Iterable

from nomina_mx.models import Antiguedad, Percepcion, SalarioIntegrado
from nomina_mx.services.parseo import es_variable
from nomina_mx.services.tablas import DIAS_ANIO, DIAS_MES, TOPE_SDI_UMAS


def factor_integracion(dias_aguinaldo: float, dias_vacaciones: float, prima_vacacional_pct: float) -> float:
    return 1 + (dias_aguinaldo / DIAS_ANIO) + (dias_vacaciones * prima_vacacional_pct / DIAS_ANIO)


def calcular_sdi(
    salario_diario: float,
    antiguedad: Antiguedad,
    percepciones: Iterable[Percepcion],
    uma: float,
) -> SalarioIntegrado:
    """Salario diario integrado.

    La parte fija parte del salario diario (sueldo mensual / 30) por el factor
    de integracion; la variable es lo que no es sueldo ni prestacion fija
    dividido entre 30.4. El tope es de 25 UMAs.
    """
    factor = factor_integracion(antiguedad.dias_aguinaldo, antiguedad.dias_vacaciones, antiguedad.prima_vacacional_pct)
    total_variables = sum(p.valor for p in percepciones if es_variable(p.nombre))
    componente_variable = total_variables / DIAS_MES
    sdi_fijo = salario_diario * factor
    sdi = sdi_fijo + componente_variable
    tope = uma * TOPE_SDI_UMAS

    return SalarioIntegrado(
        factor_integracion=factor,
        sdi_fijo=sdi_fijo,
        total_percepciones_variables=total_variables,
        componente_variable=componente_variable,
        sdi=sdi,
        tope=tope,
        sdi_topado=min(sdi, tope),
    )
