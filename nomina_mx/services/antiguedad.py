from __future__ import annotations

import datetime as dt
import math

from nomina_mx.models import Antiguedad
from nomina_mx.services.esquemas import EsquemaPrestaciones, reglas_esquema


def anios_servicio(fecha_ingreso: dt.date, fecha_calculo: dt.date) -> float:
    return (fecha_calculo - fecha_ingreso).days / 365.25


def dias_vacaciones(anios: float) -> int:
    """Dias de vacaciones de ley (art. 76 LFT, reforma 2023).

    12, 14, 16, 18, 20 los primeros cinco anios; despues +2 cada bloque de 5.
    """
    if anios < 0:
        return 0
    anio_en_curso = math.floor(anios) + 1
    if anio_en_curso <= 5:
        return 10 + anio_en_curso * 2
    bloques = (anio_en_curso - 1) // 5
    return 20 + bloques * 2


def calcular_antiguedad(fecha_ingreso: dt.date, fecha_calculo: dt.date, esquema: EsquemaPrestaciones) -> Antiguedad:
    reglas = reglas_esquema(esquema)
    anios = anios_servicio(fecha_ingreso, fecha_calculo)
    return Antiguedad(
        anios_servicio=anios,
        dias_vacaciones=dias_vacaciones(anios),
        dias_aguinaldo=reglas.dias_aguinaldo(anios),
        prima_vacacional_pct=reglas.prima_vacacional_pct(anios),
    )
