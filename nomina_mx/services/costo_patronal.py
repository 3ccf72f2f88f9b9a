from __future__ import annotations

import datetime as dt

from nomina_mx.models import Antiguedad, CostoPatronal, SalarioIntegrado
from nomina_mx.services.tablas import DIAS_MES, TablasLegales


def _cuota(base: float, pct: float) -> float:
    return base * (pct / 100.0) * DIAS_MES


def calcular_costo_patronal(
    sueldo_mensual_base: float,
    total_percepciones: float,
    salario_diario: float,
    antiguedad: Antiguedad,
    sdi: SalarioIntegrado,
    uma: float,
    riesgo_trabajo_pct: float,
    isn_pct: float,
    fecha_calculo: dt.date,
    tablas: TablasLegales,
) -> CostoPatronal:
    t = tablas.imss_patron
    sdi_topado = sdi.sdi_topado

    # IMSS (sin RCV)
    cuota_fija = _cuota(uma, t.cuota_fija_pct)
    excedente = _cuota(sdi_topado - uma * 3, t.excedente_pct) if sdi_topado > uma * 3 else 0.0
    prestaciones_dinero = _cuota(sdi_topado, t.prestaciones_dinero_pct)
    gastos_medicos = _cuota(sdi_topado, t.gastos_medicos_pct)
    invalidez_vida = _cuota(sdi_topado, t.invalidez_vida_pct)
    guarderias = _cuota(sdi_topado, t.guarderias_pct)
    riesgo_trabajo = _cuota(sdi_topado, riesgo_trabajo_pct)
    imss = cuota_fija + excedente + prestaciones_dinero + gastos_medicos + invalidez_vida + guarderias + riesgo_trabajo

    # RCV e INFONAVIT; el rango de cesantia se elige con el SDI sin topar
    retiro = _cuota(sdi_topado, t.retiro_pct)
    tasa_cv = tablas.tasa_cesantia(sdi.sdi, uma, fecha_calculo)
    cesantia_vejez = _cuota(sdi_topado, tasa_cv)
    infonavit = _cuota(sdi_topado, tablas.infonavit_pct)

    # Provisiones
    aguinaldo_mensual = (antiguedad.dias_aguinaldo * salario_diario) / 12
    prima_vacacional_mensual = ((salario_diario * antiguedad.dias_vacaciones) / 12) * antiguedad.prima_vacacional_pct

    isn = (total_percepciones + aguinaldo_mensual + prima_vacacional_mensual) * (isn_pct / 100)

    costo_total = (
        total_percepciones + imss + retiro + cesantia_vejez + infonavit + isn
        + aguinaldo_mensual + prima_vacacional_mensual
    )
    factor = costo_total / sueldo_mensual_base if sueldo_mensual_base > 0 else 0.0

    return CostoPatronal(
        cuota_fija=cuota_fija,
        excedente=excedente,
        prestaciones_dinero=prestaciones_dinero,
        gastos_medicos=gastos_medicos,
        invalidez_vida=invalidez_vida,
        guarderias=guarderias,
        riesgo_trabajo=riesgo_trabajo,
        imss=imss,
        retiro=retiro,
        tasa_cesantia_vejez=tasa_cv,
        cesantia_vejez=cesantia_vejez,
        infonavit=infonavit,
        aguinaldo_mensual=aguinaldo_mensual,
        prima_vacacional_mensual=prima_vacacional_mensual,
        isn=isn,
        costo_total=costo_total,
        factor=factor,
    )
