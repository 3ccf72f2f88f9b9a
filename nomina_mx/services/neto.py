from __future__ import annotations

import datetime as dt

from nomina_mx.models import IMSSObrero, RetencionesEmpleado
from nomina_mx.services.tablas import DIAS_MES, TablasLegales


def subsidio_empleo(ingreso: float, uma: float, fecha_calculo: dt.date, tablas: TablasLegales) -> float:
    regla = tablas.subsidio
    if ingreso > regla.tope_ingreso:
        return 0.0
    return uma * DIAS_MES * regla.multiplicador_para(fecha_calculo)


def imss_obrero(sdi_topado: float, uma: float, tablas: TablasLegales) -> IMSSObrero:
    t = tablas.imss_obrero
    excedente = (sdi_topado - uma * 3) * (t.excedente_pct / 100) * DIAS_MES if sdi_topado > uma * 3 else 0.0
    return IMSSObrero(
        excedente=excedente,
        prestaciones_dinero=sdi_topado * (t.prestaciones_dinero_pct / 100) * DIAS_MES,
        gastos_medicos=sdi_topado * (t.gastos_medicos_pct / 100) * DIAS_MES,
        invalidez_vida=sdi_topado * (t.invalidez_vida_pct / 100) * DIAS_MES,
        cesantia_vejez=sdi_topado * (t.cesantia_vejez_pct / 100) * DIAS_MES,
    )


def calcular_neto(
    total_percepciones: float,
    sdi_topado: float,
    uma: float,
    fecha_calculo: dt.date,
    tablas: TablasLegales,
) -> RetencionesEmpleado:
    isr_bruto = tablas.isr_tarifa(total_percepciones)
    subsidio = subsidio_empleo(total_percepciones, uma, fecha_calculo, tablas)
    isr = max(0.0, isr_bruto - subsidio)

    detalle = imss_obrero(sdi_topado, uma, tablas)
    retencion_imss = detalle.total

    return RetencionesEmpleado(
        isr_bruto=isr_bruto,
        subsidio_empleo=subsidio,
        isr=isr,
        imss_obrero=retencion_imss,
        imss_obrero_detalle=detalle,
        salario_neto=total_percepciones - isr - retencion_imss,
    )
