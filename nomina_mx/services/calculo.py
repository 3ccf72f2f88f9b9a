from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Sequence, Tuple

from nomina_mx.models import ConfigCalculo, DetalleCalculo, MapeoColumnas, Percepcion, ResultadoCalculo
from nomina_mx.services.antiguedad import calcular_antiguedad
from nomina_mx.services.costo_patronal import calcular_costo_patronal
from nomina_mx.services.esquemas import EsquemaPrestaciones
from nomina_mx.services.neto import calcular_neto
from nomina_mx.services.parseo import celda, es_invalido, es_sueldo, parse_fecha_ingreso, parse_numero, texto
from nomina_mx.services.sdi import calcular_sdi
from nomina_mx.services.tablas import DIAS_MES, TABLAS_2026, TablasLegales

logger = logging.getLogger(__name__)

MAX_ITERACIONES = 35
TOLERANCIA = 0.001
TASA_DEDUCCION_INICIAL = 0.25
FACTOR_RETROCESO = 0.5


@dataclass(frozen=True)
class EntradaCalculo:
    fila: Sequence[Any]
    mapeo: MapeoColumnas
    encabezados: Sequence[str]
    config: ConfigCalculo
    esquema: EsquemaPrestaciones
    fecha_calculo: dt.date
    tablas: TablasLegales = field(default=TABLAS_2026)
    indice: int = 0


def _fecha(x: dt.date) -> dt.date:
    return x.date() if isinstance(x, dt.datetime) else x


def _percepciones(entrada: EntradaCalculo) -> List[Percepcion]:
    out: List[Percepcion] = []
    for idx in entrada.mapeo.cols_percepciones:
        valor = parse_numero(celda(entrada.fila, idx))
        if valor > 0:
            out.append(Percepcion(nombre=texto(celda(entrada.encabezados, idx)), valor=valor))
    return out


def calcular_directo(entrada: EntradaCalculo, sueldo_base_override: Optional[float] = None) -> Optional[ResultadoCalculo]:
    """Forward calculation for one row.

    Returns None when the row cannot produce a meaningful record: invalid hire
    date, negative/NaN base salary, or no positive income at all.
    `sueldo_base_override` replaces the monthly base (used by the inverse solver).
    """
    fila, m, config, tablas = entrada.fila, entrada.mapeo, entrada.config, entrada.tablas
    fecha_calculo = _fecha(entrada.fecha_calculo)

    id_empleado = texto(celda(fila, m.col_id), f"row-{entrada.indice}")
    nombre_empleado = texto(celda(fila, m.col_nombre), "N/A")

    fecha_ingreso = parse_fecha_ingreso(celda(fila, m.col_fecha_ingreso))
    if fecha_ingreso is None:
        logger.debug("Fila %s rechazada: fecha de ingreso invalida (%r)", id_empleado, celda(fila, m.col_fecha_ingreso))
        return None

    percepciones = _percepciones(entrada)
    sueldo_columnas = sum(p.valor for p in percepciones if es_sueldo(p.nombre))
    otras_percepciones = sum(p.valor for p in percepciones if not es_sueldo(p.nombre))

    if sueldo_base_override is not None:
        sueldo_mensual_base = float(sueldo_base_override)
        percepciones = [p for p in percepciones if not es_sueldo(p.nombre)]
    elif sueldo_columnas > 0:
        sueldo_mensual_base = sueldo_columnas
    else:
        sueldo_mensual_base = parse_numero(celda(fila, m.col_salario_diario)) * DIAS_MES

    if es_invalido(sueldo_mensual_base):
        logger.debug("Fila %s rechazada: sueldo base invalido (%s)", id_empleado, sueldo_mensual_base)
        return None

    # 30 y no 30.4: asi esta definida la regla de integracion
    salario_diario = sueldo_mensual_base / 30
    total_percepciones = sueldo_mensual_base + otras_percepciones

    if total_percepciones <= 0 and sueldo_mensual_base <= 0:
        logger.debug("Fila %s rechazada: sin percepciones", id_empleado)
        return None

    antig = calcular_antiguedad(fecha_ingreso, fecha_calculo, entrada.esquema)
    sdi = calcular_sdi(salario_diario, antig, percepciones, config.uma)
    costo = calcular_costo_patronal(
        sueldo_mensual_base,
        total_percepciones,
        salario_diario,
        antig,
        sdi,
        config.uma,
        config.riesgo_trabajo_pct,
        config.isn_pct,
        fecha_calculo,
        tablas,
    )
    ret = calcular_neto(total_percepciones, sdi.sdi_topado, config.uma, fecha_calculo, tablas)

    detalle = DetalleCalculo(
        sdi_topado=sdi.sdi_topado,
        tope_sdi=sdi.tope,
        cuota_fija=costo.cuota_fija,
        excedente=costo.excedente,
        prestaciones_dinero=costo.prestaciones_dinero,
        gastos_medicos=costo.gastos_medicos,
        invalidez_vida=costo.invalidez_vida,
        guarderias=costo.guarderias,
        riesgo_trabajo=costo.riesgo_trabajo,
        tasa_cesantia_vejez=costo.tasa_cesantia_vejez,
        anios_servicio=antig.anios_servicio,
        dias_vacaciones=antig.dias_vacaciones,
        dias_aguinaldo=antig.dias_aguinaldo,
        prima_vacacional_pct=antig.prima_vacacional_pct,
        factor_integracion=sdi.factor_integracion,
        sdi_fijo=sdi.sdi_fijo,
        componente_variable_sdi=sdi.componente_variable,
        total_percepciones_variables=sdi.total_percepciones_variables,
        isr_bruto=ret.isr_bruto,
        subsidio_empleo=ret.subsidio_empleo,
        isr=ret.isr,
        imss_obrero=ret.imss_obrero,
        imss_obrero_detalle=ret.imss_obrero_detalle,
    )

    return ResultadoCalculo(
        id_empleado=id_empleado,
        nombre_empleado=nombre_empleado,
        total_percepciones=total_percepciones,
        sueldo_mensual_base=sueldo_mensual_base,
        percepciones_detalladas=tuple(percepciones),
        salario_diario=salario_diario,
        esquema=EsquemaPrestaciones(entrada.esquema),
        sdi=sdi.sdi,
        imss=costo.imss,
        retiro=costo.retiro,
        cesantia_vejez=costo.cesantia_vejez,
        infonavit=costo.infonavit,
        aguinaldo_mensual=costo.aguinaldo_mensual,
        prima_vacacional_mensual=costo.prima_vacacional_mensual,
        isn=costo.isn,
        costo_total=costo.costo_total,
        factor=costo.factor,
        salario_neto=ret.salario_neto,
        detalle=detalle,
    )


def _neto_para(entrada: EntradaCalculo, sueldo_bruto: float) -> Tuple[float, float]:
    r = calcular_directo(entrada, sueldo_base_override=sueldo_bruto)
    if r is None:
        return 0.0, 0.0
    return r.salario_neto, r.total_percepciones


def calcular_inverso(
    entrada: EntradaCalculo,
    neto_deseado: float,
    max_iteraciones: int = MAX_ITERACIONES,
    tolerancia: float = TOLERANCIA,
    tasa_deduccion_inicial: float = TASA_DEDUCCION_INICIAL,
    factor_retroceso: float = FACTOR_RETROCESO,
) -> Optional[ResultadoCalculo]:
    """Find the monthly base salary whose net pay matches `neto_deseado`.

    Never reports non-convergence: the result at the last estimate is returned
    as is. Targets below the net produced by a zero base are approached by
    geometric backoff towards zero instead of going negative.

    Returns None only when the row itself is rejected at the final estimate:
    an invalid hire date, or a zero base on a row with no other perceptions
    (e.g. a target of 0 for a salary-only row).
    """
    inicial = calcular_directo(entrada)
    otras_percepciones = (inicial.total_percepciones - inicial.sueldo_mensual_base) if inicial else 0.0

    bruto_inicial = neto_deseado / (1 - tasa_deduccion_inicial)
    sueldo_bruto = max(0.0, bruto_inicial - otras_percepciones)

    diferencia = None
    i = 0
    for i in range(max_iteraciones):
        neto, total_bruto = _neto_para(entrada, sueldo_bruto)
        diferencia = neto_deseado - neto

        if abs(diferencia) <= tolerancia:
            break

        if neto > 1:
            otras = total_bruto - sueldo_bruto
            nuevo_total = total_bruto * (neto_deseado / neto)
            nuevo_sueldo = nuevo_total - otras
            if nuevo_sueldo < 0 and diferencia < 0:
                # objetivo por debajo del piso alcanzable: converger hacia cero
                nuevo_sueldo = sueldo_bruto * factor_retroceso
            sueldo_bruto = nuevo_sueldo
        else:
            sueldo_bruto += diferencia

        if sueldo_bruto < 0:
            sueldo_bruto = 0.0
            if i > 0:
                break

    logger.debug(
        "Inverso %s: neto deseado=%.4f sueldo base=%.4f iteraciones=%d diferencia=%s",
        entrada.indice, neto_deseado, sueldo_bruto, i + 1, diferencia,
    )
    return calcular_directo(entrada, sueldo_base_override=sueldo_bruto)


def calcular_lote(
    filas: Sequence[Sequence[Any]],
    mapeo: MapeoColumnas,
    encabezados: Sequence[str],
    config: ConfigCalculo,
    esquema: EsquemaPrestaciones,
    fecha_calculo: dt.date,
    tablas: TablasLegales = TABLAS_2026,
    neto_deseado: Optional[float] = None,
    esquemas: Optional[Mapping[int, EsquemaPrestaciones]] = None,
    netos_deseados: Optional[Mapping[int, Optional[float]]] = None,
) -> Tuple[List[ResultadoCalculo], List[int]]:
    """Calculate every row; returns (results, indices of rejected rows).

    `esquemas` and `netos_deseados` are keyed by row index and override the
    batch-level `esquema` / `neto_deseado` for that row. A row with a desired
    net goes through the inverse solver, any other row is calculated forward.
    """
    esquemas = esquemas or {}
    netos_deseados = netos_deseados or {}
    resultados: List[ResultadoCalculo] = []
    rechazadas: List[int] = []
    for indice, fila in enumerate(filas):
        esquema_fila = esquemas.get(indice, esquema)
        neto_fila = netos_deseados.get(indice, neto_deseado)
        entrada = EntradaCalculo(fila, mapeo, encabezados, config, esquema_fila, fecha_calculo, tablas, indice)
        if neto_fila is None:
            r = calcular_directo(entrada)
        else:
            r = calcular_inverso(entrada, neto_fila)
        if r is None:
            rechazadas.append(indice)
        else:
            resultados.append(r)
    if rechazadas:
        logger.info("%d de %d filas sin resultado", len(rechazadas), len(filas))
    return resultados, rechazadas
