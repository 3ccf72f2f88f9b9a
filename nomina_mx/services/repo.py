from __future__ import annotations

import logging
import math
from dataclasses import replace
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, List, Optional

import openpyxl

from nomina_mx.config import TABLAS_PATH
from nomina_mx.services.parseo import norm
from nomina_mx.services.tablas import TABLAS_2026, TablasLegales, TramoCesantia, TramoISR

logger = logging.getLogger(__name__)

PARAMETROS_SUBSIDIO = {
    "subsidio_tope_ingreso": "tope_ingreso",
    "subsidio_multiplicador": "multiplicador",
    "subsidio_multiplicador_enero": "multiplicador_enero",
}


def _f(x: Any) -> Optional[float]:
    if x is None or str(x).strip() == "":
        return None
    return float(x)


def sheet_rows(ws) -> List[Dict[str, Any]]:
    """Rows of a sheet as dicts keyed by normalized header; empty rows skipped."""
    it = ws.iter_rows(values_only=True)
    header = next(it, None)
    if not header:
        return []
    keys = [norm(h) for h in header]
    out = []
    for r in it:
        if all(v in (None, "") for v in r):
            continue
        out.append({k: v for k, v in zip(keys, r) if k})
    return out


def _tabla_isr(rows: List[Dict[str, Any]]) -> tuple:
    tramos = []
    for r in rows:
        superior = _f(r.get("limite_superior"))
        tramos.append(TramoISR(
            limite_inferior=_f(r.get("limite_inferior")) or 0.0,
            limite_superior=math.inf if superior is None else superior,
            cuota_fija=_f(r.get("cuota_fija")) or 0.0,
            pct_excedente=_f(r.get("pct_excedente")) or 0.0,
        ))
    return tuple(tramos)


def _tabla_cesantia(rows: List[Dict[str, Any]]) -> tuple:
    tramos = []
    for r in rows:
        tasas = {int(k): float(v) for k, v in r.items() if k.isdigit() and v not in (None, "")}
        maximo = _f(r.get("max_uma"))
        tramos.append(TramoCesantia(
            rango=str(r.get("rango") or ""),
            min_uma=_f(r.get("min_uma")) or 0.0,
            max_uma=math.inf if maximo is None else maximo,
            tasas=MappingProxyType(tasas),
        ))
    return tuple(tramos)


def leer_tablas(path: str | Path) -> TablasLegales:
    """Build TablasLegales from a maestro workbook; missing sheets keep the defaults."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"No se encontro el maestro de tablas en {path}")

    wb = openpyxl.load_workbook(path, data_only=True, read_only=True)
    tablas = TABLAS_2026
    try:
        if "ISR" in wb.sheetnames:
            tablas = replace(tablas, tabla_isr=_tabla_isr(sheet_rows(wb["ISR"])))
        if "CesantiaVejez" in wb.sheetnames:
            tramos = _tabla_cesantia(sheet_rows(wb["CesantiaVejez"]))
            anios = sorted({a for t in tramos for a in t.tasas})
            tablas = replace(tablas, tabla_cesantia=tramos)
            if anios:
                tablas = replace(tablas, anio_min_cesantia=anios[0], anio_max_cesantia=anios[-1])
        if "Parametros" in wb.sheetnames:
            params = {norm(r.get("clave")): _f(r.get("valor")) for r in sheet_rows(wb["Parametros"])}
            subsidio = {campo: params[clave] for clave, campo in PARAMETROS_SUBSIDIO.items() if params.get(clave) is not None}
            if subsidio:
                tablas = replace(tablas, subsidio=replace(tablas.subsidio, **subsidio))
            if params.get("infonavit_pct") is not None:
                tablas = replace(tablas, infonavit_pct=params["infonavit_pct"])
    finally:
        wb.close()

    logger.info("Tablas cargadas desde %s (isr=%d, cesantia=%d)", path, len(tablas.tabla_isr), len(tablas.tabla_cesantia))
    return tablas


@lru_cache(maxsize=1)
def load_tablas() -> TablasLegales:
    if not TABLAS_PATH:
        return TABLAS_2026
    return leer_tablas(TABLAS_PATH)
