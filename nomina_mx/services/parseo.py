from __future__ import annotations

import datetime as dt
import math
import re
from typing import Any, Optional, Sequence

NOMBRES_SUELDO = frozenset({
    "sueldo",
    "salario",
    "sueldo mensual",
    "sueldo base",
    "sueldo ordinario",
    "vacaciones a tiempo",
})

NOMBRES_NO_VARIABLES = NOMBRES_SUELDO | {
    "seguro gmm",
    "seguro de vida",
    "seguro vida",
    "despensa",
    "horas extras",
    "pasivo laboral",
}

_NO_NUMERICO = re.compile(r"[^0-9.\-]+")
_PREFIJO_NUMERICO = re.compile(r"-?(?:\d+\.?\d*|\.\d+)")
_GRUPOS = re.compile(r"\d+")


def norm(x: Any) -> str:
    """Normalize names for case/space-insensitive matching."""
    if x is None:
        return ""
    return " ".join(str(x).split()).lower()


def celda(fila: Sequence[Any], idx: int) -> Any:
    if idx is None or idx < 0 or idx >= len(fila):
        return None
    return fila[idx]


def texto(x: Any, default: str = "") -> str:
    if x is None:
        return default
    s = str(x).strip()
    return s or default


def parse_numero(x: Any) -> float:
    """Parse a cell into a float.

    Numbers pass through; strings keep only digits, '.' and '-'
    ("$ 1,234.50" -> 1234.5) and the leading numeric part is read
    ("12-3" -> 12, "1.2.3" -> 1.2). No leading number is 0.
    """
    if x is None or isinstance(x, bool):
        return 0.0
    if isinstance(x, (int, float)):
        return float(x)
    m = _PREFIJO_NUMERICO.match(_NO_NUMERICO.sub("", str(x)))
    return float(m.group()) if m else 0.0


def _fecha_generica(s: str) -> Optional[dt.date]:
    try:
        return dt.date.fromisoformat(s[:10])
    except ValueError:
        pass
    try:
        return dt.datetime.fromisoformat(s).date()
    except ValueError:
        return None


def _fecha_con_desborde(anio: int, mes: int, dia: int) -> dt.date:
    """31/04/2020 -> 2020-05-01: days past month end roll into the next month."""
    return dt.date(anio, mes, 1) + dt.timedelta(days=dia - 1)


def parse_fecha_ingreso(x: Any) -> Optional[dt.date]:
    """Hire date from a cell: D/M/Y first, then Y/M/D, then ISO text."""
    if isinstance(x, dt.datetime):
        return x.date()
    if isinstance(x, dt.date):
        return x

    s = texto(x)
    if not s:
        return None

    partes = _GRUPOS.findall(s)
    if len(partes) == 3:
        p1, p2, p3 = (int(p) for p in partes)
        try:
            if 0 < p1 <= 31 and 0 < p2 <= 12 and p3 > 1900:
                return _fecha_con_desborde(p3, p2, p1)
            if p1 > 1900 and 0 < p2 <= 12 and 0 < p3 <= 31:
                return _fecha_con_desborde(p1, p2, p3)
        except (ValueError, OverflowError):
            pass

    return _fecha_generica(s)


def es_sueldo(nombre: str) -> bool:
    return norm(nombre) in NOMBRES_SUELDO


def es_variable(nombre: str) -> bool:
    return norm(nombre) not in NOMBRES_NO_VARIABLES


def es_invalido(x: float) -> bool:
    return math.isnan(x) or x < 0
