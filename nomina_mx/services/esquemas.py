from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict


class EsquemaPrestaciones(str, Enum):
    LEY = "ley"
    ANTES_1991 = "antes1991"
    GERENTES = "gerentes"


@dataclass(frozen=True)
class ReglasEsquema:
    nombre: str
    dias_aguinaldo: Callable[[float], int]
    prima_vacacional_pct: Callable[[float], float]


def _aguinaldo_antes_1991(anios: float) -> int:
    y = math.floor(anios)
    if y < 1:
        return 0
    if y == 1:
        return 16
    if y <= 3:
        return 21
    if y == 4:
        return 26
    return 31


def _prima_antes_1991(anios: float) -> float:
    y = math.floor(anios)
    if y < 1:
        return 0.0
    if y <= 4:
        return 0.30
    return 0.35


def _aguinaldo_gerentes(anios: float) -> int:
    y = math.floor(anios)
    if y < 1:
        return 0
    if y <= 3:
        return 22
    if y == 4:
        return 27
    return 32


def _prima_gerentes(anios: float) -> float:
    y = math.floor(anios)
    if y < 1:
        return 0.0
    if y <= 4:
        return 0.35
    return 0.40


ESQUEMAS: Dict[EsquemaPrestaciones, ReglasEsquema] = {
    EsquemaPrestaciones.LEY: ReglasEsquema("Ley", lambda anios: 15, lambda anios: 0.25),
    EsquemaPrestaciones.ANTES_1991: ReglasEsquema("Antes de 1991", _aguinaldo_antes_1991, _prima_antes_1991),
    EsquemaPrestaciones.GERENTES: ReglasEsquema("Gerentes", _aguinaldo_gerentes, _prima_gerentes),
}


def reglas_esquema(esquema: EsquemaPrestaciones | str) -> ReglasEsquema:
    """Resolve a scheme selector ("ley", "antes1991", "gerentes") to its rules."""
    return ESQUEMAS[EsquemaPrestaciones(esquema)]
