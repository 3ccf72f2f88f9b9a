from __future__ import annotations

import datetime as dt
import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

# ---------------------------
# Constantes
# ---------------------------

DIAS_MES = 30.4
DIAS_ANIO = 365
TOPE_SDI_UMAS = 25


# ---------------------------
# Estructuras
# ---------------------------

@dataclass(frozen=True)
class TramoISR:
    limite_inferior: float
    limite_superior: float
    cuota_fija: float
    pct_excedente: float

    def contiene(self, ingreso: float) -> bool:
        return self.limite_inferior <= ingreso <= self.limite_superior


@dataclass(frozen=True)
class TramoCesantia:
    rango: str
    min_uma: float
    max_uma: float
    tasas: Mapping[int, float]

    def contiene(self, sdi_en_umas: float) -> bool:
        return self.min_uma <= sdi_en_umas <= self.max_uma


@dataclass(frozen=True)
class TasasPatron:
    cuota_fija_pct: float = 20.40  # sobre 1 UMA
    excedente_pct: float = 1.10  # sobre (SBC - 3 UMA)
    prestaciones_dinero_pct: float = 0.70
    gastos_medicos_pct: float = 1.05
    invalidez_vida_pct: float = 1.75
    retiro_pct: float = 2.00
    guarderias_pct: float = 1.00


@dataclass(frozen=True)
class TasasObrero:
    excedente_pct: float = 0.40  # sobre (SBC - 3 UMA)
    prestaciones_dinero_pct: float = 0.25
    gastos_medicos_pct: float = 0.375
    invalidez_vida_pct: float = 0.625
    cesantia_vejez_pct: float = 1.125


@dataclass(frozen=True)
class ReglaSubsidio:
    tope_ingreso: float = 11492.66
    multiplicador: float = 0.1502
    multiplicador_enero: float = 0.1559

    def multiplicador_para(self, fecha: dt.date) -> float:
        return self.multiplicador_enero if fecha.month == 1 else self.multiplicador


def _tasas(*valores: float) -> Mapping[int, float]:
    return MappingProxyType({anio: v for anio, v in zip(range(2023, 2031), valores)})


ISR_MENSUAL_2026: Tuple[TramoISR, ...] = (
    TramoISR(0.01, 844.59, 0.00, 1.92),
    TramoISR(844.60, 7168.51, 16.22, 6.40),
    TramoISR(7168.52, 12598.02, 420.95, 10.88),
    TramoISR(12598.03, 14644.64, 1011.68, 16.00),
    TramoISR(14644.65, 17533.64, 1339.14, 17.92),
    TramoISR(17533.65, 35362.83, 1856.84, 21.36),
    TramoISR(35362.84, 55736.68, 5665.16, 23.52),
    TramoISR(55736.69, 106410.50, 10457.09, 30.00),
    TramoISR(106410.51, 141880.66, 25659.23, 32.00),
    TramoISR(141880.67, 425641.99, 37009.69, 34.00),
    TramoISR(425642.00, math.inf, 133488.54, 35.00),
)

CESANTIA_VEJEZ: Tuple[TramoCesantia, ...] = (
    TramoCesantia("1.0 SM", 0, 1.00, _tasas(3.15, 3.15, 3.15, 3.15, 3.15, 3.15, 3.15, 3.15)),
    TramoCesantia("1.01 SM a 1.50 UMA", 1.01, 1.50, _tasas(3.28, 3.41, 3.54, 3.67, 3.80, 3.93, 4.07, 4.20)),
    TramoCesantia("1.51 a 2.00 UMA", 1.51, 2.00, _tasas(3.58, 4.00, 4.43, 4.85, 5.28, 5.70, 6.13, 6.55)),
    TramoCesantia("2.01 a 2.50 UMA", 2.01, 2.50, _tasas(3.75, 4.35, 4.95, 5.56, 6.16, 6.76, 7.36, 7.96)),
    TramoCesantia("2.51 a 3.00 UMA", 2.51, 3.00, _tasas(3.87, 4.59, 5.31, 6.03, 6.75, 7.46, 8.18, 8.90)),
    TramoCesantia("3.01 a 3.50 UMA", 3.01, 3.50, _tasas(3.95, 4.76, 5.56, 6.36, 7.16, 7.97, 8.77, 9.57)),
    TramoCesantia("3.51 a 4.00 UMA", 3.51, 4.00, _tasas(4.02, 4.88, 5.75, 6.61, 7.48, 8.35, 9.21, 10.08)),
    TramoCesantia("4.01 UMA en adelante", 4.01, math.inf, _tasas(4.24, 5.33, 6.42, 7.51, 8.60, 9.69, 10.78, 11.88)),
)


@dataclass(frozen=True)
class TablasLegales:
    """Tablas de ley de solo lectura que se inyectan en cada calculo.

    - tabla_isr: tarifa mensual art. 96 LISR (limites inclusivos)
    - tabla_cesantia: tasa patronal de cesantia y vejez por rango de SBC en UMAs y anio
    - imss_patron / imss_obrero: porcentajes fijos de cuotas IMSS
    - subsidio: regla del subsidio al empleo
    """

    tabla_isr: Tuple[TramoISR, ...] = ISR_MENSUAL_2026
    tabla_cesantia: Tuple[TramoCesantia, ...] = CESANTIA_VEJEZ
    imss_patron: TasasPatron = field(default_factory=TasasPatron)
    imss_obrero: TasasObrero = field(default_factory=TasasObrero)
    infonavit_pct: float = 5.0
    subsidio: ReglaSubsidio = field(default_factory=ReglaSubsidio)
    anio_min_cesantia: int = 2023
    anio_max_cesantia: int = 2030

    def tramo_isr(self, ingreso: float) -> Optional[TramoISR]:
        for tramo in self.tabla_isr:
            if tramo.contiene(ingreso):
                return tramo
        return None

    def isr_tarifa(self, ingreso: float) -> float:
        """ISR antes de subsidio; 0 si el ingreso no cae en ningun tramo."""
        tramo = self.tramo_isr(ingreso)
        if not tramo:
            return 0.0
        return (ingreso - tramo.limite_inferior) * (tramo.pct_excedente / 100) + tramo.cuota_fija

    def anio_cesantia(self, fecha: dt.date) -> int:
        return max(self.anio_min_cesantia, min(fecha.year, self.anio_max_cesantia))

    def tasa_cesantia(self, sdi: float, uma: float, fecha: dt.date) -> float:
        anio = self.anio_cesantia(fecha)
        sdi_en_umas = sdi / uma
        for tramo in self.tabla_cesantia:
            if tramo.contiene(sdi_en_umas) and tramo.tasas.get(anio):
                return tramo.tasas[anio]
        if not self.tabla_cesantia:
            return 0.0
        return self.tabla_cesantia[-1].tasas.get(anio) or 0.0


TABLAS_2026 = TablasLegales()
