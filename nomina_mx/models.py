from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple

from nomina_mx.config import DEFAULT_ISN, DEFAULT_RIESGO_TRABAJO, DEFAULT_UMA
from nomina_mx.services.esquemas import EsquemaPrestaciones


@dataclass(frozen=True)
class ConfigCalculo:
    uma: float = DEFAULT_UMA
    riesgo_trabajo_pct: float = DEFAULT_RIESGO_TRABAJO
    isn_pct: float = DEFAULT_ISN

    def __post_init__(self):
        if not self.uma > 0:
            raise ValueError("uma debe ser > 0")
        if self.riesgo_trabajo_pct < 0 or self.isn_pct < 0:
            raise ValueError("las tasas de riesgo de trabajo e ISN deben ser >= 0")


@dataclass(frozen=True)
class MapeoColumnas:
    col_id: int
    col_nombre: int
    col_fecha_ingreso: int
    col_salario_diario: int
    cols_percepciones: Tuple[int, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Percepcion:
    nombre: str
    valor: float


@dataclass(frozen=True)
class Antiguedad:
    anios_servicio: float
    dias_vacaciones: int
    dias_aguinaldo: int
    prima_vacacional_pct: float


@dataclass(frozen=True)
class SalarioIntegrado:
    factor_integracion: float
    sdi_fijo: float
    total_percepciones_variables: float
    componente_variable: float
    sdi: float
    tope: float
    sdi_topado: float


@dataclass(frozen=True)
class CostoPatronal:
    cuota_fija: float
    excedente: float
    prestaciones_dinero: float
    gastos_medicos: float
    invalidez_vida: float
    guarderias: float
    riesgo_trabajo: float
    imss: float
    retiro: float
    tasa_cesantia_vejez: float
    cesantia_vejez: float
    infonavit: float
    aguinaldo_mensual: float
    prima_vacacional_mensual: float
    isn: float
    costo_total: float
    factor: float


@dataclass(frozen=True)
class IMSSObrero:
    excedente: float
    prestaciones_dinero: float
    gastos_medicos: float
    invalidez_vida: float
    cesantia_vejez: float

    @property
    def total(self) -> float:
        return self.excedente + self.prestaciones_dinero + self.gastos_medicos + self.invalidez_vida + self.cesantia_vejez


@dataclass(frozen=True)
class RetencionesEmpleado:
    isr_bruto: float
    subsidio_empleo: float
    isr: float
    imss_obrero: float
    imss_obrero_detalle: IMSSObrero
    salario_neto: float


@dataclass(frozen=True)
class DetalleCalculo:
    sdi_topado: float
    tope_sdi: float
    cuota_fija: float
    excedente: float
    prestaciones_dinero: float
    gastos_medicos: float
    invalidez_vida: float
    guarderias: float
    riesgo_trabajo: float
    tasa_cesantia_vejez: float
    anios_servicio: float
    dias_vacaciones: int
    dias_aguinaldo: int
    prima_vacacional_pct: float
    factor_integracion: float
    sdi_fijo: float
    componente_variable_sdi: float
    total_percepciones_variables: float
    isr_bruto: float
    subsidio_empleo: float
    isr: float
    imss_obrero: float
    imss_obrero_detalle: IMSSObrero


@dataclass(frozen=True)
class ResultadoCalculo:
    id_empleado: str
    nombre_empleado: str
    total_percepciones: float
    sueldo_mensual_base: float
    percepciones_detalladas: Tuple[Percepcion, ...]
    salario_diario: float
    esquema: EsquemaPrestaciones
    sdi: float
    imss: float  # cuotas IMSS patronales sin RCV
    retiro: float
    cesantia_vejez: float
    infonavit: float
    aguinaldo_mensual: float
    prima_vacacional_mensual: float
    isn: float
    costo_total: float
    factor: float
    salario_neto: float
    detalle: DetalleCalculo
