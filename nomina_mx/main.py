from __future__ import annotations

import datetime as dt
import logging
from dataclasses import asdict
from typing import Dict, List, Optional, Union

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from nomina_mx.config import DEFAULT_ISN, DEFAULT_RIESGO_TRABAJO, DEFAULT_UMA, LOG_LEVEL
from nomina_mx.models import ConfigCalculo, MapeoColumnas
from nomina_mx.services.calculo import EntradaCalculo, calcular_directo, calcular_inverso, calcular_lote
from nomina_mx.services.esquemas import ESQUEMAS, EsquemaPrestaciones
from nomina_mx.services.repo import load_tablas

logging.basicConfig(
    level=getattr(logging, LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Motor Costo Nomina MX")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

Celda = Union[float, int, str, None]


# -----------------------------
# Models
# -----------------------------
class MapeoIn(BaseModel):
    col_id: int
    col_nombre: int
    col_fecha_ingreso: int
    col_salario_diario: int
    cols_percepciones: List[int] = Field(default_factory=list)


class ConfigIn(BaseModel):
    uma: float = Field(default=DEFAULT_UMA, gt=0)
    riesgo_trabajo_pct: float = Field(default=DEFAULT_RIESGO_TRABAJO, ge=0)
    isn_pct: float = Field(default=DEFAULT_ISN, ge=0)


class _CalcBase(BaseModel):
    encabezados: List[str] = Field(default_factory=list)
    mapeo: MapeoIn
    config: ConfigIn = Field(default_factory=ConfigIn)
    esquema: EsquemaPrestaciones = EsquemaPrestaciones.LEY
    fecha_calculo: dt.date
    neto_deseado: Optional[float] = None


class CalcIn(_CalcBase):
    fila: List[Celda]


class LoteIn(_CalcBase):
    filas: List[List[Celda]]
    # por indice de fila; sustituyen a esquema / neto_deseado del lote
    esquemas: Dict[int, EsquemaPrestaciones] = Field(default_factory=dict)
    netos_deseados: Dict[int, Optional[float]] = Field(default_factory=dict)


def _mapeo(m: MapeoIn) -> MapeoColumnas:
    return MapeoColumnas(
        col_id=m.col_id,
        col_nombre=m.col_nombre,
        col_fecha_ingreso=m.col_fecha_ingreso,
        col_salario_diario=m.col_salario_diario,
        cols_percepciones=tuple(m.cols_percepciones),
    )


def _config(c: ConfigIn) -> ConfigCalculo:
    return ConfigCalculo(uma=c.uma, riesgo_trabajo_pct=c.riesgo_trabajo_pct, isn_pct=c.isn_pct)


# -----------------------------
# Endpoints
# -----------------------------
@app.get("/health")
def health():
    return {"ok": True}


@app.get("/api/meta")
def api_meta():
    tablas = load_tablas()
    return {
        "esquemas": [{"clave": e.value, "nombre": r.nombre} for e, r in ESQUEMAS.items()],
        "config": asdict(ConfigCalculo()),
        "anios_cesantia": [tablas.anio_min_cesantia, tablas.anio_max_cesantia],
    }


@app.post("/api/calc")
def api_calc(inp: CalcIn):
    entrada = EntradaCalculo(
        fila=inp.fila,
        mapeo=_mapeo(inp.mapeo),
        encabezados=inp.encabezados,
        config=_config(inp.config),
        esquema=inp.esquema,
        fecha_calculo=inp.fecha_calculo,
        tablas=load_tablas(),
    )
    if inp.neto_deseado is None:
        r = calcular_directo(entrada)
    else:
        r = calcular_inverso(entrada, inp.neto_deseado)
    if r is None:
        raise HTTPException(status_code=422, detail="No se pudo calcular la fila (fecha de ingreso o sueldo invalidos)")
    return asdict(r)


@app.post("/api/calc/lote")
def api_calc_lote(inp: LoteIn):
    resultados, rechazadas = calcular_lote(
        inp.filas,
        _mapeo(inp.mapeo),
        inp.encabezados,
        _config(inp.config),
        inp.esquema,
        inp.fecha_calculo,
        tablas=load_tablas(),
        neto_deseado=inp.neto_deseado,
        esquemas=inp.esquemas,
        netos_deseados=inp.netos_deseados,
    )
    return {"resultados": [asdict(r) for r in resultados], "rechazadas": rechazadas}
