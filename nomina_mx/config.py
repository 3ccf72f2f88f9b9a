from __future__ import annotations

import os

# Valores por defecto del calculo (UMA vigente a partir del 1 de febrero 2026)
DEFAULT_UMA = float(os.getenv("NOMINA_UMA", "117.31"))
DEFAULT_RIESGO_TRABAJO = float(os.getenv("NOMINA_RIESGO_TRABAJO", "7.58875"))
DEFAULT_ISN = float(os.getenv("NOMINA_ISN", "4.0"))

# Maestro opcional (.xlsx) con tablas ISR / Cesantia y Vejez / parametros
TABLAS_PATH = os.getenv("TABLAS_PATH") or None

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
