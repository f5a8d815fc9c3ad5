# Energía: motor de rendimiento anual y autoconsumo.
from __future__ import annotations

from .autoconsumo import consumo_anual_kwh, tasa_autoconsumo
from .contrato import RendimientoInput, RendimientoResultado
from .orientacion import aspecto_pvgis, factor_orientacion, factor_sombreado
from .orquestador_energia import ejecutar_motor_rendimiento

__all__ = [
    "RendimientoInput",
    "RendimientoResultado",
    "ejecutar_motor_rendimiento",
    "tasa_autoconsumo",
    "consumo_anual_kwh",
    "factor_orientacion",
    "factor_sombreado",
    "aspecto_pvgis",
]
