from __future__ import annotations

from typing import Mapping

from core.modelo import Orientacion, Sombreado


# ==========================================================
# Factores estáticos (fallback cuando no hay PVGIS)
# ==========================================================

def factor_orientacion(
    orientacion: Orientacion,
    tabla: Mapping[Orientacion, float],
) -> float:
    """
    Factor anual por orientación (sur = 1.0).
    Siempre devuelve valor válido. Nunca lanza excepción.
    """
    o = Orientacion.desde_respuesta(orientacion)
    if o in tabla:
        return float(tabla[o])
    return float(tabla.get(Orientacion.DESCONOCIDA, 1.0))


def factor_sombreado(
    sombreado: Sombreado,
    tabla: Mapping[Sombreado, float],
) -> float:
    s = Sombreado.desde_respuesta(sombreado)
    if s in tabla:
        return float(tabla[s])
    return float(tabla.get(Sombreado.ALGO, 1.0))


# ==========================================================
# Geometría para el proveedor de irradiancia (convención PVGIS)
# 0 = sur, 90 = oeste, -90 = este, 180 = norte
# ==========================================================

ASPECTO_PVGIS_DEG: Mapping[Orientacion, float] = {
    Orientacion.SUR: 0.0,
    Orientacion.SURESTE: -45.0,
    Orientacion.SUROESTE: 45.0,
    Orientacion.ESTE: -90.0,
    Orientacion.OESTE: 90.0,
    Orientacion.NORESTE: -135.0,
    Orientacion.NOROESTE: 135.0,
    Orientacion.NORTE: 180.0,
    Orientacion.DESCONOCIDA: 0.0,
}


def aspecto_pvgis(orientacion: Orientacion) -> float:
    return ASPECTO_PVGIS_DEG[Orientacion.desde_respuesta(orientacion)]
