from __future__ import annotations

from typing import Mapping, Optional

from core.modelo import Orientacion, TamanoHogar


def tasa_autoconsumo(
    *,
    tamano_hogar: TamanoHogar,
    tiene_almacenamiento: bool,
    orientacion: Orientacion,
    tabla: Mapping[TamanoHogar, tuple],
    bono_este_oeste: float,
    bono_diagonal: float,
    maximo: float,
) -> float:
    """
    Fracción de la generación usada en casa.

    - Base por tamaño de hogar (+ bono si hay batería).
    - Este/Oeste producen de mañana/tarde -> calzan mejor con el consumo.
    - Tope: autoconsumos muy altos no son realistas sin gestión activa.
    """
    base, bono_bateria = tabla.get(
        TamanoHogar.desde_respuesta(tamano_hogar),
        tabla[TamanoHogar.DOS],
    )

    tasa = float(base)
    if tiene_almacenamiento:
        tasa += float(bono_bateria)

    o = Orientacion.desde_respuesta(orientacion)
    if o in (Orientacion.ESTE, Orientacion.OESTE):
        tasa += bono_este_oeste
    elif o in (Orientacion.NORESTE, Orientacion.NOROESTE):
        tasa += bono_diagonal

    return max(0.0, min(tasa, float(maximo)))


def consumo_anual_kwh(
    *,
    tamano_hogar: TamanoHogar,
    consumo_declarado_kwh: Optional[float],
    tabla: Mapping[TamanoHogar, float],
) -> float:
    """Consumo declarado (> 0) manda; si no, estimación por tamaño de hogar."""
    if consumo_declarado_kwh is not None and float(consumo_declarado_kwh) > 0:
        return float(consumo_declarado_kwh)
    return float(tabla.get(TamanoHogar.desde_respuesta(tamano_hogar), tabla[TamanoHogar.DOS]))
