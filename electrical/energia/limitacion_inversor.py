from typing import Optional, Tuple


def potencia_ac_efectiva(potencia_ac_w: Optional[float], limite_ac_legal_w: float) -> float:
    """Sin dato de inversor se asume el techo legal."""
    if potencia_ac_w is None:
        return float(limite_ac_legal_w)
    return max(0.0, min(float(potencia_ac_w), float(limite_ac_legal_w)))


def techo_ac_anual(*, potencia_ac_w: float, rendimiento_kwh_wp: float) -> float:
    """
    Máximo anual que el inversor puede entregar (misma base por Wp que el DC).
    """
    return float(potencia_ac_w) * rendimiento_kwh_wp


def aplicar_recorte(
    *,
    energia_bruta_kwh: float,
    techo_ac_kwh: float,
    capacidad_kwh: float,
    eficiencia_bateria: float,
) -> Tuple[float, float, float, float]:
    """
    Devuelve (util, recortada, recuperada, recuperacion_max).

    Batería: un ciclo por día -> capacidad × 365 × eficiencia por año.
    Con batería el útil es techo + recuperada: el set entrega el techo AC
    completo aunque el bruto quede por debajo. Sin batería lo recortado se pierde.
    """
    recortada = max(0.0, energia_bruta_kwh - techo_ac_kwh)

    if capacidad_kwh <= 0:
        return min(energia_bruta_kwh, techo_ac_kwh), recortada, 0.0, 0.0

    recuperacion_max = float(capacidad_kwh) * 365.0 * float(eficiencia_bateria)
    recuperada = min(recortada, recuperacion_max)

    util = techo_ac_kwh + recuperada

    return util, recortada, recuperada, recuperacion_max
