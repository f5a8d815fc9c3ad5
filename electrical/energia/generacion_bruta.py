from typing import Optional


def rendimiento_por_wp(
    *,
    factor_orientacion: float,
    factor_sombreado: float,
    rendimiento_kwh_kwp: Optional[float],
    rendimiento_base_kwh_wp: float,
) -> float:
    """
    kWh/Wp/año del sitio.

    - Con PVGIS: ya incluye orientación e inclinación -> solo sombreado local.
    - Sin PVGIS: base fija × orientación × sombreado.
    """
    if rendimiento_kwh_kwp is not None:
        return max(0.0, float(rendimiento_kwh_kwp) / 1000.0 * float(factor_sombreado))

    return max(
        0.0,
        float(rendimiento_base_kwh_wp) * float(factor_orientacion) * float(factor_sombreado),
    )


def calcular_energia_bruta_dc(
    *,
    potencia_wp: float,
    rendimiento_kwh_wp: float,
    bifacial: bool,
    ganancia_bifacial: float,
) -> float:
    """
    Energía DC bruta anual, sin recorte del inversor.
    """
    bruta = max(0.0, float(potencia_wp)) * rendimiento_kwh_wp
    if bifacial:
        bruta *= 1.0 + float(ganancia_bifacial)
    return bruta
