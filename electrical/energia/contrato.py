from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class RendimientoInput:
    """
    Entrada formal del motor de rendimiento.
    No depende de finanzas.
    No depende del quiz.
    Solo física del producto + sitio.
    """

    # Producto
    potencia_wp: float
    potencia_ac_w: Optional[float]           # None -> techo legal
    bifacial: bool
    capacidad_almacenamiento_kwh: float      # 0 -> sin batería

    # Sitio
    factor_orientacion: float
    factor_sombreado: float
    rendimiento_kwh_kwp: Optional[float]     # PVGIS; None -> tabla estática

    # Constantes (vienen de Supuestos)
    limite_ac_legal_w: float
    rendimiento_base_kwh_wp: float
    ganancia_bifacial: float
    eficiencia_bateria: float


@dataclass(frozen=True)
class RendimientoResultado:
    """
    Resultado formal del motor de rendimiento (anual, kWh, sin redondear).
    """

    rendimiento_kwh_wp: float        # base por Wp ya con sombreado
    potencia_ac_efectiva_w: float
    uso_irradiancia: bool

    energia_bruta_kwh: float         # DC, con bifacial
    techo_ac_kwh: float
    energia_recortada_kwh: float
    recuperacion_max_kwh: float
    energia_recuperada_kwh: float
    energia_util_kwh: float
