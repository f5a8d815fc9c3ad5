# electrical/irradiancia/pvgis.py
from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional

import requests

from core.modelo import Irradiancia, Montaje, Orientacion
from core.puertos import PuertoIrradiancia
from electrical.energia.orientacion import aspecto_pvgis

logger = logging.getLogger(__name__)


# Inclinación típica por tipo de montaje (grados sobre la horizontal)
INCLINACION_POR_MONTAJE: Mapping[Montaje, float] = {
    Montaje.BARANDA: 90.0,       # vertical en la baranda
    Montaje.PISO_BALCON: 30.0,   # soporte en el piso, ~óptimo
    Montaje.FACHADA: 90.0,
    Montaje.TECHO_PLANO: 15.0,
    Montaje.DESCONOCIDO: 35.0,
}


def inclinacion_por_montaje(montaje: Montaje) -> float:
    return INCLINACION_POR_MONTAJE[Montaje.desde_respuesta(montaje)]


def irradiancia_desde_pvgis(data: Dict[str, Any]) -> Irradiancia:
    """
    Convierte la respuesta JSON de PVcalc (peakpower=1) en Irradiancia.
    ValueError si falta `outputs.totals.fixed.E_y` o no es > 0.
    """
    try:
        totales = data["outputs"]["totals"]["fixed"]
        e_y = float(totales["E_y"])
    except (KeyError, TypeError, ValueError) as e:
        raise ValueError("Respuesta PVGIS sin 'outputs.totals.fixed.E_y'") from e

    if not e_y > 0:
        raise ValueError(f"Rendimiento PVGIS inválido: E_y={e_y!r}")

    mensual_raw = (data.get("outputs", {}).get("monthly", {}) or {}).get("fixed") or []
    mensual = tuple(
        float(m.get("E_m", 0.0))
        for m in sorted(mensual_raw, key=lambda m: m.get("month", 0))
    )

    inputs = data.get("inputs") or {}
    loc = inputs.get("location") or {}
    fijo = (inputs.get("mounting_system") or {}).get("fixed") or {}

    return Irradiancia(
        rendimiento_anual_kwh_kwp=e_y,
        mensual_kwh_kwp=mensual,
        perdidas_totales_pct=float(totales.get("l_total") or 0.0),
        inclinacion_deg=float((fijo.get("slope") or {}).get("value") or 0.0),
        azimut_deg=float((fijo.get("azimuth") or {}).get("value") or 0.0),
        lat=loc.get("latitude"),
        lon=loc.get("longitude"),
        elevacion_m=loc.get("elevation"),
    )


class ClientePVGIS(PuertoIrradiancia):
    """
    Cliente mínimo de PVGIS PVcalc (JRC, sin API key).

    Docs: https://joint-research-centre.ec.europa.eu/pvgis-online-tool/pvgis-data-download_en

    Normalizado a 1 kWp: E_y es directamente kWh/kWp/año.
    Nunca lanza: ante cualquier fallo devuelve None y deja el motivo en
    `ultimo_error`.
    """

    BASE_URL = "https://re.jrc.ec.europa.eu/api/v5_3/PVcalc"

    PARAMS_BASE = {
        "peakpower": 1,
        "loss": 14,
        "pvtechchoice": "crystSi",
        "mountingplace": "building",
        "raddatabase": "PVGIS-SARAH3",
        "outputformat": "json",
    }

    def __init__(self, base_url: str | None = None, timeout: float = 10.0):
        self.base_url = base_url or self.BASE_URL
        self.timeout = timeout
        self.ultimo_error: str | None = None

    def obtener(
        self,
        lat: float,
        lon: float,
        inclinacion: float,
        azimut: float,
    ) -> Optional[Irradiancia]:
        """
        - lat, lon: ubicación
        - inclinacion: grados sobre la horizontal (90 = vertical)
        - azimut: convención PVGIS (0 = sur, 90 = oeste, -90 = este)
        """
        self.ultimo_error = None

        if not (-90.0 <= lat <= 90.0 and -180.0 <= lon <= 180.0):
            self.ultimo_error = f"Coordenadas fuera de rango: ({lat}, {lon})"
            return None

        params = dict(self.PARAMS_BASE)
        params.update({"lat": lat, "lon": lon, "angle": inclinacion, "aspect": azimut})

        try:
            resp = requests.get(
                self.base_url,
                params=params,
                headers={"Accept": "application/json"},
                timeout=self.timeout,
            )
            resp.raise_for_status()
            data = resp.json()
        except (requests.RequestException, ValueError) as e:
            self.ultimo_error = f"Error llamando a PVGIS: {e}"
            logger.warning(self.ultimo_error)
            return None

        try:
            irr = irradiancia_desde_pvgis(data)
        except ValueError as e:
            self.ultimo_error = str(e)
            logger.warning("PVGIS: %s", e)
            return None

        logger.info(
            "PVGIS: %.0f kWh/kWp/año en (%.4f, %.4f)",
            irr.rendimiento_anual_kwh_kwp, lat, lon,
        )
        return irr

    def obtener_para(
        self,
        lat: float,
        lon: float,
        orientacion: Orientacion,
        montaje: Montaje,
    ) -> Optional[Irradiancia]:
        return self.obtener(lat, lon, inclinacion_por_montaje(montaje), aspecto_pvgis(orientacion))
