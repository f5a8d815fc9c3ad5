# core/configuracion.py
from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping

import yaml

from .modelo import (
    ImportanciaEco,
    OrigenFabricacion,
    Orientacion,
    Sombreado,
    TamanoHogar,
)


# ==========================================================
# Tablas por defecto (inmutables, se pasan explícitas al motor)
# ==========================================================

_FACTORES_ORIENTACION: Dict[Orientacion, float] = {
    Orientacion.SUR: 1.00,
    Orientacion.SURESTE: 0.95,
    Orientacion.SUROESTE: 0.95,
    Orientacion.OESTE: 0.80,
    Orientacion.ESTE: 0.80,
    Orientacion.NORESTE: 0.65,
    Orientacion.NOROESTE: 0.65,
    Orientacion.NORTE: 0.55,
    Orientacion.DESCONOCIDA: 0.85,
}

_FACTORES_SOMBREADO: Dict[Sombreado, float] = {
    Sombreado.NINGUNO: 1.00,
    Sombreado.ALGO: 0.85,
    Sombreado.VARIAS_HORAS: 0.65,
    Sombreado.TODO_EL_DIA: 0.40,
}

# (tasa base, bono por almacenamiento)
_AUTOCONSUMO_POR_HOGAR: Dict[TamanoHogar, tuple] = {
    TamanoHogar.UNA: (0.25, 0.20),
    TamanoHogar.DOS: (0.35, 0.20),
    TamanoHogar.TRES_CUATRO: (0.40, 0.15),
    TamanoHogar.CINCO_MAS: (0.45, 0.15),
}

_CONSUMO_ANUAL_POR_HOGAR: Dict[TamanoHogar, float] = {
    TamanoHogar.UNA: 1500.0,
    TamanoHogar.DOS: 2500.0,
    TamanoHogar.TRES_CUATRO: 3500.0,
    TamanoHogar.CINCO_MAS: 5000.0,
}

_DISTANCIA_KM_POR_ORIGEN: Dict[OrigenFabricacion, float] = {
    OrigenFabricacion.ALEMANIA: 500.0,
    OrigenFabricacion.EUROPA: 1500.0,
    OrigenFabricacion.ASIA: 8000.0,
    OrigenFabricacion.CHINA: 9000.0,
    OrigenFabricacion.DESCONOCIDO: 4000.0,
}

_PESO_ECO_POR_IMPORTANCIA: Dict[ImportanciaEco, float] = {
    ImportanciaEco.MUY_IMPORTANTE: 0.5,
    ImportanciaEco.IMPORTANTE: 0.3,
    ImportanciaEco.SECUNDARIA: 0.1,
    ImportanciaEco.SIN_ESPECIFICAR: 0.2,
}


@dataclass(frozen=True)
class Supuestos:
    """
    Todos los supuestos del motor en un solo objeto.

    - Tarifas y CO2 de red (Alemania 2024/2025).
    - Techo AC legal de 800 W: restricción del sistema, no es entrada del usuario.
    - Curvas de puntaje: política de producto, no física. No "corregir".
    """

    # Límite legal
    limite_ac_legal_w: float = 800.0

    # Tarifas
    precio_electricidad_ct_kwh: float = 40.0
    tarifa_inyeccion_ct_kwh: float = 8.2
    co2_red_g_kwh: float = 380.0

    # Rendimiento
    rendimiento_base_kwh_wp: float = 0.95
    ganancia_bifacial: float = 0.08
    eficiencia_bateria: float = 0.90

    factores_orientacion: Mapping[Orientacion, float] = field(
        default_factory=lambda: dict(_FACTORES_ORIENTACION)
    )
    factores_sombreado: Mapping[Sombreado, float] = field(
        default_factory=lambda: dict(_FACTORES_SOMBREADO)
    )

    # Autoconsumo
    autoconsumo_por_hogar: Mapping[TamanoHogar, tuple] = field(
        default_factory=lambda: dict(_AUTOCONSUMO_POR_HOGAR)
    )
    bono_este_oeste: float = 0.05
    bono_diagonal: float = 0.03
    autoconsumo_max: float = 0.75
    consumo_anual_por_hogar: Mapping[TamanoHogar, float] = field(
        default_factory=lambda: dict(_CONSUMO_ANUAL_POR_HOGAR)
    )

    # Ecología (fabricación)
    co2_modulo_g_wp: float = 40.0
    ratio_extraccion: float = 0.60
    ratio_produccion: float = 0.35
    ratio_transporte: float = 0.05
    co2_inversor_g_w: float = 0.015
    co2_bateria_kg_kwh: float = 61.0
    peso_kg_por_400wp: float = 30.0
    peso_inversor_kg: float = 2.5
    peso_bateria_kg_kwh: float = 30.0
    co2_transporte_kg_tkm: float = 0.1
    distancia_km_por_origen: Mapping[OrigenFabricacion, float] = field(
        default_factory=lambda: dict(_DISTANCIA_KM_POR_ORIGEN)
    )
    vida_util_anios: int = 25

    # Curva de puntaje ecológico
    peso_amortizacion_co2: float = 0.6
    peso_fabricacion: float = 0.4
    amortizacion_co2_excelente_anios: float = 3.0
    amortizacion_co2_codo_anios: float = 5.0
    amortizacion_co2_regular_anios: float = 10.0
    amortizacion_co2_cero_anios: float = 15.0
    fabricacion_referencia_kg: float = 150.0
    fabricacion_rango_kg: float = 100.0

    # Ranking
    amortizacion_plena_anios: float = 4.0
    amortizacion_cero_anios: float = 20.0
    peso_eco_por_importancia: Mapping[ImportanciaEco, float] = field(
        default_factory=lambda: dict(_PESO_ECO_POR_IMPORTANCIA)
    )


SUPUESTOS_BASE = Supuestos()


# ==========================================================
# Carga YAML (sobrescribe solo escalares)
# ==========================================================

_DATA_DIR = Path(__file__).resolve().parent.parent / "data"

_ESCALARES = {
    f.name for f in fields(Supuestos)
    if f.type in ("float", "int")
}


def _to_num(k: str, v: Any) -> float:
    try:
        return float(v)
    except Exception as e:
        raise ValueError(f"'{k}' debe ser numérico en supuestos. Valor={v!r}") from e


def _tabla_enum(enum_cls: Any, doc: Dict[str, Any], nombre: str, base: Mapping) -> Dict:
    out = dict(base)
    for k, v in (doc or {}).items():
        try:
            clave = enum_cls(str(k))
        except ValueError as e:
            raise ValueError(f"Clave desconocida '{k}' en supuestos.{nombre}") from e
        out[clave] = _to_num(f"{nombre}.{k}", v)
    return out


def _tabla_pares(doc: Dict[str, Any], nombre: str, base: Mapping) -> Dict:
    """`"2": [0.35, 0.20]` -> (tasa base, bono por almacenamiento)."""
    out = dict(base)
    for k, v in (doc or {}).items():
        try:
            clave = TamanoHogar(str(k))
        except ValueError as e:
            raise ValueError(f"Clave desconocida '{k}' en supuestos.{nombre}") from e
        if not isinstance(v, (list, tuple)) or len(v) != 2:
            raise ValueError(f"supuestos.{nombre}.{k} debe ser [tasa, bono]. Valor={v!r}")
        out[clave] = (_to_num(f"{nombre}.{k}", v[0]), _to_num(f"{nombre}.{k}", v[1]))
    return out


def supuestos_desde_dict(doc: Mapping[str, Any], base: Supuestos = SUPUESTOS_BASE) -> Supuestos:
    """
    Aplica un dict (ya parseado) sobre `base`.
    Claves desconocidas -> ValueError (mejor fallar que ignorar un typo).
    """
    cambios: Dict[str, Any] = {}

    for k, v in doc.items():
        if k in _ESCALARES:
            num = _to_num(k, v)
            cambios[k] = int(num) if k == "vida_util_anios" else num
        elif k == "factores_orientacion":
            cambios[k] = _tabla_enum(Orientacion, v, k, base.factores_orientacion)
        elif k == "factores_sombreado":
            cambios[k] = _tabla_enum(Sombreado, v, k, base.factores_sombreado)
        elif k == "autoconsumo_por_hogar":
            cambios[k] = _tabla_pares(v, k, base.autoconsumo_por_hogar)
        elif k == "consumo_anual_por_hogar":
            cambios[k] = _tabla_enum(TamanoHogar, v, k, base.consumo_anual_por_hogar)
        elif k == "distancia_km_por_origen":
            cambios[k] = _tabla_enum(OrigenFabricacion, v, k, base.distancia_km_por_origen)
        elif k == "peso_eco_por_importancia":
            cambios[k] = _tabla_enum(ImportanciaEco, v, k, base.peso_eco_por_importancia)
        else:
            raise ValueError(f"Supuesto desconocido: '{k}'")

    return replace(base, **cambios)


def cargar_supuestos_yaml(path: str | Path | None = None) -> Supuestos:
    ruta = Path(path) if path else _DATA_DIR / "supuestos.yaml"
    if not ruta.exists():
        return SUPUESTOS_BASE

    doc = yaml.safe_load(ruta.read_text(encoding="utf-8")) or {}
    if not isinstance(doc, dict):
        raise ValueError(f"{ruta.name}: se esperaba un mapeo en la raíz")

    return supuestos_desde_dict(doc.get("supuestos", doc))
