# core/contrato.py
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from .configuracion import Supuestos
from .modelo import Producto


@dataclass(frozen=True)
class Economia:
    rendimiento_anual_kwh: int
    autoconsumo_kwh: int
    inyeccion_kwh: int
    ahorro_anual_eur: float
    ahorro_autoconsumo_eur: float
    ingreso_inyeccion_eur: float
    amortizacion_anios: float           # inf si no hay ahorro
    ahorro_total_10_anios: float
    ahorro_total_20_anios: float
    co2_ahorro_kg_anio: int


@dataclass(frozen=True)
class Ecologia:
    co2_fabricacion_kg: float
    co2_extraccion_kg: float
    co2_produccion_kg: float
    co2_transporte_kg: float
    amortizacion_co2_anios: float       # inf si no hay ahorro de CO2
    balance_ciclo_vida_kg: float        # negativo = ahorro neto
    anios_balance: int
    puntaje_ecologico: int              # 0..100


@dataclass
class RankingProducto:
    rank: int
    producto: Producto
    economia: Economia
    ecologia: Ecologia
    puntaje: float
    razones: List[str] = field(default_factory=list)
    advertencias: List[str] = field(default_factory=list)
    razones_ecologicas: List[str] = field(default_factory=list)
    advertencias_ecologicas: List[str] = field(default_factory=list)
    resumen_ecologico: str = ""


@dataclass(frozen=True)
class SupuestosUsados:
    """
    Lo que el motor aplicó de verdad. Reinyectable (ver
    `core.orquestador.evaluar_producto`): los campos planos resumen el caso y
    `aplicados` lleva el `Supuestos` completo (rendimiento, batería, fabricación).
    """

    precio_electricidad_ct_kwh: float
    tarifa_inyeccion_ct_kwh: float
    co2_red_g_kwh: float
    factor_orientacion: float
    factor_sombreado: float
    tasa_autoconsumo: float             # sin batería
    consumo_anual_kwh: float
    rendimiento_kwh_kwp: Optional[float]
    uso_irradiancia: bool
    uso_consumo_declarado: bool
    aplicados: Optional[Supuestos] = None


SUPUESTOS_VACIOS = SupuestosUsados(
    precio_electricidad_ct_kwh=0.0,
    tarifa_inyeccion_ct_kwh=0.0,
    co2_red_g_kwh=0.0,
    factor_orientacion=0.0,
    factor_sombreado=0.0,
    tasa_autoconsumo=0.0,
    consumo_anual_kwh=0.0,
    rendimiento_kwh_kwp=None,
    uso_irradiancia=False,
    uso_consumo_declarado=False,
)


@dataclass(frozen=True)
class ResumenPerfil:
    ubicacion: str = ""
    orientacion: str = ""
    tamano_hogar: str = ""
    presupuesto: str = ""
    montaje: str = ""
    sombreado: str = ""
    importancia_eco: str = ""


@dataclass
class RespuestaRecomendacion:
    exito: bool
    recomendado: bool
    motivo_recomendacion: str
    rankings: List[RankingProducto]
    supuestos: SupuestosUsados
    resumen_perfil: ResumenPerfil
    filtrados_fuera: int
    fuente_catalogo: str = ""
    error: Optional[str] = None

    def a_dict(self) -> Dict[str, Any]:
        return _limpiar(asdict(self))


def _limpiar(x: Any) -> Any:
    """asdict deja enums y frozensets; los pasamos a tipos JSON."""
    if isinstance(x, dict):
        return {(k.value if isinstance(k, Enum) else k): _limpiar(v) for k, v in x.items()}
    if isinstance(x, (list, tuple)):
        return [_limpiar(v) for v in x]
    if isinstance(x, (set, frozenset)):
        return sorted(_limpiar(v) for v in x)
    if isinstance(x, Enum):
        return x.value
    return x
