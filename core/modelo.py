# core/modelo.py
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, FrozenSet, Optional, Tuple


# ==========================================================
# Enums cerrados (valores = contrato del quiz / catálogo)
# ==========================================================

class _EnumRespuesta(str, Enum):
    """
    Enum de respuestas del quiz con variante "no especificada".
    Cualquier valor no reconocido cae en `_default()`.
    """

    @classmethod
    def _default(cls):
        raise NotImplementedError

    @classmethod
    def desde_respuesta(cls, valor: Any):
        if isinstance(valor, cls):
            return valor
        txt = str(valor or "").strip().lower()
        for miembro in cls:
            if miembro.value == txt:
                return miembro
        return cls._default()


class Orientacion(_EnumRespuesta):
    SUR = "sueden"
    SURESTE = "suedost"
    SUROESTE = "suedwest"
    ESTE = "osten"
    OESTE = "westen"
    NORESTE = "nordost"
    NOROESTE = "nordwest"
    NORTE = "norden"
    DESCONOCIDA = "weiss-nicht"

    @classmethod
    def _default(cls):
        return cls.DESCONOCIDA


class Sombreado(_EnumRespuesta):
    NINGUNO = "keine"
    ALGO = "etwas"
    VARIAS_HORAS = "mehrere-stunden"
    TODO_EL_DIA = "ganzen-tag"

    @classmethod
    def _default(cls):
        return cls.ALGO


class TamanoHogar(_EnumRespuesta):
    UNA = "1"
    DOS = "2"
    TRES_CUATRO = "3-4"
    CINCO_MAS = "5+"

    @classmethod
    def _default(cls):
        return cls.DOS


class Montaje(_EnumRespuesta):
    BARANDA = "balkonbruestung"
    PISO_BALCON = "balkonboden"
    FACHADA = "hauswand"
    TECHO_PLANO = "flachdach"
    DESCONOCIDO = "weiss-nicht"

    @classmethod
    def _default(cls):
        return cls.DESCONOCIDO


class ImportanciaEco(_EnumRespuesta):
    MUY_IMPORTANTE = "sehr-wichtig"
    IMPORTANTE = "wichtig"
    SECUNDARIA = "nebensaechlich"
    SIN_ESPECIFICAR = ""

    @classmethod
    def _default(cls):
        return cls.SIN_ESPECIFICAR


class OrigenFabricacion(_EnumRespuesta):
    ALEMANIA = "germany"
    EUROPA = "europe"
    ASIA = "asia"
    CHINA = "china"
    DESCONOCIDO = "unknown"

    @classmethod
    def _default(cls):
        return cls.DESCONOCIDO


# ==========================================================
# Presupuesto
# ==========================================================

_RANGOS_LEGACY = {
    "bis-400": 400.0,
    "400-700": 700.0,
    "700-1000": 1000.0,
}


@dataclass(frozen=True)
class Presupuesto:
    tipo: str                        # "limite" | "sin_limite" | "desconocido"
    tope_eur: Optional[float] = None

    LIMITE = "limite"
    SIN_LIMITE = "sin_limite"
    DESCONOCIDO = "desconocido"

    @property
    def es_limite(self) -> bool:
        return self.tipo == self.LIMITE

    @property
    def es_desconocido(self) -> bool:
        return self.tipo == self.DESCONOCIDO

    def admite(self, precio: float) -> bool:
        if not self.es_limite:
            return True
        return float(precio) <= float(self.tope_eur)

    @classmethod
    def desde_respuesta(cls, valor: Any) -> "Presupuesto":
        """
        - vacío / None / "0" / ">1000"  -> sin límite (estado por defecto del slider)
        - "weiss-nicht"                  -> desconocido
        - rango legacy o número > 0      -> límite
        - cualquier otra cosa            -> desconocido
        """
        if isinstance(valor, Presupuesto):
            return valor

        txt = str(valor if valor is not None else "").strip().lower()

        if txt in ("", "0", ">1000"):
            return cls(cls.SIN_LIMITE)
        if txt == "weiss-nicht":
            return cls(cls.DESCONOCIDO)
        if txt in _RANGOS_LEGACY:
            return cls(cls.LIMITE, _RANGOS_LEGACY[txt])

        try:
            tope = float(txt)
        except ValueError:
            return cls(cls.DESCONOCIDO)

        if tope < 0 or tope != tope:
            return cls(cls.DESCONOCIDO)
        if tope == 0 or tope == float("inf"):
            return cls(cls.SIN_LIMITE)
        return cls(cls.LIMITE, tope)


# ==========================================================
# Entidades
# ==========================================================

@dataclass(frozen=True)
class Producto:
    id: str
    nombre: str
    marca: str
    potencia_wp: float
    n_modulos: int
    precio: float

    incluye_inversor: bool = True
    potencia_ac_w: Optional[float] = None      # None -> techo legal

    incluye_almacenamiento: bool = False
    capacidad_kwh: Optional[float] = None

    montajes: FrozenSet[Montaje] = frozenset()
    bifacial: bool = False
    eficiencia_modulo_pct: float = 21.0
    garantia_anios: int = 10

    origen: OrigenFabricacion = OrigenFabricacion.DESCONOCIDO
    co2_fabricacion_kg: Optional[float] = None  # > 0 -> se usa tal cual
    descripcion: str = ""
    marca_inversor: Optional[str] = None

    @property
    def tiene_almacenamiento(self) -> bool:
        return bool(self.incluye_almacenamiento) and float(self.capacidad_kwh or 0.0) > 0.0


@dataclass(frozen=True)
class Perfil:
    """
    Perfil del hogar derivado de las respuestas del quiz.
    Todo ya normalizado: nunca hay valores fuera del dominio.
    """

    tamano_hogar: TamanoHogar = TamanoHogar.DOS
    tipo_vivienda: str = ""
    tamano_vivienda: str = ""
    montaje: Montaje = Montaje.DESCONOCIDO
    orientacion: Orientacion = Orientacion.DESCONOCIDA
    tamano_balcon: str = ""
    sombreado: Sombreado = Sombreado.ALGO
    electrodomesticos: Tuple[str, ...] = ()
    consumo_declarado_kwh: Optional[int] = None
    presupuesto: Presupuesto = field(default_factory=lambda: Presupuesto(Presupuesto.SIN_LIMITE))
    importancia_eco: ImportanciaEco = ImportanciaEco.SIN_ESPECIFICAR

    coordenadas: Optional[Tuple[float, float]] = None
    ubicacion_texto: str = ""


@dataclass(frozen=True)
class Irradiancia:
    """
    Rendimiento específico del proveedor externo (PVGIS), por kWp instalado.
    """

    rendimiento_anual_kwh_kwp: float
    mensual_kwh_kwp: Tuple[float, ...] = ()
    perdidas_totales_pct: float = 0.0
    inclinacion_deg: float = 0.0
    azimut_deg: float = 0.0
    lat: Optional[float] = None
    lon: Optional[float] = None
    elevacion_m: Optional[float] = None

    @classmethod
    def desde_payload(cls, data: Any) -> "Irradiancia":
        """
        Payload cacheado (camelCase, mismo formato que /api/solar-data).
        ValueError si no trae un rendimiento anual numérico > 0.
        """
        if isinstance(data, Irradiancia):
            return data
        if not isinstance(data, dict):
            raise ValueError("Irradiancia inválida (no es dict)")

        anual = data.get("annualYieldKwhPerKwp")
        try:
            anual_f = float(anual)
        except (TypeError, ValueError) as e:
            raise ValueError(f"annualYieldKwhPerKwp inválido: {anual!r}") from e
        if not anual_f > 0 or anual_f == float("inf"):
            raise ValueError(f"annualYieldKwhPerKwp debe ser > 0: {anual!r}")

        mensual = data.get("monthlyYields") or []
        try:
            mensual_t = tuple(float(x) for x in mensual)
        except (TypeError, ValueError) as e:
            raise ValueError("monthlyYields debe ser lista numérica") from e

        sp = data.get("systemParams") or {}
        loc = data.get("location") or {}

        def _opt(d: dict, k: str) -> Optional[float]:
            v = d.get(k) if isinstance(d, dict) else None
            try:
                return float(v) if v is not None else None
            except (TypeError, ValueError):
                return None

        return cls(
            rendimiento_anual_kwh_kwp=anual_f,
            mensual_kwh_kwp=mensual_t,
            perdidas_totales_pct=_opt(data, "totalLossPercent") or 0.0,
            inclinacion_deg=_opt(sp, "angle") or 0.0,
            azimut_deg=_opt(sp, "aspect") or 0.0,
            lat=_opt(loc, "lat"),
            lon=_opt(loc, "lon"),
            elevacion_m=_opt(loc, "elevation"),
        )
