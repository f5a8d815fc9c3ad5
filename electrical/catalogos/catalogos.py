# electrical/catalogos/catalogos.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

from core.modelo import Montaje as M
from core.modelo import OrigenFabricacion as O
from core.modelo import Producto
from core.puertos import PuertoCatalogo

from .catalogos_yaml import cargar_productos_yaml

logger = logging.getLogger(__name__)


# ==========================================================
# Catálogo base (respaldo si falla el YAML)
# ==========================================================

PRODUCTOS_BASE: Tuple[Producto, ...] = (
    Producto(
        id="yuma-basic-400",
        nombre="Yuma Basic 400",
        marca="Yuma",
        potencia_wp=400.0,
        n_modulos=1,
        precio=299.0,
        potencia_ac_w=400.0,
        montajes=frozenset({M.BARANDA, M.PISO_BALCON, M.FACHADA, M.TECHO_PLANO}),
        eficiencia_modulo_pct=20.5,
        garantia_anios=25,
        origen=O.CHINA,
        marca_inversor="Hoymiles",
        descripcion="Set compacto de entrada con un módulo de 400 W.",
    ),
    Producto(
        id="priwatt-pribalcony-duo",
        nombre="priBalcony Duo",
        marca="priwatt",
        potencia_wp=800.0,
        n_modulos=2,
        precio=499.0,
        potencia_ac_w=800.0,
        montajes=frozenset({M.BARANDA, M.PISO_BALCON}),
        eficiencia_modulo_pct=21.3,
        garantia_anios=25,
        origen=O.CHINA,
        marca_inversor="Hoymiles HMS-800",
        descripcion="Dos módulos, 800 W en total, pensado para baranda de balcón.",
    ),
    Producto(
        id="kleines-kraftwerk-classic-800",
        nombre="KK Classic 800",
        marca="Kleines Kraftwerk",
        potencia_wp=800.0,
        n_modulos=2,
        precio=479.0,
        potencia_ac_w=800.0,
        montajes=frozenset({M.BARANDA, M.PISO_BALCON, M.FACHADA, M.TECHO_PLANO}),
        eficiencia_modulo_pct=20.9,
        garantia_anios=15,
        origen=O.ALEMANIA,
        marca_inversor="TSUN TSOL-MS800",
        descripcion="Set sólido de proveedor alemán, buena relación precio/prestación.",
    ),
    Producto(
        id="greensolar-bifacial-830",
        nombre="Green Solar Bifacial 830",
        marca="Green Solar",
        potencia_wp=830.0,
        n_modulos=2,
        precio=519.0,
        potencia_ac_w=800.0,
        montajes=frozenset({M.BARANDA, M.PISO_BALCON, M.FACHADA, M.TECHO_PLANO}),
        bifacial=True,
        eficiencia_modulo_pct=21.5,
        garantia_anios=25,
        origen=O.EUROPA,
        marca_inversor="Hoymiles HMS-800W-2T",
        descripcion="Módulos bifaciales, más rendimiento sobre suelos claros.",
    ),
    Producto(
        id="anker-solix-solarbank-e1600",
        nombre="Anker SOLIX Solarbank E1600",
        marca="Anker",
        potencia_wp=800.0,
        n_modulos=2,
        precio=999.0,
        potencia_ac_w=800.0,
        incluye_almacenamiento=True,
        capacidad_kwh=1.6,
        montajes=frozenset({M.BARANDA, M.PISO_BALCON, M.TECHO_PLANO}),
        eficiencia_modulo_pct=22.0,
        garantia_anios=10,
        origen=O.CHINA,
        marca_inversor="Anker",
        descripcion="Set completo con 1,6 kWh de batería para máximo autoconsumo.",
    ),
    Producto(
        id="priwatt-pribalcony-quattro",
        nombre="priBalcony Quattro",
        marca="priwatt",
        potencia_wp=1640.0,
        n_modulos=4,
        precio=949.0,
        potencia_ac_w=1600.0,
        montajes=frozenset({M.FACHADA, M.TECHO_PLANO}),
        eficiencia_modulo_pct=21.3,
        garantia_anios=25,
        origen=O.ASIA,
        marca_inversor="Hoymiles HMS-1600-4T",
        descripcion="Set grande para fachada o terraza amplia; limitado al techo legal.",
    ),
)


# ==========================================================
# Resultado de carga (éxito / fallback visible)
# ==========================================================

FUENTE_YAML = "yaml"
FUENTE_BASE = "base"


@dataclass(frozen=True)
class ResultadoCatalogo:
    ok: bool
    productos: Tuple[Producto, ...]
    fuente: str
    errores: List[str] = field(default_factory=list)


class CatalogoYAML(PuertoCatalogo):
    """Proveedor por defecto: `data/productos.yaml`."""

    def __init__(self, path: str | Path = "productos.yaml"):
        self.path = path

    def cargar(self) -> ResultadoCatalogo:
        try:
            productos = cargar_productos_yaml(self.path)
        except (OSError, ValueError) as e:
            return ResultadoCatalogo(ok=False, productos=(), fuente=FUENTE_YAML, errores=[str(e)])
        except Exception as e:  # YAML corrupto u otro error del parser
            return ResultadoCatalogo(
                ok=False, productos=(), fuente=FUENTE_YAML, errores=[f"{type(e).__name__}: {e}"]
            )

        if not productos:
            return ResultadoCatalogo(ok=False, productos=(), fuente=FUENTE_YAML, errores=["Catálogo vacío."])

        return ResultadoCatalogo(ok=True, productos=tuple(productos), fuente=FUENTE_YAML)


class CatalogoFijo(PuertoCatalogo):
    """Lista en memoria (tests, CLI con catálogo ya cargado)."""

    def __init__(self, productos, fuente: str = "memoria"):
        self.productos = tuple(productos)
        self.fuente = fuente

    def cargar(self) -> ResultadoCatalogo:
        if not self.productos:
            return ResultadoCatalogo(ok=False, productos=(), fuente=self.fuente, errores=["Catálogo vacío."])
        return ResultadoCatalogo(ok=True, productos=self.productos, fuente=self.fuente)


# ==========================================================
# API pública (fuente de verdad)
# ==========================================================

def cargar_catalogo(proveedor: Optional[PuertoCatalogo] = None) -> ResultadoCatalogo:
    """
    Nunca devuelve vacío: si el proveedor falla o no trae productos, se usa
    PRODUCTOS_BASE y el resultado lo dice (`fuente == "base"`, `errores`).
    """
    proveedor = proveedor or CatalogoYAML()
    res = proveedor.cargar()

    if res.ok and res.productos:
        logger.debug("Catálogo cargado desde %s: %d productos", res.fuente, len(res.productos))
        return res

    logger.warning("Catálogo no disponible (%s); usando catálogo base.", "; ".join(res.errores) or "sin detalle")
    return ResultadoCatalogo(
        ok=False,
        productos=PRODUCTOS_BASE,
        fuente=FUENTE_BASE,
        errores=list(res.errores),
    )


def get_producto(producto_id: str, productos=PRODUCTOS_BASE) -> Producto:
    for p in productos:
        if p.id == producto_id:
            return p
    raise KeyError(f"Producto no existe en catálogo: {producto_id}")


def ids_productos(productos=PRODUCTOS_BASE) -> List[str]:
    return sorted(p.id for p in productos)
