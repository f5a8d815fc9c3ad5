"""
Huella ecológica de un balcony solar.

- Fabricación: extracción de materias primas, producción (módulo + inversor +
  batería) y transporte hasta el mercado alemán.
- Amortización de CO2: años hasta que la generación compensa la fabricación.
- Balance de ciclo de vida: fabricación − ahorro operativo en el periodo
  (negativo = ahorro neto; positivo = la deuda de fabricación aún no se pagó).
- Puntaje ecológico 0..100 (curvas heurísticas, ver Supuestos).

Fuentes de los factores: Fraunhofer ISE (módulos y baterías), UBA (mix de red),
ICCT/DEFRA (transporte).
"""
from __future__ import annotations

from dataclasses import dataclass

from ..configuracion import Supuestos
from ..contrato import Economia, Ecologia
from ..modelo import OrigenFabricacion, Producto
from electrical.energia.limitacion_inversor import potencia_ac_efectiva


@dataclass(frozen=True)
class DesgloseFabricacion:
    total_kg: float
    extraccion_kg: float
    produccion_kg: float
    transporte_kg: float


# ==========================================================
# Fabricación
# ==========================================================

def co2_modulos_kg(potencia_wp: float, s: Supuestos) -> float:
    return max(0.0, float(potencia_wp)) * s.co2_modulo_g_wp / 1000.0


def co2_inversor_kg(producto: Producto, s: Supuestos) -> float:
    if not producto.incluye_inversor:
        return 0.0
    pac_w = potencia_ac_efectiva(producto.potencia_ac_w, s.limite_ac_legal_w)
    return pac_w * s.co2_inversor_g_w / 1000.0


def co2_bateria_kg(producto: Producto, s: Supuestos) -> float:
    if not producto.tiene_almacenamiento:
        return 0.0
    return float(producto.capacidad_kwh) * s.co2_bateria_kg_kwh


def peso_sistema_kg(producto: Producto, s: Supuestos) -> float:
    modulos = max(0.0, float(producto.potencia_wp)) / 400.0 * s.peso_kg_por_400wp
    inversor = s.peso_inversor_kg if producto.incluye_inversor else 0.0
    bateria = float(producto.capacidad_kwh) * s.peso_bateria_kg_kwh if producto.tiene_almacenamiento else 0.0
    return modulos + inversor + bateria


def distancia_km(origen: OrigenFabricacion, s: Supuestos) -> float:
    o = OrigenFabricacion.desde_respuesta(origen)
    tabla = s.distancia_km_por_origen
    return float(tabla.get(o, tabla[OrigenFabricacion.DESCONOCIDO]))


def co2_transporte_kg(producto: Producto, s: Supuestos) -> float:
    por_modulos = co2_modulos_kg(producto.potencia_wp, s) * s.ratio_transporte
    tkm = peso_sistema_kg(producto, s) / 1000.0 * distancia_km(producto.origen, s)
    return por_modulos + tkm * s.co2_transporte_kg_tkm


def calcular_fabricacion(producto: Producto, s: Supuestos) -> DesgloseFabricacion:
    # Dato precalculado del catálogo: reparto fijo 60/35/5
    override = float(producto.co2_fabricacion_kg or 0.0)
    if override > 0:
        return DesgloseFabricacion(
            total_kg=override,
            extraccion_kg=override * s.ratio_extraccion,
            produccion_kg=override * s.ratio_produccion,
            transporte_kg=override * s.ratio_transporte,
        )

    base = co2_modulos_kg(producto.potencia_wp, s)
    extraccion = base * s.ratio_extraccion
    produccion = base * s.ratio_produccion + co2_inversor_kg(producto, s) + co2_bateria_kg(producto, s)
    transporte = co2_transporte_kg(producto, s)

    return DesgloseFabricacion(
        total_kg=extraccion + produccion + transporte,
        extraccion_kg=extraccion,
        produccion_kg=produccion,
        transporte_kg=transporte,
    )


# ==========================================================
# Amortización y ciclo de vida
# ==========================================================

def amortizacion_co2_anios(fabricacion_kg: float, co2_ahorro_kg_anio: float) -> float:
    if co2_ahorro_kg_anio <= 0:
        return float("inf")
    return fabricacion_kg / co2_ahorro_kg_anio


def anios_balance(producto: Producto, s: Supuestos) -> int:
    """Garantía del producto; si no hay dato válido, vida útil por defecto."""
    g = int(producto.garantia_anios or 0)
    return g if g > 0 else int(s.vida_util_anios)


def balance_ciclo_vida_kg(fabricacion_kg: float, co2_ahorro_kg_anio: float, anios: int) -> float:
    # negativo = ahorro neto en el periodo
    return fabricacion_kg - co2_ahorro_kg_anio * anios


# ==========================================================
# Puntaje ecológico
# ==========================================================

def puntaje_amortizacion_co2(anios: float, s: Supuestos) -> float:
    """
    <3 años: 100 | 3–5: 100→75 | 5–10: 75→50 | 10–15: 50→0 | >=15: 0
    """
    a0 = s.amortizacion_co2_excelente_anios
    a1 = s.amortizacion_co2_codo_anios
    a2 = s.amortizacion_co2_regular_anios
    a3 = s.amortizacion_co2_cero_anios

    if anios < a0:
        return 100.0
    if anios < a1:
        return 100.0 - (anios - a0) / (a1 - a0) * 25.0
    if anios < a2:
        return 75.0 - (anios - a1) / (a2 - a1) * 25.0
    if anios < a3:
        return 50.0 - (anios - a2) / (a3 - a2) * 50.0
    return 0.0


def puntaje_fabricacion(fabricacion_kg: float, s: Supuestos) -> float:
    p = (s.fabricacion_referencia_kg - fabricacion_kg) / s.fabricacion_rango_kg * 100.0
    return max(0.0, min(100.0, p))


def puntaje_ecologico(fabricacion_kg: float, amortizacion_anios: float, s: Supuestos) -> int:
    p = (
        puntaje_amortizacion_co2(amortizacion_anios, s) * s.peso_amortizacion_co2
        + puntaje_fabricacion(fabricacion_kg, s) * s.peso_fabricacion
    )
    return int(round(max(0.0, min(100.0, p))))


# ==========================================================
# API pública
# ==========================================================

def calcular_ecologia(*, producto: Producto, economia: Economia, supuestos: Supuestos) -> Ecologia:
    fab = calcular_fabricacion(producto, supuestos)
    co2_anio = float(economia.co2_ahorro_kg_anio)

    amortizacion = amortizacion_co2_anios(fab.total_kg, co2_anio)
    anios = anios_balance(producto, supuestos)

    return Ecologia(
        co2_fabricacion_kg=round(fab.total_kg, 2),
        co2_extraccion_kg=round(fab.extraccion_kg, 2),
        co2_produccion_kg=round(fab.produccion_kg, 2),
        co2_transporte_kg=round(fab.transporte_kg, 2),
        amortizacion_co2_anios=amortizacion if amortizacion == float("inf") else round(amortizacion, 1),
        balance_ciclo_vida_kg=round(balance_ciclo_vida_kg(fab.total_kg, co2_anio, anios), 2),
        anios_balance=anios,
        puntaje_ecologico=puntaje_ecologico(fab.total_kg, amortizacion, supuestos),
    )
