# core/explicaciones.py
from __future__ import annotations

from typing import List

from .contrato import Economia, Ecologia
from .etiquetas import ETIQUETA_MONTAJE, ETIQUETA_ORIGEN
from .modelo import Montaje, OrigenFabricacion, Orientacion, Perfil, Producto, Sombreado

# Umbrales (reglas independientes, el orden de evaluación no importa)
AMORTIZACION_MUY_RAPIDA_ANIOS = 6.0
AMORTIZACION_BUENA_ANIOS = 8.0
AMORTIZACION_LARGA_ANIOS = 12.0
CUOTA_AUTOCONSUMO_ALTA = 0.5
GARANTIA_LARGA_ANIOS = 25
GARANTIA_CORTA_ANIOS = 10

CO2_AMORTIZACION_EXCELENTE_ANIOS = 3.0
CO2_AMORTIZACION_BUENA_ANIOS = 5.0
CO2_AMORTIZACION_LARGA_ANIOS = 8.0
FABRICACION_BAJA_KG = 80.0
FABRICACION_ALTA_KG = 120.0

_ORIGEN_CERCANO = (OrigenFabricacion.ALEMANIA, OrigenFabricacion.EUROPA)
_ORIGEN_LEJANO = (OrigenFabricacion.ASIA, OrigenFabricacion.CHINA)


def _num(x: float) -> str:
    # 1.6 -> "1,6"
    return f"{x:g}".replace(".", ",")


# ==========================================================
# Económicas
# ==========================================================

def razones_producto(producto: Producto, economia: Economia, perfil: Perfil) -> List[str]:
    razones: List[str] = []

    if economia.amortizacion_anios <= AMORTIZACION_MUY_RAPIDA_ANIOS:
        razones.append("Amortización muy rápida, menos de 6 años")
    elif economia.amortizacion_anios <= AMORTIZACION_BUENA_ANIOS:
        razones.append("Buena amortización, menos de 8 años")

    if producto.tiene_almacenamiento:
        razones.append(
            f"Incluye batería de {_num(float(producto.capacidad_kwh))} kWh para más autoconsumo"
        )

    if producto.bifacial:
        razones.append("Módulos bifaciales: hasta 8 % más de rendimiento")

    if (
        economia.rendimiento_anual_kwh > 0
        and economia.autoconsumo_kwh / economia.rendimiento_anual_kwh > CUOTA_AUTOCONSUMO_ALTA
    ):
        razones.append("Alta cuota de autoconsumo posible")

    if producto.garantia_anios >= GARANTIA_LARGA_ANIOS:
        razones.append(f"Garantía larga ({producto.garantia_anios} años)")

    if perfil.montaje != Montaje.DESCONOCIDO and perfil.montaje in producto.montajes:
        razones.append(f"Apto para {ETIQUETA_MONTAJE[perfil.montaje].lower()}")

    if perfil.presupuesto.es_limite and perfil.presupuesto.admite(producto.precio):
        razones.append(f"Dentro del presupuesto (hasta {perfil.presupuesto.tope_eur:,.0f} €)")

    return razones


def advertencias_producto(economia: Economia, perfil: Perfil) -> List[str]:
    advertencias: List[str] = []

    if economia.amortizacion_anios > AMORTIZACION_LARGA_ANIOS:
        advertencias.append("Amortización larga, más de 12 años")

    if perfil.orientacion == Orientacion.NORTE:
        advertencias.append("La orientación norte reduce mucho el rendimiento")

    if perfil.sombreado == Sombreado.TODO_EL_DIA:
        advertencias.append("La sombra casi todo el día reduce mucho el rendimiento")

    if economia.inyeccion_kwh > economia.autoconsumo_kwh:
        advertencias.append("Se inyecta más de lo que se autoconsume: una batería podría compensar")

    return advertencias


# ==========================================================
# Ecológicas
# ==========================================================

def razones_ecologicas(producto: Producto, ecologia: Ecologia) -> List[str]:
    razones: List[str] = []
    anios = ecologia.amortizacion_co2_anios

    if anios < CO2_AMORTIZACION_EXCELENTE_ANIOS:
        razones.append("Compensa el CO₂ de fabricación en menos de 3 años: balance excelente")
    elif anios < CO2_AMORTIZACION_BUENA_ANIOS:
        razones.append(f"Buena amortización de CO₂, unos {round(anios)} años")

    if producto.origen in _ORIGEN_CERCANO:
        razones.append(
            f"Fabricado en {ETIQUETA_ORIGEN[producto.origen]}: menos emisiones de transporte"
        )

    if ecologia.co2_fabricacion_kg < FABRICACION_BAJA_KG:
        razones.append(f"Baja huella de fabricación (~{round(ecologia.co2_fabricacion_kg)} kg CO₂)")

    if producto.bifacial:
        razones.append("Los módulos bifaciales aumentan el ahorro de CO₂ en la vida útil (~8 %)")

    if producto.tiene_almacenamiento:
        razones.append("La batería integrada sube el autoconsumo y mejora la descarbonización")

    return razones


def advertencias_ecologicas(producto: Producto, ecologia: Ecologia) -> List[str]:
    advertencias: List[str] = []
    anios = ecologia.amortizacion_co2_anios

    if anios > CO2_AMORTIZACION_LARGA_ANIOS:
        txt = "nunca" if anios == float("inf") else f"{round(anios)} años"
        advertencias.append(f"Amortización de CO₂ larga ({txt}): revise ubicación y uso")

    if ecologia.co2_fabricacion_kg > FABRICACION_ALTA_KG:
        advertencias.append(f"Huella de fabricación alta ({round(ecologia.co2_fabricacion_kg)} kg CO₂)")

    if producto.origen in _ORIGEN_LEJANO:
        advertencias.append("Fabricación lejana: más emisiones de transporte")

    if producto.garantia_anios < GARANTIA_CORTA_ANIOS:
        advertencias.append(
            f"Garantía corta ({producto.garantia_anios} años): posible vida útil menor"
        )

    return advertencias


def resumen_ecologico(producto: Producto, economia: Economia, ecologia: Ecologia) -> str:
    """Párrafo corto para la tarjeta del producto."""
    anios = ecologia.amortizacion_co2_anios
    if anios == float("inf"):
        amortiza = "no llega a compensar las emisiones de su fabricación"
    elif anios < CO2_AMORTIZACION_BUENA_ANIOS:
        amortiza = f"compensa las emisiones de su fabricación en solo {anios:.1f} años"
    else:
        amortiza = f"compensa las emisiones de su fabricación en {anios:.1f} años"

    if ecologia.balance_ciclo_vida_kg < 0:
        balance = (
            f"En {ecologia.anios_balance} años evita en neto "
            f"{abs(ecologia.balance_ciclo_vida_kg):.0f} kg CO₂"
        )
    else:
        balance = (
            f"En {ecologia.anios_balance} años todavía quedan "
            f"{ecologia.balance_ciclo_vida_kg:.0f} kg CO₂ de fabricación sin compensar"
        )

    return (
        f"{producto.nombre} {amortiza}. "
        f"La fabricación emite {ecologia.co2_fabricacion_kg:.1f} kg CO₂ y la generación "
        f"ahorra unos {economia.co2_ahorro_kg_anio} kg CO₂ por año. {balance}."
    )
