from __future__ import annotations

from ..configuracion import Supuestos
from ..contrato import Economia
from ..modelo import Producto


# ==========================================================
# 🔵 Funciones financieras básicas
# ==========================================================

def calcular_autoconsumo_kwh(rendimiento_kwh: float, tasa: float, consumo_anual_kwh: float) -> float:
    """
    Nunca más que lo generado ni más de lo que el hogar plausiblemente usa.
    """
    teorico = rendimiento_kwh * tasa
    maximo_hogar = consumo_anual_kwh * tasa
    return max(0.0, min(teorico, maximo_hogar, rendimiento_kwh))


def amortizacion_simple(precio: float, ahorro_anual: float) -> float:
    return (float(precio) / float(ahorro_anual)) if ahorro_anual > 0 else float("inf")


def ahorro_acumulado(ahorro_anual: float, precio: float, anios: int) -> float:
    return ahorro_anual * anios - float(precio)


def _r2(x: float) -> float:
    return round(x, 2)


def _r1(x: float) -> float:
    return x if x == float("inf") else round(x, 1)


# ==========================================================
# 🔵 ENTRYPOINT ECONÓMICO (usa rendimiento ya limitado por AC)
# ==========================================================

def calcular_economia(
    *,
    producto: Producto,
    rendimiento_util_kwh: float,
    tasa_autoconsumo: float,
    consumo_anual_kwh: float,
    supuestos: Supuestos,
) -> Economia:
    """
    Todo lo de abajo parte del rendimiento útil (techo AC aplicado).

    Redondeo: energía y CO2 a entero, dinero a 2 decimales, años a 1 decimal.
    """

    rendimiento = int(round(max(0.0, rendimiento_util_kwh)))

    autoconsumo = calcular_autoconsumo_kwh(rendimiento, tasa_autoconsumo, consumo_anual_kwh)
    inyeccion = max(0.0, rendimiento - autoconsumo)

    ahorro_autoconsumo = autoconsumo * supuestos.precio_electricidad_ct_kwh / 100.0
    ingreso_inyeccion = inyeccion * supuestos.tarifa_inyeccion_ct_kwh / 100.0
    ahorro_anual = max(0.0, ahorro_autoconsumo + ingreso_inyeccion)

    amortizacion = amortizacion_simple(producto.precio, ahorro_anual)

    co2_kg = rendimiento * supuestos.co2_red_g_kwh / 1000.0

    return Economia(
        rendimiento_anual_kwh=rendimiento,
        autoconsumo_kwh=int(round(autoconsumo)),
        inyeccion_kwh=int(round(inyeccion)),
        ahorro_anual_eur=_r2(ahorro_anual),
        ahorro_autoconsumo_eur=_r2(ahorro_autoconsumo),
        ingreso_inyeccion_eur=_r2(ingreso_inyeccion),
        amortizacion_anios=_r1(amortizacion),
        ahorro_total_10_anios=_r2(ahorro_acumulado(ahorro_anual, producto.precio, 10)),
        ahorro_total_20_anios=_r2(ahorro_acumulado(ahorro_anual, producto.precio, 20)),
        co2_ahorro_kg_anio=int(round(max(0.0, co2_kg))),
    )
