# core/ranking.py
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from .configuracion import Supuestos
from .contrato import RankingProducto
from .modelo import ImportanciaEco, Montaje, Perfil, Producto, Sombreado


# ==========================================================
# Filtro
# ==========================================================

def cumple_presupuesto(producto: Producto, perfil: Perfil) -> bool:
    return perfil.presupuesto.admite(producto.precio)


def cumple_montaje(producto: Producto, perfil: Perfil) -> bool:
    if perfil.montaje == Montaje.DESCONOCIDO:
        return True
    return perfil.montaje in producto.montajes


def filtrar_productos(
    productos: Sequence[Producto], perfil: Perfil
) -> Tuple[List[Producto], int]:
    """Devuelve (elegibles, filtrados_fuera). Conserva el orden del catálogo."""
    elegibles = [
        p for p in productos
        if cumple_presupuesto(p, perfil) and cumple_montaje(p, perfil)
    ]
    return elegibles, len(productos) - len(elegibles)


# ==========================================================
# Decisión global
# ==========================================================

@dataclass(frozen=True)
class Decision:
    recomendado: bool
    motivo: str


MOTIVO_SOMBRA = (
    "Con sombra casi todo el día el rendimiento de un balcony solar es demasiado "
    "bajo para que valga la pena. Si puedes, busca otro lugar de montaje con más sol."
)
MOTIVO_PRESUPUESTO = (
    "Sin un presupuesto definido no podemos darte una recomendación firme. "
    "Abajo ves las opciones que encajan con tu lugar de montaje para orientarte."
)
MOTIVO_SIN_PRODUCTOS = (
    "No encontramos un balcony solar que encaje con tu presupuesto y tu lugar de "
    "montaje. Con un presupuesto algo mayor tendrías más opciones."
)


def decidir_recomendacion(
    perfil: Perfil,
    n_elegibles: int,
    factor_orientacion: float,
    factor_sombreado: float,
) -> Decision:
    if perfil.sombreado == Sombreado.TODO_EL_DIA:
        return Decision(False, MOTIVO_SOMBRA)
    if perfil.presupuesto.es_desconocido:
        return Decision(False, MOTIVO_PRESUPUESTO)
    if n_elegibles == 0:
        return Decision(False, MOTIVO_SIN_PRODUCTOS)

    combinado = factor_orientacion * factor_sombreado
    motivo = "Según tus respuestas, un balcony solar tiene sentido para ti. "
    if combinado >= 0.8:
        motivo += "Tu ubicación ofrece condiciones óptimas para un rendimiento máximo. "
    elif combinado >= 0.6:
        motivo += "Tu ubicación ofrece buenas condiciones para un rendimiento sólido. "
    else:
        motivo += "Aunque hay algunas limitaciones, la inversión puede valer la pena. "
    motivo += "Estas son nuestras mejores opciones para ti:"

    return Decision(True, motivo)


# ==========================================================
# Puntaje compuesto
# ==========================================================

def puntaje_economico(amortizacion_anios: float, s: Supuestos) -> float:
    """100 hasta `amortizacion_plena_anios`, lineal a 0 en `amortizacion_cero_anios`."""
    if math.isinf(amortizacion_anios):
        return 0.0
    a0 = s.amortizacion_plena_anios
    a1 = s.amortizacion_cero_anios
    if amortizacion_anios <= a0:
        return 100.0
    if amortizacion_anios >= a1:
        return 0.0
    return 100.0 * (a1 - amortizacion_anios) / (a1 - a0)


def peso_ecologico(importancia: ImportanciaEco, s: Supuestos) -> float:
    tabla = s.peso_eco_por_importancia
    return float(tabla.get(importancia, tabla[ImportanciaEco.SIN_ESPECIFICAR]))


def puntaje_compuesto(
    amortizacion_anios: float,
    puntaje_ecologico: float,
    importancia: ImportanciaEco,
    s: Supuestos,
) -> float:
    w = peso_ecologico(importancia, s)
    p = (1.0 - w) * puntaje_economico(amortizacion_anios, s) + w * float(puntaje_ecologico)
    return round(max(0.0, min(100.0, p)), 2)


def ordenar_rankings(rankings: List[RankingProducto]) -> List[RankingProducto]:
    """Puntaje desc, amortización asc, id asc. Asigna rank 1..n."""
    ordenados = sorted(
        rankings,
        key=lambda r: (-r.puntaje, r.economia.amortizacion_anios, r.producto.id),
    )
    for i, r in enumerate(ordenados, start=1):
        r.rank = i
    return ordenados
