# core/etiquetas.py
from __future__ import annotations

from .modelo import (
    ImportanciaEco,
    Montaje,
    OrigenFabricacion,
    Orientacion,
    Presupuesto,
    Sombreado,
    TamanoHogar,
)

NO_INDICADO = "No indicado"

ETIQUETA_ORIENTACION = {
    Orientacion.SUR: "Sur",
    Orientacion.SURESTE: "Sureste",
    Orientacion.SUROESTE: "Suroeste",
    Orientacion.ESTE: "Este",
    Orientacion.OESTE: "Oeste",
    Orientacion.NORESTE: "Noreste",
    Orientacion.NOROESTE: "Noroeste",
    Orientacion.NORTE: "Norte",
    Orientacion.DESCONOCIDA: "Desconocida",
}

ETIQUETA_HOGAR = {
    TamanoHogar.UNA: "1 persona",
    TamanoHogar.DOS: "2 personas",
    TamanoHogar.TRES_CUATRO: "3-4 personas",
    TamanoHogar.CINCO_MAS: "5 o más personas",
}

ETIQUETA_SOMBREADO = {
    Sombreado.NINGUNO: "Sin sombra o casi",
    Sombreado.ALGO: "Algo de sombra",
    Sombreado.VARIAS_HORAS: "Varias horas de sombra",
    Sombreado.TODO_EL_DIA: "Sombra casi todo el día",
}

ETIQUETA_MONTAJE = {
    Montaje.BARANDA: "Baranda del balcón",
    Montaje.PISO_BALCON: "Piso del balcón / terraza",
    Montaje.FACHADA: "Fachada",
    Montaje.TECHO_PLANO: "Techo plano",
    Montaje.DESCONOCIDO: "Varios lugares de montaje",
}

ETIQUETA_IMPORTANCIA_ECO = {
    ImportanciaEco.MUY_IMPORTANTE: "Muy importante",
    ImportanciaEco.IMPORTANTE: "Importante",
    ImportanciaEco.SECUNDARIA: "Más bien secundaria",
    ImportanciaEco.SIN_ESPECIFICAR: NO_INDICADO,
}

ETIQUETA_ORIGEN = {
    OrigenFabricacion.ALEMANIA: "Alemania",
    OrigenFabricacion.EUROPA: "Europa",
    OrigenFabricacion.ASIA: "Asia",
    OrigenFabricacion.CHINA: "China",
    OrigenFabricacion.DESCONOCIDO: "origen desconocido",
}


def etiqueta_presupuesto(p: Presupuesto) -> str:
    if p.es_limite:
        return f"Hasta {p.tope_eur:,.0f} €"
    if p.es_desconocido:
        return "Aún no lo sé"
    return "Sin límite"
