# core/perfil.py
"""
Respuestas del quiz -> Perfil normalizado.

Las claves del quiz son los ids de pregunta (int o string de dígitos).
Cualquier valor fuera de dominio cae en el default documentado del enum,
así que construir un perfil nunca falla para un mapeo.
"""
from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, Optional, Tuple

from .contrato import ResumenPerfil
from .etiquetas import (
    ETIQUETA_HOGAR,
    ETIQUETA_IMPORTANCIA_ECO,
    ETIQUETA_MONTAJE,
    ETIQUETA_ORIENTACION,
    ETIQUETA_SOMBREADO,
    NO_INDICADO,
    etiqueta_presupuesto,
)
from .modelo import (
    ImportanciaEco,
    Montaje,
    Orientacion,
    Perfil,
    Presupuesto,
    Sombreado,
    TamanoHogar,
)

logger = logging.getLogger(__name__)


# Ids de pregunta (fuente única de verdad)
P_UBICACION = 1
P_TAMANO_HOGAR = 2
P_TIPO_VIVIENDA = 3
P_TAMANO_VIVIENDA = 4
P_MONTAJE = 5
P_ORIENTACION = 6
P_TAMANO_BALCON = 7
P_SOMBREADO = 8
P_ELECTRODOMESTICOS = 9
P_CONSUMO = 10
P_PRESUPUESTO = 11
P_IMPORTANCIA_ECO = 12

CLAVE_COORDENADAS = "coordinates"


def respuesta(respuestas: Mapping[Any, Any], pregunta: int) -> Any:
    """Acepta clave int o string ("6")."""
    if pregunta in respuestas:
        return respuestas[pregunta]
    return respuestas.get(str(pregunta))


def _texto(v: Any) -> str:
    return str(v).strip() if v is not None else ""


# ==========================================================
# Ubicación
# ==========================================================

def _coordenadas_validas(lat: Any, lon: Any) -> Optional[Tuple[float, float]]:
    try:
        lat_f, lon_f = float(lat), float(lon)
    except (TypeError, ValueError):
        return None
    if not (-90.0 <= lat_f <= 90.0 and -180.0 <= lon_f <= 180.0):
        return None
    return (lat_f, lon_f)


def _parse_ubicacion(valor: Any) -> Any:
    """La respuesta 1 puede venir como JSON serializado, dict o texto libre."""
    if isinstance(valor, Mapping):
        return valor
    txt = _texto(valor)
    if not txt:
        return None
    try:
        doc = json.loads(txt)
    except ValueError:
        return txt
    # "10115" también es JSON válido: un código postal sigue siendo texto
    return doc if isinstance(doc, Mapping) else txt


def extraer_coordenadas(respuestas: Mapping[Any, Any]) -> Optional[Tuple[float, float]]:
    """
    Prioridad: clave `coordinates` {lat, lon}; luego la respuesta de ubicación
    si trae lat/lon. Coordenadas fuera de rango se descartan.
    """
    c = respuestas.get(CLAVE_COORDENADAS)
    if isinstance(c, Mapping):
        coords = _coordenadas_validas(c.get("lat"), c.get("lon"))
        if coords:
            return coords
        logger.warning("Coordenadas inválidas ignoradas: %r", c)

    ubic = _parse_ubicacion(respuesta(respuestas, P_UBICACION))
    if isinstance(ubic, Mapping) and "lat" in ubic and "lon" in ubic:
        return _coordenadas_validas(ubic.get("lat"), ubic.get("lon"))
    return None


def texto_ubicacion(respuestas: Mapping[Any, Any]) -> str:
    ubic = _parse_ubicacion(respuesta(respuestas, P_UBICACION))

    if isinstance(ubic, Mapping):
        if _coordenadas_validas(ubic.get("lat"), ubic.get("lon")):
            return "Ubicación registrada"
        ciudad = _texto(ubic.get("city"))
        if ciudad:
            cp = _texto(ubic.get("postalCode"))
            return f"{cp} {ciudad}" if cp else ciudad
        return NO_INDICADO

    if isinstance(ubic, str) and ubic:
        return ubic

    if respuestas.get(CLAVE_COORDENADAS):
        return "Ubicación registrada"
    return NO_INDICADO


# ==========================================================
# Otros campos
# ==========================================================

def _consumo_declarado(valor: Any) -> Optional[int]:
    if valor is None or isinstance(valor, bool):
        return None
    try:
        kwh = float(str(valor).strip().replace(",", "."))
    except ValueError:
        return None
    if not kwh > 0 or kwh == float("inf"):
        return None
    return int(round(kwh))


def _electrodomesticos(valor: Any) -> Tuple[str, ...]:
    if isinstance(valor, (list, tuple)):
        return tuple(_texto(v) for v in valor if _texto(v))
    txt = _texto(valor)
    return tuple(x.strip() for x in txt.split(",") if x.strip()) if txt else ()


# ==========================================================
# API pública
# ==========================================================

def construir_perfil(respuestas: Mapping[Any, Any]) -> Perfil:
    def r(pregunta: int) -> Any:
        return respuesta(respuestas, pregunta)

    return Perfil(
        tamano_hogar=TamanoHogar.desde_respuesta(r(P_TAMANO_HOGAR)),
        tipo_vivienda=_texto(r(P_TIPO_VIVIENDA)),
        tamano_vivienda=_texto(r(P_TAMANO_VIVIENDA)),
        montaje=Montaje.desde_respuesta(r(P_MONTAJE)),
        orientacion=Orientacion.desde_respuesta(r(P_ORIENTACION)),
        tamano_balcon=_texto(r(P_TAMANO_BALCON)),
        sombreado=Sombreado.desde_respuesta(r(P_SOMBREADO)),
        electrodomesticos=_electrodomesticos(r(P_ELECTRODOMESTICOS)),
        consumo_declarado_kwh=_consumo_declarado(r(P_CONSUMO)),
        presupuesto=Presupuesto.desde_respuesta(r(P_PRESUPUESTO)),
        importancia_eco=ImportanciaEco.desde_respuesta(r(P_IMPORTANCIA_ECO)),
        coordenadas=extraer_coordenadas(respuestas),
        ubicacion_texto=texto_ubicacion(respuestas),
    )


def resumen_perfil(perfil: Perfil, respuestas: Mapping[Any, Any]) -> ResumenPerfil:
    """
    Etiquetas legibles. Una pregunta sin responder se muestra como
    "No indicado" aunque el perfil use el default del enum.
    """
    def _o(pregunta: int, etiqueta: str) -> str:
        return etiqueta if _texto(respuesta(respuestas, pregunta)) else NO_INDICADO

    return ResumenPerfil(
        ubicacion=perfil.ubicacion_texto or NO_INDICADO,
        orientacion=_o(P_ORIENTACION, ETIQUETA_ORIENTACION[perfil.orientacion]),
        tamano_hogar=_o(P_TAMANO_HOGAR, ETIQUETA_HOGAR[perfil.tamano_hogar]),
        presupuesto=etiqueta_presupuesto(perfil.presupuesto),
        montaje=_o(P_MONTAJE, ETIQUETA_MONTAJE[perfil.montaje]),
        sombreado=_o(P_SOMBREADO, ETIQUETA_SOMBREADO[perfil.sombreado]),
        importancia_eco=ETIQUETA_IMPORTANCIA_ECO[perfil.importancia_eco],
    )
