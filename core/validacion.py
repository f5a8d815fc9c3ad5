# core/validacion.py
from __future__ import annotations

from collections.abc import Mapping
from typing import Any, List, Tuple

from .perfil import CLAVE_COORDENADAS, P_IMPORTANCIA_ECO, P_UBICACION


def _es_id_pregunta(k: Any) -> bool:
    if isinstance(k, bool):
        return False
    if isinstance(k, int):
        return P_UBICACION <= k <= P_IMPORTANCIA_ECO
    if isinstance(k, str) and k.strip().isdigit():
        return P_UBICACION <= int(k) <= P_IMPORTANCIA_ECO
    return False


def validar_respuestas(respuestas: Any) -> Tuple[bool, List[str]]:
    """
    Solo errores estructurales. Valores raros dentro de una respuesta no son
    error: el perfil los normaliza al default del enum.
    """
    errores: List[str] = []

    if not isinstance(respuestas, Mapping):
        errores.append(
            f"Las respuestas deben ser un mapeo id_pregunta -> valor (recibido: {type(respuestas).__name__})."
        )
        return False, errores

    for k in respuestas:
        if k == CLAVE_COORDENADAS:
            continue
        if not _es_id_pregunta(k):
            errores.append(f"Id de pregunta desconocido: {k!r}")

    coords = respuestas.get(CLAVE_COORDENADAS)
    if coords is not None and not isinstance(coords, Mapping):
        errores.append("'coordinates' debe ser un mapeo {lat, lon}.")

    return (len(errores) == 0), errores
