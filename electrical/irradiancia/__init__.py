from .pvgis import (
    INCLINACION_POR_MONTAJE,
    ClientePVGIS,
    inclinacion_por_montaje,
    irradiancia_desde_pvgis,
)

__all__ = [
    "INCLINACION_POR_MONTAJE",
    "ClientePVGIS",
    "inclinacion_por_montaje",
    "irradiancia_desde_pvgis",
]
