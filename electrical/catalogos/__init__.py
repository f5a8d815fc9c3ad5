from .catalogos import (
    FUENTE_BASE,
    FUENTE_YAML,
    PRODUCTOS_BASE,
    CatalogoFijo,
    CatalogoYAML,
    ResultadoCatalogo,
    cargar_catalogo,
    get_producto,
    ids_productos,
)
from .catalogos_yaml import cargar_productos_yaml, producto_desde_dict

__all__ = [
    "FUENTE_BASE",
    "FUENTE_YAML",
    "PRODUCTOS_BASE",
    "CatalogoFijo",
    "CatalogoYAML",
    "ResultadoCatalogo",
    "cargar_catalogo",
    "get_producto",
    "ids_productos",
    "cargar_productos_yaml",
    "producto_desde_dict",
]
