# core/cli.py
from __future__ import annotations

import argparse
import json
import logging
import math
import sys
from pathlib import Path
from typing import Any, List, Optional

import yaml

from electrical.catalogos import CatalogoYAML
from electrical.irradiancia import ClientePVGIS

from .configuracion import cargar_supuestos_yaml
from .orquestador import ejecutar_recomendacion

logger = logging.getLogger(__name__)


def _leer_doc(path: str) -> Any:
    """YAML o JSON (JSON es YAML válido)."""
    return yaml.safe_load(Path(path).read_text(encoding="utf-8"))


def _sin_infinitos(x: Any) -> Any:
    """JSON estricto: amortizaciones +inf (nunca amortiza) salen como null."""
    if isinstance(x, dict):
        return {k: _sin_infinitos(v) for k, v in x.items()}
    if isinstance(x, list):
        return [_sin_infinitos(v) for v in x]
    if isinstance(x, float) and not math.isfinite(x):
        return None
    return x


def construir_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bkw-recomendar",
        description="Ranking de balcony solar: rendimiento, economía y huella de CO2.",
        epilog="Salida JSON estricto: una amortización que nunca se alcanza se emite como null.",
    )
    parser.add_argument("respuestas", help="Archivo YAML/JSON con las respuestas del quiz")
    parser.add_argument("--irradiancia", help="Payload de irradiancia en caché (JSON/YAML)")
    parser.add_argument("--catalogo", help="Catálogo de productos YAML (por defecto data/productos.yaml)")
    parser.add_argument("--supuestos", help="Supuestos YAML (por defecto data/supuestos.yaml)")
    parser.add_argument("--pvgis", action="store_true", help="Consultar PVGIS si hay coordenadas")
    parser.add_argument("--top", type=int, default=0, help="Solo los N primeros del ranking")
    parser.add_argument("--indent", type=int, default=2)
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = construir_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        respuestas = _leer_doc(args.respuestas)
        irradiancia = _leer_doc(args.irradiancia) if args.irradiancia else None
        supuestos = cargar_supuestos_yaml(args.supuestos)
    except (OSError, ValueError, yaml.YAMLError) as e:
        print(f"Error leyendo entradas: {e}", file=sys.stderr)
        return 2

    resp = ejecutar_recomendacion(
        respuestas,
        irradiancia,
        catalogo=CatalogoYAML(Path(args.catalogo).resolve()) if args.catalogo else None,
        supuestos=supuestos,
        proveedor_irradiancia=ClientePVGIS() if args.pvgis else None,
    )

    salida = resp.a_dict()
    if args.top > 0:
        salida["rankings"] = salida["rankings"][: args.top]

    print(json.dumps(_sin_infinitos(salida), ensure_ascii=False, indent=args.indent, allow_nan=False))
    return 0 if resp.exito else 1


if __name__ == "__main__":
    sys.exit(main())
