# electrical/catalogos/catalogos_yaml.py
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List

import yaml

from core.modelo import Montaje, OrigenFabricacion, Producto

DATA_DIR = Path(__file__).resolve().parents[2] / "data"


def _read_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    return yaml.safe_load(path.read_text(encoding="utf-8")) or {}


def _req(d: Dict[str, Any], k: str, ctx: str) -> Any:
    if k not in d or d[k] is None:
        raise ValueError(f"Falta '{k}' en {ctx}")
    return d[k]


def _req_num(d: Dict[str, Any], k: str, ctx: str) -> float:
    v = _req(d, k, ctx)
    try:
        return float(v)
    except Exception as e:
        raise ValueError(f"'{k}' debe ser numérico en {ctx}. Valor={v!r}") from e


def _opt_num(d: Dict[str, Any], k: str, ctx: str, default: float | None = None) -> float | None:
    if k not in d or d[k] is None:
        return default
    v = d[k]
    try:
        return float(v)
    except Exception as e:
        raise ValueError(f"'{k}' debe ser numérico en {ctx}. Valor={v!r}") from e


def _montajes(valores: Any, ctx: str) -> frozenset:
    if not isinstance(valores, (list, tuple)):
        raise ValueError(f"'montajes' debe ser lista en {ctx}")
    # valores desconocidos se descartan (igual que el enriquecimiento externo)
    out = set()
    for v in valores:
        m = Montaje.desde_respuesta(v)
        if m.value == str(v).strip().lower():
            out.add(m)
    return frozenset(out)


def _validate_producto(pid: str, p: Dict[str, Any]) -> None:
    ctx = f"productos.{pid}"
    if not isinstance(p, dict):
        raise ValueError(f"{ctx} debe ser un mapeo")

    _req(p, "nombre", ctx)
    _req(p, "marca", ctx)
    for k in ("potencia_wp", "precio"):
        _req_num(p, k, ctx)

    if _req_num(p, "potencia_wp", ctx) <= 0:
        raise ValueError(f"'potencia_wp' debe ser > 0 en {ctx}")
    if _req_num(p, "precio", ctx) < 0:
        raise ValueError(f"'precio' no puede ser negativo en {ctx}")

    for k in ("potencia_ac_w", "capacidad_kwh", "co2_fabricacion_kg", "eficiencia_modulo_pct"):
        _opt_num(p, k, ctx)


def producto_desde_dict(pid: str, p: Dict[str, Any]) -> Producto:
    _validate_producto(pid, p)
    ctx = f"productos.{pid}"

    capacidad = _opt_num(p, "capacidad_kwh", ctx)
    incluye_almacenamiento = bool(p.get("incluye_almacenamiento", capacidad is not None and capacidad > 0))

    return Producto(
        id=str(pid),
        nombre=str(p["nombre"]).strip(),
        marca=str(p["marca"]).strip(),
        potencia_wp=float(p["potencia_wp"]),
        n_modulos=int(_opt_num(p, "n_modulos", ctx, 1)),
        precio=float(p["precio"]),
        incluye_inversor=bool(p.get("incluye_inversor", True)),
        potencia_ac_w=_opt_num(p, "potencia_ac_w", ctx),
        incluye_almacenamiento=incluye_almacenamiento,
        capacidad_kwh=capacidad,
        montajes=_montajes(p.get("montajes", []), ctx),
        bifacial=bool(p.get("bifacial", False)),
        eficiencia_modulo_pct=float(_opt_num(p, "eficiencia_modulo_pct", ctx, 21.0)),
        garantia_anios=int(_opt_num(p, "garantia_anios", ctx, 10)),
        origen=OrigenFabricacion.desde_respuesta(p.get("origen")),
        co2_fabricacion_kg=_opt_num(p, "co2_fabricacion_kg", ctx),
        descripcion=str(p.get("descripcion") or "").strip(),
        marca_inversor=(str(p["marca_inversor"]).strip() if p.get("marca_inversor") else None),
    )


def cargar_productos_yaml(path: str | Path = "productos.yaml") -> List[Producto]:
    """
    Lee `data/productos.yaml` (o una ruta absoluta).
    ValueError ante cualquier producto mal formado: el catálogo entero se
    considera inválido y el llamador decide el fallback.
    """
    ruta = Path(path)
    if not ruta.is_absolute():
        ruta = DATA_DIR / ruta

    doc = _read_yaml(ruta)
    productos = (doc.get("productos") or {}) if isinstance(doc, dict) else {}
    if not isinstance(productos, dict):
        raise ValueError(f"{ruta.name}: 'productos' debe ser un mapeo id -> producto")

    return [producto_desde_dict(pid, p) for pid, p in productos.items()]
