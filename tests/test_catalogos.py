import tempfile
import unittest
from pathlib import Path

from core.modelo import Montaje, OrigenFabricacion
from electrical.catalogos import (
    FUENTE_BASE,
    FUENTE_YAML,
    PRODUCTOS_BASE,
    CatalogoFijo,
    CatalogoYAML,
    cargar_catalogo,
    cargar_productos_yaml,
    get_producto,
    ids_productos,
    producto_desde_dict,
)

_PRODUCTO_OK = """
productos:
  set-a:
    nombre: Set A
    marca: Marca
    potencia_wp: 800
    precio: 450
    montajes: [balkonbruestung, dachziegel]
    origen: Germany
"""

_PRODUCTO_SIN_PRECIO = """
productos:
  set-b:
    nombre: Set B
    marca: Marca
    potencia_wp: 800
"""


class TestCatalogoYAML(unittest.TestCase):
    def _yaml(self, d: str, texto: str) -> Path:
        ruta = Path(d) / "productos.yaml"
        ruta.write_text(texto, encoding="utf-8")
        return ruta

    def test_catalogo_del_repo(self):
        productos = cargar_productos_yaml()
        self.assertGreaterEqual(len(productos), 10)
        ids = [p.id for p in productos]
        self.assertEqual(len(ids), len(set(ids)))
        for p in productos:
            self.assertGreater(p.potencia_wp, 0)
            self.assertTrue(p.montajes)
            if p.incluye_almacenamiento:
                self.assertTrue(p.tiene_almacenamiento)

    def test_defaults_y_normalizacion(self):
        with tempfile.TemporaryDirectory() as d:
            productos = cargar_productos_yaml(self._yaml(d, _PRODUCTO_OK))
        p = productos[0]
        self.assertEqual("set-a", p.id)
        self.assertEqual(frozenset({Montaje.BARANDA}), p.montajes)
        self.assertEqual(OrigenFabricacion.ALEMANIA, p.origen)
        self.assertIsNone(p.potencia_ac_w)
        self.assertTrue(p.incluye_inversor)
        self.assertEqual(1, p.n_modulos)

    def test_falta_campo_obligatorio(self):
        with tempfile.TemporaryDirectory() as d:
            with self.assertRaises(ValueError) as ctx:
                cargar_productos_yaml(self._yaml(d, _PRODUCTO_SIN_PRECIO))
        self.assertIn("Falta 'precio'", str(ctx.exception))

    def test_numero_invalido(self):
        with self.assertRaises(ValueError):
            producto_desde_dict("x", {"nombre": "X", "marca": "M", "potencia_wp": "mucho", "precio": 1})
        with self.assertRaises(ValueError):
            producto_desde_dict("x", {"nombre": "X", "marca": "M", "potencia_wp": 0, "precio": 1})

    def test_capacidad_implica_almacenamiento(self):
        p = producto_desde_dict(
            "x", {"nombre": "X", "marca": "M", "potencia_wp": 800, "precio": 999, "capacidad_kwh": 1.6}
        )
        self.assertTrue(p.tiene_almacenamiento)


class TestCargarCatalogo(unittest.TestCase):
    def test_yaml_ok(self):
        res = cargar_catalogo()
        self.assertTrue(res.ok)
        self.assertEqual(FUENTE_YAML, res.fuente)

    def test_fallback_si_yaml_invalido(self):
        with tempfile.TemporaryDirectory() as d:
            ruta = Path(d) / "roto.yaml"
            ruta.write_text(_PRODUCTO_SIN_PRECIO, encoding="utf-8")
            with self.assertLogs("electrical.catalogos.catalogos", level="WARNING"):
                res = cargar_catalogo(CatalogoYAML(ruta))
        self.assertFalse(res.ok)
        self.assertEqual(FUENTE_BASE, res.fuente)
        self.assertEqual(PRODUCTOS_BASE, res.productos)
        self.assertTrue(res.errores)

    def test_fallback_si_yaml_no_existe(self):
        res = cargar_catalogo(CatalogoYAML("/no/existe/productos.yaml"))
        self.assertEqual(FUENTE_BASE, res.fuente)
        self.assertEqual(PRODUCTOS_BASE, res.productos)

    def test_fallback_si_vacio(self):
        res = cargar_catalogo(CatalogoFijo([]))
        self.assertEqual(FUENTE_BASE, res.fuente)
        self.assertTrue(res.productos)

    def test_catalogo_fijo(self):
        res = cargar_catalogo(CatalogoFijo(PRODUCTOS_BASE[:2], fuente="test"))
        self.assertTrue(res.ok)
        self.assertEqual("test", res.fuente)
        self.assertEqual(2, len(res.productos))

    def test_get_producto(self):
        self.assertEqual("yuma-basic-400", get_producto("yuma-basic-400").id)
        with self.assertRaises(KeyError):
            get_producto("no-existe")
        self.assertEqual(sorted(ids_productos()), ids_productos())


if __name__ == "__main__":
    unittest.main()
