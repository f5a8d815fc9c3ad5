import tempfile
import unittest
from dataclasses import replace
from pathlib import Path

from core.configuracion import SUPUESTOS_BASE, cargar_supuestos_yaml, supuestos_desde_dict
from core.modelo import Orientacion, TamanoHogar


class TestSupuestos(unittest.TestCase):
    def test_override_escalar(self):
        s = supuestos_desde_dict({"precio_electricidad_ct_kwh": 35})
        self.assertEqual(35.0, s.precio_electricidad_ct_kwh)
        self.assertEqual(SUPUESTOS_BASE.tarifa_inyeccion_ct_kwh, s.tarifa_inyeccion_ct_kwh)

    def test_override_tabla_parcial(self):
        s = supuestos_desde_dict({"factores_orientacion": {"norden": 0.5}})
        self.assertEqual(0.5, s.factores_orientacion[Orientacion.NORTE])
        self.assertEqual(1.0, s.factores_orientacion[Orientacion.SUR])
        # la base no se toca
        self.assertEqual(0.55, SUPUESTOS_BASE.factores_orientacion[Orientacion.NORTE])

    def test_clave_desconocida(self):
        with self.assertRaises(ValueError):
            supuestos_desde_dict({"precio_gas": 10})
        with self.assertRaises(ValueError):
            supuestos_desde_dict({"factores_sombreado": {"mucho": 0.1}})

    def test_override_autoconsumo_por_hogar(self):
        s = supuestos_desde_dict({"autoconsumo_por_hogar": {"2": [0.3, 0.25]}})
        self.assertEqual((0.3, 0.25), s.autoconsumo_por_hogar[TamanoHogar.DOS])
        self.assertEqual((0.25, 0.20), s.autoconsumo_por_hogar[TamanoHogar.UNA])
        # clave YAML sin comillas llega como int
        s = supuestos_desde_dict({"autoconsumo_por_hogar": {1: [0.2, 0.1]}})
        self.assertEqual((0.2, 0.1), s.autoconsumo_por_hogar[TamanoHogar.UNA])

    def test_autoconsumo_por_hogar_invalido(self):
        for tabla in ({"2": 0.3}, {"2": [0.3]}, {"7": [0.3, 0.2]}, {"2": ["x", 0.2]}):
            with self.subTest(tabla=tabla):
                with self.assertRaises(ValueError) as ctx:
                    supuestos_desde_dict({"autoconsumo_por_hogar": tabla})
                self.assertIn("autoconsumo_por_hogar", str(ctx.exception))

    def test_valor_no_numerico(self):
        with self.assertRaises(ValueError):
            supuestos_desde_dict({"co2_red_g_kwh": "mucho"})

    def test_yaml_del_repo_coincide_con_base(self):
        self.assertEqual(SUPUESTOS_BASE, cargar_supuestos_yaml())

    def test_yaml_inexistente_devuelve_base(self):
        self.assertIs(SUPUESTOS_BASE, cargar_supuestos_yaml("/no/existe/supuestos.yaml"))

    def test_yaml_propio(self):
        with tempfile.TemporaryDirectory() as d:
            ruta = Path(d) / "s.yaml"
            ruta.write_text("supuestos:\n  tarifa_inyeccion_ct_kwh: 7.9\n  vida_util_anios: 30\n", encoding="utf-8")
            s = cargar_supuestos_yaml(ruta)
        self.assertEqual(replace(SUPUESTOS_BASE, tarifa_inyeccion_ct_kwh=7.9, vida_util_anios=30), s)
        self.assertIsInstance(s.vida_util_anios, int)


if __name__ == "__main__":
    unittest.main()
