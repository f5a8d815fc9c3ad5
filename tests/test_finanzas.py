import math
import unittest

from core.configuracion import SUPUESTOS_BASE
from core.modelo import Producto
from core.servicios.finanzas import amortizacion_simple, calcular_autoconsumo_kwh, calcular_economia


def _producto(precio=500.0) -> Producto:
    return Producto(id="p", nombre="P", marca="M", potencia_wp=800.0, n_modulos=2, precio=precio)


class TestEconomia(unittest.TestCase):
    def test_caso_base(self):
        e = calcular_economia(
            producto=_producto(500.0),
            rendimiento_util_kwh=960.4,
            tasa_autoconsumo=0.35,
            consumo_anual_kwh=2500.0,
            supuestos=SUPUESTOS_BASE,
        )
        self.assertEqual(960, e.rendimiento_anual_kwh)
        self.assertEqual(336, e.autoconsumo_kwh)
        self.assertEqual(624, e.inyeccion_kwh)
        self.assertAlmostEqual(134.40, e.ahorro_autoconsumo_eur)
        self.assertAlmostEqual(51.17, e.ingreso_inyeccion_eur)
        self.assertAlmostEqual(185.57, e.ahorro_anual_eur)
        self.assertEqual(2.7, e.amortizacion_anios)
        self.assertAlmostEqual(1355.68, e.ahorro_total_10_anios)
        self.assertAlmostEqual(3211.36, e.ahorro_total_20_anios)
        self.assertEqual(365, e.co2_ahorro_kg_anio)

    def test_autoconsumo_limitado_por_consumo_del_hogar(self):
        self.assertEqual(250.0, calcular_autoconsumo_kwh(960.0, 0.5, 500.0))
        self.assertEqual(480.0, calcular_autoconsumo_kwh(960.0, 0.5, 5000.0))

    def test_autoconsumo_nunca_supera_rendimiento(self):
        for rend in (0.0, 100.0, 960.0):
            for tasa in (0.0, 0.35, 0.75, 1.0):
                for consumo in (0.0, 500.0, 5000.0):
                    a = calcular_autoconsumo_kwh(rend, tasa, consumo)
                    self.assertLessEqual(a, rend)
                    self.assertLessEqual(a, consumo)
                    self.assertGreaterEqual(a, 0.0)

    def test_sin_ahorro_amortizacion_infinita(self):
        e = calcular_economia(
            producto=_producto(500.0),
            rendimiento_util_kwh=0.0,
            tasa_autoconsumo=0.35,
            consumo_anual_kwh=2500.0,
            supuestos=SUPUESTOS_BASE,
        )
        self.assertTrue(math.isinf(e.amortizacion_anios))
        self.assertEqual(0.0, e.ahorro_anual_eur)
        self.assertEqual(-500.0, e.ahorro_total_10_anios)
        self.assertEqual(0, e.co2_ahorro_kg_anio)

    def test_no_negativos(self):
        e = calcular_economia(
            producto=_producto(500.0),
            rendimiento_util_kwh=-10.0,
            tasa_autoconsumo=0.35,
            consumo_anual_kwh=2500.0,
            supuestos=SUPUESTOS_BASE,
        )
        for v in (e.rendimiento_anual_kwh, e.autoconsumo_kwh, e.inyeccion_kwh, e.ahorro_anual_eur):
            self.assertGreaterEqual(v, 0)

    def test_amortizacion_simple(self):
        self.assertEqual(5.0, amortizacion_simple(500.0, 100.0))
        self.assertTrue(math.isinf(amortizacion_simple(500.0, 0.0)))
        self.assertTrue(math.isinf(amortizacion_simple(500.0, -1.0)))


if __name__ == "__main__":
    unittest.main()
