import unittest

from core.configuracion import SUPUESTOS_BASE as S
from core.modelo import Orientacion, TamanoHogar
from electrical.energia import consumo_anual_kwh, tasa_autoconsumo


def _tasa(hogar, bateria=False, orientacion=Orientacion.SUR, maximo=None):
    return tasa_autoconsumo(
        tamano_hogar=hogar,
        tiene_almacenamiento=bateria,
        orientacion=orientacion,
        tabla=S.autoconsumo_por_hogar,
        bono_este_oeste=S.bono_este_oeste,
        bono_diagonal=S.bono_diagonal,
        maximo=S.autoconsumo_max if maximo is None else maximo,
    )


class TestTasaAutoconsumo(unittest.TestCase):
    def test_tabla_base(self):
        self.assertAlmostEqual(0.25, _tasa(TamanoHogar.UNA))
        self.assertAlmostEqual(0.35, _tasa(TamanoHogar.DOS))
        self.assertAlmostEqual(0.40, _tasa(TamanoHogar.TRES_CUATRO))
        self.assertAlmostEqual(0.45, _tasa(TamanoHogar.CINCO_MAS))

    def test_bono_bateria(self):
        self.assertAlmostEqual(0.45, _tasa(TamanoHogar.UNA, bateria=True))
        self.assertAlmostEqual(0.60, _tasa(TamanoHogar.CINCO_MAS, bateria=True))

    def test_bono_orientacion(self):
        self.assertAlmostEqual(0.40, _tasa(TamanoHogar.DOS, orientacion=Orientacion.OESTE))
        self.assertAlmostEqual(0.40, _tasa(TamanoHogar.DOS, orientacion=Orientacion.ESTE))
        self.assertAlmostEqual(0.38, _tasa(TamanoHogar.DOS, orientacion=Orientacion.NOROESTE))
        self.assertAlmostEqual(0.35, _tasa(TamanoHogar.DOS, orientacion=Orientacion.NORTE))

    def test_tope(self):
        self.assertAlmostEqual(0.5, _tasa(TamanoHogar.CINCO_MAS, True, Orientacion.OESTE, maximo=0.5))
        for hogar in TamanoHogar:
            for o in Orientacion:
                for bat in (False, True):
                    t = _tasa(hogar, bat, o)
                    self.assertGreaterEqual(t, 0.0)
                    self.assertLessEqual(t, 0.75)

    def test_valor_desconocido_usa_default(self):
        self.assertAlmostEqual(0.35, _tasa("7 personas"))


class TestConsumoAnual(unittest.TestCase):
    def test_tabla(self):
        esperado = {
            TamanoHogar.UNA: 1500.0,
            TamanoHogar.DOS: 2500.0,
            TamanoHogar.TRES_CUATRO: 3500.0,
            TamanoHogar.CINCO_MAS: 5000.0,
        }
        for hogar, kwh in esperado.items():
            self.assertEqual(
                kwh,
                consumo_anual_kwh(tamano_hogar=hogar, consumo_declarado_kwh=None, tabla=S.consumo_anual_por_hogar),
            )

    def test_consumo_declarado_manda(self):
        self.assertEqual(
            4200.0,
            consumo_anual_kwh(
                tamano_hogar=TamanoHogar.UNA, consumo_declarado_kwh=4200, tabla=S.consumo_anual_por_hogar
            ),
        )

    def test_consumo_declarado_cero_se_ignora(self):
        self.assertEqual(
            1500.0,
            consumo_anual_kwh(
                tamano_hogar=TamanoHogar.UNA, consumo_declarado_kwh=0, tabla=S.consumo_anual_por_hogar
            ),
        )


if __name__ == "__main__":
    unittest.main()
