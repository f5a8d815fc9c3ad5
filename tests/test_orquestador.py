import json
import math
import unittest
from dataclasses import replace

from core.configuracion import SUPUESTOS_BASE
from core.contrato import SUPUESTOS_VACIOS
from core.modelo import Irradiancia, Montaje, OrigenFabricacion, Producto
from core.orquestador import ejecutar_recomendacion, evaluar_producto
from core.perfil import construir_perfil
from core.ranking import MOTIVO_SIN_PRODUCTOS, MOTIVO_SOMBRA
from electrical.catalogos import PRODUCTOS_BASE, CatalogoFijo

RESPUESTAS = {
    1: json.dumps({"lat": 52.52, "lon": 13.405}),
    2: "2",
    5: "balkonbruestung",
    6: "sueden",
    8: "keine",
    11: "0",
    12: "wichtig",
}

IRRADIANCIA = {"annualYieldKwhPerKwp": 1050.0, "monthlyYields": [87.5] * 12}


class _ProveedorFijo:
    def __init__(self, irr=None, error=None):
        self.irr = irr
        self.error = error
        self.llamadas = []

    def obtener(self, lat, lon, inclinacion, azimut):
        self.llamadas.append((lat, lon, inclinacion, azimut))
        if self.error:
            raise self.error
        return self.irr


def _catalogo():
    return CatalogoFijo(PRODUCTOS_BASE, fuente="test")


class TestEscenarios(unittest.TestCase):
    def test_techo_ac_1200wp(self):
        p = Producto(
            id="grande", nombre="Grande", marca="M", potencia_wp=1200.0, n_modulos=3, precio=700.0,
            potencia_ac_w=800.0, montajes=frozenset({Montaje.BARANDA}), origen=OrigenFabricacion.CHINA,
        )
        resp = ejecutar_recomendacion(
            RESPUESTAS,
            {"annualYieldKwhPerKwp": 1200.0},
            catalogo=CatalogoFijo([p]),
        )
        self.assertTrue(resp.exito)
        eco = resp.rankings[0].economia
        self.assertEqual(960, eco.rendimiento_anual_kwh)
        self.assertEqual(365, eco.co2_ahorro_kg_anio)

    def test_sombra_todo_el_dia_no_recomienda(self):
        resp = ejecutar_recomendacion({**RESPUESTAS, 8: "ganzen-tag"}, catalogo=_catalogo())
        self.assertTrue(resp.exito)
        self.assertFalse(resp.recomendado)
        self.assertEqual(MOTIVO_SOMBRA, resp.motivo_recomendacion)
        self.assertTrue(resp.rankings)
        for r in resp.rankings:
            self.assertTrue(any("sombra" in a for a in r.advertencias))

    def test_presupuesto_bajo_todo_filtrado(self):
        resp = ejecutar_recomendacion({**RESPUESTAS, 11: "100"}, catalogo=_catalogo())
        self.assertTrue(resp.exito)
        self.assertFalse(resp.recomendado)
        self.assertEqual([], resp.rankings)
        self.assertEqual(len(PRODUCTOS_BASE), resp.filtrados_fuera)
        self.assertEqual(MOTIVO_SIN_PRODUCTOS, resp.motivo_recomendacion)

    def test_presupuesto_desconocido_devuelve_rankings(self):
        resp = ejecutar_recomendacion({**RESPUESTAS, 11: "weiss-nicht"}, catalogo=_catalogo())
        self.assertFalse(resp.recomendado)
        self.assertTrue(resp.rankings)

    def test_recomendacion_positiva(self):
        resp = ejecutar_recomendacion(RESPUESTAS, IRRADIANCIA, catalogo=_catalogo())
        self.assertTrue(resp.recomendado)
        self.assertEqual("test", resp.fuente_catalogo)
        # quattro no se monta en baranda
        self.assertEqual(1, resp.filtrados_fuera)
        self.assertEqual(list(range(1, len(resp.rankings) + 1)), [r.rank for r in resp.rankings])
        puntajes = [r.puntaje for r in resp.rankings]
        self.assertEqual(sorted(puntajes, reverse=True), puntajes)
        for r in resp.rankings:
            self.assertIn(Montaje.BARANDA, r.producto.montajes)
            self.assertTrue(r.resumen_ecologico)


class TestSupuestosUsados(unittest.TestCase):
    def test_con_irradiancia(self):
        resp = ejecutar_recomendacion(RESPUESTAS, IRRADIANCIA, catalogo=_catalogo())
        s = resp.supuestos
        self.assertTrue(s.uso_irradiancia)
        self.assertEqual(1050.0, s.rendimiento_kwh_kwp)
        self.assertEqual(1.0, s.factor_orientacion)
        self.assertEqual(1.0, s.factor_sombreado)
        self.assertEqual(0.35, s.tasa_autoconsumo)
        self.assertEqual(2500.0, s.consumo_anual_kwh)
        self.assertFalse(s.uso_consumo_declarado)

    def test_irradiancia_malformada_se_ignora(self):
        resp = ejecutar_recomendacion(RESPUESTAS, {"annualYieldKwhPerKwp": "n/a"}, catalogo=_catalogo())
        self.assertTrue(resp.exito)
        self.assertFalse(resp.supuestos.uso_irradiancia)
        self.assertIsNone(resp.supuestos.rendimiento_kwh_kwp)

    def test_consumo_declarado(self):
        resp = ejecutar_recomendacion({**RESPUESTAS, 10: 4200}, catalogo=_catalogo())
        self.assertTrue(resp.supuestos.uso_consumo_declarado)
        self.assertEqual(4200.0, resp.supuestos.consumo_anual_kwh)

    def test_reinyectar_supuestos_reproduce_resultados(self):
        resp = ejecutar_recomendacion(RESPUESTAS, IRRADIANCIA, catalogo=_catalogo())
        perfil = construir_perfil(RESPUESTAS)
        for r in resp.rankings:
            economia, ecologia, _ = evaluar_producto(r.producto, perfil, resp.supuestos)
            self.assertEqual(r.economia, economia)
            self.assertEqual(r.ecologia, ecologia)

    def test_reinyectar_supuestos_propios(self):
        propios = replace(
            SUPUESTOS_BASE,
            rendimiento_base_kwh_wp=1.05,
            co2_modulo_g_wp=30.0,
            eficiencia_bateria=0.8,
            precio_electricidad_ct_kwh=35.0,
        )
        resp = ejecutar_recomendacion(RESPUESTAS, catalogo=_catalogo(), supuestos=propios)
        self.assertEqual(propios, resp.supuestos.aplicados)
        self.assertEqual(35.0, resp.supuestos.precio_electricidad_ct_kwh)

        perfil = construir_perfil(RESPUESTAS)
        for r in resp.rankings:
            economia, ecologia, _ = evaluar_producto(r.producto, perfil, resp.supuestos)
            self.assertEqual(r.economia, economia)
            self.assertEqual(r.ecologia, ecologia)

        # con la base por defecto los números cambian
        r = resp.rankings[0]
        economia, ecologia, _ = evaluar_producto(r.producto, perfil, resp.supuestos, SUPUESTOS_BASE)
        self.assertNotEqual(r.economia.rendimiento_anual_kwh, economia.rendimiento_anual_kwh)
        self.assertNotEqual(r.ecologia.co2_fabricacion_kg, ecologia.co2_fabricacion_kg)


class TestProveedorIrradiancia(unittest.TestCase):
    def test_usa_proveedor_con_coordenadas(self):
        prov = _ProveedorFijo(Irradiancia(rendimiento_anual_kwh_kwp=900.0))
        resp = ejecutar_recomendacion(
            {**RESPUESTAS, 6: "westen"}, catalogo=_catalogo(), proveedor_irradiancia=prov
        )
        self.assertEqual([(52.52, 13.405, 90.0, 90.0)], prov.llamadas)
        self.assertEqual(900.0, resp.supuestos.rendimiento_kwh_kwp)

    def test_payload_en_cache_evita_llamada(self):
        prov = _ProveedorFijo(Irradiancia(rendimiento_anual_kwh_kwp=900.0))
        resp = ejecutar_recomendacion(RESPUESTAS, IRRADIANCIA, catalogo=_catalogo(), proveedor_irradiancia=prov)
        self.assertEqual([], prov.llamadas)
        self.assertEqual(1050.0, resp.supuestos.rendimiento_kwh_kwp)

    def test_sin_coordenadas_no_llama(self):
        prov = _ProveedorFijo(Irradiancia(rendimiento_anual_kwh_kwp=900.0))
        resp = ejecutar_recomendacion({6: "sueden"}, catalogo=_catalogo(), proveedor_irradiancia=prov)
        self.assertEqual([], prov.llamadas)
        self.assertFalse(resp.supuestos.uso_irradiancia)

    def test_proveedor_que_falla(self):
        prov = _ProveedorFijo(error=TimeoutError("lento"))
        resp = ejecutar_recomendacion(RESPUESTAS, catalogo=_catalogo(), proveedor_irradiancia=prov)
        self.assertTrue(resp.exito)
        self.assertFalse(resp.supuestos.uso_irradiancia)


class TestRobustez(unittest.TestCase):
    def test_entrada_invalida(self):
        for entrada in (None, ["sueden"], "hola"):
            with self.subTest(entrada=entrada):
                resp = ejecutar_recomendacion(entrada, catalogo=_catalogo())
                self.assertFalse(resp.exito)
                self.assertFalse(resp.recomendado)
                self.assertTrue(resp.error)
                self.assertEqual(SUPUESTOS_VACIOS, resp.supuestos)
                self.assertEqual([], resp.rankings)

    def test_catalogo_vacio_usa_base(self):
        resp = ejecutar_recomendacion(RESPUESTAS, catalogo=CatalogoFijo([]))
        self.assertTrue(resp.exito)
        self.assertEqual("base", resp.fuente_catalogo)
        self.assertTrue(resp.rankings)

    def test_determinista(self):
        a = ejecutar_recomendacion(RESPUESTAS, IRRADIANCIA, catalogo=_catalogo())
        b = ejecutar_recomendacion(RESPUESTAS, IRRADIANCIA, catalogo=_catalogo())
        self.assertEqual(a.a_dict(), b.a_dict())

    def test_norte_con_sombra_sin_ahorro(self):
        resp = ejecutar_recomendacion(
            {**RESPUESTAS, 6: "norden", 8: "mehrere-stunden"}, catalogo=_catalogo()
        )
        for r in resp.rankings:
            self.assertGreaterEqual(r.economia.rendimiento_anual_kwh, 0)
            self.assertLessEqual(r.economia.autoconsumo_kwh, r.economia.rendimiento_anual_kwh)
            self.assertFalse(math.isnan(r.economia.amortizacion_anios))
            self.assertTrue(any("norte" in a for a in r.advertencias))

    def test_a_dict_serializable(self):
        resp = ejecutar_recomendacion(RESPUESTAS, catalogo=_catalogo())
        d = resp.a_dict()
        txt = json.dumps(d, ensure_ascii=False)
        self.assertIn("rankings", json.loads(txt))
        primero = d["rankings"][0]["producto"]
        self.assertIsInstance(primero["montajes"], list)
        self.assertIsInstance(primero["origen"], str)


if __name__ == "__main__":
    unittest.main()
