# core/orquestador.py
from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, List, Optional, Tuple

from electrical.catalogos import cargar_catalogo
from electrical.energia import (
    RendimientoInput,
    RendimientoResultado,
    aspecto_pvgis,
    consumo_anual_kwh,
    ejecutar_motor_rendimiento,
    factor_orientacion,
    factor_sombreado,
    tasa_autoconsumo,
)
from electrical.irradiancia import inclinacion_por_montaje

from .configuracion import SUPUESTOS_BASE, Supuestos
from .contrato import (
    SUPUESTOS_VACIOS,
    Economia,
    Ecologia,
    RankingProducto,
    RespuestaRecomendacion,
    ResumenPerfil,
    SupuestosUsados,
)
from .explicaciones import (
    advertencias_ecologicas,
    advertencias_producto,
    razones_ecologicas,
    razones_producto,
    resumen_ecologico,
)
from .modelo import Irradiancia, Perfil, Producto
from .perfil import construir_perfil, resumen_perfil
from .puertos import PuertoCatalogo, PuertoIrradiancia
from .ranking import decidir_recomendacion, filtrar_productos, ordenar_rankings, puntaje_compuesto
from .servicios.ecologia import calcular_ecologia
from .servicios.finanzas import calcular_economia
from .validacion import validar_respuestas

logger = logging.getLogger(__name__)


# ==========================================================
# Irradiancia (única E/S antes del bucle)
# ==========================================================

def _resolver_irradiancia(
    irradiancia: Any,
    perfil: Perfil,
    proveedor: Optional[PuertoIrradiancia],
) -> Optional[Irradiancia]:
    if irradiancia is not None:
        try:
            return Irradiancia.desde_payload(irradiancia)
        except ValueError as e:
            logger.warning("Irradiancia en caché inválida, se usan tablas estáticas: %s", e)
            return None

    if proveedor is None or perfil.coordenadas is None:
        return None

    lat, lon = perfil.coordenadas
    try:
        irr = proveedor.obtener(
            lat,
            lon,
            inclinacion_por_montaje(perfil.montaje),
            aspecto_pvgis(perfil.orientacion),
        )
    except Exception as e:  # proveedor externo arbitrario
        logger.warning("Proveedor de irradiancia falló (%s: %s)", type(e).__name__, e)
        return None

    if irr is None:
        logger.info("Sin irradiancia del proveedor; se usan tablas estáticas.")
    return irr


# ==========================================================
# Supuestos usados (reinyectables)
# ==========================================================

def construir_supuestos_usados(
    perfil: Perfil,
    irradiancia: Optional[Irradiancia],
    s: Supuestos,
) -> SupuestosUsados:
    return SupuestosUsados(
        precio_electricidad_ct_kwh=s.precio_electricidad_ct_kwh,
        tarifa_inyeccion_ct_kwh=s.tarifa_inyeccion_ct_kwh,
        co2_red_g_kwh=s.co2_red_g_kwh,
        factor_orientacion=factor_orientacion(perfil.orientacion, s.factores_orientacion),
        factor_sombreado=factor_sombreado(perfil.sombreado, s.factores_sombreado),
        tasa_autoconsumo=_tasa(perfil, False, s),
        consumo_anual_kwh=consumo_anual_kwh(
            tamano_hogar=perfil.tamano_hogar,
            consumo_declarado_kwh=perfil.consumo_declarado_kwh,
            tabla=s.consumo_anual_por_hogar,
        ),
        rendimiento_kwh_kwp=irradiancia.rendimiento_anual_kwh_kwp if irradiancia else None,
        uso_irradiancia=irradiancia is not None,
        uso_consumo_declarado=perfil.consumo_declarado_kwh is not None,
        aplicados=s,
    )


def _tasa(perfil: Perfil, con_bateria: bool, s: Supuestos) -> float:
    return tasa_autoconsumo(
        tamano_hogar=perfil.tamano_hogar,
        tiene_almacenamiento=con_bateria,
        orientacion=perfil.orientacion,
        tabla=s.autoconsumo_por_hogar,
        bono_este_oeste=s.bono_este_oeste,
        bono_diagonal=s.bono_diagonal,
        maximo=s.autoconsumo_max,
    )


# ==========================================================
# Evaluación por producto (pura)
# ==========================================================

def evaluar_producto(
    producto: Producto,
    perfil: Perfil,
    usados: SupuestosUsados,
    supuestos: Optional[Supuestos] = None,
) -> Tuple[Economia, Ecologia, RendimientoResultado]:
    """
    rendimiento -> economía -> ecología, todo a partir de `usados`.
    Reinyectar los supuestos de una respuesta reproduce sus números.

    Base: `supuestos` si se pasa, si no `usados.aplicados`, si no SUPUESTOS_BASE.
    Tarifas y CO2 de red salen siempre de los campos planos de `usados`.
    """
    if supuestos is None:
        supuestos = usados.aplicados if usados.aplicados is not None else SUPUESTOS_BASE

    s = replace(
        supuestos,
        precio_electricidad_ct_kwh=usados.precio_electricidad_ct_kwh,
        tarifa_inyeccion_ct_kwh=usados.tarifa_inyeccion_ct_kwh,
        co2_red_g_kwh=usados.co2_red_g_kwh,
    )

    rend = ejecutar_motor_rendimiento(
        RendimientoInput(
            potencia_wp=producto.potencia_wp,
            potencia_ac_w=producto.potencia_ac_w,
            bifacial=producto.bifacial,
            capacidad_almacenamiento_kwh=(
                float(producto.capacidad_kwh) if producto.tiene_almacenamiento else 0.0
            ),
            factor_orientacion=usados.factor_orientacion,
            factor_sombreado=usados.factor_sombreado,
            rendimiento_kwh_kwp=usados.rendimiento_kwh_kwp if usados.uso_irradiancia else None,
            limite_ac_legal_w=s.limite_ac_legal_w,
            rendimiento_base_kwh_wp=s.rendimiento_base_kwh_wp,
            ganancia_bifacial=s.ganancia_bifacial,
            eficiencia_bateria=s.eficiencia_bateria,
        )
    )

    tasa = _tasa(perfil, True, s) if producto.tiene_almacenamiento else usados.tasa_autoconsumo

    economia = calcular_economia(
        producto=producto,
        rendimiento_util_kwh=rend.energia_util_kwh,
        tasa_autoconsumo=tasa,
        consumo_anual_kwh=usados.consumo_anual_kwh,
        supuestos=s,
    )
    ecologia = calcular_ecologia(producto=producto, economia=economia, supuestos=s)

    return economia, ecologia, rend


def _rankear(
    productos: List[Producto],
    perfil: Perfil,
    usados: SupuestosUsados,
    s: Supuestos,
) -> List[RankingProducto]:
    rankings: List[RankingProducto] = []

    for producto in productos:
        economia, ecologia, rend = evaluar_producto(producto, perfil, usados, s)

        if rend.energia_recortada_kwh > 0:
            logger.debug(
                "%s: %.0f kWh recortados por techo AC (%.0f recuperados)",
                producto.id, rend.energia_recortada_kwh, rend.energia_recuperada_kwh,
            )

        rankings.append(
            RankingProducto(
                rank=0,
                producto=producto,
                economia=economia,
                ecologia=ecologia,
                puntaje=puntaje_compuesto(
                    economia.amortizacion_anios,
                    ecologia.puntaje_ecologico,
                    perfil.importancia_eco,
                    s,
                ),
                razones=razones_producto(producto, economia, perfil),
                advertencias=advertencias_producto(economia, perfil),
                razones_ecologicas=razones_ecologicas(producto, ecologia),
                advertencias_ecologicas=advertencias_ecologicas(producto, ecologia),
                resumen_ecologico=resumen_ecologico(producto, economia, ecologia),
            )
        )

    return ordenar_rankings(rankings)


# ==========================================================
# ENTRYPOINT
# ==========================================================

def _respuesta_error(mensaje: str) -> RespuestaRecomendacion:
    return RespuestaRecomendacion(
        exito=False,
        recomendado=False,
        motivo_recomendacion="",
        rankings=[],
        supuestos=SUPUESTOS_VACIOS,
        resumen_perfil=ResumenPerfil(),
        filtrados_fuera=0,
        error=mensaje,
    )


def ejecutar_recomendacion(
    respuestas: Any,
    irradiancia: Any = None,
    *,
    catalogo: Optional[PuertoCatalogo] = None,
    supuestos: Supuestos = SUPUESTOS_BASE,
    proveedor_irradiancia: Optional[PuertoIrradiancia] = None,
) -> RespuestaRecomendacion:
    """
    Flujo lineal:
    Respuestas → Perfil → Irradiancia → Catálogo → Filtro →
    (Rendimiento → Economía → Ecología) por producto → Puntaje → Decisión

    Nunca lanza: entrada inválida o fallo inesperado -> exito=False + error.
    """
    ok, errores = validar_respuestas(respuestas)
    if not ok:
        logger.warning("Respuestas inválidas: %s", "; ".join(errores))
        return _respuesta_error("; ".join(errores))

    try:
        perfil = construir_perfil(respuestas)
        irr = _resolver_irradiancia(irradiancia, perfil, proveedor_irradiancia)

        cat = cargar_catalogo(catalogo)
        elegibles, filtrados_fuera = filtrar_productos(cat.productos, perfil)

        usados = construir_supuestos_usados(perfil, irr, supuestos)
        logger.info(
            "Base de rendimiento: %s",
            f"irradiancia {usados.rendimiento_kwh_kwp:.0f} kWh/kWp"
            if usados.uso_irradiancia
            else f"tablas estáticas (orientación {usados.factor_orientacion}, sombra {usados.factor_sombreado})",
        )

        rankings = _rankear(elegibles, perfil, usados, supuestos)

        decision = decidir_recomendacion(
            perfil,
            len(elegibles),
            usados.factor_orientacion,
            usados.factor_sombreado,
        )
    except Exception as e:
        logger.exception("Fallo inesperado en la recomendación")
        return _respuesta_error(f"Error interno: {type(e).__name__}: {e}")

    logger.info(
        "Recomendación: %s | %d elegibles, %d filtrados (catálogo %s)",
        "sí" if decision.recomendado else "no",
        len(elegibles), filtrados_fuera, cat.fuente,
    )

    return RespuestaRecomendacion(
        exito=True,
        recomendado=decision.recomendado,
        motivo_recomendacion=decision.motivo,
        rankings=rankings,
        supuestos=usados,
        resumen_perfil=resumen_perfil(perfil, respuestas),
        filtrados_fuera=filtrados_fuera,
        fuente_catalogo=cat.fuente,
    )
