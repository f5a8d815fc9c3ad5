from __future__ import annotations

from .contrato import RendimientoInput, RendimientoResultado
from .generacion_bruta import calcular_energia_bruta_dc, rendimiento_por_wp
from .limitacion_inversor import aplicar_recorte, potencia_ac_efectiva, techo_ac_anual


def ejecutar_motor_rendimiento(inp: RendimientoInput) -> RendimientoResultado:
    """
    Bruta DC -> techo AC (legal/inversor) -> recorte / recuperación por batería.

    Garantía: energia_util_kwh <= techo_ac_kwh + recuperacion_max_kwh.
    """

    kwh_wp = rendimiento_por_wp(
        factor_orientacion=inp.factor_orientacion,
        factor_sombreado=inp.factor_sombreado,
        rendimiento_kwh_kwp=inp.rendimiento_kwh_kwp,
        rendimiento_base_kwh_wp=inp.rendimiento_base_kwh_wp,
    )

    bruta = calcular_energia_bruta_dc(
        potencia_wp=inp.potencia_wp,
        rendimiento_kwh_wp=kwh_wp,
        bifacial=inp.bifacial,
        ganancia_bifacial=inp.ganancia_bifacial,
    )

    pac_w = potencia_ac_efectiva(inp.potencia_ac_w, inp.limite_ac_legal_w)
    techo = techo_ac_anual(potencia_ac_w=pac_w, rendimiento_kwh_wp=kwh_wp)

    util, recortada, recuperada, recuperacion_max = aplicar_recorte(
        energia_bruta_kwh=bruta,
        techo_ac_kwh=techo,
        capacidad_kwh=max(0.0, float(inp.capacidad_almacenamiento_kwh or 0.0)),
        eficiencia_bateria=inp.eficiencia_bateria,
    )

    return RendimientoResultado(
        rendimiento_kwh_wp=kwh_wp,
        potencia_ac_efectiva_w=pac_w,
        uso_irradiancia=inp.rendimiento_kwh_kwp is not None,
        energia_bruta_kwh=bruta,
        techo_ac_kwh=techo,
        energia_recortada_kwh=recortada,
        recuperacion_max_kwh=recuperacion_max,
        energia_recuperada_kwh=recuperada,
        energia_util_kwh=util,
    )
