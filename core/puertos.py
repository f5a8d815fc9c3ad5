from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Protocol

if TYPE_CHECKING:
    from core.modelo import Irradiancia
    from electrical.catalogos.catalogos import ResultadoCatalogo


class PuertoCatalogo(Protocol):
    def cargar(self) -> "ResultadoCatalogo": ...


class PuertoIrradiancia(Protocol):
    def obtener(
        self, lat: float, lon: float, inclinacion: float, azimut: float
    ) -> Optional["Irradiancia"]: ...
