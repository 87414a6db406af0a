"""
Tipos y utilidades puras para el espejo de recursos Aptos.

Se mantienen libres de I/O para poder testearlos fácilmente.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


class MalformedResponseError(ValueError):
    """El nodo devolvió un cuerpo que no es una lista de recursos."""


@dataclass(frozen=True)
class Resource:
    """Recurso on-chain de una cuenta: tipo Move + payload arbitrario."""

    type: str
    data: Any = None


def parse_resources(payload: Any) -> list[Resource]:
    """
    Convierte el JSON del endpoint ``/accounts/{account}/resources`` a Resources.

    - El cuerpo debe ser una lista.
    - Cada elemento debe ser un objeto con ``type`` string; ``data`` es opcional.

    Raises:
        MalformedResponseError: si la forma no es la esperada
    """
    if not isinstance(payload, list):
        raise MalformedResponseError(
            f"Se esperaba una lista de recursos, se recibió {type(payload).__name__}"
        )

    resources: list[Resource] = []
    for idx, item in enumerate(payload):
        if not isinstance(item, dict):
            raise MalformedResponseError(f"Recurso #{idx} no es un objeto")
        res_type = item.get("type")
        if not isinstance(res_type, str) or not res_type:
            raise MalformedResponseError(f"Recurso #{idx} sin 'type' válido")
        resources.append(Resource(type=res_type, data=item.get("data")))
    return resources


@dataclass(frozen=True)
class FetchResult:
    """
    Resultado etiquetado de una lectura al nodo.

    Distingue "la cuenta no tiene recursos" (ok con lista vacía) de
    "la lectura falló" (error con causa).
    """

    succeeded: bool
    resources: list[Resource] = field(default_factory=list)
    error: Optional[str] = None

    @classmethod
    def ok(cls, resources: list[Resource]) -> "FetchResult":
        return cls(succeeded=True, resources=list(resources))

    @classmethod
    def failed(cls, error: str) -> "FetchResult":
        return cls(succeeded=False, resources=[], error=error)
