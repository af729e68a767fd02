"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta y documentación autocontenida (Field) sin acoplar
  el Core a librerías de I/O.
- Los modelos son inmutables (`frozen`): un descriptor se construye por
  llamada y se consume una sola vez.

Nota:
- Estos modelos describen *qué* se pide a la API, no *cómo* viaja por la red.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class HttpVerb(str, Enum):
    """Verbos soportados por el core."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


class RequestDescriptor(BaseModel):
    """Una petición lógica contra un recurso.

    Por qué existe:
    - Desacopla el wrapper (que solo conoce paths y claves) del core (que
      sabe de URLs, headers y envelopes).
    """

    model_config = ConfigDict(frozen=True)

    verb: HttpVerb = Field(
        ...,
        description="Verbo HTTP.",
    )
    path_segments: tuple[str | int, ...] = Field(
        ...,
        min_length=1,
        description="Segmentos del path, en orden (p.ej. ('tags', 5)).",
    )
    body: Any = Field(
        default=None,
        description="Cuerpo JSON-serializable (solo POST/PUT).",
    )
    envelope_keys: tuple[str, ...] = Field(
        default=(),
        description="Claves del envelope esperadas; vacío = envelope completo.",
    )
    params: dict[str, Any] | None = Field(
        default=None,
        description="Query string opcional.",
    )


class TransportResponse(BaseModel):
    """Respuesta cruda devuelta por el transport (status, headers, bytes)."""

    model_config = ConfigDict(frozen=True)

    status: int = Field(..., ge=100, le=599)
    headers: dict[str, str] = Field(
        default_factory=dict,
        description="Headers con nombre en minúsculas.",
    )
    body: bytes = Field(default=b"")
    next_link: str | None = Field(
        default=None,
        description="URL con rel=\"next\" del header `Link`, ya parseada por el transport.",
    )

    def header(self, name: str) -> str | None:
        return self.headers.get(name.lower())

    @property
    def is_success(self) -> bool:
        return 200 <= self.status < 300


class ResourceSpec(BaseModel):
    """Registro estático que describe un recurso de la API.

    Se resuelve al construir el wrapper; nunca se muta en runtime.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(
        ...,
        min_length=1,
        description="Nombre lógico (p.ej. 'tags').",
    )
    base_path: tuple[str, ...] = Field(
        default=(),
        description="Prefijo de path del recurso (p.ej. ('channels', 'voice')).",
    )
    envelope_keys: tuple[str, ...] = Field(
        ...,
        min_length=1,
        description="Claves del envelope; se usa la primera presente en la respuesta.",
    )

    def path(self, *segments: str | int) -> tuple[str | int, ...]:
        return (*self.base_path, *segments)
