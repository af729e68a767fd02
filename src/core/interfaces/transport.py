"""Contrato del transport HTTP.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- El core no implementa TCP/TLS ni pooling: eso es cosa del adaptador
  (httpx) y queda intercambiable en tests.
"""

from __future__ import annotations

from typing import Mapping, Protocol, runtime_checkable

from core.domain.models import TransportResponse


@runtime_checkable
class HttpTransport(Protocol):
    """Contrato mínimo para ejecutar un intercambio HTTP.

    Reglas de diseño:
    - `request` es asíncrono: cada llamada es independiente y concurrente.
    - Fallos de red se elevan como `core.domain.errors.TransportError`; un
      status no-2xx NO es un error a este nivel.
    """

    async def request(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        body: bytes | None,
    ) -> TransportResponse:
        """Ejecuta la petición y devuelve la respuesta cruda."""

        ...
