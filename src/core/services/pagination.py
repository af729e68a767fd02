"""Localizadores de página siguiente y estado de la cadena de páginas.

La API usa varias convenciones según el endpoint; se comprueban en orden:

1. Cursor: `meta.has_more` + `links.next`.
2. Offset: `next_page` en el cuerpo.
3. Export incremental: `after_url` salvo que `end_of_stream` sea true.
4. Header `Link` con `rel="next"` (lo parsea el transport: `next_link`).

El localizador se toma tal cual de la respuesta anterior; nunca se recalcula.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any
from urllib.parse import urljoin

from core.domain.models import TransportResponse


def _non_empty_str(value: object) -> str | None:
    if isinstance(value, str) and value.strip():
        return value
    return None


def next_page_locator(envelope: Any, response: TransportResponse) -> str | None:
    """Devuelve el localizador de la página siguiente o `None` si no hay más.

    Si el cuerpo no es un objeto JSON (p.ej. un array) solo cuenta el header.
    """

    if not isinstance(envelope, dict):
        return _non_empty_str(response.next_link)

    meta = envelope.get("meta")
    links = envelope.get("links")
    if isinstance(meta, dict) and "has_more" in meta:
        if not meta.get("has_more"):
            return None
        if isinstance(links, dict):
            cursor_next = _non_empty_str(links.get("next"))
            if cursor_next:
                return cursor_next

    offset_next = _non_empty_str(envelope.get("next_page"))
    if offset_next:
        return offset_next

    if "after_url" in envelope and not envelope.get("end_of_stream"):
        after = _non_empty_str(envelope.get("after_url"))
        if after:
            return after

    return _non_empty_str(response.next_link)


def resolve_locator(locator: str, endpoint_uri: str) -> str:
    """Resuelve localizadores relativos contra el endpoint (los absolutos no cambian)."""

    return urljoin(endpoint_uri.rstrip("/") + "/", locator)


@dataclass
class PageAccumulator:
    """Estado de una cadena de páginas: cursor, páginas leídas y URLs pedidas.

    Vive lo que dura una llamada; no se comparte entre llamadas. Los items
    los acumula quien consume `iter_pages` (`get_all`).
    """

    cursor: str | None = None
    pages: int = 0
    requested: set[str] = field(default_factory=set)

    def add_page(self, next_locator: str | None) -> None:
        self.cursor = next_locator
        self.pages += 1

    @property
    def exhausted(self) -> bool:
        return self.cursor is None
