"""Core genérico de recursos REST con paginación.

Responsabilidad:
- Convertir un `RequestDescriptor` en una URL + petición HTTP.
- Desenvolver el envelope JSON usando las claves que indique el caller.
- Seguir los localizadores de página siguiente hasta agotar el listado (o
  hasta el límite de páginas pedido) devolviendo una lista plana.

Semántica de fallos:
- Nunca se tragan errores: `TransportError`, `HttpError` y `DecodeError`
  llegan siempre al caller.
- Un fallo en la página N>1 se propaga con `pages_retrieved`; jamás se
  devuelven datos parciales como si fueran completos.
- Sin reintentos por defecto. `max_retries` activa reintentos solo ante 429/503.
"""

from __future__ import annotations

import asyncio
import json
from typing import Any, AsyncIterator, Mapping, Sequence
from urllib.parse import quote, unquote, urlencode

from loguru import logger

from core.domain.errors import DecodeError, HttpError, ZendeskError
from core.domain.models import HttpVerb, RequestDescriptor, TransportResponse
from core.interfaces.transport import HttpTransport
from core.services.pagination import PageAccumulator, next_page_locator, resolve_locator

RETRYABLE_STATUSES = frozenset({429, 503})

PathSegments = Sequence[str | int]


def encode_segment(segment: str | int) -> str:
    """Percent-encode de un segmento; los ya codificados se dejan tal cual."""

    text = str(segment)
    if not text:
        raise ValueError("Path segments must not be empty")
    if quote(unquote(text), safe="") == text:
        return text
    return quote(text, safe="")


def _query_value(value: Any) -> Any:
    if isinstance(value, bool):
        return "true" if value else "false"
    return value


class ResourceClient:
    """Cliente HTTP genérico compartido por todos los wrappers de recursos.

    No guarda estado mutable entre llamadas: cada `get`/`get_all`/`post`/
    `put`/`delete` es independiente y puede ejecutarse en paralelo.
    """

    def __init__(
        self,
        transport: HttpTransport,
        *,
        endpoint_uri: str,
        headers: Mapping[str, str] | None = None,
        max_retries: int = 0,
        retry_after_default_seconds: float = 60.0,
        max_pages: int | None = None,
    ) -> None:
        if max_retries < 0:
            raise ValueError("max_retries must be >= 0")
        self._transport = transport
        self._endpoint_uri = endpoint_uri.rstrip("/")
        self._headers: dict[str, str] = {
            "Accept": "application/json",
            "Content-Type": "application/json",
        }
        if headers:
            self._headers.update(headers)
        self._max_retries = max_retries
        self._retry_after_default = retry_after_default_seconds
        self._max_pages = max_pages

    @property
    def endpoint_uri(self) -> str:
        return self._endpoint_uri

    def build_url(self, path_segments: PathSegments, params: Mapping[str, Any] | None = None) -> str:
        if not path_segments:
            raise ValueError("At least one path segment is required")
        path = "/".join(encode_segment(segment) for segment in path_segments)
        url = f"{self._endpoint_uri}/{path}"
        if params:
            query = urlencode({k: _query_value(v) for k, v in params.items()}, doseq=True)
            url = f"{url}?{query}"
        return url

    # -- operaciones públicas -------------------------------------------------

    async def get(
        self,
        path_segments: PathSegments,
        envelope_keys: Sequence[str] = (),
        *,
        params: Mapping[str, Any] | None = None,
    ) -> Any:
        descriptor = RequestDescriptor(
            verb=HttpVerb.GET,
            path_segments=tuple(path_segments),
            envelope_keys=tuple(envelope_keys),
            params=dict(params) if params else None,
        )
        return await self._execute(descriptor)

    async def get_all(
        self,
        path_segments: PathSegments,
        envelope_keys: Sequence[str] = (),
        *,
        params: Mapping[str, Any] | None = None,
        max_pages: int | None = None,
    ) -> list[Any]:
        """Recorre todas las páginas y devuelve los items concatenados en orden."""

        items: list[Any] = []
        async for page in self.iter_pages(path_segments, envelope_keys, params=params, max_pages=max_pages):
            items.extend(page)
        return items

    async def iter_pages(
        self,
        path_segments: PathSegments,
        envelope_keys: Sequence[str] = (),
        *,
        params: Mapping[str, Any] | None = None,
        max_pages: int | None = None,
    ) -> AsyncIterator[list[Any]]:
        """Generador asíncrono que produce los items de cada página según llegan.

        La página N+1 no se pide hasta tener la respuesta de la N: la cadena de
        cursores es secuencial por definición.
        """

        descriptor = RequestDescriptor(
            verb=HttpVerb.GET,
            path_segments=tuple(path_segments),
            envelope_keys=tuple(envelope_keys),
            params=dict(params) if params else None,
        )
        limit = max_pages if max_pages is not None else self._max_pages
        if limit is not None and limit < 1:
            raise ValueError("max_pages must be >= 1")

        state = PageAccumulator()
        url = self.build_url(descriptor.path_segments, descriptor.params)
        try:
            while True:
                state.requested.add(url)
                response = await self._send(HttpVerb.GET, url, None)
                envelope = self._decode(response, url)
                page_items = self._unwrap(envelope, descriptor.envelope_keys, url)
                if not isinstance(page_items, list):
                    raise DecodeError(
                        f"Expected a list under {list(descriptor.envelope_keys)}, got {type(page_items).__name__}",
                        url=url,
                    )
                state.add_page(next_page_locator(envelope, response))
                logger.debug(f"Page {state.pages} of {url}: {len(page_items)} items")
                yield page_items

                if state.exhausted:
                    return
                if limit is not None and state.pages >= limit:
                    logger.info(f"Stopping pagination of {descriptor.path_segments} after {state.pages} pages (limit)")
                    return

                url = resolve_locator(state.cursor or "", self._endpoint_uri)
                if url in state.requested:
                    raise DecodeError(f"Pagination loop: {url} was already requested", url=url)
        except ZendeskError as exc:
            exc.pages_retrieved = state.pages
            # HttpError y TransportError ya se registran donde se elevan.
            if isinstance(exc, DecodeError):
                logger.error(f"Pagination of {descriptor.path_segments} failed after {state.pages} pages: {exc}")
            else:
                logger.debug(f"Pagination of {descriptor.path_segments} stopped after {state.pages} pages")
            raise
        except asyncio.CancelledError:
            logger.info(f"Pagination of {descriptor.path_segments} cancelled after {state.pages} pages")
            raise

    async def post(self, path_segments: PathSegments, body: Any, envelope_keys: Sequence[str] = ()) -> Any:
        descriptor = RequestDescriptor(
            verb=HttpVerb.POST,
            path_segments=tuple(path_segments),
            body=body,
            envelope_keys=tuple(envelope_keys),
        )
        return await self._execute(descriptor)

    async def put(self, path_segments: PathSegments, body: Any, envelope_keys: Sequence[str] = ()) -> Any:
        descriptor = RequestDescriptor(
            verb=HttpVerb.PUT,
            path_segments=tuple(path_segments),
            body=body,
            envelope_keys=tuple(envelope_keys),
        )
        return await self._execute(descriptor)

    async def delete(self, path_segments: PathSegments) -> None:
        descriptor = RequestDescriptor(verb=HttpVerb.DELETE, path_segments=tuple(path_segments))
        await self._execute(descriptor)

    # -- plumbing -------------------------------------------------------------

    async def _execute(self, descriptor: RequestDescriptor) -> Any:
        url = self.build_url(descriptor.path_segments, descriptor.params)
        payload = None
        if descriptor.body is not None:
            payload = json.dumps(descriptor.body).encode("utf-8")

        response = await self._send(descriptor.verb, url, payload)
        if descriptor.verb is HttpVerb.DELETE:
            return None

        try:
            envelope = self._decode(response, url)
            return self._unwrap(envelope, descriptor.envelope_keys, url)
        except DecodeError as exc:
            logger.error(f"Unexpected response to {descriptor.verb.value} {url}: {exc}")
            raise

    async def _send(self, verb: HttpVerb, url: str, payload: bytes | None) -> TransportResponse:
        attempt = 0
        while True:
            logger.debug(f"{verb.value} {url}")
            response = await self._transport.request(verb.value, url, self._headers, payload)
            if response.is_success:
                return response

            if response.status in RETRYABLE_STATUSES and attempt < self._max_retries:
                attempt += 1
                delay = self._retry_delay(response)
                logger.warning(
                    f"HTTP {response.status} on {verb.value} {url}; retry {attempt}/{self._max_retries} in {delay}s"
                )
                await asyncio.sleep(delay)
                continue

            body = response.body.decode("utf-8", errors="replace")
            logger.error(f"HTTP error {response.status} on {verb.value} {url}: {body[:500]}")
            raise HttpError(response.status, body, url=url)

    def _retry_delay(self, response: TransportResponse) -> float:
        raw = response.header("retry-after")
        if raw is not None:
            try:
                return max(0.0, float(raw))
            except ValueError:
                pass
        return self._retry_after_default

    @staticmethod
    def _decode(response: TransportResponse, url: str) -> Any:
        if not response.body.strip():
            raise DecodeError(f"Empty body (HTTP {response.status}) where JSON was expected", url=url)
        try:
            return json.loads(response.body)
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise DecodeError(f"Invalid JSON in response: {exc}", url=url) from exc

    @staticmethod
    def _unwrap(envelope: Any, envelope_keys: Sequence[str], url: str) -> Any:
        if not envelope_keys:
            return envelope
        if not isinstance(envelope, dict):
            raise DecodeError(f"Expected a JSON object, got {type(envelope).__name__}", url=url)
        for key in envelope_keys:
            if key in envelope:
                return envelope[key]
        raise DecodeError(
            f"None of the expected keys {list(envelope_keys)} in response (got {sorted(envelope)})",
            url=url,
        )
