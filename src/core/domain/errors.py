"""Errores del cliente REST.

Taxonomía:
- `TransportError`: el servicio no es alcanzable (DNS, conexión, timeout).
- `HttpError`: el servidor respondió con un status no-2xx.
- `DecodeError`: la respuesta no tiene la estructura esperada.
- `ConfigurationError`: faltan subdominio o credenciales.

Todas heredan de `ZendeskError` para que el caller pueda capturarlas juntas.
"""

from __future__ import annotations


class ZendeskError(Exception):
    """Base de todos los errores del cliente.

    `pages_retrieved` solo se rellena en listados paginados: cuántas páginas
    llegaron bien antes del fallo (diagnóstico, nunca datos parciales).
    """

    def __init__(self, message: str, *, pages_retrieved: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.pages_retrieved = pages_retrieved


class ConfigurationError(ZendeskError):
    pass


class TransportError(ZendeskError):
    def __init__(self, message: str, *, url: str | None = None, pages_retrieved: int | None = None) -> None:
        super().__init__(message, pages_retrieved=pages_retrieved)
        self.url = url


class HttpError(ZendeskError):
    def __init__(
        self,
        status: int,
        body: str,
        *,
        url: str | None = None,
        pages_retrieved: int | None = None,
    ) -> None:
        super().__init__(f"HTTP {status} from {url or 'server'}", pages_retrieved=pages_retrieved)
        self.status = status
        self.body = body
        self.url = url


class DecodeError(ZendeskError):
    def __init__(self, message: str, *, url: str | None = None, pages_retrieved: int | None = None) -> None:
        super().__init__(message, pages_retrieved=pages_retrieved)
        self.url = url
