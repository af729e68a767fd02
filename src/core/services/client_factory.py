"""Ensamblado del cliente completo.

Este módulo conecta settings, autenticación, transport httpx, el core
genérico y los wrappers de recursos. Los wrappers se componen sobre un único
`ResourceClient` compartido; ninguno hereda de él.
"""

from __future__ import annotations

from types import TracebackType

from adapters.http_client import HttpxTransport, build_async_client, build_auth_headers
from adapters.resources import HistoricalQueueActivity, Invitations, Tags, TicketFields
from core.config import AppSettings
from core.domain.errors import ConfigurationError
from core.interfaces.transport import HttpTransport
from core.services.resource_client import ResourceClient


class ZendeskClient:
    """Fachada con un atributo por recurso (`client.tags.list()`, etc.)."""

    def __init__(self, core: ResourceClient, transport: HttpTransport | None = None) -> None:
        self.core = core
        self._transport = transport
        self.tags = Tags(core)
        self.ticketfields = TicketFields(core)
        self.invitations = Invitations(core)
        self.historicalqueueactivity = HistoricalQueueActivity(core)

    async def aclose(self) -> None:
        aclose = getattr(self._transport, "aclose", None)
        if aclose is not None:
            await aclose()

    async def __aenter__(self) -> "ZendeskClient":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()


def create_client(
    settings: AppSettings | None = None,
    *,
    transport: HttpTransport | None = None,
) -> ZendeskClient:
    """Construye un `ZendeskClient` a partir de la configuración.

    Si no se pasa `transport`, se crea un `HttpxTransport`. En ambos casos el
    cliente cierra el transport en `aclose()` si este expone `aclose`.
    """

    settings = settings or AppSettings()
    endpoint_uri = settings.endpoint_uri()
    if not endpoint_uri:
        raise ConfigurationError("Missing endpoint: set ZENDESK_SUBDOMAIN or ZENDESK_REMOTE_URI")

    auth_headers = build_auth_headers(settings)
    if transport is None:
        transport = HttpxTransport(build_async_client(settings))

    core = ResourceClient(
        transport,
        endpoint_uri=endpoint_uri,
        headers=auth_headers,
        max_retries=settings.max_retries,
        retry_after_default_seconds=settings.retry_after_default_seconds,
        max_pages=settings.max_pages,
    )
    return ZendeskClient(core, transport)
