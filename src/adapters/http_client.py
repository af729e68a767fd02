"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts, headers y autenticación para todas las llamadas.
- Implementa `core.interfaces.transport.HttpTransport`, así el core no importa
  httpx y los tests pueden sustituirlo por un fake.
"""

from __future__ import annotations

import base64
from typing import Mapping

import httpx
from loguru import logger

from core.config import AppSettings
from core.domain.errors import ConfigurationError, TransportError
from core.domain.models import TransportResponse


def build_async_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` con defaults seguros.

    Por qué un builder:
    - Centraliza timeouts/headers para que todos los recursos se comporten igual.
    - `transport` permite inyectar `httpx.MockTransport` en tests.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json",
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )


def build_auth_headers(settings: AppSettings) -> dict[str, str]:
    """Header `Authorization` según las credenciales configuradas.

    Prioridad: OAuth (Bearer) > email + API token > email + password.
    """

    if settings.oauth_token:
        return {"Authorization": f"Bearer {settings.oauth_token}"}

    if settings.username and settings.token:
        # Formato de API token: {email}/token:{api_token}
        credentials = f"{settings.username}/token:{settings.token}"
    elif settings.username and settings.password:
        credentials = f"{settings.username}:{settings.password}"
    else:
        raise ConfigurationError(
            "Missing credentials: set ZENDESK_OAUTH_TOKEN, or ZENDESK_USERNAME with ZENDESK_TOKEN or ZENDESK_PASSWORD"
        )

    encoded = base64.b64encode(credentials.encode("utf-8")).decode("ascii")
    return {"Authorization": f"Basic {encoded}"}


class HttpxTransport:
    """`HttpTransport` sobre un `httpx.AsyncClient` (pooling incluido)."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def request(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        body: bytes | None,
    ) -> TransportResponse:
        try:
            response = await self._client.request(method, url, headers=dict(headers), content=body)
        except httpx.TimeoutException as exc:
            logger.error(f"Timeout on {method} {url}: {exc!r}")
            raise TransportError(f"Timeout on {method} {url}", url=url) from exc
        except httpx.TransportError as exc:
            logger.error(f"Connection failure on {method} {url}: {exc!r}")
            raise TransportError(f"Connection failure on {method} {url}: {exc}", url=url) from exc

        return TransportResponse(
            status=response.status_code,
            headers={name.lower(): value for name, value in response.headers.items()},
            body=response.content,
            next_link=response.links.get("next", {}).get("url"),
        )

    async def aclose(self) -> None:
        await self._client.aclose()
