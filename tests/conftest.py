"""
Fixtures compartidas.

`FakeTransport` implementa `HttpTransport`: graba cada petición y devuelve
respuestas encoladas en orden. Un `asyncio.Event` encolado bloquea la
petición (para probar cancelación); una excepción encolada se eleva.
"""

from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass
from typing import Any, Mapping

import pytest

from core.config import AppSettings
from core.domain.models import TransportResponse
from core.services.resource_client import ResourceClient

ENDPOINT = "https://acme.zendesk.com/api/v2"


def json_response(
    payload: Any,
    status: int = 200,
    headers: dict[str, str] | None = None,
    next_link: str | None = None,
) -> TransportResponse:
    return TransportResponse(
        status=status,
        headers={k.lower(): v for k, v in (headers or {}).items()},
        body=json.dumps(payload).encode("utf-8"),
        next_link=next_link,
    )


def empty_response(status: int = 204) -> TransportResponse:
    return TransportResponse(status=status, headers={}, body=b"")


@dataclass
class RecordedCall:
    method: str
    url: str
    headers: dict[str, str]
    body: bytes | None

    def json(self) -> Any:
        assert self.body is not None
        return json.loads(self.body)


class FakeTransport:
    def __init__(self, *responses: Any) -> None:
        self.calls: list[RecordedCall] = []
        self._responses: list[Any] = list(responses)

    def queue(self, *responses: Any) -> None:
        self._responses.extend(responses)

    async def request(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        body: bytes | None,
    ) -> TransportResponse:
        self.calls.append(RecordedCall(method, url, dict(headers), body))
        if not self._responses:
            raise AssertionError(f"Unexpected request: {method} {url}")
        item = self._responses.pop(0)
        if isinstance(item, asyncio.Event):
            await item.wait()
            raise AssertionError("Blocked request was released")
        if isinstance(item, BaseException):
            raise item
        return item


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def core(transport: FakeTransport) -> ResourceClient:
    return ResourceClient(transport, endpoint_uri=ENDPOINT, headers={"Authorization": "Bearer test-token"})


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(
        _env_file=None,
        subdomain="acme",
        username="agent@acme.test",
        token="api-token",
    )
