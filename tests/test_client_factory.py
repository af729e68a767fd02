from unittest.mock import AsyncMock

import pytest

from adapters.http_client import HttpxTransport
from core.config import AppSettings
from core.domain.errors import ConfigurationError
from core.services.client_factory import ZendeskClient, create_client

from conftest import ENDPOINT, FakeTransport, json_response


def test_create_client_wires_resources(settings):
    transport = FakeTransport()

    client = create_client(settings, transport=transport)

    assert isinstance(client, ZendeskClient)
    assert client.core.endpoint_uri == ENDPOINT
    assert client.tags._client is client.core
    assert client.ticketfields._client is client.core
    assert client.invitations._client is client.core
    assert client.historicalqueueactivity._client is client.core


def test_remote_uri_overrides_subdomain():
    settings = AppSettings(
        _env_file=None,
        subdomain="acme",
        remote_uri="https://proxy.internal/zendesk/api/v2/",
        oauth_token="t",
    )

    client = create_client(settings, transport=FakeTransport())

    assert client.core.endpoint_uri == "https://proxy.internal/zendesk/api/v2"


def test_missing_endpoint():
    with pytest.raises(ConfigurationError, match="endpoint"):
        create_client(AppSettings(_env_file=None, oauth_token="t"), transport=FakeTransport())


def test_default_transport_is_httpx(settings):
    client = create_client(settings)

    assert isinstance(client._transport, HttpxTransport)


@pytest.mark.asyncio
async def test_requests_carry_auth_and_close_transport(settings):
    transport = FakeTransport(json_response({"tags": [{"id": 1}]}))
    transport.aclose = AsyncMock()

    async with create_client(settings, transport=transport) as client:
        assert await client.tags.list() == [{"id": 1}]

    assert transport.calls[0].headers["Authorization"].startswith("Basic ")
    transport.aclose.assert_awaited_once()


@pytest.mark.asyncio
async def test_settings_limits_reach_core(settings):
    settings = settings.model_copy(update={"max_pages": 1})
    transport = FakeTransport(json_response({"tags": [{"id": 1}], "next_page": f"{ENDPOINT}/tags?page=2"}))

    client = create_client(settings, transport=transport)

    assert await client.tags.list() == [{"id": 1}]
    assert len(transport.calls) == 1
