"""Recurso: Ticket Fields (y sus opciones de campo custom).

Referencia: https://developer.zendesk.com/api-reference/ticketing/tickets/ticket_fields/

Las opciones (`custom_field_options`) viajan con su propio envelope, por eso
esos métodos pasan claves distintas a las del recurso.
"""

from __future__ import annotations

from typing import Any

from core.domain.models import ResourceSpec
from core.services.resource_client import ResourceClient

TICKET_FIELDS = ResourceSpec(name="ticket_fields", envelope_keys=("ticket_fields", "ticket_field"))

_COUNT_KEYS = ("count",)
_OPTIONS_KEYS = ("custom_field_options",)
_OPTION_KEYS = ("custom_field_option",)


class TicketFields:
    """Campos de ticket: CRUD, conteo y opciones."""

    spec = TICKET_FIELDS

    def __init__(self, client: ResourceClient) -> None:
        self._client = client

    async def list(self) -> list[dict[str, Any]]:
        return await self._client.get_all(self.spec.path("ticket_fields"), self.spec.envelope_keys)

    async def show(self, ticket_field_id: int) -> dict[str, Any]:
        return await self._client.get(self.spec.path("ticket_fields", ticket_field_id), self.spec.envelope_keys)

    async def count(self) -> dict[str, Any]:
        """Conteo aproximado: `{"value": N, "refreshed_at": ...}`."""

        return await self._client.get(self.spec.path("ticket_fields", "count"), _COUNT_KEYS)

    async def create(self, ticket_field: dict[str, Any]) -> dict[str, Any]:
        return await self._client.post(
            self.spec.path("ticket_fields"), {"ticket_field": ticket_field}, self.spec.envelope_keys
        )

    async def update(self, ticket_field_id: int, ticket_field: dict[str, Any]) -> dict[str, Any]:
        return await self._client.put(
            self.spec.path("ticket_fields", ticket_field_id),
            {"ticket_field": ticket_field},
            self.spec.envelope_keys,
        )

    async def delete(self, ticket_field_id: int) -> None:
        await self._client.delete(self.spec.path("ticket_fields", ticket_field_id))

    async def list_options(self, ticket_field_id: int) -> list[dict[str, Any]]:
        return await self._client.get_all(
            self.spec.path("ticket_fields", ticket_field_id, "options"), _OPTIONS_KEYS
        )

    async def show_option(self, ticket_field_id: int, option_id: int) -> dict[str, Any]:
        return await self._client.get(
            self.spec.path("ticket_fields", ticket_field_id, "options", option_id), _OPTION_KEYS
        )

    async def create_or_update_option(self, ticket_field_id: int, option: dict[str, Any]) -> dict[str, Any]:
        """Crea la opción, o la actualiza si `option` trae `id`."""

        return await self._client.put(
            self.spec.path("ticket_fields", ticket_field_id, "options"),
            {"custom_field_option": option},
            _OPTION_KEYS,
        )

    async def delete_option(self, ticket_field_id: int, option_id: int) -> None:
        await self._client.delete(self.spec.path("ticket_fields", ticket_field_id, "options", option_id))
