"""Recurso: Tags.

Referencia: https://developer.zendesk.com/api-reference/sales-crm/resources/tags/
"""

from __future__ import annotations

from typing import Any

from core.domain.models import ResourceSpec
from core.services.resource_client import ResourceClient

TAGS = ResourceSpec(name="tags", envelope_keys=("tags", "tag"))


class Tags:
    """CRUD de tags."""

    spec = TAGS

    def __init__(self, client: ResourceClient) -> None:
        self._client = client

    async def list(self) -> list[dict[str, Any]]:
        """Todos los tags visibles para el usuario (todas las páginas)."""

        return await self._client.get_all(self.spec.path("tags"), self.spec.envelope_keys)

    async def create(self, tag_data: dict[str, Any]) -> dict[str, Any]:
        """Crea un tag (`name`, `resource_type`: lead, contact o deal)."""

        return await self._client.post(self.spec.path("tags"), tag_data, self.spec.envelope_keys)

    async def show(self, tag_id: int) -> dict[str, Any]:
        return await self._client.get(self.spec.path("tags", tag_id), self.spec.envelope_keys)

    async def update(self, tag_id: int, updated_data: dict[str, Any]) -> dict[str, Any]:
        return await self._client.put(self.spec.path("tags", tag_id), updated_data, self.spec.envelope_keys)

    async def delete(self, tag_id: int) -> None:
        await self._client.delete(self.spec.path("tags", tag_id))
