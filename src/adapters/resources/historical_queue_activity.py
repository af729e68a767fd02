"""Recurso: actividad histórica de colas (Talk / voz).

Los endpoints de voz cuelgan de `channels/voice`.
"""

from __future__ import annotations

from typing import Any

from core.domain.models import ResourceSpec
from core.services.resource_client import ResourceClient

HISTORICAL_QUEUE_ACTIVITY = ResourceSpec(
    name="historical_queue_activity",
    base_path=("channels", "voice"),
    envelope_keys=("historical_queue_activity", "historical_queue_activities"),
)


class HistoricalQueueActivity:
    spec = HISTORICAL_QUEUE_ACTIVITY

    def __init__(self, client: ResourceClient) -> None:
        self._client = client

    async def show(self) -> dict[str, Any]:
        return await self._client.get(self.spec.path("stats", "historical_queue_activity"), self.spec.envelope_keys)
