"""Recurso: invitaciones de encuestas NPS.

Referencia: https://developer.zendesk.com/api-reference/ticketing/nps/nps-api/
"""

from __future__ import annotations

from typing import Any

from core.domain.models import ResourceSpec
from core.services.resource_client import ResourceClient

INVITATIONS = ResourceSpec(name="invitations", base_path=("nps", "surveys"), envelope_keys=("invitations", "invitation"))


class Invitations:
    spec = INVITATIONS

    def __init__(self, client: ResourceClient) -> None:
        self._client = client

    async def list(self, survey_id: int | str) -> list[dict[str, Any]]:
        return await self._client.get_all(self.spec.path(survey_id, "invitations"), self.spec.envelope_keys)

    async def show(self, survey_id: int | str, invitation_id: int | str) -> dict[str, Any]:
        return await self._client.get(self.spec.path(survey_id, "invitations", invitation_id), self.spec.envelope_keys)

    async def create(self, survey_id: int | str, data: dict[str, Any]) -> dict[str, Any]:
        """Envía invitaciones a una encuesta.

        `data` sigue el formato de la API: `{"invitation": {"recipients": [...],
        "subject": ..., "body": ...}}`.
        """

        return await self._client.post(self.spec.path(survey_id, "invitations"), data, self.spec.envelope_keys)
