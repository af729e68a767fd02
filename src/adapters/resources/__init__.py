"""Wrappers de recursos (hojas sobre el core).

Por qué un paquete:
- Agrupa un módulo por recurso de la API (tags, ticket fields, NPS, voz).
- Cada wrapper solo construye paths: la lógica HTTP vive en
  `core.services.resource_client.ResourceClient`.
"""

from adapters.resources.historical_queue_activity import (
    HISTORICAL_QUEUE_ACTIVITY,
    HistoricalQueueActivity,
)
from adapters.resources.invitations import INVITATIONS, Invitations
from adapters.resources.tags import TAGS, Tags
from adapters.resources.ticket_fields import TICKET_FIELDS, TicketFields

__all__ = [
    "HISTORICAL_QUEUE_ACTIVITY",
    "INVITATIONS",
    "TAGS",
    "TICKET_FIELDS",
    "HistoricalQueueActivity",
    "Invitations",
    "Tags",
    "TicketFields",
]
