import uuid
from datetime import datetime
from typing import Literal

from pydantic import Field

from .common import ApiModel

TICKET_STATUSES = ("ouvert", "assigné", "en cours", "résolu", "clôturé")
TICKET_PRIORITIES = ("basse", "moyenne", "haute")
OPEN_TICKET_STATUSES = ("ouvert", "assigné", "en cours")

TicketStatus = Literal["ouvert", "assigné", "en cours", "résolu", "clôturé"]
TicketPriority = Literal["basse", "moyenne", "haute"]


class TicketCreateIn(ApiModel):
    title: str = Field(min_length=1, max_length=200)
    description: str = Field(min_length=1)
    assigned_to: uuid.UUID | None = None
    status: TicketStatus = "ouvert"
    priority: TicketPriority = "moyenne"


class TicketUpdateIn(ApiModel):
    title: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = Field(default=None, min_length=1)
    assigned_to: uuid.UUID | None = None
    status: TicketStatus | None = None
    priority: TicketPriority | None = None


class TicketOut(ApiModel):
    id: uuid.UUID
    title: str
    description: str
    created_by: uuid.UUID
    assigned_to: uuid.UUID | None = None
    status: str
    priority: str
    created_at: datetime
    updated_at: datetime
