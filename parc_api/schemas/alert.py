import uuid
from datetime import datetime
from typing import Literal

from pydantic import Field

from .common import ApiModel, EntityRef

ALERT_TYPES = ("licence", "securite", "maintenance", "systeme")
ALERT_PRIORITIES = ("haute", "moyenne", "basse")
ALERT_STATUSES = ("nouvelle", "en_cours", "resolue")

AlertType = Literal["licence", "securite", "maintenance", "systeme"]
AlertPriority = Literal["haute", "moyenne", "basse"]
AlertStatus = Literal["nouvelle", "en_cours", "resolue"]


class AlertCreateIn(ApiModel):
    type: AlertType
    title: str = Field(min_length=1, max_length=200)
    description: str = Field(min_length=1)
    priority: AlertPriority
    status: AlertStatus = "nouvelle"
    assigned_to: uuid.UUID | None = None
    entity: EntityRef | None = None


class AlertUpdateIn(ApiModel):
    type: AlertType | None = None
    title: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = Field(default=None, min_length=1)
    priority: AlertPriority | None = None
    status: AlertStatus | None = None
    assigned_to: uuid.UUID | None = None
    entity: EntityRef | None = None


class AlertOut(ApiModel):
    id: uuid.UUID
    type: str
    title: str
    description: str
    priority: str
    status: str
    created_by: uuid.UUID | None = None
    assigned_to: uuid.UUID | None = None
    entity: EntityRef | None = None
    created_at: datetime
    updated_at: datetime
