import uuid
from datetime import datetime
from typing import Literal

from pydantic import Field

from .common import ApiModel

INVENTORY_CONDITIONS = ("fonctionnel", "défectueux")

Condition = Literal["fonctionnel", "défectueux"]


class InventoryCreateIn(ApiModel):
    equipment_id: uuid.UUID
    assigned_to: uuid.UUID | None = None
    location: str = Field(min_length=1, max_length=200)
    last_checked: datetime | None = None
    condition: Condition = "fonctionnel"


class InventoryUpdateIn(ApiModel):
    equipment_id: uuid.UUID | None = None
    assigned_to: uuid.UUID | None = None
    location: str | None = Field(default=None, min_length=1, max_length=200)
    last_checked: datetime | None = None
    condition: Condition | None = None


class InventoryOut(ApiModel):
    id: uuid.UUID
    equipment_id: uuid.UUID
    assigned_to: uuid.UUID | None = None
    location: str
    last_checked: datetime | None = None
    condition: str
    created_at: datetime
    updated_at: datetime
