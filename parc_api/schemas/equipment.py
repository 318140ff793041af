import json
import uuid
from datetime import date, datetime
from typing import Literal

from pydantic import Field, field_validator

from .common import ApiModel

EQUIPMENT_TYPES = ("ordinateur", "serveur", "périphérique")
EQUIPMENT_STATUSES = ("en service", "en maintenance", "hors service")

EquipmentType = Literal["ordinateur", "serveur", "périphérique"]
EquipmentStatus = Literal["en service", "en maintenance", "hors service"]


class EquipmentCreateIn(ApiModel):
    type: EquipmentType
    model: str = Field(min_length=1, max_length=200)
    serial_number: str = Field(min_length=1, max_length=100)
    purchase_date: date
    status: EquipmentStatus = "en service"
    assigned_to: uuid.UUID | None = None


class EquipmentUpdateIn(ApiModel):
    type: EquipmentType | None = None
    model: str | None = Field(default=None, min_length=1, max_length=200)
    serial_number: str | None = Field(default=None, min_length=1, max_length=100)
    purchase_date: date | None = None
    status: EquipmentStatus | None = None
    assigned_to: uuid.UUID | None = None


class EquipmentOut(ApiModel):
    id: uuid.UUID
    type: str
    model: str
    serial_number: str
    purchase_date: date
    status: str
    assigned_to: uuid.UUID | None = None
    created_at: datetime
    updated_at: datetime


class EquipmentHistoryOut(ApiModel):
    id: uuid.UUID
    equipment_id: uuid.UUID
    updated_by: uuid.UUID
    changes: dict
    created_at: datetime

    @field_validator("changes", mode="before")
    @classmethod
    def parse_changes(cls, v):
        if isinstance(v, str):
            return json.loads(v)
        return v
