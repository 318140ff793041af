import uuid
from datetime import date, datetime
from typing import Literal

from pydantic import Field, ValidationInfo, field_validator

from .common import ApiModel

MAINTENANCE_TYPES = ("preventive", "corrective", "mise_a_jour")
MAINTENANCE_STATUSES = ("planifie", "en_cours", "termine", "annule")

MaintenanceType = Literal["preventive", "corrective", "mise_a_jour"]
MaintenanceStatus = Literal["planifie", "en_cours", "termine", "annule"]


class MaintenanceCreateIn(ApiModel):
    type: MaintenanceType
    title: str = Field(min_length=1, max_length=200)
    description: str = Field(min_length=1)
    start_date: date
    end_date: date
    status: MaintenanceStatus = "planifie"
    notes: str | None = None

    @field_validator("end_date")
    @classmethod
    def end_not_before_start(cls, v: date, info: ValidationInfo) -> date:
        start = info.data.get("start_date")
        if start is not None and v < start:
            raise ValueError("End date must be on or after start date")
        return v


class MaintenanceUpdateIn(ApiModel):
    type: MaintenanceType | None = None
    title: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = Field(default=None, min_length=1)
    start_date: date | None = None
    end_date: date | None = None
    status: MaintenanceStatus | None = None
    notes: str | None = None


class MaintenanceOut(ApiModel):
    id: uuid.UUID
    type: str
    title: str
    description: str
    start_date: date
    end_date: date
    status: str
    notes: str | None = None
    created_by: uuid.UUID | None = None
    created_at: datetime
    updated_at: datetime


class MaintenanceDetailOut(MaintenanceOut):
    technician_ids: list[uuid.UUID] = Field(default_factory=list)
    equipment_ids: list[uuid.UUID] = Field(default_factory=list)
