import uuid
from datetime import datetime

from pydantic import Field

from .common import ApiModel


class LicenseCreateIn(ApiModel):
    name: str = Field(min_length=1, max_length=200)
    vendor: str = Field(min_length=1, max_length=200)
    type: str = Field(min_length=1, max_length=100)
    license_key: str | None = None
    max_users: int | None = Field(default=None, ge=0)
    current_users: int = Field(default=0, ge=0)
    cost: int | None = Field(default=None, ge=0)


class LicenseUpdateIn(ApiModel):
    name: str | None = Field(default=None, min_length=1, max_length=200)
    vendor: str | None = Field(default=None, min_length=1, max_length=200)
    type: str | None = Field(default=None, min_length=1, max_length=100)
    license_key: str | None = None
    max_users: int | None = Field(default=None, ge=0)
    current_users: int | None = Field(default=None, ge=0)
    cost: int | None = Field(default=None, ge=0)


class LicenseOut(ApiModel):
    id: uuid.UUID
    name: str
    vendor: str
    type: str
    license_key: str | None = None
    max_users: int | None = None
    current_users: int
    cost: int | None = None
    created_at: datetime
    updated_at: datetime
