import uuid
from datetime import datetime
from typing import Literal

from pydantic import EmailStr, Field

from .common import ApiModel

Role = Literal["admin", "technicien", "utilisateur"]


class UserOut(ApiModel):
    id: uuid.UUID
    email: str
    first_name: str | None = None
    last_name: str | None = None
    role: str
    is_active: bool
    created_at: datetime
    updated_at: datetime


class UserCreateIn(ApiModel):
    email: EmailStr
    password: str = Field(min_length=6, max_length=72)
    first_name: str | None = Field(default=None, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)
    role: Role = "utilisateur"
    is_active: bool = True


class UserUpdateIn(ApiModel):
    email: EmailStr | None = None
    password: str | None = Field(default=None, min_length=6, max_length=72)
    first_name: str | None = Field(default=None, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)
    role: Role | None = None
    is_active: bool | None = None
