import uuid
from datetime import datetime

from pydantic import EmailStr, Field

from .common import ApiModel


class EmployeeCreateIn(ApiModel):
    name: str = Field(min_length=1, max_length=200)
    email: EmailStr
    department: str = Field(min_length=1, max_length=100)
    position: str = Field(min_length=1, max_length=100)


class EmployeeUpdateIn(ApiModel):
    name: str | None = Field(default=None, min_length=1, max_length=200)
    email: EmailStr | None = None
    department: str | None = Field(default=None, min_length=1, max_length=100)
    position: str | None = Field(default=None, min_length=1, max_length=100)


class EmployeeOut(ApiModel):
    id: uuid.UUID
    name: str
    email: str
    department: str
    position: str
    created_at: datetime
    updated_at: datetime
