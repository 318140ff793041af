from pydantic import Field, field_validator

from .common import ApiModel
from .user import UserOut


def _password_bytes_le_72(v: str) -> str:
    if len(v.encode("utf-8")) > 72:
        raise ValueError("Password must be <= 72 bytes (bcrypt limit).")
    return v


class LoginIn(ApiModel):
    email: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=1, max_length=72)

    @field_validator("password")
    @classmethod
    def login_password_bytes_le_72(cls, v: str) -> str:
        return _password_bytes_le_72(v)


class RegisterIn(ApiModel):
    email: str = Field(min_length=3, max_length=255)
    password: str = Field(min_length=6, max_length=72)
    first_name: str | None = Field(default=None, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()

    @field_validator("password")
    @classmethod
    def register_password_bytes_le_72(cls, v: str) -> str:
        return _password_bytes_le_72(v)


class AuthUserOut(ApiModel):
    user: UserOut


class MessageOut(ApiModel):
    message: str
