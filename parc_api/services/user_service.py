from __future__ import annotations

import logging
import secrets
import uuid
from functools import lru_cache

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from ..core.security import hash_password, verify_password
from ..db import transaction
from ..models import User, ROLE_ADMIN, ROLE_USER
from ..schemas.user import UserCreateIn, UserUpdateIn
from .crud import apply_patch, ensure_unique, get_by_id, list_all
from .session_service import destroy_user_sessions

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


def get_user(session: Session, user_id: uuid.UUID) -> User | None:
    return get_by_id(session, User, user_id)


def get_user_by_email(session: Session, email: str) -> User | None:
    return session.scalar(select(User).where(func.lower(User.email) == normalize_email(email)))


def list_users(session: Session) -> list[User]:
    return list_all(session, User)


@lru_cache(maxsize=1)
def _dummy_password_hash() -> str:
    return hash_password(secrets.token_urlsafe(16))


def authenticate_user(session: Session, email: str, password: str) -> User | None:
    """Return the user when the credentials match an active account."""
    user = get_user_by_email(session, email)
    if not user:
        # Same bcrypt cost as a real check, so timing does not reveal unknown emails.
        verify_password(password, _dummy_password_hash())
        return None
    if not verify_password(password, user.password_hash):
        return None
    if not user.is_active:
        return None
    return user


def create_user(
    session: Session,
    *,
    email: str,
    password: str,
    first_name: str | None = None,
    last_name: str | None = None,
    role: str = ROLE_USER,
    is_active: bool = True,
) -> User:
    email = normalize_email(email)
    ensure_unique(session, User.email, email, path="email")
    user = User(
        email=email,
        password_hash=hash_password(password),
        first_name=first_name,
        last_name=last_name,
        role=role,
        is_active=is_active,
    )
    with transaction(session):
        session.add(user)
    logger.info("Created user %s with role %s", user.email, user.role)
    return user


def create_user_from_input(session: Session, payload: UserCreateIn) -> User:
    return create_user(
        session,
        email=payload.email,
        password=payload.password,
        first_name=payload.first_name,
        last_name=payload.last_name,
        role=payload.role,
        is_active=payload.is_active,
    )


def update_user(session: Session, user_id: uuid.UUID, payload: UserUpdateIn) -> User | None:
    user = get_user(session, user_id)
    if not user:
        return None

    data = payload.model_dump(exclude_unset=True)
    password = data.pop("password", None)
    if data.get("email") is not None:
        data["email"] = normalize_email(data["email"])
        ensure_unique(session, User.email, data["email"], path="email", exclude_id=user.id)
    # Columns are non-nullable; an explicit null leaves them unchanged.
    for key in ("email", "role", "is_active"):
        if key in data and data[key] is None:
            data.pop(key)
    if password:
        data["password_hash"] = hash_password(password)

    with transaction(session):
        apply_patch(user, data)
        if data.get("is_active") is False:
            destroy_user_sessions(session, user.id)
    return user


def disable_user(session: Session, user_id: uuid.UUID) -> User | None:
    user = get_user(session, user_id)
    if not user:
        return None
    with transaction(session):
        apply_patch(user, {"is_active": False})
        destroy_user_sessions(session, user.id)
    logger.info("Disabled user %s", user.email)
    return user


def seed_admin(session: Session, email: str, password: str) -> User:
    """Create the bootstrap admin, or re-activate it if it already exists."""
    existing = get_user_by_email(session, email)
    if existing:
        with transaction(session):
            apply_patch(existing, {"role": ROLE_ADMIN, "is_active": True})
        return existing
    return create_user(session, email=email, password=password, role=ROLE_ADMIN)
