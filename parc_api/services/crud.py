"""Shared building blocks for the per-entity storage services."""
from __future__ import annotations

import uuid
from typing import Any, TypeVar

from sqlalchemy import desc, select
from sqlalchemy.orm import InstrumentedAttribute, Session

from ..core.errors import FieldValidationError
from ..models import utcnow

T = TypeVar("T")


def get_by_id(session: Session, model: type[T], obj_id: uuid.UUID) -> T | None:
    return session.get(model, obj_id)


def list_all(session: Session, model: type[T], order_by: Any = None) -> list[T]:
    stmt = select(model).order_by(desc(order_by if order_by is not None else model.created_at))
    return list(session.scalars(stmt).all())


def apply_patch(obj: Any, data: dict[str, Any]) -> dict[str, dict[str, Any]]:
    """Set the provided fields and bump updated_at. Returns {field: {"from", "to"}} for real changes."""
    changes: dict[str, dict[str, Any]] = {}
    for field, value in data.items():
        current = getattr(obj, field)
        if current != value:
            changes[field] = {"from": current, "to": value}
        setattr(obj, field, value)
    obj.updated_at = utcnow()
    return changes


def ensure_unique(
    session: Session,
    column: InstrumentedAttribute,
    value: Any,
    *,
    path: str,
    exclude_id: uuid.UUID | None = None,
) -> None:
    model = column.class_
    stmt = select(model.id).where(column == value)
    if exclude_id is not None:
        stmt = stmt.where(model.id != exclude_id)
    if session.scalar(stmt.limit(1)) is not None:
        raise FieldValidationError.single(path, f"A record with this {path} already exists")


def ensure_exists(session: Session, model: type, obj_id: uuid.UUID | None, *, path: str) -> None:
    if obj_id is None:
        return
    if session.get(model, obj_id) is None:
        raise FieldValidationError.single(path, f"Unknown {path}: {obj_id}")
