import uuid

from sqlalchemy import desc, select
from sqlalchemy.orm import Session

from ..db import transaction
from ..models import Alert, User
from ..schemas.alert import AlertCreateIn, AlertUpdateIn
from .crud import apply_patch, ensure_exists, get_by_id

REQUIRED_FIELDS = {"type", "title", "description", "priority", "status"}


def get_alert(session: Session, alert_id: uuid.UUID) -> Alert | None:
    return get_by_id(session, Alert, alert_id)


def list_alerts(
    session: Session,
    *,
    type: str | None = None,
    status: str | None = None,
    priority: str | None = None,
) -> list[Alert]:
    stmt = select(Alert)
    if type is not None:
        stmt = stmt.where(Alert.type == type)
    if status is not None:
        stmt = stmt.where(Alert.status == status)
    if priority is not None:
        stmt = stmt.where(Alert.priority == priority)
    return list(session.scalars(stmt.order_by(desc(Alert.created_at))).all())


def create_alert(session: Session, payload: AlertCreateIn, *, created_by: uuid.UUID | None) -> Alert:
    data = payload.model_dump(exclude={"entity"})
    ensure_exists(session, User, data.get("assigned_to"), path="assignedTo")
    alert = Alert(created_by=created_by, **data)
    alert.entity = payload.entity.to_key() if payload.entity else None
    with transaction(session):
        session.add(alert)
    return alert


def update_alert(session: Session, alert_id: uuid.UUID, payload: AlertUpdateIn) -> Alert | None:
    alert = get_alert(session, alert_id)
    if not alert:
        return None
    data = payload.model_dump(exclude_unset=True, exclude={"entity"})
    for key in REQUIRED_FIELDS:
        if key in data and data[key] is None:
            data.pop(key)
    ensure_exists(session, User, data.get("assigned_to"), path="assignedTo")
    with transaction(session):
        apply_patch(alert, data)
        if "entity" in payload.model_fields_set:
            alert.entity = payload.entity.to_key() if payload.entity else None
    return alert


def delete_alert(session: Session, alert_id: uuid.UUID) -> bool:
    alert = get_alert(session, alert_id)
    if not alert:
        return False
    with transaction(session):
        session.delete(alert)
    return True
