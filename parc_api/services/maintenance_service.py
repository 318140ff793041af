from __future__ import annotations

import logging
import uuid
from datetime import date, timedelta

from sqlalchemy import asc, delete, desc, select
from sqlalchemy.orm import Session

from ..core.errors import FieldValidationError
from ..db import transaction
from ..models import Equipment, MaintenanceEquipment, MaintenanceSchedule, MaintenanceTechnician, User, utc_today
from ..schemas.maintenance import MaintenanceCreateIn, MaintenanceUpdateIn
from .crud import apply_patch, get_by_id

logger = logging.getLogger(__name__)

CANCELLED = "annule"
REQUIRED_FIELDS = {"type", "title", "description", "start_date", "end_date", "status"}


class LinkTargetNotFound(Exception):
    def __init__(self, what: str):
        super().__init__(what)
        self.what = what


def get_schedule(session: Session, schedule_id: uuid.UUID) -> MaintenanceSchedule | None:
    return get_by_id(session, MaintenanceSchedule, schedule_id)


def list_schedules(session: Session) -> list[MaintenanceSchedule]:
    stmt = select(MaintenanceSchedule).order_by(desc(MaintenanceSchedule.start_date), desc(MaintenanceSchedule.created_at))
    return list(session.scalars(stmt).all())


def get_upcoming_maintenances(
    session: Session, days: int, *, today: date | None = None, limit: int | None = None
) -> list[MaintenanceSchedule]:
    today = today or utc_today()
    stmt = (
        select(MaintenanceSchedule)
        .where(MaintenanceSchedule.start_date >= today)
        .where(MaintenanceSchedule.start_date <= today + timedelta(days=days))
        .where(MaintenanceSchedule.status != CANCELLED)
        .order_by(asc(MaintenanceSchedule.start_date))
    )
    if limit is not None:
        stmt = stmt.limit(limit)
    return list(session.scalars(stmt).all())


def create_schedule(session: Session, payload: MaintenanceCreateIn, *, created_by: uuid.UUID | None) -> MaintenanceSchedule:
    schedule = MaintenanceSchedule(created_by=created_by, **payload.model_dump())
    with transaction(session):
        session.add(schedule)
    logger.info("Maintenance %s planned %s -> %s", schedule.id, schedule.start_date, schedule.end_date)
    return schedule


def update_schedule(session: Session, schedule_id: uuid.UUID, payload: MaintenanceUpdateIn) -> MaintenanceSchedule | None:
    schedule = get_schedule(session, schedule_id)
    if not schedule:
        return None
    data = payload.model_dump(exclude_unset=True)
    for key in REQUIRED_FIELDS:
        if key in data and data[key] is None:
            data.pop(key)

    start = data.get("start_date", schedule.start_date)
    end = data.get("end_date", schedule.end_date)
    if end < start:
        raise FieldValidationError.single("endDate", "End date must be on or after start date")

    with transaction(session):
        apply_patch(schedule, data)
    return schedule


def delete_schedule(session: Session, schedule_id: uuid.UUID) -> bool:
    schedule = get_schedule(session, schedule_id)
    if not schedule:
        return False
    # Join rows go first, all in one transaction.
    with transaction(session):
        session.execute(delete(MaintenanceTechnician).where(MaintenanceTechnician.maintenance_id == schedule_id))
        session.execute(delete(MaintenanceEquipment).where(MaintenanceEquipment.maintenance_id == schedule_id))
        session.delete(schedule)
    return True


def _require_schedule(session: Session, schedule_id: uuid.UUID) -> MaintenanceSchedule:
    schedule = get_schedule(session, schedule_id)
    if not schedule:
        raise LinkTargetNotFound("Maintenance schedule")
    return schedule


def list_technician_ids(session: Session, schedule_id: uuid.UUID) -> list[uuid.UUID]:
    stmt = (
        select(MaintenanceTechnician.technician_id)
        .where(MaintenanceTechnician.maintenance_id == schedule_id)
        .order_by(MaintenanceTechnician.assigned_at)
    )
    return list(session.scalars(stmt).all())


def list_technicians(session: Session, schedule_id: uuid.UUID) -> list[User]:
    stmt = (
        select(User)
        .join(MaintenanceTechnician, MaintenanceTechnician.technician_id == User.id)
        .where(MaintenanceTechnician.maintenance_id == schedule_id)
        .order_by(MaintenanceTechnician.assigned_at)
    )
    return list(session.scalars(stmt).all())


def list_equipment_ids(session: Session, schedule_id: uuid.UUID) -> list[uuid.UUID]:
    stmt = select(MaintenanceEquipment.equipment_id).where(MaintenanceEquipment.maintenance_id == schedule_id)
    return list(session.scalars(stmt).all())


def list_equipment(session: Session, schedule_id: uuid.UUID) -> list[Equipment]:
    stmt = (
        select(Equipment)
        .join(MaintenanceEquipment, MaintenanceEquipment.equipment_id == Equipment.id)
        .where(MaintenanceEquipment.maintenance_id == schedule_id)
        .order_by(Equipment.model)
    )
    return list(session.scalars(stmt).all())


def assign_technician(session: Session, schedule_id: uuid.UUID, technician_id: uuid.UUID) -> bool:
    """Link a technician to a schedule. Returns False when the link already existed."""
    _require_schedule(session, schedule_id)
    if session.get(User, technician_id) is None:
        raise LinkTargetNotFound("Technician")

    existing = session.scalar(
        select(MaintenanceTechnician.id)
        .where(MaintenanceTechnician.maintenance_id == schedule_id)
        .where(MaintenanceTechnician.technician_id == technician_id)
    )
    if existing is not None:
        return False
    with transaction(session):
        session.add(MaintenanceTechnician(maintenance_id=schedule_id, technician_id=technician_id))
    return True


def remove_technician(session: Session, schedule_id: uuid.UUID, technician_id: uuid.UUID) -> None:
    _require_schedule(session, schedule_id)
    with transaction(session):
        session.execute(
            delete(MaintenanceTechnician)
            .where(MaintenanceTechnician.maintenance_id == schedule_id)
            .where(MaintenanceTechnician.technician_id == technician_id)
        )


def add_equipment(session: Session, schedule_id: uuid.UUID, equipment_id: uuid.UUID) -> bool:
    """Link equipment to a schedule. Returns False when the link already existed."""
    _require_schedule(session, schedule_id)
    if session.get(Equipment, equipment_id) is None:
        raise LinkTargetNotFound("Equipment")

    existing = session.scalar(
        select(MaintenanceEquipment.id)
        .where(MaintenanceEquipment.maintenance_id == schedule_id)
        .where(MaintenanceEquipment.equipment_id == equipment_id)
    )
    if existing is not None:
        return False
    with transaction(session):
        session.add(MaintenanceEquipment(maintenance_id=schedule_id, equipment_id=equipment_id))
    return True


def remove_equipment(session: Session, schedule_id: uuid.UUID, equipment_id: uuid.UUID) -> None:
    _require_schedule(session, schedule_id)
    with transaction(session):
        session.execute(
            delete(MaintenanceEquipment)
            .where(MaintenanceEquipment.maintenance_id == schedule_id)
            .where(MaintenanceEquipment.equipment_id == equipment_id)
        )
