from __future__ import annotations

import json
import logging
import uuid

from sqlalchemy import delete, desc, select
from sqlalchemy.orm import Session

from ..db import transaction
from ..models import Employee, EntityKey, Equipment, EquipmentHistory, InventoryItem, MaintenanceEquipment
from ..schemas.equipment import EquipmentCreateIn, EquipmentUpdateIn
from .activity_service import record_activity
from .crud import apply_patch, ensure_exists, ensure_unique, get_by_id, list_all

logger = logging.getLogger(__name__)

# Non-nullable columns: an explicit null in a patch leaves them unchanged.
REQUIRED_FIELDS = {"type", "model", "serial_number", "purchase_date", "status"}


def get_equipment(session: Session, equipment_id: uuid.UUID) -> Equipment | None:
    return get_by_id(session, Equipment, equipment_id)


def list_equipment(session: Session) -> list[Equipment]:
    return list_all(session, Equipment)


def create_equipment(session: Session, payload: EquipmentCreateIn) -> Equipment:
    data = payload.model_dump()
    ensure_unique(session, Equipment.serial_number, data["serial_number"], path="serialNumber")
    ensure_exists(session, Employee, data.get("assigned_to"), path="assignedTo")

    equipment = Equipment(**data)
    with transaction(session):
        session.add(equipment)
        session.flush()
        record_activity(
            session,
            type="equipment_added",
            title=f"{equipment.model} ajouté",
            description=f"Nouvel équipement de type {equipment.type}",
            status="Nouveau",
            entity=EntityKey(kind="equipment", id=equipment.id),
        )
    logger.info("Equipment %s (%s) created", equipment.id, equipment.serial_number)
    return equipment


def update_equipment(
    session: Session,
    equipment_id: uuid.UUID,
    payload: EquipmentUpdateIn,
    *,
    updated_by: uuid.UUID,
) -> Equipment | None:
    equipment = get_equipment(session, equipment_id)
    if not equipment:
        return None

    data = payload.model_dump(exclude_unset=True)
    for key in REQUIRED_FIELDS:
        if key in data and data[key] is None:
            data.pop(key)
    if "serial_number" in data:
        ensure_unique(
            session, Equipment.serial_number, data["serial_number"], path="serialNumber", exclude_id=equipment.id
        )
    ensure_exists(session, Employee, data.get("assigned_to"), path="assignedTo")

    # Equipment row, history row and activity row commit or roll back together.
    with transaction(session):
        changes = apply_patch(equipment, data)
        if changes:
            session.add(
                EquipmentHistory(
                    equipment_id=equipment.id,
                    updated_by=updated_by,
                    changes=json.dumps(changes, default=str, ensure_ascii=False),
                )
            )
        record_activity(
            session,
            type="equipment_updated",
            title=f"{equipment.model} mis à jour",
            description="Spécifications modifiées",
            status="Modifié",
            entity=EntityKey(kind="equipment", id=equipment.id),
        )
    return equipment


def delete_equipment(session: Session, equipment_id: uuid.UUID) -> bool:
    equipment = get_equipment(session, equipment_id)
    if not equipment:
        return False
    # Maintenance links, inventory records and history go with the equipment.
    with transaction(session):
        session.execute(delete(MaintenanceEquipment).where(MaintenanceEquipment.equipment_id == equipment.id))
        session.execute(delete(InventoryItem).where(InventoryItem.equipment_id == equipment.id))
        session.execute(delete(EquipmentHistory).where(EquipmentHistory.equipment_id == equipment.id))
        session.delete(equipment)
    logger.info("Equipment %s deleted", equipment.id)
    return True


def get_equipment_history(session: Session, equipment_id: uuid.UUID) -> list[EquipmentHistory]:
    stmt = (
        select(EquipmentHistory)
        .where(EquipmentHistory.equipment_id == equipment_id)
        .order_by(desc(EquipmentHistory.created_at))
    )
    return list(session.scalars(stmt).all())
