import logging
import uuid

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..db import transaction
from ..models import Employee, Equipment, InventoryItem
from ..schemas.inventory import InventoryCreateIn, InventoryUpdateIn
from .crud import apply_patch, ensure_exists, get_by_id, list_all

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = {"equipment_id", "location", "condition"}


def get_inventory_item(session: Session, item_id: uuid.UUID) -> InventoryItem | None:
    return get_by_id(session, InventoryItem, item_id)


def list_inventory(session: Session) -> list[InventoryItem]:
    return list_all(session, InventoryItem)


def _warn_if_already_tracked(session: Session, equipment_id: uuid.UUID, exclude_id: uuid.UUID | None = None) -> None:
    stmt = select(InventoryItem.id).where(InventoryItem.equipment_id == equipment_id)
    if exclude_id is not None:
        stmt = stmt.where(InventoryItem.id != exclude_id)
    if session.scalar(stmt.limit(1)) is not None:
        logger.warning("Equipment %s already has an inventory record", equipment_id)


def create_inventory_item(session: Session, payload: InventoryCreateIn) -> InventoryItem:
    data = payload.model_dump()
    if data.get("last_checked") is None:
        data.pop("last_checked", None)
    ensure_exists(session, Equipment, data["equipment_id"], path="equipmentId")
    ensure_exists(session, Employee, data.get("assigned_to"), path="assignedTo")
    _warn_if_already_tracked(session, data["equipment_id"])

    item = InventoryItem(**data)
    with transaction(session):
        session.add(item)
    return item


def update_inventory_item(session: Session, item_id: uuid.UUID, payload: InventoryUpdateIn) -> InventoryItem | None:
    item = get_inventory_item(session, item_id)
    if not item:
        return None
    data = payload.model_dump(exclude_unset=True)
    for key in REQUIRED_FIELDS:
        if key in data and data[key] is None:
            data.pop(key)
    if "equipment_id" in data:
        ensure_exists(session, Equipment, data["equipment_id"], path="equipmentId")
        _warn_if_already_tracked(session, data["equipment_id"], exclude_id=item.id)
    ensure_exists(session, Employee, data.get("assigned_to"), path="assignedTo")
    with transaction(session):
        apply_patch(item, data)
    return item


def delete_inventory_item(session: Session, item_id: uuid.UUID) -> bool:
    item = get_inventory_item(session, item_id)
    if not item:
        return False
    with transaction(session):
        session.delete(item)
    return True
