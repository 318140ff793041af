import uuid

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from ..core.permissions import authorize
from ..db import get_session
from ..schemas.inventory import InventoryCreateIn, InventoryOut, InventoryUpdateIn
from ..services import inventory_service

router = APIRouter(prefix="/api/inventory", tags=["inventory"], dependencies=[Depends(authorize)])


@router.get("", response_model=list[InventoryOut])
def list_inventory(session: Session = Depends(get_session)):
    return inventory_service.list_inventory(session)


@router.get("/{item_id}", response_model=InventoryOut)
def get_inventory_item(item_id: uuid.UUID, session: Session = Depends(get_session)):
    item = inventory_service.get_inventory_item(session, item_id)
    if not item:
        raise HTTPException(status_code=404, detail="Inventory item not found")
    return item


@router.post("", response_model=InventoryOut, status_code=201)
def create_inventory_item(payload: InventoryCreateIn, session: Session = Depends(get_session)):
    return inventory_service.create_inventory_item(session, payload)


@router.put("/{item_id}", response_model=InventoryOut)
def update_inventory_item(item_id: uuid.UUID, payload: InventoryUpdateIn, session: Session = Depends(get_session)):
    item = inventory_service.update_inventory_item(session, item_id, payload)
    if not item:
        raise HTTPException(status_code=404, detail="Inventory item not found")
    return item


@router.delete("/{item_id}", status_code=204)
def delete_inventory_item(item_id: uuid.UUID, session: Session = Depends(get_session)):
    if not inventory_service.delete_inventory_item(session, item_id):
        raise HTTPException(status_code=404, detail="Inventory item not found")
    return Response(status_code=204)
