import uuid

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from ..core.permissions import authorize
from ..db import get_session
from ..models.user import User
from ..schemas.equipment import EquipmentCreateIn, EquipmentHistoryOut, EquipmentOut, EquipmentUpdateIn
from ..services import equipment_service

router = APIRouter(prefix="/api/equipment", tags=["equipment"], dependencies=[Depends(authorize)])


@router.get("", response_model=list[EquipmentOut])
def list_equipment(session: Session = Depends(get_session)):
    return equipment_service.list_equipment(session)


@router.get("/{equipment_id}", response_model=EquipmentOut)
def get_equipment(equipment_id: uuid.UUID, session: Session = Depends(get_session)):
    equipment = equipment_service.get_equipment(session, equipment_id)
    if not equipment:
        raise HTTPException(status_code=404, detail="Equipment not found")
    return equipment


@router.get("/{equipment_id}/history", response_model=list[EquipmentHistoryOut])
def get_equipment_history(equipment_id: uuid.UUID, session: Session = Depends(get_session)):
    if not equipment_service.get_equipment(session, equipment_id):
        raise HTTPException(status_code=404, detail="Equipment not found")
    return equipment_service.get_equipment_history(session, equipment_id)


@router.post("", response_model=EquipmentOut, status_code=201)
def create_equipment(payload: EquipmentCreateIn, session: Session = Depends(get_session)):
    return equipment_service.create_equipment(session, payload)


@router.put("/{equipment_id}", response_model=EquipmentOut)
def update_equipment(
    equipment_id: uuid.UUID,
    payload: EquipmentUpdateIn,
    session: Session = Depends(get_session),
    user: User = Depends(authorize),
):
    equipment = equipment_service.update_equipment(session, equipment_id, payload, updated_by=user.id)
    if not equipment:
        raise HTTPException(status_code=404, detail="Equipment not found")
    return equipment


@router.delete("/{equipment_id}", status_code=204)
def delete_equipment(equipment_id: uuid.UUID, session: Session = Depends(get_session)):
    if not equipment_service.delete_equipment(session, equipment_id):
        raise HTTPException(status_code=404, detail="Equipment not found")
    return Response(status_code=204)
