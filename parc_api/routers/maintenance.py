import uuid

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.orm import Session

from ..core.permissions import authorize
from ..db import get_session
from ..models.maintenance import MaintenanceSchedule
from ..models.user import User
from ..schemas.equipment import EquipmentOut
from ..schemas.maintenance import MaintenanceCreateIn, MaintenanceDetailOut, MaintenanceOut, MaintenanceUpdateIn
from ..schemas.user import UserOut
from ..services import maintenance_service
from ..services.maintenance_service import LinkTargetNotFound

router = APIRouter(prefix="/api/maintenance", tags=["maintenance"], dependencies=[Depends(authorize)])


def _detail(session: Session, schedule: MaintenanceSchedule) -> MaintenanceDetailOut:
    out = MaintenanceDetailOut.model_validate(schedule)
    out.technician_ids = maintenance_service.list_technician_ids(session, schedule.id)
    out.equipment_ids = maintenance_service.list_equipment_ids(session, schedule.id)
    return out


def _not_found(e: LinkTargetNotFound) -> HTTPException:
    return HTTPException(status_code=404, detail=f"{e.what} not found")


@router.get("", response_model=list[MaintenanceOut])
def list_schedules(session: Session = Depends(get_session)):
    return maintenance_service.list_schedules(session)


# Declared before "/{schedule_id}" so "upcoming" is not parsed as an id.
@router.get("/upcoming", response_model=list[MaintenanceOut])
def upcoming_schedules(days: int = Query(default=7, ge=0, le=366), session: Session = Depends(get_session)):
    return maintenance_service.get_upcoming_maintenances(session, days)


@router.get("/{schedule_id}", response_model=MaintenanceDetailOut)
def get_schedule(schedule_id: uuid.UUID, session: Session = Depends(get_session)):
    schedule = maintenance_service.get_schedule(session, schedule_id)
    if not schedule:
        raise HTTPException(status_code=404, detail="Maintenance schedule not found")
    return _detail(session, schedule)


@router.post("", response_model=MaintenanceDetailOut, status_code=201)
def create_schedule(
    payload: MaintenanceCreateIn,
    session: Session = Depends(get_session),
    user: User = Depends(authorize),
):
    schedule = maintenance_service.create_schedule(session, payload, created_by=user.id)
    return _detail(session, schedule)


@router.put("/{schedule_id}", response_model=MaintenanceDetailOut)
def update_schedule(schedule_id: uuid.UUID, payload: MaintenanceUpdateIn, session: Session = Depends(get_session)):
    schedule = maintenance_service.update_schedule(session, schedule_id, payload)
    if not schedule:
        raise HTTPException(status_code=404, detail="Maintenance schedule not found")
    return _detail(session, schedule)


@router.delete("/{schedule_id}", status_code=204)
def delete_schedule(schedule_id: uuid.UUID, session: Session = Depends(get_session)):
    if not maintenance_service.delete_schedule(session, schedule_id):
        raise HTTPException(status_code=404, detail="Maintenance schedule not found")
    return Response(status_code=204)


@router.get("/{schedule_id}/technicians", response_model=list[UserOut])
def list_schedule_technicians(schedule_id: uuid.UUID, session: Session = Depends(get_session)):
    if not maintenance_service.get_schedule(session, schedule_id):
        raise HTTPException(status_code=404, detail="Maintenance schedule not found")
    return maintenance_service.list_technicians(session, schedule_id)


@router.post("/{schedule_id}/technicians/{technician_id}", status_code=204)
def assign_technician(schedule_id: uuid.UUID, technician_id: uuid.UUID, session: Session = Depends(get_session)):
    try:
        maintenance_service.assign_technician(session, schedule_id, technician_id)
    except LinkTargetNotFound as e:
        raise _not_found(e)
    return Response(status_code=204)


@router.delete("/{schedule_id}/technicians/{technician_id}", status_code=204)
def remove_technician(schedule_id: uuid.UUID, technician_id: uuid.UUID, session: Session = Depends(get_session)):
    try:
        maintenance_service.remove_technician(session, schedule_id, technician_id)
    except LinkTargetNotFound as e:
        raise _not_found(e)
    return Response(status_code=204)


@router.get("/{schedule_id}/equipment", response_model=list[EquipmentOut])
def list_schedule_equipment(schedule_id: uuid.UUID, session: Session = Depends(get_session)):
    if not maintenance_service.get_schedule(session, schedule_id):
        raise HTTPException(status_code=404, detail="Maintenance schedule not found")
    return maintenance_service.list_equipment(session, schedule_id)


@router.post("/{schedule_id}/equipment/{equipment_id}", status_code=204)
def add_equipment(schedule_id: uuid.UUID, equipment_id: uuid.UUID, session: Session = Depends(get_session)):
    try:
        maintenance_service.add_equipment(session, schedule_id, equipment_id)
    except LinkTargetNotFound as e:
        raise _not_found(e)
    return Response(status_code=204)


@router.delete("/{schedule_id}/equipment/{equipment_id}", status_code=204)
def remove_equipment(schedule_id: uuid.UUID, equipment_id: uuid.UUID, session: Session = Depends(get_session)):
    try:
        maintenance_service.remove_equipment(session, schedule_id, equipment_id)
    except LinkTargetNotFound as e:
        raise _not_found(e)
    return Response(status_code=204)
