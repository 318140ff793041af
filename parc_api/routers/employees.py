import uuid

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from ..core.permissions import authorize
from ..db import get_session
from ..schemas.employee import EmployeeCreateIn, EmployeeOut, EmployeeUpdateIn
from ..schemas.equipment import EquipmentOut
from ..services import employee_service

router = APIRouter(prefix="/api/employees", tags=["employees"], dependencies=[Depends(authorize)])


@router.get("", response_model=list[EmployeeOut])
def list_employees(session: Session = Depends(get_session)):
    return employee_service.list_employees(session)


@router.get("/{employee_id}", response_model=EmployeeOut)
def get_employee(employee_id: uuid.UUID, session: Session = Depends(get_session)):
    employee = employee_service.get_employee(session, employee_id)
    if not employee:
        raise HTTPException(status_code=404, detail="Employee not found")
    return employee


@router.get("/{employee_id}/equipment", response_model=list[EquipmentOut])
def get_employee_equipment(employee_id: uuid.UUID, session: Session = Depends(get_session)):
    if not employee_service.get_employee(session, employee_id):
        raise HTTPException(status_code=404, detail="Employee not found")
    return employee_service.get_equipment_by_employee(session, employee_id)


@router.post("", response_model=EmployeeOut, status_code=201)
def create_employee(payload: EmployeeCreateIn, session: Session = Depends(get_session)):
    return employee_service.create_employee(session, payload)


@router.put("/{employee_id}", response_model=EmployeeOut)
def update_employee(employee_id: uuid.UUID, payload: EmployeeUpdateIn, session: Session = Depends(get_session)):
    employee = employee_service.update_employee(session, employee_id, payload)
    if not employee:
        raise HTTPException(status_code=404, detail="Employee not found")
    return employee


@router.delete("/{employee_id}", status_code=204)
def delete_employee(employee_id: uuid.UUID, session: Session = Depends(get_session)):
    if not employee_service.delete_employee(session, employee_id):
        raise HTTPException(status_code=404, detail="Employee not found")
    return Response(status_code=204)
