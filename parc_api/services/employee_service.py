import uuid

from sqlalchemy import desc, select, update
from sqlalchemy.orm import Session

from ..db import transaction
from ..models import Employee, Equipment, InventoryItem, utcnow
from ..schemas.employee import EmployeeCreateIn, EmployeeUpdateIn
from .crud import apply_patch, ensure_unique, get_by_id, list_all


def get_employee(session: Session, employee_id: uuid.UUID) -> Employee | None:
    return get_by_id(session, Employee, employee_id)


def list_employees(session: Session) -> list[Employee]:
    return list_all(session, Employee)


def create_employee(session: Session, payload: EmployeeCreateIn) -> Employee:
    data = payload.model_dump()
    data["email"] = data["email"].strip().lower()
    ensure_unique(session, Employee.email, data["email"], path="email")
    employee = Employee(**data)
    with transaction(session):
        session.add(employee)
    return employee


def update_employee(session: Session, employee_id: uuid.UUID, payload: EmployeeUpdateIn) -> Employee | None:
    employee = get_employee(session, employee_id)
    if not employee:
        return None
    data = {k: v for k, v in payload.model_dump(exclude_unset=True).items() if v is not None}
    if "email" in data:
        data["email"] = data["email"].strip().lower()
        ensure_unique(session, Employee.email, data["email"], path="email", exclude_id=employee.id)
    with transaction(session):
        apply_patch(employee, data)
    return employee


def delete_employee(session: Session, employee_id: uuid.UUID) -> bool:
    employee = get_employee(session, employee_id)
    if not employee:
        return False
    # Equipment and inventory records assigned to the employee become unassigned.
    with transaction(session):
        now = utcnow()
        session.execute(
            update(Equipment).where(Equipment.assigned_to == employee.id).values(assigned_to=None, updated_at=now)
        )
        session.execute(
            update(InventoryItem).where(InventoryItem.assigned_to == employee.id).values(assigned_to=None, updated_at=now)
        )
        session.delete(employee)
    return True


def get_equipment_by_employee(session: Session, employee_id: uuid.UUID) -> list[Equipment]:
    stmt = select(Equipment).where(Equipment.assigned_to == employee_id).order_by(desc(Equipment.created_at))
    return list(session.scalars(stmt).all())
