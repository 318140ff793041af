"""Spreadsheet (.xlsx) export and import of the asset collections.

Exports use French column headers and render foreign keys as display
names. Imports read the same headers back, one insert per row, inside a
single transaction. Invalid enum values fall back to a safe default
instead of rejecting the row.
"""
from __future__ import annotations

import logging
import re
import uuid
from dataclasses import dataclass
from datetime import date, datetime, timezone
from io import BytesIO
from typing import Any, Callable

from openpyxl import Workbook, load_workbook
from sqlalchemy import select
from sqlalchemy.orm import Session

from ..db import transaction
from ..models import (
    Alert,
    Employee,
    Equipment,
    InventoryItem,
    License,
    MaintenanceEquipment,
    MaintenanceSchedule,
    MaintenanceTechnician,
    Ticket,
    User,
)
from ..schemas.alert import ALERT_PRIORITIES, ALERT_STATUSES, ALERT_TYPES
from ..schemas.equipment import EQUIPMENT_STATUSES, EQUIPMENT_TYPES
from ..schemas.inventory import INVENTORY_CONDITIONS
from ..schemas.maintenance import MAINTENANCE_STATUSES, MAINTENANCE_TYPES
from ..schemas.ticket import TICKET_PRIORITIES, TICKET_STATUSES
from .maintenance_service import list_equipment_ids, list_technician_ids

logger = logging.getLogger(__name__)

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

HEADERS: dict[str, list[str]] = {
    "employees": ["ID", "Nom", "Email", "Département", "Poste", "Date de création", "Date de mise à jour"],
    "equipment": [
        "ID", "Type", "Modèle", "Numéro de série", "Date d'achat", "Statut", "Assigné à",
        "Date de création", "Date de mise à jour",
    ],
    "inventory": [
        "ID", "Équipement", "Assigné à", "Localisation", "Dernière vérification", "État",
        "Date de création", "Date de mise à jour",
    ],
    "licenses": [
        "ID", "Nom", "Vendeur", "Type", "Clé de licence", "Utilisateurs max", "Utilisateurs actuels", "Coût",
        "Date de création", "Date de mise à jour",
    ],
    "planning": [
        "ID", "Type", "Titre", "Description", "Date de début", "Date de fin", "Statut", "Notes", "Créé par",
        "Équipements", "Techniciens", "Date de création", "Date de mise à jour",
    ],
    "tickets": [
        "ID", "Titre", "Description", "Créé par", "Assigné à", "Statut", "Priorité",
        "Date de création", "Date de mise à jour",
    ],
    "alerts": [
        "ID", "Type", "Titre", "Description", "Priorité", "Statut", "Créé par", "Assigné à",
        "Date de création", "Date de mise à jour",
    ],
}

DATA_TYPES = tuple(HEADERS)


class UnknownDataType(ValueError):
    pass


class RowError(ValueError):
    pass


@dataclass
class ImportResult:
    imported: int
    skipped: list[dict[str, Any]]


# ---------------------------------------------------------------- helpers

def _cell(value: Any) -> Any:
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc).replace(tzinfo=None)
        return value
    if isinstance(value, uuid.UUID):
        return str(value)
    return value


def _text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _required(row: dict[str, Any], header: str) -> str:
    value = _text(row.get(header))
    if value is None:
        raise RowError(f"Missing value for '{header}'")
    return value


def _choice(value: Any, allowed: tuple[str, ...], default: str) -> str:
    text = _text(value)
    return text if text in allowed else default


def _as_date(value: Any, header: str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = _text(value)
    if text is None:
        raise RowError(f"Missing value for '{header}'")
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        raise RowError(f"Invalid date for '{header}': {text}")


def _as_datetime(value: Any) -> datetime | None:
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    text = _text(value)
    if text is None:
        return None
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


def _as_int(value: Any, header: str) -> int | None:
    if value is None or _text(value) is None:
        return None
    try:
        return int(float(value))
    except (TypeError, ValueError):
        raise RowError(f"Invalid number for '{header}': {value}")


def _as_uuid(value: str) -> uuid.UUID | None:
    try:
        return uuid.UUID(value)
    except ValueError:
        return None


def _split_list(value: Any) -> list[str]:
    text = _text(value)
    if not text:
        return []
    return [part.strip() for part in text.split(",") if part.strip()]


class Lookups:
    """Display-name maps for export and reverse resolution for import."""

    def __init__(self, session: Session):
        self.session = session
        self._employees: dict[uuid.UUID, Employee] | None = None
        self._users: dict[uuid.UUID, User] | None = None
        self._equipment: dict[uuid.UUID, Equipment] | None = None

    @property
    def employees(self) -> dict[uuid.UUID, Employee]:
        if self._employees is None:
            self._employees = {e.id: e for e in self.session.scalars(select(Employee)).all()}
        return self._employees

    @property
    def users(self) -> dict[uuid.UUID, User]:
        if self._users is None:
            self._users = {u.id: u for u in self.session.scalars(select(User)).all()}
        return self._users

    @property
    def equipment(self) -> dict[uuid.UUID, Equipment]:
        if self._equipment is None:
            self._equipment = {e.id: e for e in self.session.scalars(select(Equipment)).all()}
        return self._equipment

    def employee_name(self, employee_id: uuid.UUID | None) -> str | None:
        employee = self.employees.get(employee_id) if employee_id else None
        return employee.name if employee else None

    def user_email(self, user_id: uuid.UUID | None) -> str | None:
        user = self.users.get(user_id) if user_id else None
        return user.email if user else None

    def equipment_label(self, equipment_id: uuid.UUID | None) -> str | None:
        equipment = self.equipment.get(equipment_id) if equipment_id else None
        return f"{equipment.model} ({equipment.serial_number})" if equipment else None

    def resolve_employee(self, value: Any, header: str) -> uuid.UUID | None:
        text = _text(value)
        if text is None:
            return None
        as_id = _as_uuid(text)
        if as_id and as_id in self.employees:
            return as_id
        matches = [e.id for e in self.employees.values() if e.email == text.lower() or e.name == text]
        if len(matches) == 1:
            return matches[0]
        raise RowError(f"Unknown employee for '{header}': {text}")

    def resolve_user(self, value: Any, header: str) -> uuid.UUID | None:
        text = _text(value)
        if text is None:
            return None
        as_id = _as_uuid(text)
        if as_id and as_id in self.users:
            return as_id
        for user in self.users.values():
            if user.email == text.lower():
                return user.id
        raise RowError(f"Unknown user for '{header}': {text}")

    def resolve_equipment(self, value: Any, header: str) -> uuid.UUID | None:
        text = _text(value)
        if text is None:
            return None
        as_id = _as_uuid(text)
        if as_id and as_id in self.equipment:
            return as_id
        # "Model (SERIAL)" as exported, or a bare serial number.
        m = re.search(r"\(([^()]+)\)\s*$", text)
        serial = m.group(1).strip() if m else text
        for equipment in self.equipment.values():
            if equipment.serial_number == serial:
                return equipment.id
        raise RowError(f"Unknown equipment for '{header}': {text}")

    def remember_employee(self, employee: Employee) -> None:
        self.employees[employee.id] = employee

    def remember_equipment(self, equipment: Equipment) -> None:
        self.equipment[equipment.id] = equipment


# ---------------------------------------------------------------- export

def _export_rows(session: Session, data_type: str) -> list[list[Any]]:
    lk = Lookups(session)
    if data_type == "employees":
        return [
            [e.id, e.name, e.email, e.department, e.position, e.created_at, e.updated_at]
            for e in session.scalars(select(Employee).order_by(Employee.created_at)).all()
        ]
    if data_type == "equipment":
        return [
            [
                e.id, e.type, e.model, e.serial_number, e.purchase_date, e.status,
                lk.employee_name(e.assigned_to), e.created_at, e.updated_at,
            ]
            for e in session.scalars(select(Equipment).order_by(Equipment.created_at)).all()
        ]
    if data_type == "inventory":
        return [
            [
                i.id, lk.equipment_label(i.equipment_id), lk.employee_name(i.assigned_to), i.location,
                i.last_checked, i.condition, i.created_at, i.updated_at,
            ]
            for i in session.scalars(select(InventoryItem).order_by(InventoryItem.created_at)).all()
        ]
    if data_type == "licenses":
        return [
            [
                l.id, l.name, l.vendor, l.type, l.license_key, l.max_users, l.current_users, l.cost,
                l.created_at, l.updated_at,
            ]
            for l in session.scalars(select(License).order_by(License.created_at)).all()
        ]
    if data_type == "planning":
        rows = []
        for m in session.scalars(select(MaintenanceSchedule).order_by(MaintenanceSchedule.start_date)).all():
            equipment = ", ".join(filter(None, (lk.equipment_label(i) for i in list_equipment_ids(session, m.id))))
            technicians = ", ".join(filter(None, (lk.user_email(i) for i in list_technician_ids(session, m.id))))
            rows.append(
                [
                    m.id, m.type, m.title, m.description, m.start_date, m.end_date, m.status, m.notes,
                    lk.user_email(m.created_by), equipment or None, technicians or None, m.created_at, m.updated_at,
                ]
            )
        return rows
    if data_type == "tickets":
        return [
            [
                t.id, t.title, t.description, lk.user_email(t.created_by), lk.user_email(t.assigned_to),
                t.status, t.priority, t.created_at, t.updated_at,
            ]
            for t in session.scalars(select(Ticket).order_by(Ticket.created_at)).all()
        ]
    if data_type == "alerts":
        return [
            [
                a.id, a.type, a.title, a.description, a.priority, a.status, lk.user_email(a.created_by),
                lk.user_email(a.assigned_to), a.created_at, a.updated_at,
            ]
            for a in session.scalars(select(Alert).order_by(Alert.created_at)).all()
        ]
    raise UnknownDataType(data_type)


def export_workbook(session: Session, data_type: str) -> bytes:
    if data_type not in HEADERS:
        raise UnknownDataType(data_type)

    wb = Workbook()
    ws = wb.active
    ws.title = data_type
    ws.append(HEADERS[data_type])
    for row in _export_rows(session, data_type):
        ws.append([_cell(v) for v in row])

    buf = BytesIO()
    wb.save(buf)
    return buf.getvalue()


def export_filename(data_type: str, now: datetime | None = None) -> str:
    now = now or datetime.now(timezone.utc)
    return f"{data_type}-export-{now.strftime('%Y%m%d-%H%M%S')}.xlsx"


# ---------------------------------------------------------------- import

def read_rows(content: bytes) -> list[tuple[int, dict[str, Any]]]:
    wb = load_workbook(BytesIO(content), read_only=True, data_only=True)
    try:
        ws = wb.worksheets[0]
        rows = ws.iter_rows(values_only=True)
        header_row = next(rows, None)
        if not header_row:
            return []
        headers = [_text(h) or "" for h in header_row]
        out = []
        for index, values in enumerate(rows, start=2):
            if values is None or all(_text(v) is None for v in values):
                continue
            out.append((index, dict(zip(headers, values))))
        return out
    finally:
        wb.close()


def _import_employee(session: Session, row: dict[str, Any], lk: Lookups, user: User) -> None:
    email = _required(row, "Email").lower()
    if session.scalar(select(Employee.id).where(Employee.email == email)) is not None:
        raise RowError(f"Employee email already exists: {email}")
    employee = Employee(
        name=_required(row, "Nom"),
        email=email,
        department=_required(row, "Département"),
        position=_required(row, "Poste"),
    )
    session.add(employee)
    session.flush()
    lk.remember_employee(employee)


def _import_equipment(session: Session, row: dict[str, Any], lk: Lookups, user: User) -> None:
    serial = _required(row, "Numéro de série")
    if session.scalar(select(Equipment.id).where(Equipment.serial_number == serial)) is not None:
        raise RowError(f"Serial number already exists: {serial}")
    equipment = Equipment(
        type=_choice(row.get("Type"), EQUIPMENT_TYPES, "ordinateur"),
        model=_required(row, "Modèle"),
        serial_number=serial,
        purchase_date=_as_date(row.get("Date d'achat"), "Date d'achat"),
        status=_choice(row.get("Statut"), EQUIPMENT_STATUSES, "en service"),
        assigned_to=lk.resolve_employee(row.get("Assigné à"), "Assigné à"),
    )
    session.add(equipment)
    session.flush()
    lk.remember_equipment(equipment)


def _import_inventory(session: Session, row: dict[str, Any], lk: Lookups, user: User) -> None:
    equipment_id = lk.resolve_equipment(row.get("Équipement"), "Équipement")
    if equipment_id is None:
        raise RowError("Missing value for 'Équipement'")
    item = InventoryItem(
        equipment_id=equipment_id,
        assigned_to=lk.resolve_employee(row.get("Assigné à"), "Assigné à"),
        location=_required(row, "Localisation"),
        condition=_choice(row.get("État"), INVENTORY_CONDITIONS, "fonctionnel"),
    )
    last_checked = _as_datetime(row.get("Dernière vérification"))
    if last_checked is not None:
        item.last_checked = last_checked
    session.add(item)
    session.flush()


def _import_license(session: Session, row: dict[str, Any], lk: Lookups, user: User) -> None:
    session.add(
        License(
            name=_required(row, "Nom"),
            vendor=_required(row, "Vendeur"),
            type=_required(row, "Type"),
            license_key=_text(row.get("Clé de licence")),
            max_users=_as_int(row.get("Utilisateurs max"), "Utilisateurs max"),
            current_users=_as_int(row.get("Utilisateurs actuels"), "Utilisateurs actuels") or 0,
            cost=_as_int(row.get("Coût"), "Coût"),
        )
    )
    session.flush()


def _import_planning(session: Session, row: dict[str, Any], lk: Lookups, user: User) -> None:
    start = _as_date(row.get("Date de début"), "Date de début")
    end = _as_date(row.get("Date de fin"), "Date de fin")
    if end < start:
        raise RowError("End date must be on or after start date")
    equipment_ids = [lk.resolve_equipment(v, "Équipements") for v in _split_list(row.get("Équipements"))]
    technician_ids = [lk.resolve_user(v, "Techniciens") for v in _split_list(row.get("Techniciens"))]

    schedule = MaintenanceSchedule(
        type=_choice(row.get("Type"), MAINTENANCE_TYPES, "preventive"),
        title=_required(row, "Titre"),
        description=_required(row, "Description"),
        start_date=start,
        end_date=end,
        status=_choice(row.get("Statut"), MAINTENANCE_STATUSES, "planifie"),
        notes=_text(row.get("Notes")),
        created_by=lk.resolve_user(row.get("Créé par"), "Créé par") or user.id,
    )
    session.add(schedule)
    session.flush()
    for equipment_id in dict.fromkeys(equipment_ids):
        session.add(MaintenanceEquipment(maintenance_id=schedule.id, equipment_id=equipment_id))
    for technician_id in dict.fromkeys(technician_ids):
        session.add(MaintenanceTechnician(maintenance_id=schedule.id, technician_id=technician_id))
    session.flush()


def _import_ticket(session: Session, row: dict[str, Any], lk: Lookups, user: User) -> None:
    session.add(
        Ticket(
            title=_required(row, "Titre"),
            description=_required(row, "Description"),
            created_by=lk.resolve_user(row.get("Créé par"), "Créé par") or user.id,
            assigned_to=lk.resolve_user(row.get("Assigné à"), "Assigné à"),
            status=_choice(row.get("Statut"), TICKET_STATUSES, "ouvert"),
            priority=_choice(row.get("Priorité"), TICKET_PRIORITIES, "moyenne"),
        )
    )
    session.flush()


def _import_alert(session: Session, row: dict[str, Any], lk: Lookups, user: User) -> None:
    session.add(
        Alert(
            type=_choice(row.get("Type"), ALERT_TYPES, "systeme"),
            title=_required(row, "Titre"),
            description=_required(row, "Description"),
            priority=_choice(row.get("Priorité"), ALERT_PRIORITIES, "moyenne"),
            status=_choice(row.get("Statut"), ALERT_STATUSES, "nouvelle"),
            created_by=lk.resolve_user(row.get("Créé par"), "Créé par") or user.id,
            assigned_to=lk.resolve_user(row.get("Assigné à"), "Assigné à"),
        )
    )
    session.flush()


IMPORTERS: dict[str, Callable[[Session, dict[str, Any], Lookups, User], None]] = {
    "employees": _import_employee,
    "equipment": _import_equipment,
    "inventory": _import_inventory,
    "licenses": _import_license,
    "planning": _import_planning,
    "tickets": _import_ticket,
    "alerts": _import_alert,
}


def import_workbook(session: Session, data_type: str, content: bytes, *, user: User) -> ImportResult:
    importer = IMPORTERS.get(data_type)
    if importer is None:
        raise UnknownDataType(data_type)

    rows = read_rows(content)
    lk = Lookups(session)
    imported = 0
    skipped: list[dict[str, Any]] = []
    with transaction(session):
        for row_number, row in rows:
            try:
                importer(session, row, lk, user)
            except RowError as e:
                skipped.append({"row": row_number, "message": str(e)})
                continue
            imported += 1
    logger.info("Imported %d %s rows (%d skipped)", imported, data_type, len(skipped))
    return ImportResult(imported=imported, skipped=skipped)
