import uuid

from sqlalchemy import desc, select
from sqlalchemy.orm import Session

from ..db import transaction
from ..models import Ticket, User
from ..schemas.ticket import TicketCreateIn, TicketUpdateIn
from .crud import apply_patch, ensure_exists, get_by_id

REQUIRED_FIELDS = {"title", "description", "status", "priority"}


def get_ticket(session: Session, ticket_id: uuid.UUID) -> Ticket | None:
    return get_by_id(session, Ticket, ticket_id)


def list_tickets(
    session: Session,
    *,
    created_by: uuid.UUID | None = None,
    assigned_to: uuid.UUID | None = None,
    status: str | None = None,
) -> list[Ticket]:
    stmt = select(Ticket)
    if created_by is not None:
        stmt = stmt.where(Ticket.created_by == created_by)
    if assigned_to is not None:
        stmt = stmt.where(Ticket.assigned_to == assigned_to)
    if status is not None:
        stmt = stmt.where(Ticket.status == status)
    stmt = stmt.order_by(desc(Ticket.created_at))
    return list(session.scalars(stmt).all())


def create_ticket(session: Session, payload: TicketCreateIn, *, created_by: uuid.UUID) -> Ticket:
    data = payload.model_dump()
    ensure_exists(session, User, data.get("assigned_to"), path="assignedTo")
    ticket = Ticket(created_by=created_by, **data)
    with transaction(session):
        session.add(ticket)
    return ticket


def update_ticket(session: Session, ticket_id: uuid.UUID, payload: TicketUpdateIn) -> Ticket | None:
    ticket = get_ticket(session, ticket_id)
    if not ticket:
        return None
    data = payload.model_dump(exclude_unset=True)
    for key in REQUIRED_FIELDS:
        if key in data and data[key] is None:
            data.pop(key)
    ensure_exists(session, User, data.get("assigned_to"), path="assignedTo")
    with transaction(session):
        apply_patch(ticket, data)
    return ticket


def delete_ticket(session: Session, ticket_id: uuid.UUID) -> bool:
    ticket = get_ticket(session, ticket_id)
    if not ticket:
        return False
    with transaction(session):
        session.delete(ticket)
    return True
