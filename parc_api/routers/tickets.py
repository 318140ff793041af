import uuid

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.orm import Session

from ..core.permissions import authorize
from ..db import get_session
from ..models.user import User
from ..schemas.ticket import TicketCreateIn, TicketOut, TicketUpdateIn
from ..services import ticket_service

router = APIRouter(prefix="/api/tickets", tags=["tickets"], dependencies=[Depends(authorize)])


@router.get("", response_model=list[TicketOut])
def list_tickets(
    created_by: uuid.UUID | None = Query(default=None, alias="createdBy"),
    assigned_to: uuid.UUID | None = Query(default=None, alias="assignedTo"),
    status: str | None = None,
    session: Session = Depends(get_session),
):
    return ticket_service.list_tickets(session, created_by=created_by, assigned_to=assigned_to, status=status)


@router.get("/{ticket_id}", response_model=TicketOut)
def get_ticket(ticket_id: uuid.UUID, session: Session = Depends(get_session)):
    ticket = ticket_service.get_ticket(session, ticket_id)
    if not ticket:
        raise HTTPException(status_code=404, detail="Ticket not found")
    return ticket


@router.post("", response_model=TicketOut, status_code=201)
def create_ticket(
    payload: TicketCreateIn,
    session: Session = Depends(get_session),
    user: User = Depends(authorize),
):
    return ticket_service.create_ticket(session, payload, created_by=user.id)


@router.put("/{ticket_id}", response_model=TicketOut)
def update_ticket(ticket_id: uuid.UUID, payload: TicketUpdateIn, session: Session = Depends(get_session)):
    ticket = ticket_service.update_ticket(session, ticket_id, payload)
    if not ticket:
        raise HTTPException(status_code=404, detail="Ticket not found")
    return ticket


@router.delete("/{ticket_id}", status_code=204)
def delete_ticket(ticket_id: uuid.UUID, session: Session = Depends(get_session)):
    if not ticket_service.delete_ticket(session, ticket_id):
        raise HTTPException(status_code=404, detail="Ticket not found")
    return Response(status_code=204)
