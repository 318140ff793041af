import uuid

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from ..core.permissions import authorize
from ..db import get_session
from ..models.user import User
from ..schemas.alert import AlertCreateIn, AlertOut, AlertUpdateIn
from ..services import alert_service

router = APIRouter(prefix="/api/alerts", tags=["alerts"], dependencies=[Depends(authorize)])


@router.get("", response_model=list[AlertOut])
def list_alerts(
    type: str | None = None,
    status: str | None = None,
    priority: str | None = None,
    session: Session = Depends(get_session),
):
    return alert_service.list_alerts(session, type=type, status=status, priority=priority)


@router.get("/{alert_id}", response_model=AlertOut)
def get_alert(alert_id: uuid.UUID, session: Session = Depends(get_session)):
    alert = alert_service.get_alert(session, alert_id)
    if not alert:
        raise HTTPException(status_code=404, detail="Alert not found")
    return alert


@router.post("", response_model=AlertOut, status_code=201)
def create_alert(
    payload: AlertCreateIn,
    session: Session = Depends(get_session),
    user: User = Depends(authorize),
):
    return alert_service.create_alert(session, payload, created_by=user.id)


@router.put("/{alert_id}", response_model=AlertOut)
def update_alert(alert_id: uuid.UUID, payload: AlertUpdateIn, session: Session = Depends(get_session)):
    alert = alert_service.update_alert(session, alert_id, payload)
    if not alert:
        raise HTTPException(status_code=404, detail="Alert not found")
    return alert


@router.delete("/{alert_id}", status_code=204)
def delete_alert(alert_id: uuid.UUID, session: Session = Depends(get_session)):
    if not alert_service.delete_alert(session, alert_id):
        raise HTTPException(status_code=404, detail="Alert not found")
    return Response(status_code=204)
