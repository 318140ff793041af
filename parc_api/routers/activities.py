from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..core.permissions import authorize
from ..db import get_session
from ..schemas.activity import ActivityOut
from ..services.activity_service import get_recent_activities

router = APIRouter(prefix="/api/activities", tags=["activities"], dependencies=[Depends(authorize)])


@router.get("", response_model=list[ActivityOut])
def list_activities(limit: int = Query(default=10, ge=1, le=100), session: Session = Depends(get_session)):
    return get_recent_activities(session, limit)
