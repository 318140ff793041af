from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..core.permissions import authorize
from ..db import get_session
from ..schemas.dashboard import DashboardStatsOut
from ..services.dashboard_service import get_dashboard_stats

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"], dependencies=[Depends(authorize)])


@router.get("/stats", response_model=DashboardStatsOut)
def dashboard_stats(session: Session = Depends(get_session)):
    return get_dashboard_stats(session)
