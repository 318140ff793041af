from fastapi import Depends, HTTPException, Request
from sqlalchemy.orm import Session

from ..db import get_session
from ..models.user import User
from ..services.session_service import resolve_session_user
from .security import unsign_session_id


def get_session_id(request: Request) -> str | None:
    settings = request.app.state.settings
    token = request.cookies.get(settings.SESSION_COOKIE_NAME)
    if not token:
        return None
    return unsign_session_id(token, settings.SESSION_SECRET)


def get_current_user(
    request: Request,
    session: Session = Depends(get_session),
) -> User:
    sid = get_session_id(request)
    if not sid:
        raise HTTPException(status_code=401, detail="Unauthorized")

    user = resolve_session_user(session, sid)
    if not user or not user.is_active:
        raise HTTPException(status_code=401, detail="Unauthorized")
    request.state.user = user
    return user
