import logging

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from sqlalchemy.orm import Session

from ..core.config import Settings
from ..core.current_user import get_current_user, get_session_id
from ..core.security import sign_session_id
from ..db import get_session
from ..models.user import User
from ..schemas.auth import AuthUserOut, LoginIn, MessageOut, RegisterIn
from ..schemas.user import UserOut
from ..services.session_service import create_session, destroy_session
from ..services.user_service import authenticate_user, create_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


def set_session_cookie(response: Response, settings: Settings, sid: str) -> None:
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=sign_session_id(sid, settings.SESSION_SECRET),
        max_age=settings.SESSION_TTL_SECONDS,
        httponly=settings.SESSION_COOKIE_HTTPONLY,
        secure=settings.cookie_secure,
        samesite=settings.cookie_samesite,
        domain=settings.SESSION_COOKIE_DOMAIN,
        path="/",
    )


def clear_session_cookie(response: Response, settings: Settings) -> None:
    response.delete_cookie(
        key=settings.SESSION_COOKIE_NAME,
        httponly=settings.SESSION_COOKIE_HTTPONLY,
        secure=settings.cookie_secure,
        samesite=settings.cookie_samesite,
        domain=settings.SESSION_COOKIE_DOMAIN,
        path="/",
    )


def start_session(request: Request, response: Response, session: Session, user: User) -> None:
    # A sid carried over from before authentication is never reused.
    previous = get_session_id(request)
    if previous:
        destroy_session(session, previous)
    settings = request.app.state.settings
    sid = create_session(session, user.id, settings.SESSION_TTL_SECONDS)
    set_session_cookie(response, settings, sid)


@router.post("/login", response_model=AuthUserOut)
def login(
    payload: LoginIn,
    request: Request,
    response: Response,
    session: Session = Depends(get_session),
):
    user = authenticate_user(session, payload.email, payload.password)
    if not user:
        logger.info("Rejected login attempt")
        raise HTTPException(status_code=401, detail="Unauthorized")

    start_session(request, response, session, user)
    logger.info("User %s logged in", user.id)
    return {"user": user}


@router.post("/register", response_model=AuthUserOut, status_code=201)
def register(
    payload: RegisterIn,
    request: Request,
    response: Response,
    session: Session = Depends(get_session),
):
    user = create_user(
        session,
        email=payload.email,
        password=payload.password,
        first_name=payload.first_name,
        last_name=payload.last_name,
    )
    start_session(request, response, session, user)
    return {"user": user}


@router.post("/logout", response_model=MessageOut)
def logout(request: Request, response: Response, session: Session = Depends(get_session)):
    sid = get_session_id(request)
    if sid:
        destroy_session(session, sid)
    clear_session_cookie(response, request.app.state.settings)
    return {"message": "Logged out"}


@router.get("/user", response_model=UserOut)
def current_user(user: User = Depends(get_current_user)):
    return user
