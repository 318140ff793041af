from __future__ import annotations

import logging
import secrets
import uuid
from datetime import datetime, timedelta, timezone

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from ..models import User, UserSession

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def purge_expired_sessions(session: Session) -> int:
    result = session.execute(delete(UserSession).where(UserSession.expires_at <= _now()))
    return result.rowcount or 0


def create_session(session: Session, user_id: uuid.UUID, ttl_seconds: int) -> str:
    purged = purge_expired_sessions(session)
    if purged:
        logger.debug("Purged %d expired sessions", purged)
    sid = secrets.token_urlsafe(32)
    session.add(UserSession(sid=sid, user_id=user_id, expires_at=_now() + timedelta(seconds=ttl_seconds)))
    session.commit()
    return sid


def resolve_session_user(session: Session, sid: str) -> User | None:
    stmt = (
        select(User)
        .join(UserSession, UserSession.user_id == User.id)
        .where(UserSession.sid == sid)
        .where(UserSession.expires_at > _now())
    )
    return session.scalar(stmt)


def destroy_session(session: Session, sid: str) -> None:
    session.execute(delete(UserSession).where(UserSession.sid == sid))
    session.commit()


def destroy_user_sessions(session: Session, user_id: uuid.UUID) -> None:
    session.execute(delete(UserSession).where(UserSession.user_id == user_id))
