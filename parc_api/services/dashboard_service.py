"""Cross-entity statistics for the dashboard.

Every call re-queries the database; there is no caching layer.
"""
from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone
from typing import Any

from sqlalchemy import desc, func, select
from sqlalchemy.orm import Session

from ..models import Alert, Equipment, Ticket, User, utc_today
from ..schemas.ticket import OPEN_TICKET_STATUSES
from .activity_service import get_recent_activities
from .maintenance_service import get_upcoming_maintenances

TREND_DAYS = 7
RESOLVED_STATUS = "résolu"
ALERT_LIMIT = 5
UPCOMING_MAINTENANCE_DAYS = 7
UPCOMING_MAINTENANCE_LIMIT = 3
RECENT_ACTIVITY_LIMIT = 5


def _count(session: Session, stmt) -> int:
    return int(session.scalar(stmt) or 0)


def utc_day(column, dialect_name: str):
    """Calendar day of a timestamp column, taken in UTC."""
    if dialect_name == "postgresql":
        # date() on timestamptz follows the connection TimeZone.
        return func.date(func.timezone("UTC", column))
    return func.date(column)


def _tickets_per_day(session: Session, column, since: datetime, *extra_filters) -> dict[str, int]:
    day = utc_day(column, session.get_bind().dialect.name)
    stmt = select(day.label("day"), func.count(Ticket.id)).where(column >= since)
    for f in extra_filters:
        stmt = stmt.where(f)
    stmt = stmt.group_by(day)
    return {str(d): int(n) for d, n in session.execute(stmt).all()}


def tickets_by_day(session: Session, today: date) -> list[dict[str, Any]]:
    first_day = today - timedelta(days=TREND_DAYS - 1)
    since = datetime.combine(first_day, time.min, tzinfo=timezone.utc)

    created = _tickets_per_day(session, Ticket.created_at, since)
    resolved = _tickets_per_day(session, Ticket.updated_at, since, Ticket.status == RESOLVED_STATUS)

    out = []
    for offset in range(TREND_DAYS):
        key = (first_day + timedelta(days=offset)).isoformat()
        out.append({"date": key, "created": created.get(key, 0), "resolved": resolved.get(key, 0)})
    return out


def equipment_by_status(session: Session) -> list[dict[str, Any]]:
    stmt = select(Equipment.status, func.count(Equipment.id)).group_by(Equipment.status).order_by(Equipment.status)
    return [{"status": status, "count": int(n)} for status, n in session.execute(stmt).all()]


def active_alerts(session: Session, limit: int = ALERT_LIMIT) -> list[Alert]:
    stmt = select(Alert).where(Alert.status != "resolue").order_by(desc(Alert.created_at)).limit(limit)
    return list(session.scalars(stmt).all())


def get_dashboard_stats(session: Session, today: date | None = None) -> dict[str, Any]:
    today = today or utc_today()
    return {
        "total_equipment": _count(session, select(func.count(Equipment.id))),
        "open_tickets": _count(
            session, select(func.count(Ticket.id)).where(Ticket.status.in_(OPEN_TICKET_STATUSES))
        ),
        "active_users": _count(session, select(func.count(User.id)).where(User.is_active.is_(True))),
        "equipment_by_status": equipment_by_status(session),
        "tickets_by_day": tickets_by_day(session, today),
        "alerts": active_alerts(session),
        "upcoming_maintenances": get_upcoming_maintenances(
            session, UPCOMING_MAINTENANCE_DAYS, today=today, limit=UPCOMING_MAINTENANCE_LIMIT
        ),
        "recent_activities": get_recent_activities(session, RECENT_ACTIVITY_LIMIT),
    }
