from sqlalchemy import desc, select
from sqlalchemy.orm import Session

from ..models import Activity, EntityKey


def record_activity(
    session: Session,
    *,
    type: str,
    title: str,
    description: str,
    status: str,
    entity: EntityKey | None = None,
) -> Activity:
    """Stage an activity row. The caller owns the transaction."""
    activity = Activity(type=type, title=title, description=description, status=status)
    activity.entity = entity
    session.add(activity)
    return activity


def get_recent_activities(session: Session, limit: int = 10) -> list[Activity]:
    stmt = select(Activity).order_by(desc(Activity.created_at)).limit(limit)
    return list(session.scalars(stmt).all())
