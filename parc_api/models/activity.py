import uuid
from datetime import datetime

from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, Text, Uuid, func
from .user import Base, UTCDateTime, utcnow
from .entity_ref import EntityRefMixin, entity_ref_check


class Activity(EntityRefMixin, Base):
    __tablename__ = "activities"
    __table_args__ = (entity_ref_check("activities"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # e.g. "equipment_added", "equipment_updated"
    type: Mapped[str] = mapped_column(String(64))
    title: Mapped[str] = mapped_column(String(255))
    description: Mapped[str] = mapped_column(Text)
    status: Mapped[str] = mapped_column(String(32))

    created_at: Mapped[datetime] = mapped_column(UTCDateTime, default=utcnow, server_default=func.now())
