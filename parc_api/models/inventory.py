import uuid
from datetime import datetime

from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, ForeignKey, Uuid, func
from .user import Base, UTCDateTime, utcnow


class InventoryItem(Base):
    __tablename__ = "inventory"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    equipment_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("equipment.id"))
    assigned_to: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("employees.id"), nullable=True)
    location: Mapped[str] = mapped_column(String(200))
    last_checked: Mapped[datetime | None] = mapped_column(UTCDateTime, default=utcnow, nullable=True)
    condition: Mapped[str] = mapped_column(String(32), default="fonctionnel")

    created_at: Mapped[datetime] = mapped_column(UTCDateTime, default=utcnow, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(UTCDateTime, default=utcnow, server_default=func.now())
