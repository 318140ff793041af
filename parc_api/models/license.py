import uuid
from datetime import datetime

from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, Integer, Uuid, func
from .user import Base, UTCDateTime, utcnow


class License(Base):
    __tablename__ = "licenses"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(200))
    vendor: Mapped[str] = mapped_column(String(200))
    type: Mapped[str] = mapped_column(String(100))  # Microsoft, Adobe, Antivirus...
    license_key: Mapped[str | None] = mapped_column(String(255), nullable=True)
    max_users: Mapped[int | None] = mapped_column(Integer, nullable=True)
    current_users: Mapped[int] = mapped_column(Integer, default=0, server_default="0")
    cost: Mapped[int | None] = mapped_column(Integer, nullable=True)  # cents

    created_at: Mapped[datetime] = mapped_column(UTCDateTime, default=utcnow, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(UTCDateTime, default=utcnow, server_default=func.now())
