import uuid
from datetime import date, datetime

from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, Text, Date, ForeignKey, UniqueConstraint, Uuid, func
from .user import Base, UTCDateTime, utcnow


class MaintenanceSchedule(Base):
    __tablename__ = "maintenance_schedules"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    type: Mapped[str] = mapped_column(String(32))  # preventive/corrective/mise_a_jour
    title: Mapped[str] = mapped_column(String(200))
    description: Mapped[str] = mapped_column(Text)
    start_date: Mapped[date] = mapped_column(Date)
    end_date: Mapped[date] = mapped_column(Date)
    status: Mapped[str] = mapped_column(String(32), default="planifie")
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_by: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("users.id"), nullable=True)

    created_at: Mapped[datetime] = mapped_column(UTCDateTime, default=utcnow, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(UTCDateTime, default=utcnow, server_default=func.now())


class MaintenanceTechnician(Base):
    __tablename__ = "maintenance_technicians"
    __table_args__ = (UniqueConstraint("maintenance_id", "technician_id", name="uq_maintenance_technician"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    maintenance_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("maintenance_schedules.id"))
    technician_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("users.id"))
    assigned_at: Mapped[datetime] = mapped_column(UTCDateTime, default=utcnow, server_default=func.now())


class MaintenanceEquipment(Base):
    __tablename__ = "maintenance_equipment"
    __table_args__ = (UniqueConstraint("maintenance_id", "equipment_id", name="uq_maintenance_equipment"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    maintenance_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("maintenance_schedules.id"))
    equipment_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("equipment.id"))
