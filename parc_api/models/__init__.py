from .user import Base, User, utcnow, utc_today, ROLE_ADMIN, ROLE_TECHNICIAN, ROLE_USER
from .session import UserSession
from .employee import Employee
from .equipment import Equipment, EquipmentHistory
from .inventory import InventoryItem
from .ticket import Ticket
from .license import License
from .entity_ref import EntityKey, ENTITY_KINDS
from .alert import Alert
from .activity import Activity
from .maintenance import MaintenanceSchedule, MaintenanceTechnician, MaintenanceEquipment

__all__ = [
    "Base",
    "User",
    "utcnow",
    "utc_today",
    "ROLE_ADMIN",
    "ROLE_TECHNICIAN",
    "ROLE_USER",
    "UserSession",
    "Employee",
    "Equipment",
    "EquipmentHistory",
    "InventoryItem",
    "Ticket",
    "License",
    "EntityKey",
    "ENTITY_KINDS",
    "Alert",
    "Activity",
    "MaintenanceSchedule",
    "MaintenanceTechnician",
    "MaintenanceEquipment",
]
