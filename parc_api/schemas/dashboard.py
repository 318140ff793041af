from .common import ApiModel
from .activity import ActivityOut
from .alert import AlertOut
from .maintenance import MaintenanceOut


class StatusCount(ApiModel):
    status: str
    count: int


class TicketDayOut(ApiModel):
    date: str
    created: int
    resolved: int


class DashboardStatsOut(ApiModel):
    total_equipment: int
    open_tickets: int
    active_users: int
    equipment_by_status: list[StatusCount]
    tickets_by_day: list[TicketDayOut]
    alerts: list[AlertOut]
    upcoming_maintenances: list[MaintenanceOut]
    recent_activities: list[ActivityOut]
