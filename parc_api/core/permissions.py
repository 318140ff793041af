from typing import Iterable

from fastapi import Depends, HTTPException, Request

from ..models.user import User, ROLE_ADMIN, ROLE_TECHNICIAN
from .current_user import get_current_user

STAFF = frozenset({ROLE_ADMIN, ROLE_TECHNICIAN})
ADMIN_ONLY = frozenset({ROLE_ADMIN})

# (method, route path) -> roles allowed. Routes not listed only need a session.
ROUTE_PERMISSIONS: dict[tuple[str, str], frozenset[str]] = {
    ("POST", "/api/users"): ADMIN_ONLY,
    ("PUT", "/api/users/{user_id}"): ADMIN_ONLY,
    ("DELETE", "/api/users/{user_id}"): ADMIN_ONLY,
    ("POST", "/api/employees"): STAFF,
    ("PUT", "/api/employees/{employee_id}"): STAFF,
    ("DELETE", "/api/employees/{employee_id}"): ADMIN_ONLY,
    ("POST", "/api/equipment"): STAFF,
    ("PUT", "/api/equipment/{equipment_id}"): STAFF,
    ("DELETE", "/api/equipment/{equipment_id}"): ADMIN_ONLY,
    ("PUT", "/api/tickets/{ticket_id}"): STAFF,
    ("DELETE", "/api/tickets/{ticket_id}"): ADMIN_ONLY,
    ("POST", "/api/inventory"): STAFF,
    ("PUT", "/api/inventory/{item_id}"): STAFF,
    ("DELETE", "/api/inventory/{item_id}"): ADMIN_ONLY,
    ("POST", "/api/licenses"): STAFF,
    ("PUT", "/api/licenses/{license_id}"): STAFF,
    ("DELETE", "/api/licenses/{license_id}"): ADMIN_ONLY,
    ("POST", "/api/alerts"): STAFF,
    ("PUT", "/api/alerts/{alert_id}"): STAFF,
    ("DELETE", "/api/alerts/{alert_id}"): ADMIN_ONLY,
    ("POST", "/api/maintenance"): STAFF,
    ("PUT", "/api/maintenance/{schedule_id}"): STAFF,
    ("DELETE", "/api/maintenance/{schedule_id}"): ADMIN_ONLY,
    ("POST", "/api/maintenance/{schedule_id}/technicians/{technician_id}"): STAFF,
    ("DELETE", "/api/maintenance/{schedule_id}/technicians/{technician_id}"): STAFF,
    ("POST", "/api/maintenance/{schedule_id}/equipment/{equipment_id}"): STAFF,
    ("DELETE", "/api/maintenance/{schedule_id}/equipment/{equipment_id}"): STAFF,
    ("POST", "/import"): STAFF,
}


def check_role(user: User, allowed: Iterable[str]) -> None:
    if user.role not in allowed:
        raise HTTPException(status_code=403, detail="Forbidden")


def required_roles(method: str, path: str) -> frozenset[str] | None:
    return ROUTE_PERMISSIONS.get((method.upper(), path))


def authorize(request: Request, user: User = Depends(get_current_user)) -> User:
    route = request.scope.get("route")
    path = getattr(route, "path", request.url.path)
    allowed = required_roles(request.method, path)
    if allowed is not None:
        check_role(user, allowed)
    return user


def require_role(*roles: str):
    allowed = frozenset(roles)

    def dependency(user: User = Depends(get_current_user)) -> User:
        check_role(user, allowed)
        return user

    return dependency
