from types import SimpleNamespace

import pytest
from fastapi import HTTPException

from parc_api.core.permissions import ROUTE_PERMISSIONS, require_role, required_roles


def test_every_guarded_route_exists(app):
    paths = app.openapi()["paths"]
    routes = {(method.upper(), path) for path, operations in paths.items() for method in operations}
    missing = [key for key in ROUTE_PERMISSIONS if key not in routes]
    assert missing == []


def test_unlisted_route_only_needs_session():
    assert required_roles("GET", "/api/equipment") is None
    assert required_roles("post", "/api/equipment") == frozenset({"admin", "technicien"})


@pytest.mark.parametrize(
    "path",
    ["/api/users", "/api/employees", "/api/equipment", "/api/tickets", "/api/inventory",
     "/api/licenses", "/api/alerts", "/api/maintenance", "/api/activities", "/api/dashboard/stats"],
)
def test_anonymous_requests_are_rejected(client, path):
    res = client.get(path)
    assert res.status_code == 401


def test_plain_user_can_read_but_not_write_equipment(user_client):
    assert user_client.get("/api/equipment").status_code == 200
    res = user_client.post(
        "/api/equipment",
        json={"type": "ordinateur", "model": "X", "serialNumber": "SN-X", "purchaseDate": "2024-01-01"},
    )
    assert res.status_code == 403
    assert res.json() == {"message": "Forbidden"}


def test_technician_cannot_delete(technician_client, make_equipment):
    equipment = make_equipment()
    res = technician_client.delete(f"/api/equipment/{equipment['id']}")
    assert res.status_code == 403


def test_admin_can_delete(admin_client, make_equipment):
    equipment = make_equipment()
    assert admin_client.delete(f"/api/equipment/{equipment['id']}").status_code == 204
    assert admin_client.get(f"/api/equipment/{equipment['id']}").status_code == 404


def test_user_management_is_admin_only(technician_client, admin_client):
    body = {"email": "staff@example.com", "password": "hunter22", "role": "technicien"}
    assert technician_client.post("/api/users", json=body).status_code == 403
    res = admin_client.post("/api/users", json=body)
    assert res.status_code == 201
    assert res.json()["role"] == "technicien"


def test_plain_user_can_open_tickets(user_client):
    res = user_client.post("/api/tickets", json={"title": "Écran noir", "description": "Plus d'affichage"})
    assert res.status_code == 201


def test_require_role_guard():
    guard = require_role("admin")
    admin = SimpleNamespace(role="admin")
    assert guard(user=admin) is admin
    with pytest.raises(HTTPException) as exc:
        guard(user=SimpleNamespace(role="technicien"))
    assert exc.value.status_code == 403
