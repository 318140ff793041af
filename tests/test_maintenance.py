import uuid
from datetime import date, timedelta

import pytest
from sqlalchemy import func, select

from parc_api.models import MaintenanceEquipment, MaintenanceTechnician, utc_today


def _schedule_body(start, end, **overrides):
    body = {
        "type": "preventive",
        "title": "Nettoyage serveurs",
        "description": "Dépoussiérage et contrôle",
        "startDate": start.isoformat(),
        "endDate": end.isoformat(),
    }
    body.update(overrides)
    return body


@pytest.fixture
def schedule(technician_client):
    today = utc_today()
    res = technician_client.post("/api/maintenance", json=_schedule_body(today + timedelta(days=2), today + timedelta(days=3)))
    assert res.status_code == 201, res.text
    return res.json()


def test_create_schedule(technician_client, schedule):
    assert schedule["status"] == "planifie"
    assert schedule["createdBy"] == str(technician_client.user.id)
    assert schedule["technicianIds"] == []
    assert schedule["equipmentIds"] == []


def test_end_before_start_rejected(technician_client):
    today = utc_today()
    res = technician_client.post("/api/maintenance", json=_schedule_body(today, today - timedelta(days=1)))
    assert res.status_code == 400
    assert res.json()["errors"][0]["path"] == "endDate"


def test_same_day_schedule_allowed(technician_client):
    today = utc_today()
    res = technician_client.post("/api/maintenance", json=_schedule_body(today, today))
    assert res.status_code == 201


def test_update_checks_merged_dates(technician_client, schedule):
    start = date.fromisoformat(schedule["startDate"])
    res = technician_client.put(
        f"/api/maintenance/{schedule['id']}", json={"endDate": (start - timedelta(days=1)).isoformat()}
    )
    assert res.status_code == 400
    assert res.json()["errors"][0]["path"] == "endDate"

    res = technician_client.put(f"/api/maintenance/{schedule['id']}", json={"status": "en_cours"})
    assert res.status_code == 200
    assert res.json()["status"] == "en_cours"


def test_link_technicians_and_equipment(technician_client, schedule, make_equipment):
    equipment = make_equipment()
    tech_id = str(technician_client.user.id)
    base = f"/api/maintenance/{schedule['id']}"

    assert technician_client.post(f"{base}/technicians/{tech_id}").status_code == 204
    assert technician_client.post(f"{base}/equipment/{equipment['id']}").status_code == 204

    detail = technician_client.get(base).json()
    assert detail["technicianIds"] == [tech_id]
    assert detail["equipmentIds"] == [equipment["id"]]

    technicians = technician_client.get(f"{base}/technicians").json()
    assert [t["id"] for t in technicians] == [tech_id]
    linked = technician_client.get(f"{base}/equipment").json()
    assert [e["serialNumber"] for e in linked] == [equipment["serialNumber"]]

    assert technician_client.delete(f"{base}/technicians/{tech_id}").status_code == 204
    assert technician_client.delete(f"{base}/equipment/{equipment['id']}").status_code == 204
    detail = technician_client.get(base).json()
    assert detail["technicianIds"] == []
    assert detail["equipmentIds"] == []


def test_linking_twice_is_a_no_op(technician_client, schedule):
    tech_id = str(technician_client.user.id)
    url = f"/api/maintenance/{schedule['id']}/technicians/{tech_id}"
    assert technician_client.post(url).status_code == 204
    assert technician_client.post(url).status_code == 204
    assert technician_client.get(f"/api/maintenance/{schedule['id']}").json()["technicianIds"] == [tech_id]


def test_link_to_unknown_targets(technician_client, schedule):
    missing = "00000000-0000-0000-0000-000000000000"
    res = technician_client.post(f"/api/maintenance/{schedule['id']}/equipment/{missing}")
    assert res.status_code == 404
    assert res.json() == {"message": "Equipment not found"}

    res = technician_client.post(f"/api/maintenance/{missing}/technicians/{technician_client.user.id}")
    assert res.status_code == 404
    assert res.json() == {"message": "Maintenance schedule not found"}


def test_plain_user_cannot_link(user_client, schedule):
    res = user_client.post(f"/api/maintenance/{schedule['id']}/technicians/{user_client.user.id}")
    assert res.status_code == 403


def test_delete_removes_links(admin_client, technician_client, schedule, make_equipment, session):
    equipment = make_equipment()
    base = f"/api/maintenance/{schedule['id']}"
    technician_client.post(f"{base}/technicians/{technician_client.user.id}")
    technician_client.post(f"{base}/equipment/{equipment['id']}")

    assert technician_client.delete(base).status_code == 403
    assert admin_client.delete(base).status_code == 204
    assert admin_client.get(base).status_code == 404
    # The linked equipment itself survives.
    assert admin_client.get(f"/api/equipment/{equipment['id']}").status_code == 200

    schedule_id = uuid.UUID(schedule["id"])
    for model in (MaintenanceTechnician, MaintenanceEquipment):
        stmt = select(func.count()).select_from(model).where(model.maintenance_id == schedule_id)
        assert session.scalar(stmt) == 0


def test_upcoming(technician_client, schedule):
    today = utc_today()
    technician_client.post("/api/maintenance", json=_schedule_body(today + timedelta(days=30), today + timedelta(days=31), title="Plus tard"))
    technician_client.post(
        "/api/maintenance",
        json=_schedule_body(today + timedelta(days=1), today + timedelta(days=1), title="Annulée", status="annule"),
    )

    titles = [s["title"] for s in technician_client.get("/api/maintenance/upcoming").json()]
    assert titles == [schedule["title"]]

    titles = [s["title"] for s in technician_client.get("/api/maintenance/upcoming?days=60").json()]
    assert titles == [schedule["title"], "Plus tard"]
