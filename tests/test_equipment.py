from datetime import datetime, timedelta

from sqlalchemy import text

from parc_api.models import utc_today


def test_create_equipment_records_activity(admin_client):
    res = admin_client.post(
        "/api/equipment",
        json={"type": "ordinateur", "model": "ThinkPad", "serialNumber": "SN-1", "purchaseDate": "2024-03-01"},
    )
    assert res.status_code == 201
    created = res.json()
    assert created["status"] == "en service"
    assert created["assignedTo"] is None

    res = admin_client.get(f"/api/equipment/{created['id']}")
    assert res.status_code == 200
    fetched = res.json()
    for key in ("id", "type", "model", "serialNumber", "purchaseDate", "status"):
        assert fetched[key] == created[key]

    activities = admin_client.get("/api/activities").json()
    assert activities[0]["type"] == "equipment_added"
    assert activities[0]["title"] == "ThinkPad ajouté"
    assert activities[0]["entity"] == {"kind": "equipment", "id": created["id"]}


def test_duplicate_serial_number(admin_client, make_equipment):
    make_equipment(serialNumber="SN-DUP")
    res = admin_client.post(
        "/api/equipment",
        json={"type": "serveur", "model": "PowerEdge", "serialNumber": "SN-DUP", "purchaseDate": "2024-03-01"},
    )
    assert res.status_code == 400
    assert res.json()["errors"] == [{"path": "serialNumber", "message": "A record with this serialNumber already exists"}]


def test_invalid_type_is_rejected(admin_client):
    res = admin_client.post(
        "/api/equipment",
        json={"type": "tablette", "model": "iPad", "serialNumber": "SN-T", "purchaseDate": "2024-03-01"},
    )
    assert res.status_code == 400
    assert res.json()["errors"][0]["path"] == "type"


def test_unknown_assignee_is_rejected(admin_client):
    res = admin_client.post(
        "/api/equipment",
        json={
            "type": "ordinateur",
            "model": "ThinkPad",
            "serialNumber": "SN-2",
            "purchaseDate": "2024-03-01",
            "assignedTo": "00000000-0000-0000-0000-000000000000",
        },
    )
    assert res.status_code == 400
    assert res.json()["errors"][0]["path"] == "assignedTo"


def test_update_writes_history_and_activity(technician_client, make_equipment):
    equipment = make_equipment(model="Latitude")
    res = technician_client.put(f"/api/equipment/{equipment['id']}", json={"status": "en maintenance"})
    assert res.status_code == 200
    assert res.json()["status"] == "en maintenance"

    history = technician_client.get(f"/api/equipment/{equipment['id']}/history").json()
    assert len(history) == 1
    assert history[0]["updatedBy"] == str(technician_client.user.id)
    assert history[0]["changes"] == {"status": {"from": "en service", "to": "en maintenance"}}

    activities = technician_client.get("/api/activities?limit=1").json()
    assert activities[0]["type"] == "equipment_updated"
    assert activities[0]["title"] == "Latitude mis à jour"


def test_empty_update_keeps_record(admin_client, make_equipment):
    equipment = make_equipment()
    res = admin_client.put(f"/api/equipment/{equipment['id']}", json={})
    assert res.status_code == 200
    body = res.json()
    for key in ("type", "model", "serialNumber", "purchaseDate", "status"):
        assert body[key] == equipment[key]
    assert admin_client.get(f"/api/equipment/{equipment['id']}/history").json() == []


def test_update_to_taken_serial(admin_client, make_equipment):
    make_equipment(serialNumber="SN-A")
    other = make_equipment(serialNumber="SN-B")
    res = admin_client.put(f"/api/equipment/{other['id']}", json={"serialNumber": "SN-A"})
    assert res.status_code == 400


def test_missing_equipment(admin_client):
    missing = "00000000-0000-0000-0000-000000000000"
    assert admin_client.get(f"/api/equipment/{missing}").status_code == 404
    assert admin_client.put(f"/api/equipment/{missing}", json={"model": "X"}).status_code == 404
    assert admin_client.delete(f"/api/equipment/{missing}").status_code == 404
    assert admin_client.get(f"/api/equipment/{missing}/history").status_code == 404


def test_delete_removes_links_inventory_and_history(admin_client, technician_client, make_equipment):
    equipment = make_equipment()
    keep = make_equipment()
    today = utc_today().isoformat()
    schedule = technician_client.post(
        "/api/maintenance",
        json={"type": "preventive", "title": "Contrôle", "description": "-", "startDate": today, "endDate": today},
    ).json()
    base = f"/api/maintenance/{schedule['id']}"
    technician_client.post(f"{base}/equipment/{equipment['id']}")
    technician_client.post(f"{base}/equipment/{keep['id']}")
    technician_client.post("/api/inventory", json={"equipmentId": equipment["id"], "location": "Stock"})
    technician_client.post("/api/inventory", json={"equipmentId": keep["id"], "location": "Stock"})
    technician_client.put(f"/api/equipment/{equipment['id']}", json={"status": "hors service"})

    assert admin_client.delete(f"/api/equipment/{equipment['id']}").status_code == 204

    assert admin_client.get(base).json()["equipmentIds"] == [keep["id"]]
    inventory = admin_client.get("/api/inventory").json()
    assert [item["equipmentId"] for item in inventory] == [keep["id"]]
    assert admin_client.get(f"/api/equipment/{equipment['id']}/history").status_code == 404


def test_sqlite_enforces_foreign_keys(session):
    assert session.execute(text("PRAGMA foreign_keys")).scalar() == 1


def test_timestamps_are_utc_aware(admin_client, make_equipment):
    equipment = make_equipment()
    fetched = admin_client.get(f"/api/equipment/{equipment['id']}").json()
    for key in ("createdAt", "updatedAt"):
        value = datetime.fromisoformat(fetched[key].replace("Z", "+00:00"))
        assert value.utcoffset() == timedelta(0)
