def test_inventory_crud(technician_client, make_equipment, make_employee):
    equipment = make_equipment()
    employee = make_employee()

    res = technician_client.post(
        "/api/inventory",
        json={"equipmentId": equipment["id"], "assignedTo": employee["id"], "location": "Bureau 204"},
    )
    assert res.status_code == 201
    item = res.json()
    assert item["condition"] == "fonctionnel"
    assert item["lastChecked"] is not None

    res = technician_client.put(f"/api/inventory/{item['id']}", json={"condition": "défectueux"})
    assert res.status_code == 200
    assert res.json()["condition"] == "défectueux"
    assert res.json()["location"] == "Bureau 204"

    assert len(technician_client.get("/api/inventory").json()) == 1


def test_inventory_requires_known_equipment(technician_client):
    res = technician_client.post(
        "/api/inventory",
        json={"equipmentId": "00000000-0000-0000-0000-000000000000", "location": "Stock"},
    )
    assert res.status_code == 400
    assert res.json()["errors"][0]["path"] == "equipmentId"


def test_second_inventory_record_for_same_equipment_is_allowed(technician_client, make_equipment):
    equipment = make_equipment()
    body = {"equipmentId": equipment["id"], "location": "Stock"}
    assert technician_client.post("/api/inventory", json=body).status_code == 201
    assert technician_client.post("/api/inventory", json=body).status_code == 201


def test_inventory_delete_is_admin_only(admin_client, technician_client, make_equipment):
    equipment = make_equipment()
    item = technician_client.post("/api/inventory", json={"equipmentId": equipment["id"], "location": "Stock"}).json()
    assert technician_client.delete(f"/api/inventory/{item['id']}").status_code == 403
    assert admin_client.delete(f"/api/inventory/{item['id']}").status_code == 204


def test_license_crud(admin_client):
    res = admin_client.post(
        "/api/licenses",
        json={"name": "Office 365", "vendor": "Microsoft", "type": "Microsoft", "maxUsers": 50, "cost": 12000},
    )
    assert res.status_code == 201
    lic = res.json()
    assert lic["currentUsers"] == 0
    assert lic["licenseKey"] is None

    res = admin_client.put(f"/api/licenses/{lic['id']}", json={"currentUsers": 12})
    assert res.status_code == 200
    assert res.json()["currentUsers"] == 12
    assert res.json()["maxUsers"] == 50

    assert admin_client.delete(f"/api/licenses/{lic['id']}").status_code == 204
    assert admin_client.get(f"/api/licenses/{lic['id']}").status_code == 404


def test_empty_license_update_changes_nothing(admin_client):
    lic = admin_client.post("/api/licenses", json={"name": "Acrobat", "vendor": "Adobe", "type": "Adobe"}).json()
    res = admin_client.put(f"/api/licenses/{lic['id']}", json={})
    assert res.status_code == 200
    for key in ("name", "vendor", "type", "currentUsers", "maxUsers", "cost"):
        assert res.json()[key] == lic[key]


def test_negative_license_cost_rejected(admin_client):
    res = admin_client.post("/api/licenses", json={"name": "X", "vendor": "Y", "type": "Z", "cost": -1})
    assert res.status_code == 400
    assert res.json()["errors"][0]["path"] == "cost"
