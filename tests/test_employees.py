def test_employee_crud(admin_client, make_employee):
    employee = make_employee(name="Jean Dupont", email="Jean.Dupont@Example.com")
    assert employee["email"] == "jean.dupont@example.com"

    res = admin_client.get(f"/api/employees/{employee['id']}")
    assert res.status_code == 200
    assert res.json()["name"] == "Jean Dupont"

    res = admin_client.put(f"/api/employees/{employee['id']}", json={"position": "Chef de projet"})
    assert res.status_code == 200
    assert res.json()["position"] == "Chef de projet"
    assert res.json()["department"] == employee["department"]

    assert admin_client.delete(f"/api/employees/{employee['id']}").status_code == 204
    assert admin_client.get(f"/api/employees/{employee['id']}").status_code == 404


def test_duplicate_employee_email(admin_client, make_employee):
    make_employee(email="dup@example.com")
    res = admin_client.post(
        "/api/employees",
        json={"name": "Other", "email": "dup@example.com", "department": "IT", "position": "Dev"},
    )
    assert res.status_code == 400
    assert res.json()["errors"][0]["path"] == "email"


def test_missing_fields_are_reported_by_path(admin_client):
    res = admin_client.post("/api/employees", json={"name": "Incomplete"})
    assert res.status_code == 400
    paths = {e["path"] for e in res.json()["errors"]}
    assert {"email", "department", "position"} <= paths


def test_malformed_id_is_a_validation_error(admin_client):
    res = admin_client.get("/api/employees/not-a-uuid")
    assert res.status_code == 400


def test_equipment_assigned_to_employee(admin_client, make_employee, make_equipment):
    employee = make_employee()
    make_equipment(assignedTo=employee["id"])
    make_equipment()

    res = admin_client.get(f"/api/employees/{employee['id']}/equipment")
    assert res.status_code == 200
    assert len(res.json()) == 1
    assert res.json()[0]["assignedTo"] == employee["id"]


def test_technician_cannot_delete_employee(technician_client, make_employee):
    employee = make_employee()
    assert technician_client.delete(f"/api/employees/{employee['id']}").status_code == 403


def test_delete_unassigns_equipment_and_inventory(admin_client, make_employee, make_equipment):
    employee = make_employee()
    equipment = make_equipment(assignedTo=employee["id"])
    item = admin_client.post(
        "/api/inventory", json={"equipmentId": equipment["id"], "assignedTo": employee["id"], "location": "Bureau 12"}
    ).json()

    assert admin_client.delete(f"/api/employees/{employee['id']}").status_code == 204

    assert admin_client.get(f"/api/equipment/{equipment['id']}").json()["assignedTo"] is None
    assert admin_client.get(f"/api/inventory/{item['id']}").json()["assignedTo"] is None
