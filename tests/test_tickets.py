def test_ticket_defaults_and_creator(user_client):
    res = user_client.post("/api/tickets", json={"title": "Imprimante", "description": "Bourrage papier"})
    assert res.status_code == 201
    ticket = res.json()
    assert ticket["status"] == "ouvert"
    assert ticket["priority"] == "moyenne"
    assert ticket["createdBy"] == str(user_client.user.id)


def test_creator_cannot_be_spoofed(user_client, admin_client):
    res = user_client.post(
        "/api/tickets",
        json={"title": "VPN", "description": "Connexion impossible", "createdBy": str(admin_client.user.id)},
    )
    assert res.status_code == 201
    assert res.json()["createdBy"] == str(user_client.user.id)


def test_filters(user_client, technician_client):
    tech_id = str(technician_client.user.id)
    user_client.post("/api/tickets", json={"title": "A", "description": "a", "assignedTo": tech_id})
    user_client.post("/api/tickets", json={"title": "B", "description": "b", "priority": "haute"})
    technician_client.post("/api/tickets", json={"title": "C", "description": "c", "status": "en cours"})

    mine = user_client.get(f"/api/tickets?createdBy={user_client.user.id}").json()
    assert sorted(t["title"] for t in mine) == ["A", "B"]

    assigned = user_client.get(f"/api/tickets?assignedTo={tech_id}").json()
    assert [t["title"] for t in assigned] == ["A"]

    in_progress = user_client.get("/api/tickets", params={"status": "en cours"}).json()
    assert [t["title"] for t in in_progress] == ["C"]


def test_staff_updates_status(user_client, technician_client):
    ticket = user_client.post("/api/tickets", json={"title": "Clavier", "description": "Touches"}).json()

    res = user_client.put(f"/api/tickets/{ticket['id']}", json={"status": "résolu"})
    assert res.status_code == 403

    res = technician_client.put(f"/api/tickets/{ticket['id']}", json={"status": "résolu"})
    assert res.status_code == 200
    assert res.json()["status"] == "résolu"
    assert res.json()["title"] == "Clavier"


def test_invalid_status_rejected(user_client):
    res = user_client.post("/api/tickets", json={"title": "X", "description": "x", "status": "perdu"})
    assert res.status_code == 400
    assert res.json()["errors"][0]["path"] == "status"


def test_delete_ticket(admin_client, user_client):
    ticket = user_client.post("/api/tickets", json={"title": "Souris", "description": "HS"}).json()
    assert user_client.delete(f"/api/tickets/{ticket['id']}").status_code == 403
    assert admin_client.delete(f"/api/tickets/{ticket['id']}").status_code == 204
    assert admin_client.get(f"/api/tickets/{ticket['id']}").json() == {"message": "Ticket not found"}
