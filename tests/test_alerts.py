def test_alert_with_entity_reference(technician_client, make_equipment):
    equipment = make_equipment()
    res = technician_client.post(
        "/api/alerts",
        json={
            "type": "maintenance",
            "title": "Disque plein",
            "description": "Plus de 95% utilisé",
            "priority": "haute",
            "entity": {"kind": "equipment", "id": equipment["id"]},
        },
    )
    assert res.status_code == 201
    alert = res.json()
    assert alert["status"] == "nouvelle"
    assert alert["createdBy"] == str(technician_client.user.id)
    assert alert["entity"] == {"kind": "equipment", "id": equipment["id"]}

    res = technician_client.put(f"/api/alerts/{alert['id']}", json={"entity": None, "status": "en_cours"})
    assert res.status_code == 200
    assert res.json()["entity"] is None
    assert res.json()["status"] == "en_cours"


def test_update_without_entity_keeps_it(technician_client, make_equipment):
    equipment = make_equipment()
    alert = technician_client.post(
        "/api/alerts",
        json={
            "type": "systeme",
            "title": "Sauvegarde",
            "description": "Échec",
            "priority": "moyenne",
            "entity": {"kind": "equipment", "id": equipment["id"]},
        },
    ).json()
    res = technician_client.put(f"/api/alerts/{alert['id']}", json={"priority": "basse"})
    assert res.json()["entity"] == alert["entity"]


def test_unknown_entity_kind_rejected(technician_client):
    res = technician_client.post(
        "/api/alerts",
        json={
            "type": "systeme",
            "title": "X",
            "description": "x",
            "priority": "basse",
            "entity": {"kind": "printer", "id": "00000000-0000-0000-0000-000000000000"},
        },
    )
    assert res.status_code == 400


def test_alert_filters(technician_client):
    for type_, priority in (("licence", "haute"), ("securite", "haute"), ("licence", "basse")):
        technician_client.post(
            "/api/alerts",
            json={"type": type_, "title": f"{type_}-{priority}", "description": "d", "priority": priority},
        )

    res = technician_client.get("/api/alerts", params={"type": "licence"}).json()
    assert sorted(a["title"] for a in res) == ["licence-basse", "licence-haute"]

    res = technician_client.get("/api/alerts", params={"type": "licence", "priority": "haute"}).json()
    assert [a["title"] for a in res] == ["licence-haute"]

    assert technician_client.get("/api/alerts", params={"status": "resolue"}).json() == []


def test_plain_user_reads_alerts_only(user_client):
    assert user_client.get("/api/alerts").status_code == 200
    res = user_client.post(
        "/api/alerts", json={"type": "systeme", "title": "X", "description": "x", "priority": "basse"}
    )
    assert res.status_code == 403
