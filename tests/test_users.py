from tests.conftest import PASSWORD


def test_list_and_get_users(admin_client):
    res = admin_client.get("/api/users")
    assert res.status_code == 200
    emails = [u["email"] for u in res.json()]
    assert admin_client.user.email in emails

    res = admin_client.get(f"/api/users/{admin_client.user.id}")
    assert res.status_code == 200
    assert res.json()["role"] == "admin"


def test_unknown_user_is_404(admin_client):
    res = admin_client.get("/api/users/00000000-0000-0000-0000-000000000000")
    assert res.status_code == 404
    assert res.json() == {"message": "User not found"}


def test_update_user_role_and_password(admin_client, client, create_user):
    user = create_user()
    res = admin_client.put(f"/api/users/{user.id}", json={"role": "technicien", "password": "new-secret"})
    assert res.status_code == 200
    assert res.json()["role"] == "technicien"

    assert client.post("/api/auth/login", json={"email": user.email, "password": PASSWORD}).status_code == 401
    assert client.post("/api/auth/login", json={"email": user.email, "password": "new-secret"}).status_code == 200


def test_delete_disables_user_and_ends_sessions(admin_client, user_client):
    target = user_client.user
    assert user_client.get("/api/auth/user").status_code == 200

    res = admin_client.delete(f"/api/users/{target.id}")
    assert res.status_code == 204

    assert user_client.get("/api/auth/user").status_code == 401
    res = admin_client.get(f"/api/users/{target.id}")
    assert res.status_code == 200
    assert res.json()["isActive"] is False


def test_create_user_duplicate_email(admin_client):
    body = {"email": "dup@example.com", "password": "hunter22"}
    assert admin_client.post("/api/users", json=body).status_code == 201
    res = admin_client.post("/api/users", json=body)
    assert res.status_code == 400
    assert res.json()["errors"] == [{"path": "email", "message": "A record with this email already exists"}]
