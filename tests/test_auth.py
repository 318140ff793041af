from fastapi.testclient import TestClient

from parc_api.main import create_app
from parc_api.services import user_service
from tests.conftest import PASSWORD


def test_register_logs_in_and_returns_user(client):
    res = client.post(
        "/api/auth/register",
        json={"email": "New.User@Example.com", "password": "hunter22", "firstName": "New", "lastName": "User"},
    )
    assert res.status_code == 201
    user = res.json()["user"]
    assert user["email"] == "new.user@example.com"
    assert user["role"] == "utilisateur"
    assert "passwordHash" not in user

    me = client.get("/api/auth/user")
    assert me.status_code == 200
    assert me.json()["id"] == user["id"]


def test_register_duplicate_email_is_a_field_error(client, create_user):
    create_user(email="taken@example.com")
    res = client.post("/api/auth/register", json={"email": "taken@example.com", "password": "hunter22"})
    assert res.status_code == 400
    body = res.json()
    assert body["errors"][0]["path"] == "email"


def test_register_rejects_short_password(client):
    res = client.post("/api/auth/register", json={"email": "a@example.com", "password": "123"})
    assert res.status_code == 400
    body = res.json()
    assert body["message"] == "Invalid request data"
    assert any(e["path"] == "password" for e in body["errors"])


def test_login_and_logout(client, create_user):
    user = create_user(email="bob@example.com")
    res = client.post("/api/auth/login", json={"email": "BOB@example.com", "password": PASSWORD})
    assert res.status_code == 200
    assert res.json()["user"]["id"] == str(user.id)
    assert client.get("/api/auth/user").status_code == 200

    res = client.post("/api/auth/logout")
    assert res.status_code == 200
    assert res.json() == {"message": "Logged out"}
    assert client.get("/api/auth/user").status_code == 401


def test_login_wrong_password(client, create_user):
    create_user(email="carol@example.com")
    res = client.post("/api/auth/login", json={"email": "carol@example.com", "password": "wrong-password"})
    assert res.status_code == 401
    assert res.json() == {"message": "Unauthorized"}


def test_login_inactive_user_rejected(client, create_user):
    create_user(email="gone@example.com", is_active=False)
    res = client.post("/api/auth/login", json={"email": "gone@example.com", "password": PASSWORD})
    assert res.status_code == 401


def test_current_user_requires_session(client):
    res = client.get("/api/auth/user")
    assert res.status_code == 401
    assert res.json() == {"message": "Unauthorized"}


def test_tampered_cookie_is_rejected(app, client, settings):
    other = TestClient(app)
    other.cookies.set(settings.SESSION_COOKIE_NAME, "not-a-signed-token")
    assert other.get("/api/auth/user").status_code == 401


def test_session_cookie_flags(client, create_user, settings):
    user = create_user()
    res = client.post("/api/auth/login", json={"email": user.email, "password": PASSWORD})
    cookie = res.headers["set-cookie"]
    assert cookie.startswith(f"{settings.SESSION_COOKIE_NAME}=")
    assert "HttpOnly" in cookie
    assert "Max-Age=604800" in cookie
    assert "samesite=lax" in cookie.lower()


def test_seed_admin_at_startup(settings):
    settings.ADMIN_EMAIL = "root@example.com"
    settings.ADMIN_PASSWORD = "bootstrap-pw"
    with TestClient(create_app(settings)) as c:
        res = c.post("/api/auth/login", json={"email": "root@example.com", "password": "bootstrap-pw"})
        assert res.status_code == 200
        assert res.json()["user"]["role"] == "admin"


def test_login_replaces_previous_session(app, client, create_user, settings):
    user = create_user()
    client.post("/api/auth/login", json={"email": user.email, "password": PASSWORD})
    old_token = client.cookies.get(settings.SESSION_COOKIE_NAME)

    res = client.post("/api/auth/login", json={"email": user.email, "password": PASSWORD})
    assert res.status_code == 200
    assert client.cookies.get(settings.SESSION_COOKIE_NAME) != old_token
    assert client.get("/api/auth/user").status_code == 200

    stale = TestClient(app)
    stale.cookies.set(settings.SESSION_COOKIE_NAME, old_token)
    assert stale.get("/api/auth/user").status_code == 401


def test_unknown_email_still_checks_a_password_hash(session, monkeypatch):
    calls = []

    def fake_verify(password, hashed):
        calls.append(hashed)
        return False

    monkeypatch.setattr(user_service, "verify_password", fake_verify)
    assert user_service.authenticate_user(session, "nobody@example.com", "whatever") is None
    assert len(calls) == 1
    assert calls[0].startswith("$2")
