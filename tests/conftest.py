import uuid

import pytest
from fastapi.testclient import TestClient

from parc_api.core.config import Settings
from parc_api.main import create_app
from parc_api.models import ROLE_ADMIN, ROLE_TECHNICIAN, ROLE_USER
from parc_api.services import user_service

PASSWORD = "secret123"


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        DATABASE_URL="sqlite://",
        AUTO_DB_BOOTSTRAP=True,
        SESSION_SECRET="test-secret",
        LOG_LEVEL="WARNING",
        ADMIN_EMAIL=None,
        ADMIN_PASSWORD=None,
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    # Entering the client runs the lifespan, which creates the tables.
    with TestClient(app) as c:
        yield c


@pytest.fixture
def session(app, client):
    s = app.state.db.session()
    yield s
    s.close()


@pytest.fixture
def create_user(session):
    def _create(role=ROLE_USER, email=None, password=PASSWORD, is_active=True):
        email = email or f"{role}-{uuid.uuid4().hex[:8]}@example.com"
        return user_service.create_user(
            session,
            email=email,
            password=password,
            first_name="Test",
            last_name=role.capitalize(),
            role=role,
            is_active=is_active,
        )

    return _create


@pytest.fixture
def login_as(app, client, create_user):
    """Returns a fresh client logged in with a new user of the given role."""

    def _login(role):
        user = create_user(role=role)
        c = TestClient(app)
        res = c.post("/api/auth/login", json={"email": user.email, "password": PASSWORD})
        assert res.status_code == 200, res.text
        c.user = user
        return c

    return _login


@pytest.fixture
def admin_client(login_as):
    return login_as(ROLE_ADMIN)


@pytest.fixture
def technician_client(login_as):
    return login_as(ROLE_TECHNICIAN)


@pytest.fixture
def user_client(login_as):
    return login_as(ROLE_USER)


@pytest.fixture
def make_employee(admin_client):
    def _make(**overrides):
        body = {
            "name": "Alice Martin",
            "email": f"alice-{uuid.uuid4().hex[:8]}@example.com",
            "department": "Comptabilité",
            "position": "Analyste",
        }
        body.update(overrides)
        res = admin_client.post("/api/employees", json=body)
        assert res.status_code == 201, res.text
        return res.json()

    return _make


@pytest.fixture
def make_equipment(admin_client):
    def _make(**overrides):
        body = {
            "type": "ordinateur",
            "model": "ThinkPad X1",
            "serialNumber": f"SN-{uuid.uuid4().hex[:8]}",
            "purchaseDate": "2024-01-15",
        }
        body.update(overrides)
        res = admin_client.post("/api/equipment", json=body)
        assert res.status_code == 201, res.text
        return res.json()

    return _make
