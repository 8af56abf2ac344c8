import base64
import os

# Point the app at a throwaway in-memory database before it is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENV"] = "test"
os.environ.pop("SEED_ADMIN_EMAIL", None)
os.environ.pop("SEED_ADMIN_PASSWORD", None)

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from app.main import app  # noqa: E402


@pytest.fixture
def client():
    # Entering the client runs startup, which builds a fresh in-memory database
    with TestClient(app) as c:
        yield c


def basic_auth(email: str, password: str) -> dict:
    token = base64.b64encode(f"{email}:{password}".encode()).decode()
    return {"Authorization": f"Basic {token}"}


def register(client, **overrides):
    payload = {
        "first_name": "A",
        "last_name": "B",
        "email": "a@b.com",
        "password": "secret1",
        "type": "employee",
    }
    payload.update(overrides)
    return client.post("/api/register", json=payload)


@pytest.fixture
def registered(client):
    r = register(client)
    assert r.status_code == 201, r.text
    return r.json()["data"]["user"]


def update_user(email: str, **values):
    """Write columns directly, bypassing the API (e.g. to deactivate an account)."""
    from app.models.user import User

    session = app.state.database.session()
    try:
        user = session.query(User).filter(User.email == email).one()
        for key, value in values.items():
            setattr(user, key, value)
        session.commit()
    finally:
        session.close()


def load_user(email: str):
    from app.models.user import User

    session = app.state.database.session()
    try:
        user = session.query(User).filter(User.email == email).one()
        session.expunge(user)
        return user
    finally:
        session.close()
