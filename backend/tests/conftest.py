import os

# keep the app's own engine in memory; tests inject their own sessions
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SEED_DEMO_DATA", "false")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from ledger.db import models  # noqa: F401
from ledger.db.base import Base
from ledger.db.session import get_db, make_engine
from ledger.main import app


@pytest.fixture
def engine():
    eng = make_engine("sqlite://")
    Base.metadata.create_all(bind=eng)
    yield eng
    Base.metadata.drop_all(bind=eng)
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine, future=True)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield lambda: TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def client(make_client):
    return make_client()


def signup(client, username="alice", password="secret1"):
    r = client.post("/api/v1/auth/register", json={"username": username, "password": password})
    assert r.status_code == 201, r.text
    r = client.post("/api/v1/auth/login", json={"username": username, "password": password})
    assert r.status_code == 200, r.text
    return r.json()


@pytest.fixture
def alice(make_client):
    c = make_client()
    signup(c, "alice", "secret1")
    return c


@pytest.fixture
def bob(make_client):
    c = make_client()
    signup(c, "bob", "hunter22")
    return c


LUNCH = {
    "amount": "20.00",
    "category": "Food",
    "date": "2024-01-01",
    "description": "Lunch",
    "type": "expense",
}
