from datetime import datetime, timedelta

from fastapi.testclient import TestClient

from ledger.core.config import settings
from ledger.db import models, storage
from ledger.services import security

from .conftest import signup

COOKIE = settings.SESSION_COOKIE_NAME


def test_register_returns_user_without_password(client, db):
    r = client.post("/api/v1/auth/register", json={"username": "alice", "password": "secret1"})
    assert r.status_code == 201
    body = r.json()
    assert body == {"id": body["id"], "username": "alice"}
    stored = storage.get_user_by_username(db, "alice")
    assert stored.password != "secret1"
    assert security.verify_password("secret1", stored.password)


def test_register_does_not_log_in(client):
    client.post("/api/v1/auth/register", json={"username": "alice", "password": "secret1"})
    assert client.get("/api/v1/auth/user").status_code == 401


def test_duplicate_username_is_a_conflict(client):
    payload = {"username": "alice", "password": "secret1"}
    assert client.post("/api/v1/auth/register", json=payload).status_code == 201
    r = client.post("/api/v1/auth/register", json=payload)
    assert r.status_code == 409
    assert r.json()["message"] == "Username already exists"


def test_register_validation_reports_first_field(client):
    r = client.post("/api/v1/auth/register", json={"username": "alice", "password": "123"})
    assert r.status_code == 400
    assert r.json()["field"] == "password"

    r = client.post("/api/v1/auth/register", json={"username": "   ", "password": "secret1"})
    assert r.status_code == 400
    assert r.json() == {"message": "Username is required", "field": "username"}

    r = client.post("/api/v1/auth/register", json={"password": "secret1"})
    assert r.status_code == 400
    assert r.json()["field"] == "username"


def test_login_opens_a_session(client):
    user = signup(client)
    assert user["username"] == "alice"
    assert COOKIE in client.cookies
    r = client.get("/api/v1/auth/user")
    assert r.status_code == 200
    assert r.json() == user


def test_cookie_only_carries_a_session_id(client, db):
    signup(client)
    sid = security.read_session_id(client.cookies[COOKIE])
    row = storage.get_session(db, sid)
    assert row is not None
    assert row.user_id == storage.get_user_by_username(db, "alice").id


def test_wrong_password_and_unknown_user_are_unauthorized(client):
    signup(client)
    other = client.post("/api/v1/auth/login", json={"username": "alice", "password": "wrong-one"})
    assert other.status_code == 401
    assert other.json()["message"] == "Invalid username or password"
    missing = client.post("/api/v1/auth/login", json={"username": "mallory", "password": "secret1"})
    assert missing.status_code == 401
    assert missing.json() == other.json()


def test_anonymous_requests_are_rejected(client):
    assert client.get("/api/v1/auth/user").status_code == 401
    assert client.post("/api/v1/auth/logout").status_code == 401
    assert client.get("/api/v1/transactions").json() == {"message": "Unauthorized"}


def test_logout_invalidates_the_session(client, db):
    signup(client)
    old_cookie = client.cookies[COOKIE]
    r = client.post("/api/v1/auth/logout")
    assert r.status_code == 200
    assert r.json() == {"message": "Logged out"}
    assert client.get("/api/v1/auth/user").status_code == 401

    # replaying the old cookie must not work: the server row is gone
    client.cookies.set(COOKIE, old_cookie)
    assert client.get("/api/v1/auth/user").status_code == 401
    assert storage.get_session(db, security.read_session_id(old_cookie)) is None


def test_expired_session_is_rejected_and_removed(client, db):
    user = storage.create_user(db, "erin", security.hash_password("secret1"))
    # the cookie itself is still valid, only the server row has expired
    storage.create_session(db, "expired-sid", user.id, datetime.utcnow() - timedelta(seconds=1))
    client.cookies.set(COOKIE, security.sign_session_id("expired-sid", security.session_expiry()))
    assert client.get("/api/v1/auth/user").status_code == 401
    db.expire_all()
    assert db.get(models.UserSession, "expired-sid") is None


def test_forged_cookie_is_rejected(client):
    client.cookies.set(COOKIE, "not-a-token")
    assert client.get("/api/v1/auth/user").status_code == 401


def test_register_then_login_with_same_credentials(client):
    for name in ("u1", "second_user", "Zoë"):
        signup(client, name, "s3cret-pass")
        assert client.get("/api/v1/auth/user").json()["username"] == name


def test_register_race_on_unique_username_is_a_conflict(client, monkeypatch):
    signup(client)
    # the second request checked before the first one committed
    monkeypatch.setattr(storage, "get_user_by_username", lambda db, username: None)
    r = client.post("/api/v1/auth/register", json={"username": "alice", "password": "secret1"})
    assert r.status_code == 409
    assert r.json()["message"] == "Username already exists"


def test_short_wrong_password_is_unauthorized(client):
    signup(client)
    r = client.post("/api/v1/auth/login", json={"username": "alice", "password": "abc"})
    assert r.status_code == 401
    assert r.json()["message"] == "Invalid username or password"


def test_login_purges_abandoned_sessions(client, db):
    user = storage.create_user(db, "erin", security.hash_password("secret1"))
    storage.create_session(db, "abandoned", user.id, datetime.utcnow() - timedelta(minutes=5))
    signup(client)
    db.expire_all()
    assert db.get(models.UserSession, "abandoned") is None
    assert db.query(models.UserSession).count() == 1


def test_startup_purges_abandoned_sessions(engine, session_factory, db, monkeypatch):
    from ledger import main

    monkeypatch.setattr(main, "engine", engine)
    monkeypatch.setattr(main, "SessionLocal", session_factory)
    user = storage.create_user(db, "erin", security.hash_password("secret1"))
    storage.create_session(db, "abandoned", user.id, datetime.utcnow() - timedelta(minutes=5))
    storage.create_session(db, "live", user.id, security.session_expiry())

    with TestClient(main.app):
        pass

    db.expire_all()
    assert db.get(models.UserSession, "abandoned") is None
    assert db.get(models.UserSession, "live") is not None
