import pytest
from fastapi.testclient import TestClient

from english_station.config import Settings, _parse_origins
from english_station.main import create_app


def test_health(client):
    r = client.get("/api/health")
    assert r.status_code == 200
    assert r.json() == {"status": "OK", "message": "API is running", "database": "Connected"}


def test_unknown_api_route(client):
    r = client.get("/api/nope")
    assert r.status_code == 404
    assert r.json() == {"error": "API endpoint /api/nope not found"}


def test_unexpected_error_returns_json_500():
    app = create_app(Settings(database_url="sqlite://", log_level="CRITICAL"))

    @app.get("/api/boom")
    def boom():
        raise RuntimeError("kaboom")

    with TestClient(app, raise_server_exceptions=False) as c:
        r = c.get("/api/boom")
    assert r.status_code == 500
    assert r.json() == {"error": "Something went wrong!"}


def test_startup_fails_when_database_is_unreachable():
    app = create_app(Settings(database_url="sqlite:////nonexistent-dir/sub/db.sqlite", log_level="WARNING"))
    with pytest.raises(Exception):
        with TestClient(app):
            pass


def test_settings_roundtrip(client):
    assert client.get("/api/settings").json() == {}

    r = client.post("/api/settings", json={"settings": {"siteName": "English Station", "maintenanceMode": False}})
    assert r.status_code == 200
    assert r.json() == {"message": "Settings updated successfully"}

    client.post("/api/settings", json={"settings": {"maintenanceMode": True}})
    assert client.get("/api/settings").json() == {"maintenanceMode": True, "siteName": "English Station"}


def test_admin_promote_and_demote(client, user):
    r = client.put(f"/api/admin/users/{user['id']}/promote")
    assert r.status_code == 200
    assert r.json()["isAdmin"] is True

    listed = client.get("/api/admin/users").json()
    assert listed[0]["isAdmin"] is True

    r = client.put(f"/api/admin/users/{user['id']}/demote")
    assert r.json()["isAdmin"] is False

    assert client.put("/api/admin/users/ghost/promote").status_code == 404


def test_admin_delete_user(client, user):
    r = client.delete(f"/api/admin/users/{user['id']}")
    assert r.json() == {"message": "User deleted successfully"}
    assert client.get("/api/admin/users").json() == []


@pytest.mark.parametrize("raw,expected", [
    ("", ["*"]),
    ("*", ["*"]),
    ("http://a.test, http://b.test", ["http://a.test", "http://b.test"]),
])
def test_parse_origins(raw, expected):
    assert _parse_origins(raw) == expected
