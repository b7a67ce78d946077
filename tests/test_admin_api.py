from __future__ import annotations

import sqlite3

from fastapi.testclient import TestClient

from sitefeatures.app import create_app
from sitefeatures.flag_store import MemoryFlagStore


class _LockedStore(MemoryFlagStore):
    def set_enabled(self, feature_id: str, enabled: bool) -> None:
        raise sqlite3.OperationalError("database is locked")


def _set_env(monkeypatch) -> None:
    monkeypatch.setenv("SITE_ADMIN_API_KEY", "admin-secret")
    monkeypatch.delenv("SITE_FEATURES_SETUP_ON_START", raising=False)
    monkeypatch.delenv("SITE_MAINTENANCE_MESSAGE", raising=False)


def _auth() -> dict[str, str]:
    return {"Authorization": "Bearer admin-secret"}


def test_admin_requires_bearer(monkeypatch) -> None:
    _set_env(monkeypatch)
    client = TestClient(create_app(MemoryFlagStore()))

    assert client.get("/admin/features").status_code == 401
    assert client.get("/admin/features", headers={"Authorization": "Bearer wrong"}).status_code == 401
    assert client.put("/admin/features/sample", json={"enabled": True}).status_code == 401


def test_admin_unauthorized_when_key_unset(monkeypatch) -> None:
    monkeypatch.delenv("SITE_ADMIN_API_KEY", raising=False)
    client = TestClient(create_app(MemoryFlagStore()))

    assert client.get("/admin/features", headers={"Authorization": "Bearer anything"}).status_code == 401


def test_list_features_reports_metadata(monkeypatch) -> None:
    _set_env(monkeypatch)
    client = TestClient(create_app(MemoryFlagStore({"visits": True})))

    resp = client.get("/admin/features", headers=_auth())
    assert resp.status_code == 200
    features = {f["id"]: f for f in resp.json()["features"]}

    assert set(features) == {"maintenance", "sample", "visits"}
    assert features["sample"]["name"] == "Sample"
    assert features["sample"]["subpath"] == "/sample"
    assert features["sample"]["enabled"] is False
    assert features["visits"]["enabled"] is True


def test_toggle_sample_feature_gates_its_route(monkeypatch) -> None:
    _set_env(monkeypatch)
    client = TestClient(create_app(MemoryFlagStore()))

    assert client.get("/sample/ping").status_code == 503

    on = client.put("/admin/features/sample", headers=_auth(), json={"enabled": True})
    assert on.status_code == 200
    assert on.json() == {"ok": True, "id": "sample", "enabled": True}
    assert client.get("/sample/ping").json() == {"ok": True}

    off = client.put("/admin/features/sample", headers=_auth(), json={"enabled": False})
    assert off.json()["enabled"] is False
    assert client.get("/sample/ping").status_code == 503


def test_toggle_unknown_feature_is_404(monkeypatch) -> None:
    _set_env(monkeypatch)
    client = TestClient(create_app(MemoryFlagStore()))

    missing = client.put("/admin/features/nope", headers=_auth(), json={"enabled": True})
    assert missing.status_code == 404

    noop = client.put("/admin/features/nope", headers=_auth(), json={"enabled": False})
    assert noop.status_code == 200

    assert client.get("/admin/features/nope", headers=_auth()).status_code == 404


def test_rejected_setup_is_409_and_flag_unchanged(monkeypatch) -> None:
    _set_env(monkeypatch)
    client = TestClient(create_app(MemoryFlagStore()))

    resp = client.put("/admin/features/maintenance", headers=_auth(), json={"enabled": True})
    assert resp.status_code == 409
    assert resp.json()["detail"] == "SITE_MAINTENANCE_MESSAGE missing"

    got = client.get("/admin/features/maintenance", headers=_auth())
    assert got.json()["feature"]["enabled"] is False
    assert client.get("/maintenance/notice").json() == {"ok": True, "active": False}

    monkeypatch.setenv("SITE_MAINTENANCE_MESSAGE", "Back at 10:00 UTC")
    ok = client.put("/admin/features/maintenance", headers=_auth(), json={"enabled": True})
    assert ok.status_code == 200
    assert client.get("/maintenance/notice").json()["message"] == "Back at 10:00 UTC"


def test_toggle_body_is_strict(monkeypatch) -> None:
    _set_env(monkeypatch)
    client = TestClient(create_app(MemoryFlagStore()))

    assert client.put("/admin/features/sample", headers=_auth(), json={"enabled": "yes"}).status_code == 422
    assert (
        client.put("/admin/features/sample", headers=_auth(), json={"enabled": True, "extra": 1}).status_code
        == 422
    )


def test_store_write_failure_is_409_not_500(monkeypatch) -> None:
    _set_env(monkeypatch)
    client = TestClient(create_app(_LockedStore()))

    resp = client.put("/admin/features/visits", headers=_auth(), json={"enabled": True})
    assert resp.status_code == 409
    assert resp.json()["detail"] == "OperationalError: database is locked"

    got = client.get("/admin/features/visits", headers=_auth())
    assert got.json()["feature"]["enabled"] is False
