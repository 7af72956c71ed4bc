from __future__ import annotations

import time
from datetime import timedelta

import pytest
import socketio
from fastapi.testclient import TestClient

from skillswap.core.utils import isoformat_utc, utcnow
from skillswap.services.datastore import DataStoreService


def test_asgi_entrypoint_wraps_fastapi_with_socketio() -> None:
    from skillswap import main

    assert isinstance(main.application, socketio.ASGIApp)
    assert main.app.state.realtime is main.realtime

    client = TestClient(main.app)
    assert client.get("/healthz").status_code == 200
    assert client.get("/api/v1/presence").status_code == 200
    # Mounted routers answer 401 without an identity rather than 404.
    assert client.get("/api/messages/conversations").status_code == 401
    assert client.get("/api/classes/all").status_code == 401
    assert client.get("/api/nothing-here").status_code == 404


def test_startup_without_sweeper_serves_health() -> None:
    from skillswap import main

    with TestClient(main.app) as client:
        assert client.get("/healthz").json() == {"ok": True}
    assert main._sweeper_task is None


def test_startup_sweeps_expired_classes(
    sqlite_store, monkeypatch: pytest.MonkeyPatch
) -> None:
    from skillswap import main

    monkeypatch.setattr(main.settings, "enable_class_sweeper", True)
    monkeypatch.setattr(main.settings, "enable_class_sweeper_beat", False)
    store = DataStoreService(default_collection=main.settings.classes_collection)
    now = utcnow()
    store.insert_one({"title": "expired", "date": isoformat_utc(now - timedelta(hours=25))})
    store.insert_one({"title": "recent", "date": isoformat_utc(now - timedelta(hours=23))})

    with TestClient(main.app):
        assert main._sweeper_task is not None
        deadline = time.monotonic() + 5
        while store.count() > 1 and time.monotonic() < deadline:
            time.sleep(0.02)

    assert [d["title"] for d in store.find_many()] == ["recent"]
    assert main._sweeper_task is None


def test_beat_flag_keeps_in_process_sweeper_off(monkeypatch: pytest.MonkeyPatch) -> None:
    from skillswap import main

    monkeypatch.setattr(main.settings, "enable_class_sweeper", True)
    monkeypatch.setattr(main.settings, "enable_class_sweeper_beat", True)

    with TestClient(main.app):
        assert main._sweeper_task is None
