from __future__ import annotations

from collections.abc import Callable, Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from skillswap.api import register_routes
from skillswap.core import dependencies as deps
from skillswap.core.exceptions import register_exception_handlers
from skillswap.realtime.server import RealtimeServer
from skillswap.services.classes import ClassService
from skillswap.services.messages import MessageService
from skillswap.services.users import ConnectionService, UserService


class _NullTransport:
    def send(self, handle, event, payload) -> None:
        return None

    def broadcast(self, event, payload) -> None:
        return None


@pytest.fixture()
def realtime() -> RealtimeServer:
    return RealtimeServer(transport=_NullTransport())


@pytest.fixture()
def client(sqlite_store, realtime: RealtimeServer) -> Iterator[TestClient]:
    users = UserService()
    app = FastAPI()
    register_exception_handlers(app)
    register_routes(app)
    app.dependency_overrides[deps.get_user_service] = lambda: users
    app.dependency_overrides[deps.get_connection_service] = lambda: ConnectionService(users=users)
    app.dependency_overrides[deps.get_message_service] = lambda: MessageService(users=users)
    app.dependency_overrides[deps.get_class_service] = lambda: ClassService()
    app.dependency_overrides[deps.get_realtime_server] = lambda: realtime
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def as_user() -> Callable[[str], dict[str, str]]:
    return lambda user_id: {"X-User-Id": user_id}


@pytest.fixture()
def make_user(client: TestClient) -> Callable[..., str]:
    def _make(name: str, **extra) -> str:
        res = client.post(
            "/api/users",
            json={"name": name, "email": f"{name.lower()}@example.com", **extra},
        )
        assert res.status_code == 201, res.text
        return res.json()["id"]

    return _make


@pytest.fixture()
def connect(client: TestClient, as_user) -> Callable[[str, str], None]:
    def _connect(a: str, b: str) -> None:
        assert client.post(f"/api/connections/request/{b}", headers=as_user(a)).status_code == 200
        assert client.post(f"/api/connections/accept/{a}", headers=as_user(b)).status_code == 200

    return _connect
