"""Central dependency providers (FastAPI + tasks).

These helpers keep services and the realtime server process-scoped and
reusable, enabling test-time cache clearing/overrides.
"""

from __future__ import annotations

from functools import lru_cache
from typing import TYPE_CHECKING

from fastapi import Header

from skillswap.core.exceptions import AuthenticationError
from skillswap.core.settings import settings

if TYPE_CHECKING:
    from skillswap.realtime.server import RealtimeServer
    from skillswap.services.class_sweeper import ExpirySweeper
    from skillswap.services.classes import ClassService
    from skillswap.services.messages import MessageService
    from skillswap.services.users import ConnectionService, UserService


def get_current_user_id(x_user_id: str | None = Header(default=None)) -> str:
    """Caller identity as issued by the external auth layer (opaque id)."""

    user_id = (x_user_id or "").strip()
    if not user_id:
        raise AuthenticationError("Missing X-User-Id header")
    return user_id


@lru_cache(maxsize=1)
def get_user_service() -> UserService:
    from skillswap.services.users import UserService

    return UserService()


@lru_cache(maxsize=1)
def get_connection_service() -> ConnectionService:
    from skillswap.services.users import ConnectionService

    return ConnectionService(users=get_user_service())


@lru_cache(maxsize=1)
def get_message_service() -> MessageService:
    from skillswap.services.messages import MessageService

    return MessageService(users=get_user_service())


@lru_cache(maxsize=1)
def get_class_service() -> ClassService:
    from skillswap.services.classes import ClassService

    return ClassService()


@lru_cache(maxsize=1)
def get_expiry_sweeper() -> ExpirySweeper:
    from skillswap.services.class_sweeper import ExpirySweeper

    return ExpirySweeper(classes=get_class_service())


@lru_cache(maxsize=1)
def get_realtime_server() -> RealtimeServer:
    from skillswap.realtime.server import RealtimeServer, create_socketio_server

    origins = settings.cors_allow_origins
    # Engine.IO only treats a bare "*" string as a wildcard.
    cors: str | list[str] = "*" if "*" in origins else list(origins)
    return RealtimeServer(create_socketio_server(cors))
