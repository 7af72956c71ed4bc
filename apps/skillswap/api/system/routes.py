from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends

from skillswap.core.dependencies import get_realtime_server, get_user_service
from skillswap.core.exceptions import ServiceUnavailableError
from skillswap.realtime.server import RealtimeServer
from skillswap.services.users import UserService

router = APIRouter(tags=["system"])


@router.get("/healthz")
def health() -> dict[str, Any]:
    return {"ok": True}


@router.get("/readyz")
def ready(users: UserService = Depends(get_user_service)) -> dict[str, Any]:
    try:
        users._store.ping()
    except Exception as exc:
        raise ServiceUnavailableError("Database unavailable") from exc
    return {"ok": True}


@router.get("/api/v1/presence")
def presence(realtime: RealtimeServer = Depends(get_realtime_server)) -> dict[str, Any]:
    users = realtime.registry.online_users()
    return {"count": len(users), "online": users}
