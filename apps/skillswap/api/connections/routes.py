from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends

from skillswap.core.dependencies import get_connection_service, get_current_user_id
from skillswap.services.users import ConnectionService

router = APIRouter(prefix="/api/connections", tags=["connections"])


@router.post("/request/{target_id}")
def send_request(
    target_id: str,
    user_id: str = Depends(get_current_user_id),
    svc: ConnectionService = Depends(get_connection_service),
) -> dict[str, Any]:
    svc.request(user_id, target_id)
    return {"message": "Connection request sent"}


@router.post("/accept/{requester_id}")
def accept_request(
    requester_id: str,
    user_id: str = Depends(get_current_user_id),
    svc: ConnectionService = Depends(get_connection_service),
) -> dict[str, Any]:
    svc.accept(user_id, requester_id)
    return {"message": "Connection request accepted"}


@router.post("/reject/{requester_id}")
def reject_request(
    requester_id: str,
    user_id: str = Depends(get_current_user_id),
    svc: ConnectionService = Depends(get_connection_service),
) -> dict[str, Any]:
    svc.reject(user_id, requester_id)
    return {"message": "Connection request rejected"}


@router.get("/requests")
def pending_requests(
    user_id: str = Depends(get_current_user_id),
    svc: ConnectionService = Depends(get_connection_service),
) -> list[dict[str, Any]]:
    return svc.pending(user_id)


@router.get("/list")
def list_connections(
    user_id: str = Depends(get_current_user_id),
    svc: ConnectionService = Depends(get_connection_service),
) -> list[dict[str, Any]]:
    return svc.connections(user_id)


__all__ = ["router"]
