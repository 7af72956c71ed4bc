from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Query, status

from skillswap.core.dependencies import get_current_user_id, get_user_service
from skillswap.schemas.users import Endorsement, EndorsementCreate, UserCreate, UserUpdate
from skillswap.services.users import UserService

router = APIRouter(prefix="/api/users", tags=["users"])


@router.post("", status_code=status.HTTP_201_CREATED)
def create_user(
    payload: UserCreate,
    svc: UserService = Depends(get_user_service),
) -> dict[str, Any]:
    user_id = svc.create(payload)
    return svc.get(user_id)


@router.get("/search")
def search_users(
    q: str | None = Query(default=None, description="Name or teachable skill"),
    skill: str | None = Query(default=None),
    user_id: str = Depends(get_current_user_id),
    svc: UserService = Depends(get_user_service),
) -> dict[str, Any]:
    items = svc.search(viewer_id=user_id, query=q, skill=skill)
    return {"count": len(items), "items": items}


@router.put("/profile")
def update_profile(
    payload: UserUpdate,
    user_id: str = Depends(get_current_user_id),
    svc: UserService = Depends(get_user_service),
) -> dict[str, Any]:
    return svc.update_profile(user_id, payload)


@router.post("/{target_id}/endorse", response_model=list[Endorsement])
def endorse_skill(
    target_id: str,
    payload: EndorsementCreate,
    user_id: str = Depends(get_current_user_id),
    svc: UserService = Depends(get_user_service),
) -> list[dict[str, Any]]:
    return svc.endorse(target_id, user_id, payload.skill)


@router.get("/{target_id}")
def get_user(
    target_id: str,
    _user_id: str = Depends(get_current_user_id),
    svc: UserService = Depends(get_user_service),
) -> dict[str, Any]:
    return svc.get(target_id)


__all__ = ["router"]
