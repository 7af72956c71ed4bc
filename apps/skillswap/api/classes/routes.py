from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, status

from skillswap.core.dependencies import get_class_service, get_current_user_id
from skillswap.schemas.classes import ClassCreate, ClassRecord, ClassStatus, ClassStatusUpdate
from skillswap.services.classes import ClassService

router = APIRouter(prefix="/api/classes", tags=["classes"])


@router.post("/create", status_code=status.HTTP_201_CREATED, response_model=ClassRecord)
def create_class(
    payload: ClassCreate,
    user_id: str = Depends(get_current_user_id),
    svc: ClassService = Depends(get_class_service),
) -> dict[str, Any]:
    return svc.create(user_id, payload)


@router.get("/all", response_model=list[ClassRecord])
def list_classes(
    skill: str | None = None,
    status: ClassStatus | None = None,
    _user_id: str = Depends(get_current_user_id),
    svc: ClassService = Depends(get_class_service),
) -> list[dict[str, Any]]:
    return svc.list_all(skill=skill, status=status)


@router.get("/my-classes", response_model=list[ClassRecord])
def my_classes(
    user_id: str = Depends(get_current_user_id),
    svc: ClassService = Depends(get_class_service),
) -> list[dict[str, Any]]:
    return svc.hosted_by(user_id)


@router.get("/enrolled", response_model=list[ClassRecord])
def enrolled_classes(
    user_id: str = Depends(get_current_user_id),
    svc: ClassService = Depends(get_class_service),
) -> list[dict[str, Any]]:
    return svc.enrolled(user_id)


@router.post("/{class_id}/join", response_model=ClassRecord)
def join_class(
    class_id: str,
    user_id: str = Depends(get_current_user_id),
    svc: ClassService = Depends(get_class_service),
) -> dict[str, Any]:
    return svc.join(class_id, user_id)


@router.post("/{class_id}/leave")
def leave_class(
    class_id: str,
    user_id: str = Depends(get_current_user_id),
    svc: ClassService = Depends(get_class_service),
) -> dict[str, Any]:
    svc.leave(class_id, user_id)
    return {"message": "Left class successfully"}


@router.put("/{class_id}/status", response_model=ClassRecord)
def update_class_status(
    class_id: str,
    payload: ClassStatusUpdate,
    user_id: str = Depends(get_current_user_id),
    svc: ClassService = Depends(get_class_service),
) -> dict[str, Any]:
    return svc.update_status(class_id, user_id, payload.status)


@router.delete("/{class_id}")
def delete_class(
    class_id: str,
    user_id: str = Depends(get_current_user_id),
    svc: ClassService = Depends(get_class_service),
) -> dict[str, Any]:
    svc.delete(class_id, user_id)
    return {"message": "Class deleted successfully"}


__all__ = ["router"]
