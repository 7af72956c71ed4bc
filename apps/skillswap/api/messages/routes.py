from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, status

from skillswap.core.dependencies import get_current_user_id, get_message_service
from skillswap.schemas.messages import ConversationSummary, MessageCreate, MessageRecord
from skillswap.services.messages import MessageService

router = APIRouter(prefix="/api/messages", tags=["messages"])


@router.post("/send", status_code=status.HTTP_201_CREATED, response_model=MessageRecord)
def send_message(
    payload: MessageCreate,
    user_id: str = Depends(get_current_user_id),
    svc: MessageService = Depends(get_message_service),
) -> dict[str, Any]:
    """Persist a message. The client relays it live over Socket.IO afterwards."""
    return svc.send(user_id, payload)


@router.get("/conversation/{other_id}", response_model=list[MessageRecord])
def get_conversation(
    other_id: str,
    user_id: str = Depends(get_current_user_id),
    svc: MessageService = Depends(get_message_service),
) -> list[dict[str, Any]]:
    return svc.conversation(user_id, other_id)


@router.get("/conversations", response_model=list[ConversationSummary])
def list_conversations(
    user_id: str = Depends(get_current_user_id),
    svc: MessageService = Depends(get_message_service),
) -> list[dict[str, Any]]:
    return svc.conversations(user_id)


@router.put("/read/{other_id}")
def mark_read(
    other_id: str,
    user_id: str = Depends(get_current_user_id),
    svc: MessageService = Depends(get_message_service),
) -> dict[str, Any]:
    updated = svc.mark_read(user_id, other_id)
    return {"message": "Messages marked as read", "updated": updated}


__all__ = ["router"]
