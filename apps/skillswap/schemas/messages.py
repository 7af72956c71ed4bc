from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator


class MessageCreate(BaseModel):
    receiver_id: str
    content: str

    @field_validator("receiver_id", "content")
    @classmethod
    def _non_empty_str(cls, v: str) -> str:
        if not (v or "").strip():
            raise ValueError("must be non-empty")
        return v.strip()


class MessageRecord(BaseModel):
    """A persisted chat message as returned by the REST API."""

    id: str
    sender_id: str
    receiver_id: str
    content: str
    is_read: bool = False
    created_at: datetime


class ConversationSummary(BaseModel):
    """Latest message and unread count for one counterpart."""

    user_id: str
    name: Optional[str] = None
    last_message: MessageRecord
    unread_count: int = 0


__all__ = ["ConversationSummary", "MessageCreate", "MessageRecord"]
