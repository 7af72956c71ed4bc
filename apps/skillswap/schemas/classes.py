from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


class ClassStatus(str, Enum):
    scheduled = "scheduled"
    ongoing = "ongoing"
    completed = "completed"
    cancelled = "cancelled"


class ClassCreate(BaseModel):
    title: str
    description: str = ""
    skill: str
    date: datetime
    duration: int = Field(default=60, ge=1, description="Duration in minutes.")
    meeting_link: str = ""
    max_participants: int = Field(default=10, ge=1)

    @field_validator("title", "skill")
    @classmethod
    def _non_empty_str(cls, v: str) -> str:
        if not (v or "").strip():
            raise ValueError("must be non-empty")
        return v.strip()


class ClassStatusUpdate(BaseModel):
    status: ClassStatus


class ClassRecord(BaseModel):
    """A scheduled group class."""

    id: str
    title: str
    description: str = ""
    skill: str
    host_id: str
    date: datetime
    duration: int
    meeting_link: str = ""
    max_participants: int
    participants: List[str] = Field(default_factory=list)
    status: ClassStatus = ClassStatus.scheduled
    created_at: Optional[datetime] = None


__all__ = ["ClassCreate", "ClassRecord", "ClassStatus", "ClassStatusUpdate"]
