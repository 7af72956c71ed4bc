from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SkillLevel(str, Enum):
    beginner = "Beginner"
    intermediate = "Intermediate"
    advanced = "Advanced"
    expert = "Expert"


class LearningPriority(str, Enum):
    low = "Low"
    medium = "Medium"
    high = "High"


class TeachableSkill(BaseModel):
    """A skill the user can teach."""

    name: str
    level: SkillLevel = SkillLevel.intermediate
    years_of_experience: Optional[int] = Field(default=None, ge=0)


class WantedSkill(BaseModel):
    """A skill the user wants to learn."""

    name: str
    priority: LearningPriority = LearningPriority.medium


def _non_empty(v: str) -> str:
    if not (v or "").strip():
        raise ValueError("must be non-empty")
    return v.strip()


class UserCreate(BaseModel):
    name: str
    email: str
    bio: str = ""
    location: str = ""
    skills_to_teach: List[TeachableSkill] = Field(default_factory=list)
    skills_to_learn: List[WantedSkill] = Field(default_factory=list)
    is_public: bool = True

    @field_validator("name", "email")
    @classmethod
    def _non_empty_str(cls, v: str) -> str:
        return _non_empty(v)

    @field_validator("email")
    @classmethod
    def _lower_email(cls, v: str) -> str:
        return v.lower()


class UserUpdate(BaseModel):
    name: Optional[str] = None
    bio: Optional[str] = None
    location: Optional[str] = None
    skills_to_teach: Optional[List[TeachableSkill]] = None
    skills_to_learn: Optional[List[WantedSkill]] = None
    is_public: Optional[bool] = None

    @field_validator("name")
    @classmethod
    def _non_empty_name(cls, v: Optional[str]) -> Optional[str]:
        return None if v is None else _non_empty(v)


class EndorsementCreate(BaseModel):
    skill: str

    @field_validator("skill")
    @classmethod
    def _non_empty_skill(cls, v: str) -> str:
        return _non_empty(v)


class Endorsement(BaseModel):
    """One user vouching for another user's skill."""

    skill: str
    endorsed_by: str
    endorsed_by_name: Optional[str] = None
    date: datetime


class UserRecord(BaseModel):
    """Canonical document for the `users` collection."""

    model_config = ConfigDict(extra="allow")

    name: str
    email: str
    bio: str = ""
    location: str = ""
    skills_to_teach: List[Dict[str, Any]] = Field(default_factory=list)
    skills_to_learn: List[Dict[str, Any]] = Field(default_factory=list)
    connections: List[str] = Field(default_factory=list)
    pending_requests: List[str] = Field(default_factory=list)
    sent_requests: List[str] = Field(default_factory=list)
    endorsements: List[Dict[str, Any]] = Field(default_factory=list)
    is_public: bool = True
    created_at: Optional[datetime] = None


__all__ = [
    "Endorsement",
    "EndorsementCreate",
    "LearningPriority",
    "SkillLevel",
    "TeachableSkill",
    "UserCreate",
    "UserRecord",
    "UserUpdate",
    "WantedSkill",
]
