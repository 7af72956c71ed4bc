"""Group classes hosted by users."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from skillswap.core.exceptions import BadRequestError, ForbiddenError, NotFoundError
from skillswap.core.settings import settings
from skillswap.core.utils import isoformat_utc, utcnow
from skillswap.schemas.classes import ClassCreate, ClassStatus
from skillswap.services.datastore import DataStoreService

logger = logging.getLogger(__name__)

ACTIVE_STATUSES = (ClassStatus.scheduled.value, ClassStatus.ongoing.value)


def _to_record(doc: dict[str, Any]) -> dict[str, Any]:
    out = dict(doc)
    out["id"] = str(out.pop("_id"))
    return out


@dataclass
class ClassService:
    """CRUD, enrollment and expiry for the `classes` collection."""

    collection_name: str = settings.classes_collection
    store: DataStoreService | None = None

    def __post_init__(self) -> None:
        self._store = self.store or DataStoreService(default_collection=self.collection_name)

    def _require(self, class_id: str) -> dict[str, Any]:
        doc = self._store.find_one({"_id": class_id})
        if doc is None:
            raise NotFoundError("Class not found")
        return doc

    def create(self, host_id: str, payload: ClassCreate) -> dict[str, Any]:
        doc = {
            **payload.model_dump(mode="json"),
            "date": isoformat_utc(payload.date),
            "host_id": host_id,
            "participants": [],
            "status": ClassStatus.scheduled.value,
            "created_at": isoformat_utc(utcnow()),
        }
        doc["_id"] = self._store.insert_one(doc)
        logger.info("Class %s created by %s for %s", doc["_id"], host_id, doc["date"])
        return _to_record(doc)

    def get(self, class_id: str) -> dict[str, Any]:
        return _to_record(self._require(class_id))

    def list_all(
        self, *, skill: str | None = None, status: ClassStatus | None = None
    ) -> list[dict[str, Any]]:
        flt: dict[str, Any] = {}
        if skill:
            flt["skill"] = {"$regex": re.escape(skill.strip()), "$options": "i"}
        if status is not None:
            flt["status"] = status.value
        else:
            flt["status"] = {"$in": list(ACTIVE_STATUSES)}
        docs = self._store.find_many(flt, sort=[("date", 1)])
        return [_to_record(d) for d in docs]

    def hosted_by(self, host_id: str) -> list[dict[str, Any]]:
        docs = self._store.find_many({"host_id": host_id}, sort=[("date", -1)])
        return [_to_record(d) for d in docs]

    def enrolled(self, user_id: str) -> list[dict[str, Any]]:
        docs = self._store.find_many({"participants": user_id}, sort=[("date", 1)])
        return [_to_record(d) for d in docs]

    def join(self, class_id: str, user_id: str) -> dict[str, Any]:
        doc = self._require(class_id)
        participants = list(doc.get("participants") or [])
        if len(participants) >= int(doc.get("max_participants") or 0):
            raise BadRequestError("Class is full", code="class_full")
        if user_id in participants:
            raise BadRequestError("Already enrolled in this class", code="already_enrolled")
        if doc.get("host_id") == user_id:
            raise BadRequestError("Cannot join your own class", code="own_class")
        self._store.update_one({"_id": class_id}, {"$addToSet": {"participants": user_id}})
        return self.get(class_id)

    def leave(self, class_id: str, user_id: str) -> None:
        self._require(class_id)
        self._store.update_one({"_id": class_id}, {"$pull": {"participants": user_id}})

    def update_status(self, class_id: str, user_id: str, status: ClassStatus) -> dict[str, Any]:
        doc = self._require(class_id)
        if doc.get("host_id") != user_id:
            raise ForbiddenError("Only host can update class status")
        self._store.update_one({"_id": class_id}, {"$set": {"status": status.value}})
        return self.get(class_id)

    def delete(self, class_id: str, user_id: str) -> None:
        doc = self._require(class_id)
        if doc.get("host_id") != user_id:
            raise ForbiddenError("Only host can delete the class")
        self._store.delete_one({"_id": class_id})

    def delete_scheduled_before(self, cutoff: datetime) -> int:
        """Delete every class whose scheduled date is at or before `cutoff`."""

        return self._store.delete_many({"date": {"$lte": cutoff}})


__all__ = ["ACTIVE_STATUSES", "ClassService"]
