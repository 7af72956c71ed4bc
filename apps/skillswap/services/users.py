"""User profiles and the connection graph between them."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any

from skillswap.core.exceptions import BadRequestError, NotFoundError
from skillswap.core.settings import settings
from skillswap.core.utils import isoformat_utc, utcnow
from skillswap.schemas.users import UserCreate, UserRecord, UserUpdate
from skillswap.services.datastore import DataStoreService

logger = logging.getLogger(__name__)

PUBLIC_FIELDS = ("name", "email", "bio", "location", "skills_to_teach", "skills_to_learn")


def _public(doc: dict[str, Any]) -> dict[str, Any]:
    out = {key: doc.get(key) for key in PUBLIC_FIELDS}
    out["id"] = str(doc["_id"])
    return out


@dataclass
class UserService:
    """CRUD for user profiles."""

    collection_name: str = settings.users_collection
    store: DataStoreService | None = None

    def __post_init__(self) -> None:
        self._store = self.store or DataStoreService(default_collection=self.collection_name)

    def create(self, payload: UserCreate) -> str:
        if self._store.find_one({"email": payload.email}):
            raise BadRequestError("Email already registered", code="email_taken")
        doc = {
            **payload.model_dump(mode="json"),
            "connections": [],
            "pending_requests": [],
            "sent_requests": [],
            "endorsements": [],
            "created_at": isoformat_utc(utcnow()),
        }
        UserRecord.model_validate(doc)
        return self._store.insert_one(doc)

    def get_doc(self, user_id: str) -> dict[str, Any] | None:
        return self._store.find_one({"_id": user_id})

    def require(self, user_id: str) -> dict[str, Any]:
        doc = self.get_doc(user_id)
        if doc is None:
            raise NotFoundError("User not found")
        return doc

    def get(self, user_id: str) -> dict[str, Any]:
        doc = self.require(user_id)
        out = _public(doc)
        out["connections"] = list(doc.get("connections") or [])
        out["endorsements"] = list(doc.get("endorsements") or [])
        return out

    def get_many(self, user_ids: list[str]) -> list[dict[str, Any]]:
        if not user_ids:
            return []
        docs = self._store.find_many({"_id": {"$in": list(user_ids)}})
        by_id = {str(d["_id"]): d for d in docs}
        return [_public(by_id[uid]) for uid in user_ids if uid in by_id]

    def update_profile(self, user_id: str, patch: UserUpdate) -> dict[str, Any]:
        changes = patch.model_dump(mode="json", exclude_none=True)
        res = self._store.update_one({"_id": user_id}, {"$set": changes})
        if not res.get("matched_count"):
            raise NotFoundError("User not found")
        return self.get(user_id)

    def search(
        self,
        *,
        viewer_id: str,
        query: str | None = None,
        skill: str | None = None,
    ) -> list[dict[str, Any]]:
        """Public profiles matching a name/skill query, excluding the viewer."""

        flt: dict[str, Any] = {"_id": {"$ne": viewer_id}, "is_public": True}
        if query:
            pattern = re.escape(query.strip())
            flt["$or"] = [
                {"name": {"$regex": pattern, "$options": "i"}},
                {"skills_to_teach.name": {"$regex": pattern, "$options": "i"}},
            ]
        if skill:
            flt["skills_to_teach.name"] = {"$regex": re.escape(skill.strip()), "$options": "i"}
        docs = self._store.find_many(flt, sort=[("name", 1)])
        return [_public(d) for d in docs]

    def endorse(self, user_id: str, endorser_id: str, skill: str) -> list[dict[str, Any]]:
        """Append an endorsement of `skill` by `endorser_id`; return all endorsements.

        Endorsements are an append-only log, so repeats are kept as separate entries.
        """

        entry = {"skill": skill, "endorsed_by": endorser_id, "date": isoformat_utc(utcnow())}
        res = self._store.update_one({"_id": user_id}, {"$push": {"endorsements": entry}})
        if not res.get("matched_count"):
            raise NotFoundError("User not found")
        endorsements = list(self.require(user_id).get("endorsements") or [])
        endorser_ids = list(dict.fromkeys(e["endorsed_by"] for e in endorsements))
        endorsers = {u["id"]: u.get("name") for u in self.get_many(endorser_ids)}
        return [{**e, "endorsed_by_name": endorsers.get(e["endorsed_by"])} for e in endorsements]

    def are_connected(self, user_id: str, other_id: str) -> bool:
        doc = self.get_doc(user_id)
        return bool(doc) and other_id in (doc.get("connections") or [])


@dataclass
class ConnectionService:
    """Connection requests between users.

    Each side of a relationship is stored on the user document: the requester
    tracks `sent_requests`, the target tracks `pending_requests`, and both get the
    other in `connections` once accepted.
    """

    users: UserService

    def _store(self) -> DataStoreService:
        return self.users._store

    def request(self, user_id: str, target_id: str) -> None:
        if user_id == target_id:
            raise BadRequestError("Cannot send request to yourself", code="self_request")
        self.users.require(target_id)
        me = self.users.require(user_id)
        if target_id in (me.get("connections") or []):
            raise BadRequestError("Already connected", code="already_connected")
        store = self._store()
        store.update_one({"_id": target_id}, {"$addToSet": {"pending_requests": user_id}})
        store.update_one({"_id": user_id}, {"$addToSet": {"sent_requests": target_id}})
        logger.info("Connection request %s -> %s", user_id, target_id)

    def accept(self, user_id: str, requester_id: str) -> None:
        me = self.users.require(user_id)
        if requester_id not in (me.get("pending_requests") or []):
            raise NotFoundError("No pending request from this user", code="request_not_found")
        store = self._store()
        store.update_one(
            {"_id": user_id},
            {
                "$addToSet": {"connections": requester_id},
                "$pull": {"pending_requests": requester_id},
            },
        )
        store.update_one(
            {"_id": requester_id},
            {"$addToSet": {"connections": user_id}, "$pull": {"sent_requests": user_id}},
        )
        logger.info("Connection accepted %s <-> %s", requester_id, user_id)

    def reject(self, user_id: str, requester_id: str) -> None:
        store = self._store()
        store.update_one({"_id": user_id}, {"$pull": {"pending_requests": requester_id}})
        store.update_one({"_id": requester_id}, {"$pull": {"sent_requests": user_id}})

    def pending(self, user_id: str) -> list[dict[str, Any]]:
        me = self.users.require(user_id)
        return self.users.get_many(list(me.get("pending_requests") or []))

    def connections(self, user_id: str) -> list[dict[str, Any]]:
        me = self.users.require(user_id)
        return self.users.get_many(list(me.get("connections") or []))


__all__ = ["ConnectionService", "UserService"]
