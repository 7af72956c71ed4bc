"""Persisted chat history (the source of truth behind the live relay)."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from skillswap.core.exceptions import NotConnectedError
from skillswap.core.settings import settings
from skillswap.core.utils import isoformat_utc, utcnow
from skillswap.schemas.messages import MessageCreate
from skillswap.services.datastore import DataStoreService
from skillswap.services.users import UserService

logger = logging.getLogger(__name__)


def _to_record(doc: dict[str, Any]) -> dict[str, Any]:
    out = dict(doc)
    out["id"] = str(out.pop("_id"))
    return out


@dataclass
class MessageService:
    """Create, read and mark-read operations on the `messages` collection."""

    users: UserService
    collection_name: str = settings.messages_collection
    store: DataStoreService | None = None

    def __post_init__(self) -> None:
        self._store = self.store or DataStoreService(default_collection=self.collection_name)

    def send(self, sender_id: str, payload: MessageCreate) -> dict[str, Any]:
        """Persist a message between two connected users."""

        if not self.users.are_connected(sender_id, payload.receiver_id):
            raise NotConnectedError("You can only message connections")
        doc = {
            "sender_id": sender_id,
            "receiver_id": payload.receiver_id,
            "content": payload.content,
            "is_read": False,
            "created_at": isoformat_utc(utcnow()),
        }
        doc["_id"] = self._store.insert_one(doc)
        return _to_record(doc)

    def conversation(self, user_id: str, other_id: str) -> list[dict[str, Any]]:
        """Both directions of a conversation, oldest first.

        Fetching a conversation marks the other user's unread messages as read.
        """

        docs = self._store.find_many(
            {
                "$or": [
                    {"sender_id": user_id, "receiver_id": other_id},
                    {"sender_id": other_id, "receiver_id": user_id},
                ]
            },
            sort=[("created_at", 1)],
        )
        self.mark_read(user_id, other_id)
        return [_to_record(d) for d in docs]

    def conversations(self, user_id: str) -> list[dict[str, Any]]:
        """One summary per counterpart, most recent conversation first."""

        docs = self._store.find_many(
            {"$or": [{"sender_id": user_id}, {"receiver_id": user_id}]},
            sort=[("created_at", -1)],
        )
        summaries: dict[str, dict[str, Any]] = {}
        for doc in docs:
            other = doc["receiver_id"] if doc["sender_id"] == user_id else doc["sender_id"]
            summary = summaries.get(other)
            if summary is None:
                summary = {"user_id": other, "last_message": _to_record(doc), "unread_count": 0}
                summaries[other] = summary
            if doc["receiver_id"] == user_id and not doc.get("is_read"):
                summary["unread_count"] += 1

        names = {u["id"]: u.get("name") for u in self.users.get_many(list(summaries))}
        for other, summary in summaries.items():
            summary["name"] = names.get(other)
        return list(summaries.values())

    def mark_read(self, user_id: str, other_id: str) -> int:
        """Mark messages sent by `other_id` to `user_id` as read."""

        res = self._store.update_many(
            {"sender_id": other_id, "receiver_id": user_id, "is_read": False},
            {"$set": {"is_read": True}},
        )
        return int(res.get("modified_count", 0))


__all__ = ["MessageService"]
