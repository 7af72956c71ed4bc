"""SQL-backed document store.

Implements the small subset of Mongo-style CRUD APIs the REST collaborator and
the class sweeper need, on top of a single JSON table (`DataStoreRow`).
"""

from __future__ import annotations

import copy
import re
import uuid
from collections.abc import Mapping, Sequence
from datetime import datetime
from typing import Any

import sqlalchemy as sa
from pydantic_core import to_jsonable_python
from sqlmodel import Session, select

from skillswap.core.database import SessionLocal
from skillswap.core.utils import parse_datetime, utcnow
from skillswap.models.datastore import DataStoreRow

SortPairs = Sequence[tuple[str, int]]

_MISSING = object()


def _ensure_collection(name: str | None) -> str:
    actual = (name or "").strip()
    if not actual:
        raise ValueError("A collection name must be provided.")
    return actual


def _normalize_id(value: Any) -> str:
    return str(value)


def _jsonable_document(document: Mapping[str, Any]) -> dict[str, Any]:
    """Convert a document to a JSON-serializable Python dict.

    JSON columns require values that `json.dumps` can handle. We normalize common
    non-JSON types (e.g. datetime) to stable representations.
    """

    converted = to_jsonable_python(dict(document))
    if not isinstance(converted, dict):
        raise TypeError("Document must serialize to a JSON object.")
    return converted


def _resolve(doc: Mapping[str, Any], key: str) -> Any:
    val: Any = doc
    for part in key.split("."):
        if isinstance(val, list):
            # Dot-paths fan out over arrays of sub-documents.
            val = [item[part] for item in val if isinstance(item, Mapping) and part in item]
            continue
        if not isinstance(val, Mapping) or part not in val:
            return _MISSING
        val = val[part]
    return val


def _equals(val: Any, expected: Any) -> bool:
    if isinstance(expected, datetime):
        parsed = parse_datetime(val)
        return parsed is not None and parsed == parse_datetime(expected)
    if isinstance(val, list) and not isinstance(expected, list):
        # Mongo array semantics: a scalar matches any element.
        return any(_equals(item, expected) for item in val)
    return val == to_jsonable_python(expected)


def _compare(val: Any, op: str, bound: Any) -> bool:
    if isinstance(bound, datetime):
        left = parse_datetime(val)
        right = parse_datetime(bound)
    else:
        left, right = val, bound
    if left is None or left is _MISSING or right is None:
        return False
    try:
        if op == "$lt":
            return left < right
        if op == "$lte":
            return left <= right
        if op == "$gt":
            return left > right
        return left >= right
    except TypeError:
        return False


def _match_condition(val: Any, cond: Mapping[str, Any]) -> bool:
    for op, arg in cond.items():
        if op == "$ne":
            if val is not _MISSING and _equals(val, arg):
                return False
        elif op == "$in":
            if val is _MISSING or not any(_equals(val, item) for item in arg):
                return False
        elif op == "$nin":
            if val is not _MISSING and any(_equals(val, item) for item in arg):
                return False
        elif op in {"$lt", "$lte", "$gt", "$gte"}:
            if not _compare(val, op, arg):
                return False
        elif op == "$regex":
            flags = re.IGNORECASE if "i" in cond.get("$options", "") else 0
            candidates = val if isinstance(val, list) else [val]
            if not any(
                isinstance(item, str) and re.search(arg, item, flags=flags) is not None
                for item in candidates
            ):
                return False
        elif op == "$options":
            continue
        elif op == "$exists":
            if (val is not _MISSING) != bool(arg):
                return False
        else:
            # unsupported operator
            return False
    return True


def match_filter(doc: Mapping[str, Any], flt: Mapping[str, Any]) -> bool:
    """Return True if `doc` satisfies the Mongo-style filter `flt`."""

    for key, cond in flt.items():
        if key == "$or":
            if not any(match_filter(doc, sub) for sub in cond):
                return False
            continue
        if key == "$and":
            if not all(match_filter(doc, sub) for sub in cond):
                return False
            continue
        if key == "_id" and not isinstance(cond, Mapping):
            cond = _normalize_id(cond)
        val = _resolve(doc, key)
        if isinstance(cond, Mapping):
            if not _match_condition(val, cond):
                return False
        elif val is _MISSING or not _equals(val, cond):
            return False
    return True


def _id_clause(filter_: Mapping[str, Any]) -> sa.ColumnElement[bool] | None:
    """SQL pre-filter for exact `_id` lookups; everything else is matched in Python."""

    cond = filter_.get("_id")
    if cond is None or isinstance(cond, Mapping):
        return None
    return DataStoreRow.doc_id == _normalize_id(cond)


def _container(doc: dict[str, Any], key: str) -> tuple[dict[str, Any], str]:
    parts = key.split(".")
    ref = doc
    for p in parts[:-1]:
        if p not in ref or not isinstance(ref[p], dict):
            ref[p] = {}
        ref = ref[p]
    return ref, parts[-1]


def apply_update(doc: dict[str, Any], update: Mapping[str, Any]) -> int:
    """Apply `$set`/`$push`/`$addToSet`/`$pull` in place; return the number of changes."""

    modified = 0
    for k, v in (update.get("$set") or {}).items():
        ref, leaf = _container(doc, k)
        v = to_jsonable_python(v)
        if ref.get(leaf) != v:
            modified += 1
        ref[leaf] = v
    for k, v in (update.get("$push") or {}).items():
        ref, leaf = _container(doc, k)
        arr = ref.get(leaf)
        if not isinstance(arr, list):
            arr = []
        arr.append(to_jsonable_python(v))
        ref[leaf] = arr
        modified += 1
    for k, v in (update.get("$addToSet") or {}).items():
        ref, leaf = _container(doc, k)
        arr = ref.get(leaf)
        if not isinstance(arr, list):
            arr = []
        v = to_jsonable_python(v)
        if v not in arr:
            arr.append(v)
            modified += 1
        ref[leaf] = arr
    for k, v in (update.get("$pull") or {}).items():
        ref, leaf = _container(doc, k)
        arr = ref.get(leaf)
        if not isinstance(arr, list):
            continue
        v = to_jsonable_python(v)
        kept = [item for item in arr if item != v]
        if len(kept) != len(arr):
            modified += 1
        ref[leaf] = kept
    return modified


def _sort_key(field: str):
    def key(doc: Mapping[str, Any]) -> tuple[int, Any]:
        val = _resolve(doc, field)
        if val is _MISSING or val is None:
            return (0, "")
        return (1, val)

    return key


class DataStoreService:
    """Lightweight document store emulating a subset of Mongo APIs on a SQL JSON column."""

    def __init__(self, *, default_collection: str | None = None) -> None:
        self._default_collection = default_collection

    # ------------- helpers -------------
    def _session(self) -> Session:
        return SessionLocal()

    def _collection(self, name: str | None) -> str:
        return _ensure_collection(name or self._default_collection)

    def _rows(self, s: Session, coll: str, flt: Mapping[str, Any]) -> list[DataStoreRow]:
        stmt = select(DataStoreRow).where(DataStoreRow.collection == coll)
        clause = _id_clause(flt)
        if clause is not None:
            stmt = stmt.where(clause)
        return [row for row in s.exec(stmt).all() if match_filter(row.data, flt)]

    # ------------- ops -------------
    def ping(self) -> bool:
        with self._session() as s:
            s.exec(sa.text("SELECT 1")).one()
        return True

    def insert_one(self, document: Mapping[str, Any], *, collection: str | None = None) -> str:
        coll = self._collection(collection)
        doc = dict(document)
        _id = _normalize_id(doc.get("_id") or uuid.uuid4())
        doc["_id"] = _id
        row = DataStoreRow(collection=coll, doc_id=_id, data=_jsonable_document(doc))
        with self._session() as s:
            s.add(row)
            s.commit()
        return _id

    def find_one(
        self,
        filter_: Mapping[str, Any] | None = None,
        *,
        collection: str | None = None,
    ) -> dict[str, Any] | None:
        coll = self._collection(collection)
        with self._session() as s:
            rows = self._rows(s, coll, filter_ or {})
        return dict(rows[0].data) if rows else None

    def find_many(
        self,
        filter_: Mapping[str, Any] | None = None,
        *,
        sort: SortPairs | None = None,
        limit: int | None = None,
        collection: str | None = None,
    ) -> list[dict[str, Any]]:
        coll = self._collection(collection)
        with self._session() as s:
            docs = [dict(r.data) for r in self._rows(s, coll, filter_ or {})]
        if sort:
            for field, direction in reversed(sort):
                docs.sort(key=_sort_key(field), reverse=direction < 0)
        if limit:
            docs = docs[:limit]
        return docs

    def update_one(
        self,
        filter_: Mapping[str, Any],
        update: Mapping[str, Any],
        *,
        upsert: bool = False,
        collection: str | None = None,
    ) -> dict[str, Any]:
        coll = self._collection(collection)
        with self._session() as s:
            rows = self._rows(s, coll, filter_)
            target = rows[0] if rows else None
            if target is None and upsert:
                base: dict[str, Any] = {}
                base.update(update.get("$setOnInsert") or {})
                base.update(update.get("$set") or {})
                _id = _normalize_id(base.get("_id") or uuid.uuid4())
                base["_id"] = _id
                s.add(DataStoreRow(collection=coll, doc_id=_id, data=_jsonable_document(base)))
                s.commit()
                return {"matched_count": 0, "modified_count": 0, "upserted_id": _id}

            if target is None:
                return {"matched_count": 0, "modified_count": 0, "upserted_id": None}

            # Deep copy: apply_update mutates nested lists, which the row still shares.
            doc = copy.deepcopy(target.data)
            modified = apply_update(doc, update)
            # $setOnInsert is ignored on updates (Mongo behavior)
            target.data = _jsonable_document(doc)
            target.updated_at = utcnow()
            s.add(target)
            s.commit()
            return {"matched_count": 1, "modified_count": modified, "upserted_id": None}

    def update_many(
        self,
        filter_: Mapping[str, Any],
        update: Mapping[str, Any],
        *,
        collection: str | None = None,
    ) -> dict[str, Any]:
        coll = self._collection(collection)
        matched = 0
        modified = 0
        with self._session() as s:
            for row in self._rows(s, coll, filter_):
                matched += 1
                doc = copy.deepcopy(row.data)
                if apply_update(doc, update):
                    modified += 1
                    row.data = _jsonable_document(doc)
                    row.updated_at = utcnow()
                    s.add(row)
            if modified:
                s.commit()
        return {"matched_count": matched, "modified_count": modified}

    def delete_one(
        self,
        filter_: Mapping[str, Any],
        *,
        collection: str | None = None,
    ) -> int:
        coll = self._collection(collection)
        with self._session() as s:
            rows = self._rows(s, coll, filter_)
            if not rows:
                return 0
            s.delete(rows[0])
            s.commit()
        return 1

    def delete_many(
        self,
        filter_: Mapping[str, Any],
        *,
        collection: str | None = None,
    ) -> int:
        coll = self._collection(collection)
        deleted = 0
        with self._session() as s:
            for row in self._rows(s, coll, filter_):
                s.delete(row)
                deleted += 1
            if deleted:
                s.commit()
        return deleted

    def count(
        self,
        filter_: Mapping[str, Any] | None = None,
        *,
        collection: str | None = None,
    ) -> int:
        return len(self.find_many(filter_, collection=collection))


__all__ = ["DataStoreService", "apply_update", "match_filter"]
