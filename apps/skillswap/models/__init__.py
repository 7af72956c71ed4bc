"""Convenient exports for writing ORM models (SQLModel)."""

from sqlmodel import Field, SQLModel

from skillswap.models.datastore import DataStoreRow

__all__ = ["DataStoreRow", "Field", "SQLModel"]
