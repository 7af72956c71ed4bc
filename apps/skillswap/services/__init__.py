"""Service layer package.

Keep imports lazy so that importing a single service (e.g. from a Celery task)
does not pull in the others. Common symbols remain reachable from
`skillswap.services` through `__getattr__` proxies.
"""

from __future__ import annotations

from typing import Any

__all__ = [
    "ClassService",
    "ConnectionService",
    "DataStoreService",
    "ExpirySweeper",
    "MessageService",
    "UserService",
]


def __getattr__(name: str) -> Any:  # PEP 562 lazy attribute access
    if name == "DataStoreService":
        from skillswap.services.datastore import DataStoreService

        return DataStoreService
    if name in {"UserService", "ConnectionService"}:
        from skillswap.services import users

        return getattr(users, name)
    if name == "MessageService":
        from skillswap.services.messages import MessageService

        return MessageService
    if name == "ClassService":
        from skillswap.services.classes import ClassService

        return ClassService
    if name == "ExpirySweeper":
        from skillswap.services.class_sweeper import ExpirySweeper

        return ExpirySweeper
    raise AttributeError(name)
