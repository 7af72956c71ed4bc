"""In-memory presence: which user is reachable on which connection.

State lives only as long as the process. Clients re-announce themselves with
`user-online` after every (re)connect, so a restart rebuilds the registry from
scratch.

One registry instance is owned by one event loop; every mutation runs on that
loop, which is the only serialization it relies on. Running several API
processes requires an external registry instead.
"""

from __future__ import annotations

import logging

from skillswap.realtime.events import STATUS_OFFLINE, STATUS_ONLINE, USER_STATUS
from skillswap.realtime.transport import Transport

logger = logging.getLogger(__name__)


class PresenceRegistry:
    """Maps user ids to their single active connection handle."""

    def __init__(self, transport: Transport) -> None:
        self._transport = transport
        self._handles: dict[str, str] = {}

    def mark_online(self, user_id: str, handle: str) -> None:
        """Record `handle` for `user_id` and broadcast the online status.

        A second announcement for the same user replaces the previous handle;
        the older connection stays open but no longer receives relayed events.
        """

        previous = self._handles.get(user_id)
        self._handles[user_id] = handle
        if previous is not None and previous != handle:
            logger.info("User %s moved from connection %s to %s", user_id, previous, handle)
        else:
            logger.debug("User %s online on %s", user_id, handle)
        self._transport.broadcast(USER_STATUS, {"userId": user_id, "status": STATUS_ONLINE})

    def mark_offline(self, handle: str) -> list[str]:
        """Drop every entry still pointing at `handle`; return the users removed.

        Unknown or superseded handles are ignored.
        """

        gone = [user_id for user_id, h in self._handles.items() if h == handle]
        for user_id in gone:
            del self._handles[user_id]
            logger.debug("User %s offline (%s)", user_id, handle)
            self._transport.broadcast(USER_STATUS, {"userId": user_id, "status": STATUS_OFFLINE})
        return gone

    def lookup(self, user_id: str) -> str | None:
        return self._handles.get(user_id)

    def user_for(self, handle: str) -> str | None:
        for user_id, h in self._handles.items():
            if h == handle:
                return user_id
        return None

    def online_users(self) -> list[str]:
        return sorted(self._handles)

    def __contains__(self, user_id: object) -> bool:
        return user_id in self._handles

    def __len__(self) -> int:
        return len(self._handles)


__all__ = ["PresenceRegistry"]
