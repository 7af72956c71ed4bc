"""Best-effort, at-most-once relays between live connections.

Neither relay persists, buffers, retries or acknowledges anything. Messages are
stored through the REST API beforehand; a receiver who misses the live event
picks it up from the stored conversation on the next load.
"""

from __future__ import annotations

import logging
from typing import Any

from skillswap.realtime.events import RECEIVE_MESSAGE, USER_TYPING
from skillswap.realtime.presence import PresenceRegistry
from skillswap.realtime.transport import Transport

logger = logging.getLogger(__name__)


class MessageRelay:
    """Forward chat messages to the receiver's current connection."""

    def __init__(self, registry: PresenceRegistry, transport: Transport) -> None:
        self._registry = registry
        self._transport = transport

    def relay(self, sender_id: str | None, receiver_id: str, payload: Any) -> bool:
        """Deliver `payload` unmodified as `receive-message`; False if the receiver is offline.

        Callers are trusted to have checked the connection between sender and
        receiver (the REST send endpoint does).
        """

        handle = self._registry.lookup(receiver_id)
        if handle is None:
            logger.debug("Dropped message %s -> %s: receiver offline", sender_id, receiver_id)
            return False
        self._transport.send(handle, RECEIVE_MESSAGE, payload)
        return True


class TypingRelay:
    """Forward "is typing" notices; display timeouts are up to the receiver."""

    def __init__(self, registry: PresenceRegistry, transport: Transport) -> None:
        self._registry = registry
        self._transport = transport

    def notify_typing(
        self,
        sender_id: str | None,
        receiver_id: str,
        payload: dict[str, Any] | None = None,
    ) -> bool:
        handle = self._registry.lookup(receiver_id)
        if handle is None:
            return False
        event = dict(payload or {})
        event["senderId"] = sender_id
        event["receiverId"] = receiver_id
        self._transport.send(handle, USER_TYPING, event)
        return True


__all__ = ["MessageRelay", "TypingRelay"]
