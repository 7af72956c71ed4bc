"""Fire-and-forget event dispatch onto live Socket.IO connections."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Coroutine
from functools import partial
from typing import Any, Protocol

import socketio

logger = logging.getLogger(__name__)


class Transport(Protocol):
    """What the presence registry and relays need from the socket layer.

    Both methods return immediately; the network write happens later on the
    event loop and its outcome is never reported back to the caller.
    """

    def send(self, handle: str, event: str, payload: Any) -> None: ...

    def broadcast(self, event: str, payload: Any) -> None: ...


class SocketIOTransport:
    """`Transport` backed by a python-socketio `AsyncServer`."""

    def __init__(self, sio: socketio.AsyncServer) -> None:
        self._sio = sio
        self._pending: set[asyncio.Task[Any]] = set()

    def send(self, handle: str, event: str, payload: Any) -> None:
        self._dispatch(self._sio.emit(event, payload, to=handle), event=event, target=handle)

    def broadcast(self, event: str, payload: Any) -> None:
        self._dispatch(self._sio.emit(event, payload), event=event, target="*")

    @property
    def pending(self) -> int:
        return len(self._pending)

    async def drain(self) -> None:
        """Wait for dispatches already handed to the loop (shutdown and tests)."""

        if self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    def _dispatch(self, coro: Coroutine[Any, Any, Any], *, event: str, target: str) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            coro.close()
            logger.warning("No running event loop; dropped %s for %s", event, target)
            return
        task = loop.create_task(coro)
        self._pending.add(task)
        task.add_done_callback(partial(self._finished, event=event, target=target))

    def _finished(self, task: asyncio.Task[Any], *, event: str, target: str) -> None:
        self._pending.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.warning("Emit of %s to %s failed: %s", event, target, exc)


__all__ = ["SocketIOTransport", "Transport"]
