"""Socket.IO server wiring for presence, chat relay and typing notices.

Event protocol (see `skillswap.realtime.events`):
- `user-online` (userId) registers the connection and broadcasts `user-status`
- `send-message` ({receiverId, message}) relays `receive-message` to the receiver
- `typing` ({receiverId, senderId}) relays `user-typing` to the receiver
- disconnect removes the connection and broadcasts `user-status` offline

Payloads are not validated beyond what is needed to route them; anything that
cannot be routed is logged at debug level and ignored.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

import socketio

from skillswap.realtime.events import SEND_MESSAGE, TYPING, USER_ONLINE
from skillswap.realtime.presence import PresenceRegistry
from skillswap.realtime.relay import MessageRelay, TypingRelay
from skillswap.realtime.transport import SocketIOTransport, Transport

logger = logging.getLogger(__name__)


def _as_user_id(value: Any) -> str | None:
    if isinstance(value, dict):
        value = value.get("userId")
    if value is None or isinstance(value, (dict, list)):
        return None
    text = str(value).strip()
    return text or None


def create_socketio_server(
    cors_allowed_origins: str | Sequence[str] = "*",
) -> socketio.AsyncServer:
    return socketio.AsyncServer(
        async_mode="asgi",
        cors_allowed_origins=cors_allowed_origins,
        logger=False,
        engineio_logger=False,
    )


class RealtimeServer:
    """Owns one Socket.IO server and the presence registry bound to it."""

    def __init__(
        self,
        sio: socketio.AsyncServer | None = None,
        *,
        transport: Transport | None = None,
    ) -> None:
        self.sio = sio or create_socketio_server()
        self.transport = transport or SocketIOTransport(self.sio)
        self.registry = PresenceRegistry(self.transport)
        self.messages = MessageRelay(self.registry, self.transport)
        self.typing = TypingRelay(self.registry, self.transport)
        self._register_handlers()

    def _register_handlers(self) -> None:
        self.sio.on("connect", self.on_connect)
        self.sio.on("disconnect", self.on_disconnect)
        self.sio.on(USER_ONLINE, self.on_user_online)
        self.sio.on(SEND_MESSAGE, self.on_send_message)
        self.sio.on(TYPING, self.on_typing)

    def asgi_app(self, other_asgi_app: Any = None, *, socketio_path: str = "socket.io") -> Any:
        return socketio.ASGIApp(
            self.sio,
            other_asgi_app=other_asgi_app,
            socketio_path=socketio_path,
        )

    # ------------- handlers -------------
    async def on_connect(self, sid: str, environ: dict[str, Any], auth: Any | None = None) -> None:
        logger.debug("Connection opened: %s", sid)

    async def on_disconnect(self, sid: str, *_args: Any) -> None:
        users = self.registry.mark_offline(sid)
        logger.debug("Connection closed: %s (users: %s)", sid, users or "-")

    async def on_user_online(self, sid: str, data: Any = None) -> None:
        user_id = _as_user_id(data)
        if user_id is None:
            logger.debug("Ignoring %s without a user id from %s", USER_ONLINE, sid)
            return
        self.registry.mark_online(user_id, sid)

    async def on_send_message(self, sid: str, data: Any = None) -> None:
        receiver_id = _as_user_id(data.get("receiverId")) if isinstance(data, dict) else None
        if receiver_id is None:
            logger.debug("Ignoring %s without receiverId from %s", SEND_MESSAGE, sid)
            return
        sender_id = self.registry.user_for(sid)
        self.messages.relay(sender_id, receiver_id, data.get("message"))

    async def on_typing(self, sid: str, data: Any = None) -> None:
        receiver_id = _as_user_id(data.get("receiverId")) if isinstance(data, dict) else None
        if receiver_id is None:
            logger.debug("Ignoring %s without receiverId from %s", TYPING, sid)
            return
        sender_id = _as_user_id(data.get("senderId")) or self.registry.user_for(sid)
        self.typing.notify_typing(sender_id, receiver_id, data)


__all__ = ["RealtimeServer", "create_socketio_server"]
