from __future__ import annotations

import asyncio

from skillswap.realtime.server import RealtimeServer


def _server(transport) -> RealtimeServer:
    return RealtimeServer(transport=transport)


def test_user_online_accepts_plain_id_or_object(transport) -> None:
    server = _server(transport)

    asyncio.run(server.on_user_online("sid-a", "alice"))
    asyncio.run(server.on_user_online("sid-b", {"userId": "bob"}))

    assert server.registry.lookup("alice") == "sid-a"
    assert server.registry.lookup("bob") == "sid-b"


def test_user_online_without_id_is_ignored(transport) -> None:
    server = _server(transport)

    asyncio.run(server.on_user_online("sid-a", None))
    asyncio.run(server.on_user_online("sid-a", {"name": "no id"}))
    asyncio.run(server.on_user_online("sid-a", "   "))

    assert len(server.registry) == 0
    assert transport.broadcasts == []


def test_malformed_send_message_is_dropped(transport) -> None:
    server = _server(transport)
    asyncio.run(server.on_user_online("sid-b", "bob"))

    asyncio.run(server.on_send_message("sid-a", "not a dict"))
    asyncio.run(server.on_send_message("sid-a", {"message": {"content": "hi"}}))
    asyncio.run(server.on_typing("sid-a", None))

    assert transport.sent == []


def test_disconnect_of_unknown_handle_is_a_noop(transport) -> None:
    server = _server(transport)

    asyncio.run(server.on_disconnect("sid-never-seen"))

    assert transport.broadcasts == []


def test_chat_session_end_to_end(transport) -> None:
    server = _server(transport)

    asyncio.run(server.on_connect("sid-a", {}))
    asyncio.run(server.on_connect("sid-b", {}))
    asyncio.run(server.on_user_online("sid-a", "A"))
    asyncio.run(server.on_user_online("sid-b", "B"))
    assert transport.broadcasts == [
        ("user-status", {"userId": "A", "status": "online"}),
        ("user-status", {"userId": "B", "status": "online"}),
    ]

    message = {"id": "m1", "sender_id": "A", "receiver_id": "B", "content": "hi"}
    asyncio.run(server.on_send_message("sid-a", {"receiverId": "B", "message": message}))
    assert transport.sent_to("sid-b") == [("receive-message", message)]
    assert transport.sent_to("sid-a") == []

    asyncio.run(server.on_typing("sid-b", {"receiverId": "A", "senderId": "B"}))
    assert transport.sent_to("sid-a") == [
        ("user-typing", {"receiverId": "A", "senderId": "B"})
    ]

    asyncio.run(server.on_disconnect("sid-b"))
    assert transport.broadcasts[-1] == ("user-status", {"userId": "B", "status": "offline"})

    sent_before = len(transport.sent)
    asyncio.run(server.on_send_message("sid-a", {"receiverId": "B", "message": {"content": "?"}}))
    assert len(transport.sent) == sent_before
    assert server.registry.online_users() == ["A"]


def test_stale_disconnect_after_reconnect_keeps_user_online(transport) -> None:
    server = _server(transport)
    asyncio.run(server.on_user_online("sid-1", "A"))
    asyncio.run(server.on_user_online("sid-2", "A"))

    asyncio.run(server.on_disconnect("sid-1"))

    assert server.registry.lookup("A") == "sid-2"
    assert ("user-status", {"userId": "A", "status": "offline"}) not in transport.broadcasts


def test_handlers_are_registered_on_the_socketio_server(transport) -> None:
    server = _server(transport)

    handlers = server.sio.handlers["/"]
    for event in ("connect", "disconnect", "user-online", "send-message", "typing"):
        assert event in handlers
