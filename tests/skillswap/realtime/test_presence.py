from __future__ import annotations

from skillswap.realtime.presence import PresenceRegistry


def test_mark_online_registers_and_broadcasts(transport) -> None:
    registry = PresenceRegistry(transport)

    registry.mark_online("alice", "sid-1")

    assert registry.lookup("alice") == "sid-1"
    assert "alice" in registry
    assert transport.broadcasts == [("user-status", {"userId": "alice", "status": "online"})]


def test_mark_offline_removes_entry_and_broadcasts(transport) -> None:
    registry = PresenceRegistry(transport)
    registry.mark_online("alice", "sid-1")
    registry.mark_online("bob", "sid-2")

    gone = registry.mark_offline("sid-1")

    assert gone == ["alice"]
    assert registry.lookup("alice") is None
    assert registry.online_users() == ["bob"]
    assert transport.broadcasts[-1] == ("user-status", {"userId": "alice", "status": "offline"})


def test_unknown_handle_is_a_noop(transport) -> None:
    registry = PresenceRegistry(transport)
    registry.mark_online("alice", "sid-1")
    before = list(transport.broadcasts)

    assert registry.mark_offline("sid-unknown") == []
    assert registry.mark_offline("sid-unknown") == []
    assert registry.lookup("alice") == "sid-1"
    assert transport.broadcasts == before


def test_reconnect_supersedes_previous_handle(transport) -> None:
    registry = PresenceRegistry(transport)
    registry.mark_online("alice", "sid-old")
    registry.mark_online("alice", "sid-new")

    assert registry.lookup("alice") == "sid-new"
    assert len(registry) == 1

    # The stale connection closing later must not evict the live one.
    assert registry.mark_offline("sid-old") == []
    assert registry.lookup("alice") == "sid-new"


def test_repeated_online_offline_never_leaks_or_duplicates(transport) -> None:
    registry = PresenceRegistry(transport)
    for _ in range(5):
        registry.mark_online("alice", "sid-1")
        registry.mark_online("alice", "sid-1")
        assert len(registry) == 1
        registry.mark_offline("sid-1")
        assert len(registry) == 0
        assert "alice" not in registry


def test_one_handle_announcing_two_users_is_fully_cleared(transport) -> None:
    registry = PresenceRegistry(transport)
    registry.mark_online("alice", "sid-1")
    registry.mark_online("alice-alt", "sid-1")

    assert sorted(registry.mark_offline("sid-1")) == ["alice", "alice-alt"]
    assert len(registry) == 0


def test_user_for_reverse_lookup(transport) -> None:
    registry = PresenceRegistry(transport)
    registry.mark_online("alice", "sid-1")

    assert registry.user_for("sid-1") == "alice"
    assert registry.user_for("sid-2") is None


def test_registries_are_isolated(transport) -> None:
    first = PresenceRegistry(transport)
    second = PresenceRegistry(transport)
    first.mark_online("alice", "sid-1")

    assert second.lookup("alice") is None
