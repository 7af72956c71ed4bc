from __future__ import annotations

from typing import Any

import pytest


class RecordingTransport:
    """Collects dispatched events instead of writing to sockets."""

    def __init__(self) -> None:
        self.sent: list[tuple[str, str, Any]] = []
        self.broadcasts: list[tuple[str, Any]] = []

    def send(self, handle: str, event: str, payload: Any) -> None:
        self.sent.append((handle, event, payload))

    def broadcast(self, event: str, payload: Any) -> None:
        self.broadcasts.append((event, payload))

    def sent_to(self, handle: str) -> list[tuple[str, Any]]:
        return [(event, payload) for h, event, payload in self.sent if h == handle]


@pytest.fixture()
def transport() -> RecordingTransport:
    return RecordingTransport()
