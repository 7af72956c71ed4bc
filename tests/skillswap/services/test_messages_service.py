from __future__ import annotations

import pytest

from skillswap.core.exceptions import NotConnectedError
from skillswap.schemas.messages import MessageCreate
from skillswap.schemas.users import UserCreate
from skillswap.services.messages import MessageService
from skillswap.services.users import ConnectionService, UserService


@pytest.fixture()
def people(sqlite_store):
    users = UserService()
    conns = ConnectionService(users=users)
    a = users.create(UserCreate(name="Ada", email="ada@example.com"))
    b = users.create(UserCreate(name="Bob", email="bob@example.com"))
    c = users.create(UserCreate(name="Cy", email="cy@example.com"))
    conns.request(a, b)
    conns.accept(b, a)
    return users, a, b, c


def test_send_requires_connection(people) -> None:
    users, a, _b, c = people
    svc = MessageService(users=users)

    with pytest.raises(NotConnectedError) as exc:
        svc.send(a, MessageCreate(receiver_id=c, content="hi"))
    assert exc.value.status_code == 403
    assert exc.value.code == "not_connected"


def test_conversation_is_ordered_and_marks_read(people) -> None:
    users, a, b, _c = people
    svc = MessageService(users=users)
    svc.send(a, MessageCreate(receiver_id=b, content="one"))
    svc.send(b, MessageCreate(receiver_id=a, content="two"))
    svc.send(a, MessageCreate(receiver_id=b, content="three"))

    before = {s["user_id"]: s for s in svc.conversations(b)}
    assert before[a]["unread_count"] == 2
    assert before[a]["name"] == "Ada"
    assert before[a]["last_message"]["content"] == "three"

    thread = svc.conversation(b, a)
    assert [m["content"] for m in thread] == ["one", "two", "three"]

    after = {s["user_id"]: s for s in svc.conversations(b)}
    assert after[a]["unread_count"] == 0
    # Ada has not opened the thread yet.
    assert svc.conversations(a)[0]["unread_count"] == 1


def test_mark_read_returns_updated_count(people) -> None:
    users, a, b, _c = people
    svc = MessageService(users=users)
    svc.send(a, MessageCreate(receiver_id=b, content="one"))
    svc.send(a, MessageCreate(receiver_id=b, content="two"))

    assert svc.mark_read(b, a) == 2
    assert svc.mark_read(b, a) == 0
