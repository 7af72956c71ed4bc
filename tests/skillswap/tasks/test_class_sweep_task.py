from __future__ import annotations

from typing import Any

import pytest

from skillswap.tasks import classes as class_tasks


class _FakeSweeper:
    def __init__(self, result: int = 0, exc: Exception | None = None) -> None:
        self.result = result
        self.exc = exc
        self.calls = 0

    def sweep(self, now: Any = None) -> int:
        self.calls += 1
        if self.exc is not None:
            raise self.exc
        return self.result


def test_task_reports_deleted_count(monkeypatch: pytest.MonkeyPatch) -> None:
    sweeper = _FakeSweeper(result=3)
    monkeypatch.setattr(class_tasks, "get_expiry_sweeper", lambda: sweeper)

    assert class_tasks.sweep_expired_classes_task() == {"ok": True, "deleted": 3}
    assert sweeper.calls == 1


def test_task_failure_is_reported_not_raised(monkeypatch: pytest.MonkeyPatch) -> None:
    sweeper = _FakeSweeper(exc=RuntimeError("database is locked"))
    monkeypatch.setattr(class_tasks, "get_expiry_sweeper", lambda: sweeper)

    out = class_tasks.sweep_expired_classes_task()

    assert out["ok"] is False
    assert out["deleted"] == 0
    assert "database is locked" in out["error"]


def test_task_is_registered_under_stable_name() -> None:
    assert class_tasks.sweep_expired_classes_task.name == "skillswap.tasks.classes.sweep_expired"
