from __future__ import annotations

import logging
from typing import Any

from celery import shared_task

from skillswap.core.dependencies import get_expiry_sweeper

logger = logging.getLogger(__name__)


@shared_task(name="skillswap.tasks.classes.sweep_expired")
def sweep_expired_classes_task() -> dict[str, Any]:
    """Delete classes past the retention window.

    Runs best-effort from Celery beat: failures are logged and reported in the
    result, never retried before the next scheduled run.
    """
    try:
        deleted = get_expiry_sweeper().sweep()
    except Exception as exc:
        logger.exception("Class expiry sweep failed")
        return {"ok": False, "deleted": 0, "error": str(exc)}
    return {"ok": True, "deleted": deleted}
