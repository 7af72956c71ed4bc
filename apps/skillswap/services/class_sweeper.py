"""Deletes classes whose scheduled time is past the retention window."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta

from skillswap.core.settings import settings
from skillswap.core.utils import ensure_utc, utcnow
from skillswap.services.classes import ClassService

logger = logging.getLogger(__name__)


def _default_retention() -> timedelta:
    return timedelta(hours=settings.class_retention_hours)


@dataclass
class ExpirySweeper:
    """Idempotent sweep: a class is removed once `date <= now - retention`.

    Running it twice over the same data deletes nothing the second time, so
    overlapping runs are harmless.
    """

    classes: ClassService
    retention: timedelta = field(default_factory=_default_retention)

    def cutoff(self, now: datetime | None = None) -> datetime:
        return ensure_utc(now or utcnow()) - self.retention

    def sweep(self, now: datetime | None = None) -> int:
        cutoff = self.cutoff(now)
        deleted = self.classes.delete_scheduled_before(cutoff)
        if deleted:
            logger.info("Expiry sweep removed %d classes scheduled before %s", deleted, cutoff)
        else:
            logger.debug("Expiry sweep found nothing before %s", cutoff)
        return deleted


__all__ = ["ExpirySweeper"]
