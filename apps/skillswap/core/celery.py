from __future__ import annotations

from celery import Celery
from celery.schedules import crontab

from skillswap.core.settings import settings


def create_celery_app(*, include_tasks: bool = True) -> Celery:
    """Create a configured Celery app.

    `include_tasks=False` creates a lightweight client suitable for the API
    process (enqueue/poll only) without importing task modules.
    """

    task_modules = ["skillswap.tasks.classes"] if include_tasks else []

    celery_app = Celery(
        settings.app_name,
        broker=settings.redis_url,
        backend=settings.redis_url,
        include=task_modules,
    )
    celery_app.conf.update(
        accept_content=["json"],
        enable_utc=True,
        result_serializer="json",
        task_serializer="json",
        timezone="UTC",
        task_track_started=True,
        worker_prefetch_multiplier=1,
        task_default_queue="default",
    )

    beat_schedule: dict[str, object] = {}
    if settings.enable_class_sweeper_beat:
        beat_schedule |= {
            # Top of every hour; the sweep is idempotent so a late or doubled run is harmless.
            "class-expiry-sweep-hourly": {
                "task": "skillswap.tasks.classes.sweep_expired",
                "schedule": crontab(minute=0),
                "options": {"queue": "default"},
            }
        }

    if beat_schedule:
        celery_app.conf.beat_schedule = beat_schedule

    return celery_app
