import logging

from fastapi import FastAPI
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware

# Environment is loaded by Pydantic Settings (see skillswap.core.settings).
from skillswap.api import register_routes
from skillswap.core.dependencies import get_expiry_sweeper, get_realtime_server
from skillswap.core.exceptions import register_exception_handlers
from skillswap.core.logging import setup_logging
from skillswap.core.settings import settings
from skillswap.realtime.scheduler import RecurringTask

# Initialize logging early so all modules inherit the handlers/level
setup_logging()

logger = logging.getLogger(__name__)

app = FastAPI(title="SkillSwap API", debug=settings.debug)
register_exception_handlers(app)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_routes(app)

realtime = get_realtime_server()
app.state.realtime = realtime

_sweeper_task: RecurringTask | None = None


async def _sweep_expired_classes() -> int:
    # The store is synchronous; keep it off the event loop that drives Socket.IO.
    return await run_in_threadpool(get_expiry_sweeper().sweep)


@app.on_event("startup")
async def _start_class_sweeper() -> None:
    """Run the expiry sweep now and then every interval, unless Celery beat owns it."""
    global _sweeper_task

    if not settings.enable_class_sweeper or settings.enable_class_sweeper_beat:
        logger.info("In-process class sweeper disabled")
        return
    _sweeper_task = RecurringTask(
        "class-expiry-sweep",
        _sweep_expired_classes,
        interval=settings.class_sweep_interval_seconds,
    )
    _sweeper_task.start()


@app.on_event("shutdown")
async def _stop_class_sweeper() -> None:
    global _sweeper_task

    if _sweeper_task is not None:
        await _sweeper_task.stop()
        _sweeper_task = None


# ASGI entrypoint: Socket.IO handles its own path and hands everything else to FastAPI.
application = realtime.asgi_app(app, socketio_path=settings.socketio_path)

logger.info("SkillSwap API initialized")
