"""API router registration helpers.

Routers are imported lazily inside `register_routes` rather than at module
import time, so importing a single router module in tests stays cheap.
"""

from fastapi import FastAPI


def register_routes(app: FastAPI) -> None:
    """Attach all API routers (lazy imports)."""
    from skillswap.api.classes import router as classes_router
    from skillswap.api.connections import router as connections_router
    from skillswap.api.messages import router as messages_router
    from skillswap.api.system import router as system_router
    from skillswap.api.users import router as users_router

    routers = [
        system_router,
        users_router,
        connections_router,
        messages_router,
        classes_router,
    ]
    for router in routers:
        app.include_router(router)
