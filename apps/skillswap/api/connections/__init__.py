from skillswap.api.connections.routes import router

__all__ = ["router"]
