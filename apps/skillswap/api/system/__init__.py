from skillswap.api.system.routes import router

__all__ = ["router"]
