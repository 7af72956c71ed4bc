from skillswap.api.users.routes import router

__all__ = ["router"]
