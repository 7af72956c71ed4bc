from skillswap.api.messages.routes import router

__all__ = ["router"]
