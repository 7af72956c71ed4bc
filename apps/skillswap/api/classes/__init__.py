from skillswap.api.classes.routes import router

__all__ = ["router"]
