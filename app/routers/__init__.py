from app.routers import architecture

__all__ = ["architecture"]
