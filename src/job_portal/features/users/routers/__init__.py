from .me import router

__all__ = ["router"]
