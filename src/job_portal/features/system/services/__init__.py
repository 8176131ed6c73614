from .system_service import SystemService

__all__ = ["SystemService"]
