from .lifecycle import ApplicationLifecycle

__all__ = ["ApplicationLifecycle"]
