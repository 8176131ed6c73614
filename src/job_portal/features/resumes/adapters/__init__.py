from .local_storage import LocalResumeStorage, ALLOWED_FILE_TYPES

__all__ = ["LocalResumeStorage", "ALLOWED_FILE_TYPES"]
