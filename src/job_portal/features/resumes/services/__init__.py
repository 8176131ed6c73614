from .resume_service import ResumeService

__all__ = ["ResumeService"]
