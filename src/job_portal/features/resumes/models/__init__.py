from .responses import ResumeDeleteResponse, ResumeResponse

__all__ = ["ResumeDeleteResponse", "ResumeResponse"]
