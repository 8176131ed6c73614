from .resume import Resume
from .protocols import ResumeRepository, ResumeStorage

__all__ = ["Resume", "ResumeRepository", "ResumeStorage"]
