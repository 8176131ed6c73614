"""Job portal API: jobs, applications and resumes with cached job reads."""

from .__version__ import __version__

__all__ = ["__version__"]
