"""Version information for job-portal."""

__version__ = "1.0.0"
