"""Feature modules of the job portal."""
