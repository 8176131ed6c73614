"""Health, statistics and cache administration."""
