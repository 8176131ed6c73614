"""Configuration module for job-portal.

Settings are read from the environment (and an optional ``.env`` file)
through pydantic-settings; logging is configured from the same environment.
"""

from .settings import (
    Settings,
    CacheBackendType,
    get_settings,
)

from .logging_config import (
    setup_logging,
    LogLevel,
    LogVerbosity,
    LogFormat,
    LoggingConfig,
    get_logger,
)

__all__ = [
    # Settings
    "Settings",
    "CacheBackendType",
    "get_settings",

    # Logging
    "setup_logging",
    "LogLevel",
    "LogVerbosity",
    "LogFormat",
    "LoggingConfig",
    "get_logger",
]
