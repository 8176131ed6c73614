from .application import (
    Application,
    ApplicationPage,
    ApplicationStatus,
    StatusHistoryEntry,
    EMPLOYER_STATUSES,
    OPEN_STATUSES,
    DECISION_STATUSES,
)
from .protocols import ApplicationRepository

__all__ = [
    "Application",
    "ApplicationPage",
    "ApplicationStatus",
    "StatusHistoryEntry",
    "EMPLOYER_STATUSES",
    "OPEN_STATUSES",
    "DECISION_STATUSES",
    "ApplicationRepository",
]
