"""Job application entity and its status model."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from math import ceil
from typing import Any, Dict, List, Optional

from ....utils import ensure_utc, utc_now


class ApplicationStatus(str, Enum):
    PENDING = "pending"
    UNDER_REVIEW = "under_review"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    WITHDRAWN = "withdrawn"


# Statuses a job poster may set
EMPLOYER_STATUSES = frozenset({
    ApplicationStatus.PENDING,
    ApplicationStatus.UNDER_REVIEW,
    ApplicationStatus.ACCEPTED,
    ApplicationStatus.REJECTED,
})
OPEN_STATUSES = frozenset({ApplicationStatus.PENDING, ApplicationStatus.UNDER_REVIEW})
DECISION_STATUSES = frozenset({ApplicationStatus.ACCEPTED, ApplicationStatus.REJECTED})


@dataclass
class StatusHistoryEntry:
    status: ApplicationStatus
    updated_at: datetime
    updated_by: Optional[str] = None

    def __post_init__(self):
        self.status = ApplicationStatus(self.status)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status.value,
            "updated_at": self.updated_at.isoformat(),
            "updated_by": self.updated_by,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StatusHistoryEntry":
        updated_at = data["updated_at"]
        if isinstance(updated_at, str):
            updated_at = datetime.fromisoformat(updated_at)
        return cls(
            status=data["status"],
            updated_at=ensure_utc(updated_at),
            updated_by=data.get("updated_by"),
        )


@dataclass
class Application:
    """An applicant's application to a job.

    ``status_history`` is append-only and gains exactly one entry per status
    change, including creation.
    """

    id: str
    job_id: str
    applicant_id: str
    resume_id: str
    cover_letter: Optional[str] = None
    status: ApplicationStatus = ApplicationStatus.PENDING
    notes: List[str] = field(default_factory=list)
    status_history: List[StatusHistoryEntry] = field(default_factory=list)
    applied_at: datetime = field(default_factory=utc_now)
    last_status_update: datetime = field(default_factory=utc_now)
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    def __post_init__(self):
        self.status = ApplicationStatus(self.status)
        self.status_history = [
            entry if isinstance(entry, StatusHistoryEntry) else StatusHistoryEntry.from_dict(entry)
            for entry in self.status_history
        ]


@dataclass
class ApplicationPage:
    applications: List[Application]
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        return ceil(self.total / self.limit) if self.limit else 0
