"""Resume entity."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ....utils import utc_now


@dataclass
class Resume:
    """An uploaded resume file owned by an applicant."""

    id: str
    name: str
    path: str
    applicant_id: str
    content_type: Optional[str] = None
    size: int = 0
    uploaded_at: datetime = field(default_factory=utc_now)
