"""User account entity."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional

from ....utils import utc_now


class UserRole(str, Enum):
    USER = "user"
    ADMIN = "admin"


@dataclass
class User:
    """A person using the portal, as job seeker, employer or administrator.

    Credentials are held by the token issuer; only profile data lives here.
    """

    id: str
    name: str
    email: str
    role: UserRole = UserRole.USER
    phone: Optional[str] = None
    location: Optional[str] = None
    skills: List[str] = field(default_factory=list)
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    def __post_init__(self):
        if not isinstance(self.role, UserRole):
            self.role = UserRole(self.role)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
