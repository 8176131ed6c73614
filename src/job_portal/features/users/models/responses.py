"""User response models."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from ..entities.user import User


class UserResponse(BaseModel):
    id: str = Field(..., description="User ID")
    name: str
    email: str
    role: str
    phone: Optional[str] = None
    location: Optional[str] = None
    skills: List[str] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            role=user.role.value,
            phone=user.phone,
            location=user.location,
            skills=list(user.skills),
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
