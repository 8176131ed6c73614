"""User request models."""

from typing import Any, List, Optional

from pydantic import BaseModel, Field, model_validator

# Profile fields a user may clear by sending null
CLEARABLE_FIELDS = frozenset({"phone", "location"})


class UserProfileUpdate(BaseModel):
    """Fields a user may change on their own profile."""

    name: Optional[str] = Field(None, min_length=1, max_length=200)
    phone: Optional[str] = Field(None, max_length=50)
    location: Optional[str] = Field(None, max_length=200)
    skills: Optional[List[str]] = None

    @model_validator(mode="before")
    @classmethod
    def reject_required_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            nulls = sorted(k for k, v in data.items() if v is None and k not in CLEARABLE_FIELDS)
            if nulls:
                raise ValueError(f"{', '.join(nulls)} cannot be null")
        return data
