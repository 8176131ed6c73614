"""Application request models."""

from pydantic import BaseModel, Field


class StatusUpdateRequest(BaseModel):
    # Checked against the employer statuses by the lifecycle, which answers 400
    status: str = Field(..., description="pending, under_review, accepted or rejected")


class NoteRequest(BaseModel):
    note: str = Field(..., min_length=1, max_length=5000)
