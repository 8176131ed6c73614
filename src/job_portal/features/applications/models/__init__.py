from .requests import NoteRequest, StatusUpdateRequest
from .responses import (
    ApplicationListResponse,
    ApplicationMutationResponse,
    ApplicationResponse,
    StatusHistoryResponse,
)

__all__ = [
    "NoteRequest",
    "StatusUpdateRequest",
    "ApplicationListResponse",
    "ApplicationMutationResponse",
    "ApplicationResponse",
    "StatusHistoryResponse",
]
