"""
Pydantic schemas for API request/response validation.
"""
from app.schemas.dream import (
    DreamSubmissionRequest,
    DreamSubmissionResponse,
    ErrorResponse,
)

__all__ = [
    "DreamSubmissionRequest",
    "DreamSubmissionResponse",
    "ErrorResponse",
]
