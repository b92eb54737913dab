"""
Pydantic schemas for the dream interpretation endpoint.
"""
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.models.dream import DreamMode


def _as_text(value: Any) -> Optional[str]:
    """Stringify a raw payload value; None and empty strings become None."""
    if value is None:
        return None
    if isinstance(value, bool):
        text = "true" if value else "false"
    else:
        text = str(value)
    return text or None


class DreamSubmissionRequest(BaseModel):
    """
    Raw submission payload (JSON body for POST, query string for GET).
    Values are only coerced here; business validation happens in SubmissionService.
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    dream_text: Optional[str] = Field(None, alias="dreamText", description="Dream text to interpret")
    mode: Optional[str] = Field(None, description="'traditional' (default) or 'internal'")
    user_id: Optional[str] = Field(None, alias="userId", description="Registered user ID")
    anon_key: Optional[str] = Field(None, alias="anonKey", description="Anonymous session key, required without userId")

    @field_validator("dream_text", "mode", "user_id", "anon_key", mode="before")
    @classmethod
    def coerce_to_text(cls, value: Any) -> Optional[str]:
        return _as_text(value)


class DreamSubmissionResponse(BaseModel):
    """Schema for an accepted submission."""
    model_config = ConfigDict(populate_by_name=True)

    ok: bool = True
    dream_id: str = Field(..., alias="dreamId")
    created_at: datetime = Field(..., alias="createdAt")
    mode_selected: DreamMode = Field(..., alias="modeSelected")
    interpretation: str


class ErrorResponse(BaseModel):
    """Schema for failed submissions."""
    error: str
    message: Optional[str] = None
    detail: Optional[str] = None
    plan: Optional[str] = None
    limit: Optional[int] = None
