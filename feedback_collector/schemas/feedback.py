"""Pydantic schemas for feedback."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from feedback_collector.services.feedback import sanitize_input


class FeedbackCreate(BaseModel):
    """Anonymous feedback submission.

    ``password`` is the room secret and is only checked for protected rooms.
    """

    content: str = Field(..., min_length=1, max_length=5000)
    password: str = Field("", max_length=128)

    @field_validator("content")
    @classmethod
    def _sanitize_content(cls, v: str) -> str:
        v = sanitize_input(v)
        if not v:
            raise ValueError("content must not be empty")
        return v


class FeedbackResponse(BaseModel):
    """Schema for feedback response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    room_id: str
    content: str
    sentiment: str
    created_at: datetime


class FeedbackListResponse(BaseModel):
    """List of feedback for a room."""

    items: list[FeedbackResponse]
    total: int
