"""Pydantic schemas for rooms."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from feedback_collector.services.feedback import sanitize_input


class RoomCreate(BaseModel):
    """Schema for creating a room. An empty or missing password leaves it open."""

    name: str = Field(..., min_length=1, max_length=255)
    password: str | None = Field(None, max_length=128)

    @field_validator("name")
    @classmethod
    def _sanitize_name(cls, v: str) -> str:
        v = sanitize_input(v)
        if not v:
            raise ValueError("name must not be empty")
        return v


class RoomJoin(BaseModel):
    """Schema for joining a room."""

    password: str = Field("", max_length=128)


class RoomResponse(BaseModel):
    """Public view of a room (the secret is never included)."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    owner_id: UUID
    is_password_protected: bool
    created_at: datetime
