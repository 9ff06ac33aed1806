# Feedback Collector Pydantic Schemas
from feedback_collector.schemas.auth import (
    AccountResponse,
    AuthResponse,
    LoginRequest,
    RegisterRequest,
)
from feedback_collector.schemas.feedback import (
    FeedbackCreate,
    FeedbackListResponse,
    FeedbackResponse,
)
from feedback_collector.schemas.room import RoomCreate, RoomJoin, RoomResponse

__all__ = [
    "AccountResponse",
    "AuthResponse",
    "FeedbackCreate",
    "FeedbackListResponse",
    "FeedbackResponse",
    "LoginRequest",
    "RegisterRequest",
    "RoomCreate",
    "RoomJoin",
    "RoomResponse",
]
