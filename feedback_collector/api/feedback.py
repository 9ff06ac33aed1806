"""Feedback API endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from feedback_collector.api.dependencies import (
    get_current_user,
    get_feedback_service,
    get_room_service,
)
from feedback_collector.middleware.authenticator import Authenticated
from feedback_collector.schemas.feedback import (
    FeedbackCreate,
    FeedbackListResponse,
    FeedbackResponse,
)
from feedback_collector.services.feedback import FeedbackService
from feedback_collector.services.room_access import WrongSecretError
from feedback_collector.services.rooms import RoomService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/rooms/{room_id}/feedback", tags=["feedback"])


@router.post("", response_model=FeedbackResponse, status_code=status.HTTP_201_CREATED)
async def submit_feedback(
    room_id: str,
    data: FeedbackCreate,
    room_service: RoomService = Depends(get_room_service),
    service: FeedbackService = Depends(get_feedback_service),
) -> FeedbackResponse:
    """Submit anonymous feedback. Protected rooms require their secret."""
    try:
        room = await room_service.join(room_id, data.password)
    except WrongSecretError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid room password",
        ) from e

    if room is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Room not found")

    feedback = await service.submit(room, data.content)
    return FeedbackResponse.model_validate(feedback)


@router.get("", response_model=FeedbackListResponse)
async def list_feedback(
    room_id: str,
    current_user: Authenticated = Depends(get_current_user),
    room_service: RoomService = Depends(get_room_service),
    service: FeedbackService = Depends(get_feedback_service),
) -> FeedbackListResponse:
    """List feedback for a room. Only the room's owner may read it."""
    room = await room_service.get(room_id)
    # Non-owners get the same answer as for a missing room
    if room is None or room.owner_id != current_user.user_id:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Room not found")

    items = await service.list_for_room(room.id)
    return FeedbackListResponse(
        items=[FeedbackResponse.model_validate(f) for f in items],
        total=len(items),
    )
