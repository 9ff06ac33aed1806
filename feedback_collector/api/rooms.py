"""Room API endpoints.

Creating and listing rooms requires an account; looking up and joining a
room does not. Joining is gated only by the room secret.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from feedback_collector.api.dependencies import get_current_user, get_room_service
from feedback_collector.middleware.authenticator import Authenticated
from feedback_collector.schemas.room import RoomCreate, RoomJoin, RoomResponse
from feedback_collector.services.room_access import WrongSecretError
from feedback_collector.services.rooms import (
    OwnerNotFoundError,
    RoomIdExhaustedError,
    RoomService,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/rooms", tags=["rooms"])


@router.post("", response_model=RoomResponse, status_code=status.HTTP_201_CREATED)
async def create_room(
    data: RoomCreate,
    current_user: Authenticated = Depends(get_current_user),
    service: RoomService = Depends(get_room_service),
) -> RoomResponse:
    """Create a room owned by the caller, optionally protected by a secret."""
    try:
        room = await service.create(
            owner_id=current_user.user_id,
            name=data.name,
            password=data.password,
        )
    except OwnerNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found") from e
    except RoomIdExhaustedError as e:
        logger.error(str(e))
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Failed to create room",
        ) from e
    return RoomResponse.model_validate(room)


@router.get("", response_model=list[RoomResponse])
async def list_rooms(
    current_user: Authenticated = Depends(get_current_user),
    service: RoomService = Depends(get_room_service),
) -> list[RoomResponse]:
    """List rooms created by the caller."""
    rooms = await service.list_by_owner(current_user.user_id)
    return [RoomResponse.model_validate(r) for r in rooms]


@router.get("/{room_id}", response_model=RoomResponse)
async def get_room(
    room_id: str,
    service: RoomService = Depends(get_room_service),
) -> RoomResponse:
    """Get the public view of a room."""
    room = await service.get(room_id)
    if room is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Room not found")
    return RoomResponse.model_validate(room)


@router.post("/{room_id}/join", response_model=RoomResponse)
async def join_room(
    room_id: str,
    data: RoomJoin,
    service: RoomService = Depends(get_room_service),
) -> RoomResponse:
    """Join a room, supplying its secret if it has one."""
    try:
        room = await service.join(room_id, data.password)
    except WrongSecretError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid room password",
        ) from e

    if room is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Room not found")
    return RoomResponse.model_validate(room)
