"""Room service - creation, lookup and joining of feedback rooms."""

import logging
import re
import secrets
import string
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from feedback_collector.models.account import Account
from feedback_collector.models.room import ROOM_ID_LENGTH, Room
from feedback_collector.services.credentials import CredentialStore
from feedback_collector.services.room_access import RoomAccessGuard

logger = logging.getLogger(__name__)

ROOM_ID_ALPHABET = string.ascii_letters + string.digits
ROOM_ID_PATTERN = re.compile(rf"^[a-zA-Z0-9]{{{ROOM_ID_LENGTH}}}$")

# 62^6 ids; collisions are rare enough that a few retries suffice
MAX_ROOM_ID_ATTEMPTS = 5


class RoomIdExhaustedError(Exception):
    """Could not find an unused room id."""


class OwnerNotFoundError(Exception):
    """The owning account no longer exists."""


def generate_room_id() -> str:
    return "".join(secrets.choice(ROOM_ID_ALPHABET) for _ in range(ROOM_ID_LENGTH))


def is_valid_room_id(room_id: str) -> bool:
    return bool(ROOM_ID_PATTERN.match(room_id))


class RoomService:
    """Service for managing rooms."""

    def __init__(self, db: AsyncSession, credentials: CredentialStore):
        self.db = db
        self.credentials = credentials
        self.guard = RoomAccessGuard(credentials)

    async def create(self, owner_id: UUID, name: str, password: str | None = None) -> Room:
        """Create a room, hashing its secret if one is given.

        An empty secret means the room is unprotected. The secret is fixed
        for the life of the room.
        """
        password_hash = self.credentials.hash(password) if password else None

        for attempt in range(1, MAX_ROOM_ID_ATTEMPTS + 1):
            room_id = generate_room_id()
            room = Room(
                id=room_id,
                name=name,
                owner_id=owner_id,
                password_hash=password_hash,
            )
            self.db.add(room)
            try:
                await self.db.commit()
            except IntegrityError as e:
                await self.db.rollback()
                if await self._exists(select(Room.id).where(Room.id == room_id)):
                    logger.warning(f"Room id collision on attempt {attempt}, retrying")
                    continue
                # Only an id collision is retried; anything else is a real failure
                if not await self._exists(select(Account.id).where(Account.id == owner_id)):
                    raise OwnerNotFoundError(f"Account {owner_id} does not exist") from e
                raise
            await self.db.refresh(room)
            logger.info(f"Created room {room.id} for account {owner_id}")
            return room

        raise RoomIdExhaustedError("Could not allocate a unique room id")

    async def _exists(self, stmt) -> bool:
        return await self.db.scalar(stmt) is not None

    async def get(self, room_id: str) -> Room | None:
        """Get a room by id; malformed ids never reach the database."""
        if not is_valid_room_id(room_id):
            return None
        result = await self.db.execute(select(Room).where(Room.id == room_id))
        return result.scalar_one_or_none()

    async def list_by_owner(self, owner_id: UUID) -> list[Room]:
        result = await self.db.execute(
            select(Room).where(Room.owner_id == owner_id).order_by(Room.created_at.desc())
        )
        return list(result.scalars().all())

    async def join(self, room_id: str, candidate_secret: str | None) -> Room | None:
        """Return the room if the candidate may join, None if it does not exist.

        Raises WrongSecretError when the room is protected and the secret
        does not match.
        """
        room = await self.get(room_id)
        if room is None:
            return None
        self.guard.check_join(room, candidate_secret)
        return room
