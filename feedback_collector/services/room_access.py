"""Shared-secret gate for joining rooms.

Deliberately identity-agnostic: the guard never sees an account. Owning a
room and being able to join it are separate capabilities, and a room
secret never grants account-level identity.
"""

import logging

from feedback_collector.models.room import Room
from feedback_collector.services.credentials import CredentialStore

logger = logging.getLogger(__name__)


class RoomAccessError(Exception):
    """Base exception for room access checks."""


class WrongSecretError(RoomAccessError):
    """The candidate secret does not match the room's secret."""


class RoomAccessGuard:
    """Verify a room's optional secret using the shared credential primitive."""

    def __init__(self, credentials: CredentialStore):
        self.credentials = credentials

    def check_join(self, room: Room, candidate_secret: str | None) -> bool:
        """Return True if the candidate may join, else raise WrongSecretError.

        Unprotected rooms admit any candidate, including an empty one.
        """
        if not room.is_password_protected:
            return True

        if not self.credentials.verify(room.password_hash, candidate_secret or ""):
            logger.info(f"Wrong secret supplied for room {room.id}")
            raise WrongSecretError("Invalid room password")
        return True
