"""Feedback service - anonymous submissions and owner retrieval."""

import logging
import re

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from feedback_collector.models.feedback import Feedback
from feedback_collector.models.room import Room

logger = logging.getLogger(__name__)

_TAG_RE = re.compile(r"<[^>]*>")


def sanitize_input(value: str) -> str:
    """Strip HTML tags and surrounding whitespace."""
    return _TAG_RE.sub("", value).strip()


class FeedbackService:
    """Service for feedback rows."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def submit(self, room: Room, content: str) -> Feedback:
        """Store feedback for a room the caller has already been admitted to."""
        feedback = Feedback(room_id=room.id, content=content)
        self.db.add(feedback)
        await self.db.flush()
        await self.db.refresh(feedback)
        logger.info(f"Feedback {feedback.id} submitted to room {room.id}")
        return feedback

    async def list_for_room(self, room_id: str) -> list[Feedback]:
        result = await self.db.execute(
            select(Feedback)
            .where(Feedback.room_id == room_id)
            .order_by(Feedback.created_at.desc())
        )
        return list(result.scalars().all())
