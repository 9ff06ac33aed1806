"""Feedback model - anonymous submissions into a room."""

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from feedback_collector.models.base import BaseModel
from feedback_collector.models.room import ROOM_ID_LENGTH

if TYPE_CHECKING:
    from feedback_collector.models.room import Room


class Feedback(BaseModel):
    """A single piece of anonymous feedback.

    No submitter identity is recorded.
    """

    __tablename__ = "feedback"

    room_id: Mapped[str] = mapped_column(
        String(ROOM_ID_LENGTH),
        ForeignKey("rooms.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    # Filled in later by sentiment analysis
    sentiment: Mapped[str] = mapped_column(
        String(50), nullable=False, default="pending", server_default="pending", index=True
    )

    room: Mapped["Room"] = relationship("Room", back_populates="feedback")

    def __repr__(self) -> str:
        return f"<Feedback {self.id} (room_id={self.room_id})>"
