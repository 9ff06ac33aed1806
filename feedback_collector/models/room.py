"""Room model - a feedback collection space owned by an account."""

from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import ForeignKey, String, Uuid
from sqlalchemy.ext.hybrid import hybrid_property
from sqlalchemy.orm import Mapped, mapped_column, relationship

from feedback_collector.core.database import Base
from feedback_collector.models.base import TimestampMixin

if TYPE_CHECKING:
    from feedback_collector.models.account import Account
    from feedback_collector.models.feedback import Feedback

ROOM_ID_LENGTH = 6


class Room(TimestampMixin, Base):
    """Feedback room.

    The room secret is stored only as an Argon2 hash. Whether a room is
    protected is derived from the presence of that hash, so the two can
    never disagree.
    """

    __tablename__ = "rooms"

    id: Mapped[str] = mapped_column(String(ROOM_ID_LENGTH), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    owner_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("accounts.id"),
        nullable=False,
        index=True,
    )
    password_hash: Mapped[str | None] = mapped_column(String(255), nullable=True)

    owner: Mapped["Account"] = relationship("Account", back_populates="rooms")
    feedback: Mapped[list["Feedback"]] = relationship(
        "Feedback",
        back_populates="room",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    @hybrid_property
    def is_password_protected(self) -> bool:
        return self.password_hash is not None

    @is_password_protected.inplace.expression
    @classmethod
    def _is_password_protected_expression(cls):
        return cls.password_hash.is_not(None)

    def __repr__(self) -> str:
        return f"<Room {self.id} (protected={self.is_password_protected})>"
