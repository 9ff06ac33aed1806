"""Account model - registered creators who own rooms."""

from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from feedback_collector.models.base import BaseModel

if TYPE_CHECKING:
    from feedback_collector.models.room import Room


class Account(BaseModel):
    """A registered account.

    Email uniqueness is enforced by the unique index on ``email``; the
    registration path relies on it rather than on a prior lookup.
    ``password_hash`` is an Argon2 PHC string and must never appear in
    logs or API responses.
    """

    __tablename__ = "accounts"

    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    subscription_type: Mapped[str] = mapped_column(
        String(50), nullable=False, default="free", server_default="free"
    )

    rooms: Mapped[list["Room"]] = relationship("Room", back_populates="owner")

    def __repr__(self) -> str:
        return f"<Account {self.id}>"
