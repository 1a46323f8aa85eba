"""Vote model."""

from datetime import datetime
from typing import TYPE_CHECKING
from sqlalchemy import String, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from backend.app.db.base import Base
from backend.app.models.idea import utcnow

if TYPE_CHECKING:
    from backend.app.models.idea import Idea


class Vote(Base):
    """
    Vote ledger entry: one row per user per idea.

    The composite primary key is the uniqueness constraint. Rows are written
    once by the gated upvote transaction and never updated or deleted.

    Attributes:
        idea_id: Associated idea ID
        user_id: Identity of the voter
        voted_at: Server-assigned vote timestamp
    """

    __tablename__ = "votes"

    idea_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("ideas.id", ondelete="CASCADE"),
        primary_key=True,
    )
    user_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    voted_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        default=utcnow,
    )

    # Relationships
    idea: Mapped["Idea"] = relationship("Idea", back_populates="votes")

    def __repr__(self) -> str:
        return f"<Vote(idea_id={self.idea_id}, user_id={self.user_id})>"
