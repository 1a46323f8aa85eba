"""Idea model."""

import uuid
from datetime import datetime, timezone
from typing import TYPE_CHECKING
from sqlalchemy import String, Text, Integer, DateTime, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from backend.app.db.base import Base

if TYPE_CHECKING:
    from backend.app.models.vote import Vote


def utcnow() -> datetime:
    """Current UTC time as a naive datetime (the form SQLite round-trips)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Idea(Base):
    """
    Idea model representing a short user-submitted proposal.

    Attributes:
        id: Unique idea identifier (UUID)
        text: Trimmed idea text (at most 280 characters)
        upvotes: Vote counter, only ever incremented by upvote transactions
        author_id: Identity of the anonymous session that submitted the idea
        created_at: Server-assigned creation timestamp
        version: Optimistic-concurrency version, bumped on every UPDATE
    """

    __tablename__ = "ideas"
    __table_args__ = (
        CheckConstraint("upvotes >= 0", name="ck_ideas_upvotes_non_negative"),
    )

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )
    text: Mapped[str] = mapped_column(Text, nullable=False)
    upvotes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    author_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        default=utcnow,
        index=True,
    )
    version: Mapped[int] = mapped_column(Integer, nullable=False)

    # Relationships
    votes: Mapped[list["Vote"]] = relationship(
        "Vote",
        back_populates="idea",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    # UPDATEs carry "WHERE version = <read version>"; a concurrent writer
    # makes the statement match no rows and the flush raises StaleDataError.
    __mapper_args__ = {"version_id_col": version}

    def __repr__(self) -> str:
        return f"<Idea(id={self.id}, text={self.text[:50]}..., upvotes={self.upvotes})>"
