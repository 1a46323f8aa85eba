"""Database models."""

from backend.app.models.idea import Idea
from backend.app.models.vote import Vote

__all__ = ["Idea", "Vote"]
