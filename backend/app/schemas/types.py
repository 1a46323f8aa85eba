"""Shared field types for API schemas."""

from datetime import datetime, timezone
from typing import Annotated

from pydantic import AfterValidator


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive timestamps; the store keeps all times in naive UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


# Always serialized with an explicit UTC offset
UTCDateTime = Annotated[datetime, AfterValidator(as_utc)]
