"""Unit tests for API response schemas."""

from datetime import datetime, timedelta, timezone

from backend.app.schemas.idea import IdeaResponse
from backend.app.schemas.types import as_utc
from backend.app.schemas.vote import VoteStatusResponse


class TestUTCDateTime:
    """Test timestamps are always emitted with a UTC offset."""

    def test_naive_value_is_treated_as_utc(self):
        """Test a naive timestamp gets UTC attached without shifting."""
        value = as_utc(datetime(2024, 5, 1, 12, 30))

        assert value == datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc)

    def test_aware_value_is_converted(self):
        """Test an aware timestamp is converted to UTC."""
        value = as_utc(datetime(2024, 5, 1, 14, 30, tzinfo=timezone(timedelta(hours=2))))

        assert value == datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc)
        assert value.utcoffset() == timedelta(0)

    def test_idea_created_at_serialized_with_offset(self):
        """Test createdAt carries a UTC designator in JSON."""
        response = IdeaResponse.model_validate(
            {
                "id": "idea-1",
                "text": "Bike racks downtown",
                "upvotes": 0,
                "author_id": "alice",
                "created_at": datetime(2024, 5, 1, 12, 30),
            }
        )

        created_at = response.model_dump(mode="json", by_alias=True)["createdAt"]
        assert created_at in ("2024-05-01T12:30:00Z", "2024-05-01T12:30:00+00:00")

    def test_missing_voted_at_stays_null(self):
        """Test an absent vote timestamp is serialized as null."""
        response = VoteStatusResponse(has_voted=False, voted_at=None)

        assert response.model_dump(mode="json", by_alias=True)["votedAt"] is None
