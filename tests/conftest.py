"""
Shared fixtures for the analytics tests.
"""

import itertools
from datetime import datetime, timezone

import pytest

from src.models.rating import RatingRecord


@pytest.fixture
def make_rating():
    """Factory for RatingRecord with sensible defaults (UTC timestamps)."""
    counter = itertools.count(1)

    def _make(
        created_at=datetime(2025, 3, 10, 12, 0, tzinfo=timezone.utc),
        naturalness=5,
        confidence=5,
        eye_contact=5,
        user_id="user-1",
        comment=None,
        rating_id=None
    ):
        return RatingRecord(
            id=rating_id or f"rating-{next(counter)}",
            user_id=user_id,
            created_at=created_at,
            naturalness=naturalness,
            confidence=confidence,
            eye_contact=eye_contact,
            comment=comment
        )

    return _make
