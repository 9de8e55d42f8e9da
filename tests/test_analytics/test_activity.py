"""
Unit tests for the activity heatmap.
"""

from datetime import date, datetime, timedelta, timezone
from src.analytics.activity import build_activity_grid, heatmap_range
from src.models.analytics import ReferenceMonth

UTC = timezone.utc


def test_heatmap_range():
    start, end = heatmap_range(ReferenceMonth(2025, 3))

    assert start == date(2024, 4, 1)
    assert end == date(2025, 3, 31)


def test_grid_is_dense(make_rating):
    """One cell per calendar day, no gaps, no duplicates."""
    reference = ReferenceMonth(2025, 3)
    ratings = [make_rating(created_at=datetime(2025, 3, 10, 12, tzinfo=UTC))]

    cells = build_activity_grid(ratings, reference, tz=UTC)

    start, end = date(2024, 4, 1), date(2025, 3, 31)
    expected_days = (end - start).days + 1
    assert len(cells) == expected_days == 365
    assert len({c.date for c in cells}) == len(cells)
    assert cells[0].date == start
    assert cells[-1].date == end
    assert all(b.date - a.date == timedelta(days=1) for a, b in zip(cells, cells[1:]))


def test_grid_covers_leap_year(make_rating):
    ratings = [make_rating(created_at=datetime(2024, 2, 29, 12, tzinfo=UTC))]

    cells = build_activity_grid(ratings, ReferenceMonth(2024, 12), tz=UTC)

    assert len(cells) == 366
    assert next(c for c in cells if c.date == date(2024, 2, 29)).count == 1


def test_counts_per_day(make_rating):
    ratings = [
        make_rating(created_at=datetime(2025, 3, 10, 8, tzinfo=UTC)),
        make_rating(created_at=datetime(2025, 3, 10, 20, tzinfo=UTC)),
        make_rating(created_at=datetime(2024, 12, 24, 9, tzinfo=UTC)),
        # Outside the window on both sides
        make_rating(created_at=datetime(2024, 3, 31, 9, tzinfo=UTC)),
        make_rating(created_at=datetime(2025, 4, 1, 9, tzinfo=UTC)),
    ]

    cells = build_activity_grid(ratings, ReferenceMonth(2025, 3), tz=UTC)
    by_day = {c.date: c.count for c in cells}

    assert by_day[date(2025, 3, 10)] == 2
    assert by_day[date(2024, 12, 24)] == 1
    assert by_day[date(2025, 3, 11)] == 0
    assert sum(by_day.values()) == 3


def test_current_month_flag(make_rating):
    ratings = [make_rating(created_at=datetime(2025, 3, 10, tzinfo=UTC))]

    cells = build_activity_grid(ratings, ReferenceMonth(2025, 3), tz=UTC)
    current = [c for c in cells if c.is_current_month]

    assert len(current) == 31
    assert all(c.date.year == 2025 and c.date.month == 3 for c in current)


def test_navigation_moves_grid_by_a_year(make_rating):
    ratings = [make_rating(created_at=datetime(2024, 3, 10, tzinfo=UTC))]
    reference = ReferenceMonth(2025, 3)

    previous = build_activity_grid(ratings, reference.navigate(-1), tz=UTC)

    assert previous[0].date == date(2023, 4, 1)
    assert previous[-1].date == date(2024, 3, 31)
    assert sum(c.count for c in previous) == 1


def test_empty_records():
    assert build_activity_grid([], ReferenceMonth(2025, 3)) == []
