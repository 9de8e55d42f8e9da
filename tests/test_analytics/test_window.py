"""
Unit tests for the time-window filter.
"""

import pytest
from datetime import datetime, timedelta, timezone
from src.analytics.window import filter_by_window, window_cutoff
from src.models.analytics import AggregationWindow

NOW = datetime(2025, 6, 30, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def history(make_rating):
    """One rating every 5 days over the last ~4 months, oldest first."""
    return [
        make_rating(created_at=NOW - timedelta(days=days))
        for days in range(120, -1, -5)
    ]


def _is_subsequence(short, long):
    it = iter(long)
    return all(item in it for item in short)


def test_window_monotonicity(history):
    """7d ⊆ 30d ⊆ 90d ⊆ all, each as an ordered subsequence."""
    filtered = {
        window: filter_by_window(history, window, now=NOW, tz=timezone.utc)
        for window in AggregationWindow
    }

    assert _is_subsequence(filtered[AggregationWindow.LAST_7_DAYS], filtered[AggregationWindow.LAST_30_DAYS])
    assert _is_subsequence(filtered[AggregationWindow.LAST_30_DAYS], filtered[AggregationWindow.LAST_90_DAYS])
    assert _is_subsequence(filtered[AggregationWindow.LAST_90_DAYS], filtered[AggregationWindow.ALL])
    assert filtered[AggregationWindow.ALL] == history


def test_window_counts(history):
    counts = {
        window: len(filter_by_window(history, window, now=NOW, tz=timezone.utc))
        for window in AggregationWindow
    }

    # Ratings at 0, 5 days; 0..30 step 5; 0..90 step 5
    assert counts[AggregationWindow.LAST_7_DAYS] == 2
    assert counts[AggregationWindow.LAST_30_DAYS] == 7
    assert counts[AggregationWindow.LAST_90_DAYS] == 19
    assert counts[AggregationWindow.ALL] == len(history)


def test_cutoff_is_inclusive(make_rating):
    """A rating exactly at now - 7 days is kept; one second earlier is not."""
    boundary = make_rating(created_at=NOW - timedelta(days=7))
    too_old = make_rating(created_at=NOW - timedelta(days=7, seconds=1))

    kept = filter_by_window(
        [too_old, boundary], AggregationWindow.LAST_7_DAYS, now=NOW, tz=timezone.utc
    )

    assert kept == [boundary]


def test_order_preserved(history):
    kept = filter_by_window(history, AggregationWindow.LAST_90_DAYS, now=NOW, tz=timezone.utc)

    times = [r.created_at for r in kept]
    assert times == sorted(times)


def test_empty_input():
    for window in AggregationWindow:
        assert filter_by_window([], window, now=NOW) == []


def test_mixed_offsets_compare_by_instant(make_rating):
    """Timestamps in another offset are compared as instants."""
    plus_two = timezone(timedelta(hours=2))
    # 6 days 23 hours ago, written in UTC+2
    recent = make_rating(created_at=(NOW - timedelta(days=6, hours=23)).astimezone(plus_two))

    kept = filter_by_window([recent], AggregationWindow.LAST_7_DAYS, now=NOW, tz=timezone.utc)

    assert kept == [recent]


def test_window_cutoff():
    assert window_cutoff(AggregationWindow.ALL, now=NOW) is None
    assert window_cutoff(AggregationWindow.LAST_30_DAYS, now=NOW, tz=timezone.utc) == NOW - timedelta(days=30)
