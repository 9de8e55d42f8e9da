"""
Unit tests for StorageManager.
"""

import pytest
import json
import os
import tempfile
from datetime import date
import pandas as pd
from src.models.analytics import ActivityCell, TrendPoint
from src.utils.storage import StorageManager

ROWS = [
    {
        "id": "r1",
        "user_id": "u1",
        "created_at": "2025-03-01T09:00:00Z",
        "naturalness": 6,
        "confidence": 7,
        "eye_contact": 8,
        "comment": None
    },
    {
        "id": "r2",
        "user_id": "u2",
        "created_at": "2025-03-02T10:00:00+00:00",
        "naturalness": 9,
        "confidence": 9,
        "eye_contact": 9,
        "comment": "Very natural"
    }
]


def test_load_ratings_list():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = os.path.join(tmpdir, "ratings.json")
        with open(path, "w") as f:
            json.dump(ROWS, f)

        records = StorageManager(tmpdir).load_ratings(path)

        assert [r.id for r in records] == ["r1", "r2"]
        assert records[1].comment == "Very natural"


def test_load_ratings_wrapped_and_relative():
    """{"ratings": [...]} is accepted; relative paths resolve against data_root."""
    with tempfile.TemporaryDirectory() as tmpdir:
        with open(os.path.join(tmpdir, "export.json"), "w") as f:
            json.dump({"ratings": ROWS}, f)

        records = StorageManager(tmpdir).load_ratings("export.json")

        assert len(records) == 2


def test_load_missing_snapshot():
    with tempfile.TemporaryDirectory() as tmpdir:
        storage = StorageManager(tmpdir)

        with pytest.raises(FileNotFoundError):
            storage.load_ratings(os.path.join(tmpdir, "nope.json"))


def test_load_invalid_row():
    """A malformed row fails the whole load instead of being skipped."""
    bad_rows = ROWS + [dict(ROWS[0], id="r3", naturalness=42)]

    with tempfile.TemporaryDirectory() as tmpdir:
        path = os.path.join(tmpdir, "ratings.json")
        with open(path, "w") as f:
            json.dump(bad_rows, f)

        with pytest.raises(ValueError, match="#2"):
            StorageManager(tmpdir).load_ratings(path)


def test_load_not_a_list():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = os.path.join(tmpdir, "ratings.json")
        with open(path, "w") as f:
            json.dump({"rows": ROWS}, f)

        with pytest.raises(ValueError, match="list of ratings"):
            StorageManager(tmpdir).load_ratings(path)


def test_save_and_reload_ratings():
    with tempfile.TemporaryDirectory() as tmpdir:
        storage = StorageManager(tmpdir)
        source = os.path.join(tmpdir, "ratings.json")
        with open(source, "w") as f:
            json.dump(ROWS, f)
        records = storage.load_ratings(source)

        copy_path = os.path.join(tmpdir, "copy", "ratings.json")
        storage.save_ratings(records, copy_path)

        assert storage.load_ratings(copy_path) == records


def test_save_csvs():
    trend = [TrendPoint(date(2025, 3, 1), "Mar 1", 6.0, 7.0, 8.0)]
    cells = [
        ActivityCell(date(2025, 3, 1), 1, True),
        ActivityCell(date(2025, 3, 2), 0, True),
    ]

    with tempfile.TemporaryDirectory() as tmpdir:
        storage = StorageManager(tmpdir)
        out = os.path.join(tmpdir, "output")

        trend_path = storage.save_trend_csv(trend, out, "report")
        activity_path = storage.save_activity_csv(cells, out, "report")

        trend_df = pd.read_csv(trend_path)
        activity_df = pd.read_csv(activity_path)

        assert trend_path.endswith("report_trend.csv")
        assert list(trend_df.columns) == ["date", "date_label", "naturalness", "confidence", "eye_contact"]
        assert trend_df.loc[0, "naturalness"] == 6.0
        assert list(activity_df["count"]) == [1, 0]


def test_save_empty_trend_csv():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = StorageManager(tmpdir).save_trend_csv([], tmpdir, "empty")

        df = pd.read_csv(path)
        assert df.empty
        assert "naturalness" in df.columns


@pytest.mark.parametrize("bad_row", [
    dict(ROWS[0], user_id=None),
    dict(ROWS[0], comment=5),
    "not a row",
])
def test_load_malformed_rows_raise_value_error(bad_row):
    """Null raters, non-string comments and non-object rows all fail the load."""
    with tempfile.TemporaryDirectory() as tmpdir:
        path = os.path.join(tmpdir, "ratings.json")
        with open(path, "w") as f:
            json.dump([ROWS[1], bad_row], f)

        with pytest.raises(ValueError, match="#1"):
            StorageManager(tmpdir).load_ratings(path)
