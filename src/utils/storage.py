"""
Storage utility.

File I/O helpers for rating snapshots, analytics reports and chart CSVs.
"""

import json
import os
import logging
from typing import List, Sequence

import pandas as pd

from src.models.analytics import ActivityCell, AnalyticsResult, TrendPoint
from src.models.rating import RatingRecord

logger = logging.getLogger(__name__)


class StorageManager:
    """
    Manages file I/O for all analytics inputs and outputs.

    Handles:
    - Rating snapshots (data/ratings.json, exported from the ratings table)
    - Reports (output/<name>.json)
    - Chart tables (output/<name>_trend.csv, output/<name>_activity.csv)
    """

    def __init__(self, data_root: str):
        """
        Initialize storage manager.

        Args:
            data_root: Root data directory (e.g., /path/to/data)
        """
        self.data_root = data_root
        os.makedirs(self.data_root, exist_ok=True)

        logger.info(f"Initialized StorageManager with data_root={data_root}")

    def load_ratings(self, path: str) -> List[RatingRecord]:
        """
        Load a ratings snapshot.

        Args:
            path: JSON file holding a list of rows, or {"ratings": [...]};
                  relative paths resolve against data_root

        Returns:
            List of RatingRecord in file order

        Raises:
            FileNotFoundError: If the snapshot doesn't exist
            ValueError: If the file is not a list of valid rating rows
        """
        if not os.path.isabs(path) and not os.path.exists(path):
            path = os.path.join(self.data_root, path)

        if not os.path.exists(path):
            logger.error(f"Ratings snapshot not found: {path}")
            raise FileNotFoundError(f"Ratings snapshot not found: {path}")

        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)

        if isinstance(data, dict):
            data = data.get("ratings")
        if not isinstance(data, list):
            raise ValueError(f"Expected a list of ratings in {path}")

        records = []
        for index, row in enumerate(data):
            try:
                records.append(RatingRecord.from_dict(row))
            except (KeyError, TypeError, ValueError) as e:
                logger.error(f"Invalid rating row #{index} in {path}: {e}")
                raise ValueError(f"Invalid rating row #{index} in {path}: {e}") from e

        logger.info(f"Loaded {len(records)} ratings from {path}")
        return records

    def save_ratings(self, records: Sequence[RatingRecord], path: str) -> None:
        """
        Write ratings back out in the snapshot format.

        Args:
            records: Ratings to save
            path: Destination JSON file
        """
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        try:
            with open(path, 'w', encoding='utf-8') as f:
                json.dump([r.to_dict() for r in records], f, indent=2)
            logger.info(f"Saved {len(records)} ratings to {path}")
        except OSError as e:
            logger.error(f"Failed to save ratings to {path}: {e}")
            raise

    def save_report(self, result: AnalyticsResult, output_dir: str, name: str) -> str:
        """
        Save the full analytics result as JSON.

        Returns:
            Path to the report file
        """
        os.makedirs(output_dir, exist_ok=True)
        output_path = os.path.join(output_dir, f"{name}.json")

        try:
            with open(output_path, 'w', encoding='utf-8') as f:
                json.dump(result.to_dict(), f, indent=2, ensure_ascii=False)
            logger.info(f"Report saved to {output_path}")
        except OSError as e:
            logger.error(f"Failed to save report {output_path}: {e}")
            raise

        return output_path

    def save_trend_csv(self, trend: Sequence[TrendPoint], output_dir: str, name: str) -> str:
        """Save the trend series as a chart-ready CSV."""
        columns = ["date", "date_label", "naturalness", "confidence", "eye_contact"]
        df = pd.DataFrame([point.to_dict() for point in trend], columns=columns)
        return self._write_csv(df, output_dir, f"{name}_trend.csv")

    def save_activity_csv(self, cells: Sequence[ActivityCell], output_dir: str, name: str) -> str:
        """Save the activity heatmap as a CSV (one row per day)."""
        columns = ["date", "count", "is_current_month"]
        df = pd.DataFrame([cell.to_dict() for cell in cells], columns=columns)
        return self._write_csv(df, output_dir, f"{name}_activity.csv")

    def _write_csv(self, df: pd.DataFrame, output_dir: str, filename: str) -> str:
        os.makedirs(output_dir, exist_ok=True)
        output_path = os.path.join(output_dir, filename)

        try:
            df.to_csv(output_path, index=False)
            logger.info(f"Saved {len(df)} rows to {output_path}")
        except OSError as e:
            logger.error(f"Failed to write {output_path}: {e}")
            raise

        return output_path


# Design Rationale and Trade-offs:
#
# 1. Why re-raise I/O errors after logging?
#    - A report written from a partial snapshot would be silently wrong
#    - Trade-off: One unreadable row fails the whole run
#
# 2. Why save_ratings() alongside load_ratings()?
#    - Writes a (possibly scoped) snapshot back in the export format, e.g. to
#      build fixtures or hand one rater their own data
#
# 3. Why CSV for trend and activity?
#    - Chart tools read them directly; the JSON report carries everything else
