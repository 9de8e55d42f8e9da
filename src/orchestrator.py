"""
Analytics Orchestrator.

Loads a ratings snapshot, scopes it, runs the aggregator and writes outputs.
"""

import logging
from datetime import datetime
from typing import List, Optional, Sequence

from src.analytics.aggregator import RatingsAnalyticsAggregator
from src.models.analytics import AggregationWindow, AnalyticsResult, ReferenceMonth
from src.models.rating import RatingRecord
from src.utils.storage import StorageManager

logger = logging.getLogger(__name__)


class AnalyticsOrchestrator:
    """
    Orchestrates one analytics report.

    Coordinates:
    1. Snapshot load → 2. User scoping → 3. Chronological ordering
    → 4. Aggregation → 5. Report + CSV export
    """

    def __init__(
        self,
        data_root: str,
        output_dir: str,
        aggregator: Optional[RatingsAnalyticsAggregator] = None
    ):
        """
        Initialize orchestrator.

        Args:
            data_root: Root directory holding rating snapshots
            output_dir: Directory for reports and CSVs
            aggregator: Aggregator to use (defaults to one built from settings)
        """
        self.data_root = data_root
        self.output_dir = output_dir
        self.storage = StorageManager(data_root)
        self.aggregator = aggregator or RatingsAnalyticsAggregator()

        logger.info("Analytics orchestrator initialized")

    def build(
        self,
        records: Sequence[RatingRecord],
        window: AggregationWindow,
        reference_month: ReferenceMonth,
        user_id: Optional[str] = None,
        now: Optional[datetime] = None,
        selected_rating_id: Optional[str] = None
    ) -> AnalyticsResult:
        """
        Aggregate an in-memory snapshot.

        Args:
            records: All ratings in the snapshot
            window: Trailing window selector
            reference_month: Heatmap reference month
            user_id: Restrict to one rater (personal history); None = all (admin)
            now: Evaluation time (defaults to the current time)
            selected_rating_id: Highlighted rating, if any
        """
        scoped = self._scope(records, user_id)
        return self.aggregator.aggregate(
            scoped,
            window=window,
            reference_month=reference_month,
            now=now,
            selected_rating_id=selected_rating_id
        )

    def run(
        self,
        snapshot_path: str,
        window: AggregationWindow,
        reference_month: ReferenceMonth,
        user_id: Optional[str] = None,
        now: Optional[datetime] = None,
        selected_rating_id: Optional[str] = None
    ) -> str:
        """
        Produce the report for a snapshot file.

        Returns:
            Path to the generated report JSON
        """
        records = self.storage.load_ratings(snapshot_path)

        result = self.build(
            records,
            window=window,
            reference_month=reference_month,
            user_id=user_id,
            now=now,
            selected_rating_id=selected_rating_id
        )

        name = self._report_name(window, reference_month, user_id)
        report_path = self.storage.save_report(result, self.output_dir, name)
        self.storage.save_trend_csv(result.trend, self.output_dir, name)
        self.storage.save_activity_csv(result.activity, self.output_dir, name)

        logger.info(
            f"Report complete: {result.summary.total_ratings} ratings from "
            f"{result.summary.unique_raters} raters → {report_path}"
        )
        return report_path

    def _scope(
        self,
        records: Sequence[RatingRecord],
        user_id: Optional[str]
    ) -> List[RatingRecord]:
        """Restrict to one user if requested and order by creation time."""
        if user_id is None:
            scoped = list(records)
            logger.info(f"Global scope: {len(scoped)} ratings")
        else:
            scoped = [r for r in records if r.user_id == user_id]
            logger.info(f"User scope {user_id}: {len(scoped)}/{len(records)} ratings")
            if not scoped:
                logger.warning(f"No ratings found for user {user_id}")

        # Stable sort keeps the export order for equal timestamps
        return sorted(scoped, key=lambda r: r.created_at.timestamp())

    def _report_name(
        self,
        window: AggregationWindow,
        reference_month: ReferenceMonth,
        user_id: Optional[str]
    ) -> str:
        scope = f"user_{user_id}" if user_id else "all"
        return f"ratings_{scope}_{window.value}_{reference_month.label}"


# Design Rationale and Trade-offs:
#
# 1. Why sort after scoping?
#    - The aggregators expect chronological input, as the store returns it
#    - Stable sort keeps export order for identical timestamps
#
# 2. Why build() separate from run()?
#    - build() works on in-memory records; run() adds file I/O around it
