"""
Ratings Analytics Aggregator.

Runs every aggregation step over one snapshot of ratings and bundles the
results for the rating history page and the admin dashboard.
"""

import logging
from datetime import datetime, tzinfo
from typing import Optional, Sequence

import config.settings as settings
from src.analytics.activity import build_activity_grid
from src.analytics.distribution import build_metric_distributions
from src.analytics.ranking import best_and_worst, find_rating, recent_ratings
from src.analytics.summary import summarize
from src.analytics.trends import build_trend_series, rolling_average
from src.analytics.window import filter_by_window
from src.models.analytics import AggregationWindow, AnalyticsResult, ReferenceMonth
from src.models.rating import RatingRecord

logger = logging.getLogger(__name__)


class RatingsAnalyticsAggregator:
    """
    Derives the analytics view-model from a list of ratings.

    Holds configuration only; every call to aggregate() recomputes all
    outputs from its arguments.
    """

    def __init__(
        self,
        rolling_size: int = settings.ROLLING_WINDOW_SIZE,
        highlight_limit: int = settings.HIGHLIGHT_LIMIT,
        recent_limit: int = settings.RECENT_RATINGS_LIMIT,
        edges: Sequence[int] = tuple(settings.DISTRIBUTION_EDGES),
        heatmap_months: int = settings.HEATMAP_MONTHS,
        tz: Optional[tzinfo] = None
    ):
        """
        Initialize aggregator.

        Args:
            rolling_size: Trend points in the rolling average
            highlight_limit: Length of the best / worst lists
            recent_limit: Length of the recent ratings list
            edges: Distribution bin edges
            heatmap_months: Months covered by the activity heatmap
            tz: Evaluation time zone (None = the process's local zone)
        """
        self.rolling_size = rolling_size
        self.highlight_limit = highlight_limit
        self.recent_limit = recent_limit
        self.edges = tuple(edges)
        self.heatmap_months = heatmap_months
        self.tz = tz

    def aggregate(
        self,
        records: Sequence[RatingRecord],
        window: AggregationWindow,
        reference_month: ReferenceMonth,
        now: Optional[datetime] = None,
        selected_rating_id: Optional[str] = None
    ) -> AnalyticsResult:
        """
        Compute the full analytics result.

        Args:
            records: Chronological, already authorization-scoped ratings
            window: Trailing window for trend, distribution, highlights and summary
            reference_month: Month the activity heatmap ends at
            now: Evaluation time (defaults to the current time)
            selected_rating_id: Rating highlighted in the detail card, if any

        Returns:
            AnalyticsResult; empty input yields empty lists and zero statistics
        """
        if now is None:
            now = datetime.now(self.tz)

        filtered = filter_by_window(records, window, now=now, tz=self.tz)
        trend = build_trend_series(filtered, tz=self.tz)
        best, worst = best_and_worst(filtered, limit=self.highlight_limit)

        result = AnalyticsResult(
            window=window,
            reference_month=reference_month,
            generated_at=now,
            trend=trend,
            distributions=build_metric_distributions(filtered, self.edges),
            rolling_average=rolling_average(trend, size=self.rolling_size),
            # The heatmap ignores the window selector
            activity=build_activity_grid(
                records, reference_month, tz=self.tz, months=self.heatmap_months
            ),
            best=best,
            worst=worst,
            summary=summarize(filtered),
            recent=recent_ratings(filtered, limit=self.recent_limit),
            selected=find_rating(filtered, selected_rating_id)
        )

        logger.info(
            f"Aggregated {len(filtered)}/{len(records)} ratings "
            f"(window={window.value}, month={reference_month.label}): "
            f"{len(trend)} trend points, {len(result.activity)} heatmap days"
        )
        return result


# Design Rationale and Trade-offs:
#
# 1. Why pass window, month, now and selection as arguments?
#    - No state survives between calls; the same inputs give the same result
#    - Trade-off: Callers hold UI state themselves
#
# 2. Why does the heatmap get the unfiltered records?
#    - It shows a year of activity regardless of the selected window
