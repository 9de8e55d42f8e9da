"""
Trend series and rolling average.

Turns filtered ratings into one averaged point per calendar date and
summarizes the most recent points.
"""

import logging
from datetime import tzinfo
from typing import List, Optional, Sequence

import pandas as pd

import config.settings as settings
from src.models.analytics import RollingAverage, TrendPoint
from src.models.rating import RatingRecord, SCORE_FIELDS
from src.utils.dates import local_date, short_label
from src.utils.rounding import round1

logger = logging.getLogger(__name__)


def build_trend_series(
    records: Sequence[RatingRecord],
    tz: Optional[tzinfo] = None
) -> List[TrendPoint]:
    """
    Average each metric per local calendar date.

    Args:
        records: Filtered ratings in chronological order
        tz: Evaluation time zone (None = local)

    Returns:
        One TrendPoint per distinct date, in order of first appearance,
        each metric rounded half-up to one decimal
    """
    if not records:
        return []

    df = pd.DataFrame(
        [
            {
                "date": local_date(r.created_at, tz),
                "naturalness": r.naturalness,
                "confidence": r.confidence,
                "eye_contact": r.eye_contact
            }
            for r in records
        ]
    )

    # sort=False keeps dates in the order they first appear
    daily = df.groupby("date", sort=False)[list(SCORE_FIELDS)].mean()

    trend = [
        TrendPoint(
            date=day,
            date_label=short_label(day),
            naturalness=round1(row["naturalness"]),
            confidence=round1(row["confidence"]),
            eye_contact=round1(row["eye_contact"])
        )
        for day, row in daily.iterrows()
    ]

    logger.debug(f"Built {len(trend)} trend points from {len(records)} ratings")
    return trend


def rolling_average(
    trend: Sequence[TrendPoint],
    size: int = settings.ROLLING_WINDOW_SIZE
) -> RollingAverage:
    """
    Mean of each metric over the last `size` trend points.

    Uses the incremental update m_k = m_(k-1) + (x_k - m_(k-1)) / k, which
    after k points equals sum / k. Values are left unrounded.
    """
    recent = list(trend)[-size:] if size > 0 else []
    if not recent:
        return RollingAverage()

    means = {name: 0.0 for name in SCORE_FIELDS}
    for k, point in enumerate(recent, start=1):
        for name in SCORE_FIELDS:
            means[name] += (getattr(point, name) - means[name]) / k

    return RollingAverage(
        naturalness=means["naturalness"],
        confidence=means["confidence"],
        eye_contact=means["eye_contact"],
        points=len(recent)
    )


# Design Rationale and Trade-offs:
#
# 1. Why pandas groupby for daily means?
#    - Same tool as the CSV export; sort=False keeps first-appearance order
#    - Trade-off: DataFrame overhead for small snapshots, negligible here
#
# 2. Why the incremental rolling mean?
#    - After k points m_k equals sum / k exactly (up to float rounding)
#    - Pairwise smoothing ((m + x) / 2) is a different statistic and is not used
#
# 3. Why leave the rolling average unrounded?
#    - Callers compare it to sum / n; rounding happens at display time
