"""
Summary statistics for the stat cards.
"""

import logging
from typing import Sequence

from src.models.analytics import SummaryStats
from src.models.rating import RatingRecord
from src.utils.rounding import round1, safe_mean

logger = logging.getLogger(__name__)


def summarize(records: Sequence[RatingRecord]) -> SummaryStats:
    """Totals and per-metric averages; all zeros for an empty input."""
    if not records:
        logger.debug("No ratings in window, summary is all zeros")
        return SummaryStats()

    stats = SummaryStats(
        total_ratings=len(records),
        unique_raters=len({r.user_id for r in records}),
        avg_naturalness=round1(safe_mean(r.naturalness for r in records)),
        avg_confidence=round1(safe_mean(r.confidence for r in records)),
        avg_eye_contact=round1(safe_mean(r.eye_contact for r in records))
    )

    logger.debug(
        f"Summary: {stats.total_ratings} ratings from {stats.unique_raters} raters"
    )
    return stats


# Design Rationale and Trade-offs:
#
# 1. Why average raw ratings rather than trend points?
#    - Stat cards weight every rating equally; busy days do not count once
#    - Trade-off: Differs from the mean of the trend line when days are uneven
#
# 2. Why unique raters from user_id?
#    - Personal scope always reports 1, admin scope reports distinct users
