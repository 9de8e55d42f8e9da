"""
Time-window filter.

Selects the ratings submitted within a trailing window ending "now".
"""

import logging
from datetime import datetime, timedelta, tzinfo
from typing import List, Optional, Sequence

from src.models.analytics import AggregationWindow
from src.models.rating import RatingRecord
from src.utils.dates import to_local

logger = logging.getLogger(__name__)


def window_cutoff(
    window: AggregationWindow,
    now: Optional[datetime] = None,
    tz: Optional[tzinfo] = None
) -> Optional[datetime]:
    """
    Earliest timestamp (inclusive) kept by a window.

    Args:
        window: Window selector
        now: Evaluation time (defaults to the current time)
        tz: Evaluation time zone (None = local)

    Returns:
        Aware cutoff datetime, or None when the window has no cutoff
    """
    if window.days is None:
        return None
    if now is None:
        now = datetime.now(tz)
    return to_local(now, tz) - timedelta(days=window.days)


def filter_by_window(
    records: Sequence[RatingRecord],
    window: AggregationWindow,
    now: Optional[datetime] = None,
    tz: Optional[tzinfo] = None
) -> List[RatingRecord]:
    """
    Keep records created at or after the window cutoff.

    Input order is preserved, so a chronological snapshot stays chronological.
    """
    cutoff = window_cutoff(window, now, tz)
    if cutoff is None:
        return list(records)

    kept = [r for r in records if to_local(r.created_at, tz) >= cutoff]

    logger.debug(
        f"Window {window.value}: kept {len(kept)}/{len(records)} ratings "
        f"since {cutoff.isoformat()}"
    )
    return kept


# Design Rationale and Trade-offs:
#
# 1. Why convert both sides with to_local()?
#    - Aware and naive datetimes cannot be compared directly
#    - Mixed offsets are compared as instants
#    - Trade-off: Naive timestamps are assumed to be in the evaluation zone
