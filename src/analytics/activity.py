"""
Activity heatmap builder.

Counts ratings per calendar day over the months ending at a reference month.
"""

import logging
from collections import Counter
from datetime import tzinfo
from typing import List, Optional, Sequence

import pandas as pd

import config.settings as settings
from src.models.analytics import ActivityCell, ReferenceMonth
from src.models.rating import RatingRecord
from src.utils.dates import local_date

logger = logging.getLogger(__name__)


def heatmap_range(
    reference_month: ReferenceMonth,
    months: int = settings.HEATMAP_MONTHS
) -> tuple:
    """
    First and last day covered by the heatmap.

    Returns:
        (first day of the month `months - 1` before the reference month,
         last day of the reference month)
    """
    if months < 1:
        raise ValueError(f"Heatmap must span at least one month, got {months}")
    start = reference_month.shift(-(months - 1)).first_day
    return start, reference_month.last_day


def build_activity_grid(
    records: Sequence[RatingRecord],
    reference_month: ReferenceMonth,
    tz: Optional[tzinfo] = None,
    months: int = settings.HEATMAP_MONTHS
) -> List[ActivityCell]:
    """
    One cell per calendar day, zero-activity days included.

    Args:
        records: The full, unfiltered record set
        reference_month: Month the heatmap ends at
        tz: Evaluation time zone (None = local)
        months: Number of calendar months shown

    Returns:
        Chronological cells, or [] when there are no records at all
    """
    if not records:
        return []

    start, end = heatmap_range(reference_month, months)
    counts = Counter(local_date(r.created_at, tz) for r in records)

    cells = []
    for timestamp in pd.date_range(start=start, end=end, freq="D"):
        day = timestamp.date()
        cells.append(
            ActivityCell(
                date=day,
                count=counts.get(day, 0),
                is_current_month=reference_month.contains(day)
            )
        )

    active_days = sum(1 for cell in cells if cell.count)
    logger.debug(
        f"Heatmap {start} to {end}: {len(cells)} days, {active_days} active"
    )
    return cells


# Design Rationale and Trade-offs:
#
# 1. Why fill every day, including zero-activity days?
#    - The heatmap is a fixed calendar grid; gaps would shift the columns
#    - Same approach as filling missing days with zero counts in trend tables
#
# 2. Why return [] when there are no records at all?
#    - An empty snapshot renders the "no data" state instead of a blank year
#    - Trade-off: A window that matches nothing still gets the full grid
