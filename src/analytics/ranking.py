"""
Rating highlights.

Ranks ratings by their three-metric average for the best / worst lists,
and picks out recent and selected ratings.
"""

import logging
from typing import List, Optional, Sequence, Tuple

import config.settings as settings
from src.models.analytics import RankedRating
from src.models.rating import RatingRecord
from src.utils.rounding import round1, safe_mean

logger = logging.getLogger(__name__)


def score_band(score: float) -> str:
    """Band label for a score: excellent (>= 8), good (>= 6), fair (>= 3), poor."""
    for lower_bound, label in settings.SCORE_BANDS:
        if score >= lower_bound:
            return label
    return settings.SCORE_BANDS[-1][1]


def rank_rating(record: RatingRecord) -> RankedRating:
    average = round1(safe_mean(record.scores))
    return RankedRating(record=record, average=average, band=score_band(average))


def rank_ratings(records: Sequence[RatingRecord]) -> List[RankedRating]:
    """Attach the rounded average to every record, order preserved."""
    return [rank_rating(r) for r in records]


def best_and_worst(
    records: Sequence[RatingRecord],
    limit: int = settings.HIGHLIGHT_LIMIT
) -> Tuple[List[RankedRating], List[RankedRating]]:
    """
    Top `limit` ratings by descending and by ascending average.

    sorted() is stable, so equal averages keep their input order in both lists.
    """
    ranked = rank_ratings(records)
    best = sorted(ranked, key=lambda r: r.average, reverse=True)[:limit]
    worst = sorted(ranked, key=lambda r: r.average)[:limit]

    if ranked:
        logger.debug(
            f"Ranked {len(ranked)} ratings: best {best[0].average}, worst {worst[0].average}"
        )
    return best, worst


def recent_ratings(
    records: Sequence[RatingRecord],
    limit: int = settings.RECENT_RATINGS_LIMIT
) -> List[RankedRating]:
    """Newest `limit` ratings, newest first."""
    newest = sorted(records, key=lambda r: r.created_at.timestamp(), reverse=True)
    return rank_ratings(newest[:limit])


def find_rating(
    records: Sequence[RatingRecord],
    rating_id: Optional[str]
) -> Optional[RankedRating]:
    """The highlighted rating, or None when the id is unset or unknown."""
    if rating_id is None:
        return None
    for record in records:
        if record.id == rating_id:
            return rank_rating(record)
    return None


# Design Rationale and Trade-offs:
#
# 1. Why sorted() for best / worst?
#    - Stable in both directions, so ties keep chronological order
#    - Trade-off: Sorts the full list to take seven, fine for snapshot sizes
#
# 2. Why bands on the rounded average?
#    - The band matches the number shown next to it
