"""
Score distribution builder.

Buckets metric values into fixed bins for the distribution charts.
"""

import logging
import math
from typing import Dict, List, Sequence

import pandas as pd

import config.settings as settings
from src.models.analytics import DistributionBin
from src.models.rating import RatingRecord, SCORE_FIELDS

logger = logging.getLogger(__name__)


def bin_labels(edges: Sequence[int]) -> List[str]:
    """
    Labels for the bins defined by `edges`.

    Every bin but the last is "lo-hi" with hi = next edge - 1;
    the last bin starts at edges[-2] and is open above ("8+").
    """
    if len(edges) < 2:
        raise ValueError(f"Need at least two bin edges, got {list(edges)}")
    labels = [f"{lo}-{hi - 1}" for lo, hi in zip(edges[:-2], edges[1:-1])]
    labels.append(f"{edges[-2]}+")
    return labels


def build_distribution(
    values: Sequence[int],
    edges: Sequence[int] = tuple(settings.DISTRIBUTION_EDGES)
) -> List[DistributionBin]:
    """
    Count values per bin.

    Bin i accepts edges[i] <= v < edges[i+1]; the last bin accepts
    v >= edges[-2]. Values below edges[0] fall in no bin.

    Args:
        values: Metric values (any integers)
        edges: Strictly increasing bin edges

    Returns:
        Non-empty bins in edge order
    """
    if any(b <= a for a, b in zip(edges, edges[1:])):
        raise ValueError(f"Bin edges must be strictly increasing: {list(edges)}")

    labels = bin_labels(edges)
    if not values:
        return []

    # Left-closed bins; the last one is stretched to infinity
    cut_points = list(edges[:-1]) + [math.inf]
    binned = pd.cut(pd.Series(values), bins=cut_points, right=False, labels=labels)
    counts = binned.value_counts(sort=False)

    dropped = len(values) - int(counts.sum())
    if dropped:
        logger.warning(f"{dropped} value(s) below lowest bin edge {edges[0]} not counted")

    return [
        DistributionBin(range=str(label), count=int(count))
        for label, count in counts.items()
        if count > 0
    ]


def build_metric_distributions(
    records: Sequence[RatingRecord],
    edges: Sequence[int] = tuple(settings.DISTRIBUTION_EDGES)
) -> Dict[str, List[DistributionBin]]:
    """Distribution for each of naturalness, confidence and eye contact."""
    return {
        name: build_distribution([getattr(r, name) for r in records], edges)
        for name in SCORE_FIELDS
    }


# Design Rationale and Trade-offs:
#
# 1. Why stretch the last bin to infinity?
#    - "8+" must hold both 9 and 10 with edges [0, 2, 4, 6, 8, 10]
#    - Trade-off: edges[-1] only closes the edge list and never bounds a bin
#
# 2. Why drop values below edges[0] with a warning?
#    - No bin accepts them; scores are validated to 1-10 before reaching here
