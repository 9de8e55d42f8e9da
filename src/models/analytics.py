"""
Analytics data models.

Aggregation inputs (window, reference month) and the derived, never-persisted
view-model consumed by charts and summary cards.
"""

import re
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Dict, List, Optional

import config.settings as settings
from src.models.rating import RatingRecord
from src.utils.dates import add_months, month_last_day


class AggregationWindow(Enum):
    """Trailing time window relative to "now"."""
    LAST_7_DAYS = "7d"
    LAST_30_DAYS = "30d"
    LAST_90_DAYS = "90d"
    ALL = "all"

    @property
    def days(self) -> Optional[int]:
        """Window length in days, None for no cutoff."""
        return settings.WINDOW_DAYS[self.value]

    @classmethod
    def parse(cls, text: str) -> "AggregationWindow":
        """Parse '7d', '30d', '90d' or 'all' (case-insensitive)."""
        try:
            return cls(text.strip().lower())
        except (ValueError, AttributeError):
            choices = ", ".join(w.value for w in cls)
            raise ValueError(f"Invalid window: {text!r}. Must be one of {choices}") from None


_MONTH_PATTERN = re.compile(r"^(\d{4})-(\d{1,2})$")


@dataclass(frozen=True)
class ReferenceMonth:
    """
    Calendar month anchoring the activity heatmap.
    The heatmap spans the 12 months ending at this month's last day.
    """
    year: int
    month: int

    def __post_init__(self):
        if not (1 <= self.month <= 12):
            raise ValueError(f"Invalid month: {self.month}. Must be 1-12")
        if not (1 <= self.year <= 9999):
            raise ValueError(f"Invalid year: {self.year}")

    @property
    def first_day(self) -> date:
        return date(self.year, self.month, 1)

    @property
    def last_day(self) -> date:
        return month_last_day(self.year, self.month)

    @property
    def label(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"

    def shift(self, months: int) -> "ReferenceMonth":
        """Move by a whole number of calendar months (negative = back)."""
        year, month = add_months(self.year, self.month, months)
        return ReferenceMonth(year, month)

    def navigate(self, steps: int) -> "ReferenceMonth":
        """Heatmap navigation: each step moves a full 12-month page."""
        return self.shift(steps * settings.HEATMAP_MONTHS)

    def contains(self, day: date) -> bool:
        return day.year == self.year and day.month == self.month

    @classmethod
    def from_date(cls, day: date) -> "ReferenceMonth":
        return cls(day.year, day.month)

    @classmethod
    def parse(cls, text: str) -> "ReferenceMonth":
        """Parse 'YYYY-MM'."""
        match = _MONTH_PATTERN.match(text.strip())
        if not match:
            raise ValueError(f"Invalid reference month: {text!r}. Expected YYYY-MM")
        return cls(int(match.group(1)), int(match.group(2)))


@dataclass
class TrendPoint:
    """Daily averages for one calendar date present in the data."""
    date: date
    date_label: str  # Short axis label, e.g. "Oct 5"
    naturalness: float
    confidence: float
    eye_contact: float

    def to_dict(self) -> dict:
        return {
            "date": self.date.isoformat(),
            "date_label": self.date_label,
            "naturalness": self.naturalness,
            "confidence": self.confidence,
            "eye_contact": self.eye_contact
        }


@dataclass
class DistributionBin:
    range: str  # "0-1", "2-3", ..., "8+"
    count: int

    def to_dict(self) -> dict:
        return {"range": self.range, "count": self.count}


@dataclass
class RollingAverage:
    """Mean of each metric over the most recent trend points."""
    naturalness: float = 0.0
    confidence: float = 0.0
    eye_contact: float = 0.0
    points: int = 0  # Number of trend points averaged

    def to_dict(self) -> dict:
        return {
            "naturalness": self.naturalness,
            "confidence": self.confidence,
            "eye_contact": self.eye_contact,
            "points": self.points
        }


@dataclass
class ActivityCell:
    """One calendar day of the activity heatmap."""
    date: date
    count: int
    is_current_month: bool

    def to_dict(self) -> dict:
        return {
            "date": self.date.isoformat(),
            "count": self.count,
            "is_current_month": self.is_current_month
        }


@dataclass
class RankedRating:
    """A rating record with its rounded three-metric average."""
    record: RatingRecord
    average: float
    band: str = ""  # Score band of the average (see ranking.score_band)

    def to_dict(self) -> dict:
        data = self.record.to_dict()
        data["average"] = self.average
        data["band"] = self.band
        return data


@dataclass
class SummaryStats:
    total_ratings: int = 0
    unique_raters: int = 0
    avg_naturalness: float = 0.0
    avg_confidence: float = 0.0
    avg_eye_contact: float = 0.0

    def to_dict(self) -> dict:
        return {
            "total_ratings": self.total_ratings,
            "unique_raters": self.unique_raters,
            "avg_naturalness": self.avg_naturalness,
            "avg_confidence": self.avg_confidence,
            "avg_eye_contact": self.avg_eye_contact
        }


@dataclass
class AnalyticsResult:
    """
    Everything the rating history page and admin dashboard render.
    Recomputed from scratch on every aggregation pass.
    """
    window: AggregationWindow
    reference_month: ReferenceMonth
    generated_at: datetime
    trend: List[TrendPoint] = field(default_factory=list)
    distributions: Dict[str, List[DistributionBin]] = field(default_factory=dict)
    rolling_average: RollingAverage = field(default_factory=RollingAverage)
    activity: List[ActivityCell] = field(default_factory=list)
    best: List[RankedRating] = field(default_factory=list)
    worst: List[RankedRating] = field(default_factory=list)
    summary: SummaryStats = field(default_factory=SummaryStats)
    recent: List[RankedRating] = field(default_factory=list)
    selected: Optional[RankedRating] = None

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict."""
        return {
            "window": self.window.value,
            "reference_month": self.reference_month.label,
            "generated_at": self.generated_at.isoformat(),
            "summary": self.summary.to_dict(),
            "trend": [point.to_dict() for point in self.trend],
            "distributions": {
                metric: [b.to_dict() for b in bins]
                for metric, bins in self.distributions.items()
            },
            "rolling_average": self.rolling_average.to_dict(),
            "activity": [cell.to_dict() for cell in self.activity],
            "best": [r.to_dict() for r in self.best],
            "worst": [r.to_dict() for r in self.worst],
            "recent": [r.to_dict() for r in self.recent],
            "selected": self.selected.to_dict() if self.selected else None
        }


# Design Rationale and Trade-offs:
#
# 1. Why an Enum for the window instead of a day count?
#    - Only 7d, 30d, 90d and all are valid selectors
#    - Trade-off: A new window needs an enum member and a WINDOW_DAYS entry
#
# 2. Why navigate() moves 12 months?
#    - One heatmap page is 12 months; shift() remains for single-month moves
#
# 3. Why to_dict() on every output type?
#    - The report is written as JSON; dates become ISO strings there only
