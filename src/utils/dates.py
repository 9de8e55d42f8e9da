"""
Date helpers.

Local calendar dates for rating timestamps and month arithmetic.
"""

import calendar
from datetime import date, datetime, tzinfo
from typing import Optional


def to_local(timestamp: datetime, tz: Optional[tzinfo] = None) -> datetime:
    """
    Convert a timestamp to an aware datetime in the evaluation time zone.

    Args:
        timestamp: Aware timestamp, or naive timestamp already in local time
        tz: Evaluation time zone (None = the process's local zone)

    Returns:
        Aware datetime in tz
    """
    if timestamp.tzinfo is None:
        if tz is None:
            # Naive datetimes are interpreted as system local time
            return timestamp.astimezone()
        return timestamp.replace(tzinfo=tz)
    return timestamp.astimezone(tz)


def local_date(timestamp: datetime, tz: Optional[tzinfo] = None) -> date:
    """Calendar date of a timestamp in the evaluation time zone."""
    return to_local(timestamp, tz).date()


def add_months(year: int, month: int, months: int) -> tuple:
    """Shift (year, month) by a whole number of months."""
    index = year * 12 + (month - 1) + months
    return index // 12, index % 12 + 1


def month_last_day(year: int, month: int) -> date:
    """Last calendar day of a month."""
    return date(year, month, calendar.monthrange(year, month)[1])


def short_label(day: date) -> str:
    """Chart axis label, e.g. 'Oct 5'."""
    return f"{day.strftime('%b')} {day.day}"


# Design Rationale and Trade-offs:
#
# 1. Why a tz parameter instead of reading the process zone everywhere?
#    - Calendar dates depend on the zone; tests pin it explicitly
#    - Trade-off: None still means the process's local zone
