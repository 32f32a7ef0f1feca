"""Date windows for each zoom level - no I/O dependencies."""

import calendar
from datetime import date, timedelta
from typing import Iterator

from .policy import ZoomLevel


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield every calendar day from start to end, inclusive."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def sunday_index(d: date) -> int:
    """Weekday index with 0 = Sunday .. 6 = Saturday."""
    return (d.weekday() + 1) % 7


def window_for(zoom: ZoomLevel | str, anchor: date, week_start: int = 0) -> tuple[date, date]:
    """
    Inclusive date window shown at a zoom level around an anchor date.

    week_start uses Python's convention (0 = Monday).
    """
    zoom = ZoomLevel(zoom)

    match zoom:
        case ZoomLevel.DAY:
            return anchor, anchor
        case ZoomLevel.WEEK:
            start = anchor - timedelta(days=(anchor.weekday() - week_start) % 7)
            return start, start + timedelta(days=6)
        case ZoomLevel.MONTH:
            last = calendar.monthrange(anchor.year, anchor.month)[1]
            return anchor.replace(day=1), anchor.replace(day=last)
        case ZoomLevel.YEAR:
            return date(anchor.year, 1, 1), date(anchor.year, 12, 31)
