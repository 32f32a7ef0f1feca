"""Current-time indicator position - no I/O dependencies."""

from datetime import datetime, time

from .layout import visible_minutes

# Presentation refresh interval; position only changes once a minute
NOW_REFRESH_SECONDS = 60


def now_offset(now: datetime | time, visible_start_hour: int, visible_end_hour: int) -> int | None:
    """Minutes from the top of the grid, or None when now is off the grid."""
    if now.hour < visible_start_hour or now.hour > visible_end_hour:
        return None
    return (now.hour - visible_start_hour) * 60 + now.minute


def now_fraction(now: datetime | time, visible_start_hour: int, visible_end_hour: int) -> float | None:
    """
    Same position as now_offset, as a fraction of the visible window.

    The end hour is inclusive, so times inside it pin to the bottom (1.0).
    """
    offset = now_offset(now, visible_start_hour, visible_end_hour)
    total = visible_minutes(visible_start_hour, visible_end_hour)
    if offset is None or total == 0:
        return None
    return min(offset / total, 1.0)
