"""Column layout for timed items on a day grid - no I/O dependencies."""

from dataclasses import dataclass, field
from datetime import date

from .models import ItemType, LayoutRecord, ScheduleItem, parse_time

DEFAULT_VISIBLE_START_HOUR = 6
DEFAULT_VISIBLE_END_HOUR = 23
DEFAULT_DURATION_MINUTES = 60
MIN_RENDER_MINUTES = 30


def visible_minutes(visible_start_hour: int, visible_end_hour: int) -> int:
    """Height of the visible grid in minutes."""
    if visible_end_hour < visible_start_hour:
        raise ValueError(f"Visible hours inverted: {visible_start_hour}-{visible_end_hour}")
    return (visible_end_hour - visible_start_hour) * 60


@dataclass
class _Placement:
    item: ScheduleItem
    top: int
    span: int
    column: int = 0
    cluster: int = 0

    @property
    def end(self) -> int:
        return self.top + self.span


def _position(
    item: ScheduleItem,
    visible_start_hour: int,
    visible_end_hour: int,
    min_render_minutes: int,
) -> _Placement | None:
    """Clip and position a single item, or None if it stays off the grid."""
    t = parse_time(item.time)
    if t is None:
        return None
    if t.hour < visible_start_hour or t.hour > visible_end_hour:
        return None

    top = (t.hour - visible_start_hour) * 60 + t.minute
    duration = item.duration if item.duration is not None else DEFAULT_DURATION_MINUTES
    return _Placement(item=item, top=top, span=max(duration, min_render_minutes))


def layout_day(
    items: list[ScheduleItem],
    visible_start_hour: int = DEFAULT_VISIBLE_START_HOUR,
    visible_end_hour: int = DEFAULT_VISIBLE_END_HOUR,
    min_render_minutes: int = MIN_RENDER_MINUTES,
) -> list[LayoutRecord]:
    """
    Assign timed items of one day to non-overlapping columns.

    Pure function - no I/O. All-day items and items starting outside the
    visible hours are left out. Uses greedy interval partitioning, so the
    number of columns equals the largest number of items overlapping at
    any instant.

    Args:
        items: Items for a single calendar day
        visible_start_hour: First hour shown on the grid
        visible_end_hour: Last hour shown on the grid (inclusive)
        min_render_minutes: Floor applied to every span

    Returns:
        LayoutRecords in packing order (start ascending, longer first)
    """
    visible_minutes(visible_start_hour, visible_end_hour)

    placements = [
        p
        for p in (
            _position(item, visible_start_hour, visible_end_hour, min_render_minutes)
            for item in items
        )
        if p is not None
    ]
    placements.sort(key=lambda p: (p.top, -p.span))

    columns: list[list[_Placement]] = []
    cluster_columns: list[int] = []
    cluster_end = None

    for placement in placements:
        # Everything placed so far has ended: start a fresh cluster
        if cluster_end is None or placement.top >= cluster_end:
            columns = []
            cluster_columns.append(0)
            cluster_end = placement.end

        for index, column in enumerate(columns):
            if all(placement.top >= p.end or p.top >= placement.end for p in column):
                column.append(placement)
                placement.column = index
                break
        else:
            columns.append([placement])
            placement.column = len(columns) - 1

        placement.cluster = len(cluster_columns) - 1
        cluster_columns[-1] = len(columns)
        cluster_end = max(cluster_end, placement.end)

    return [
        LayoutRecord(
            item=p.item,
            column_index=p.column,
            total_columns=cluster_columns[p.cluster],
            top_offset_minutes=p.top,
            span_minutes=p.span,
        )
        for p in placements
    ]


def layout_week(
    items: list[ScheduleItem],
    days: list[date],
    visible_start_hour: int = DEFAULT_VISIBLE_START_HOUR,
    visible_end_hour: int = DEFAULT_VISIBLE_END_HOUR,
    min_render_minutes: int = MIN_RENDER_MINUTES,
) -> dict[str, list[LayoutRecord]]:
    """Run layout_day once per day column, keyed by ISO date."""
    by_day: dict[str, list[ScheduleItem]] = {d.isoformat(): [] for d in days}
    for item in items:
        if item.date in by_day:
            by_day[item.date].append(item)

    return {
        day: layout_day(day_items, visible_start_hour, visible_end_hour, min_render_minutes)
        for day, day_items in by_day.items()
    }


@dataclass
class DayColumn:
    """One day's items split by where they render."""

    date: str
    all_day: list[ScheduleItem] = field(default_factory=list)
    routines: list[ScheduleItem] = field(default_factory=list)
    timed: list[ScheduleItem] = field(default_factory=list)


def split_day(items: list[ScheduleItem], day: date) -> DayColumn:
    """
    Split a day's items into banner rows and grid items.

    All-day routines get their own banner row; other all-day items share
    the general banner.
    """
    column = DayColumn(date=day.isoformat())
    for item in items:
        if item.date != column.date:
            continue
        if not item.is_all_day:
            column.timed.append(item)
        elif item.type == ItemType.ROUTINE:
            column.routines.append(item)
        else:
            column.all_day.append(item)
    return column
