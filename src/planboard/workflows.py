"""Shared workflow layer between the CLI and the core.

Each build_* function reads the snapshot through an adapter, runs the pure
core on it and returns plain records ready for display.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime

from .adapters.json_snapshot import JsonSnapshotReader
from .config import Config
from .core.layout import layout_day, split_day
from .core.models import LayoutRecord, ScheduleItem
from .core.now import now_offset
from .core.policy import ZoomLevel
from .core.schedule import get_schedule_items
from .core.windows import iter_days, window_for
from .ports.snapshot_reader import SnapshotReader

logger = logging.getLogger(__name__)


@dataclass
class DayBoard:
    """Everything needed to draw one day column."""

    date: date
    all_day: list[ScheduleItem] = field(default_factory=list)
    routines: list[ScheduleItem] = field(default_factory=list)
    layout: list[LayoutRecord] = field(default_factory=list)
    now_offset: int | None = None

    def to_dict(self) -> dict:
        return {
            "date": self.date.isoformat(),
            "allDay": [i.to_dict() for i in self.all_day],
            "routines": [i.to_dict() for i in self.routines],
            "layout": [r.to_dict() for r in self.layout],
            "nowOffset": self.now_offset,
        }


def get_reader(config: Config) -> JsonSnapshotReader:
    """Resolve the snapshot reader from config."""
    return JsonSnapshotReader(config.snapshot_path())


def build_schedule(
    config: Config,
    zoom: ZoomLevel | str,
    anchor: date,
    reader: SnapshotReader | None = None,
) -> list[ScheduleItem]:
    """Read the snapshot and aggregate the window around anchor."""
    reader = reader or get_reader(config)
    start, end = window_for(zoom, anchor, config.week_start_index())
    logger.debug(f"Aggregating {ZoomLevel(zoom).value} window {start}..{end}")
    return get_schedule_items(reader.read(), start, end, zoom)


def _board_for(
    items: list[ScheduleItem], day: date, config: Config, now: datetime | None
) -> DayBoard:
    start_hour, end_hour = config.visible_range()
    column = split_day(items, day)
    board = DayBoard(
        date=day,
        all_day=column.all_day,
        routines=column.routines,
        layout=layout_day(column.timed, start_hour, end_hour, config.min_render_minutes),
    )
    if now is not None and now.date() == day:
        board.now_offset = now_offset(now, start_hour, end_hour)
    return board


def build_day_board(
    config: Config,
    day: date,
    now: datetime | None = None,
    reader: SnapshotReader | None = None,
) -> DayBoard:
    """Aggregate one day and lay out its timed items."""
    now = now or datetime.now()
    items = build_schedule(config, ZoomLevel.DAY, day, reader)
    return _board_for(items, day, config, now)


def build_week_board(
    config: Config,
    anchor: date,
    now: datetime | None = None,
    reader: SnapshotReader | None = None,
) -> dict[str, DayBoard]:
    """Aggregate the week around anchor and lay out each day column."""
    now = now or datetime.now()
    items = build_schedule(config, ZoomLevel.WEEK, anchor, reader)
    start, end = window_for(ZoomLevel.WEEK, anchor, config.week_start_index())
    return {day.isoformat(): _board_for(items, day, config, now) for day in iter_days(start, end)}
