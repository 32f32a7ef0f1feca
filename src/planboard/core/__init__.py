"""Functional core - pure scheduling logic with no I/O."""

from .models import (
    Task,
    Event,
    Routine,
    RoutineInstance,
    Goal,
    Project,
    Snapshot,
    ItemType,
    ScheduleItem,
    LayoutRecord,
)
from .policy import ZoomLevel, ViewPolicy, policy_for
from .projection import project_routines
from .schedule import get_schedule_items, sort_schedule_items
from .layout import MIN_RENDER_MINUTES, DayColumn, layout_day, layout_week, split_day
from .now import NOW_REFRESH_SECONDS, now_offset
from .styles import Style, style_for
from .windows import iter_days, window_for

__all__ = [
    # Models
    "Task",
    "Event",
    "Routine",
    "RoutineInstance",
    "Goal",
    "Project",
    "Snapshot",
    "ItemType",
    "ScheduleItem",
    "LayoutRecord",
    # Policy
    "ZoomLevel",
    "ViewPolicy",
    "policy_for",
    # Aggregation
    "project_routines",
    "get_schedule_items",
    "sort_schedule_items",
    # Layout
    "MIN_RENDER_MINUTES",
    "DayColumn",
    "layout_day",
    "layout_week",
    "split_day",
    "NOW_REFRESH_SECONDS",
    "now_offset",
    # Presentation
    "Style",
    "style_for",
    "iter_days",
    "window_for",
]
