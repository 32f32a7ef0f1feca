"""Planning entities and schedule records - no I/O dependencies."""

import re
from dataclasses import dataclass, field
from datetime import date, datetime, time
from enum import Enum

_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_TIME_PATTERN = re.compile(r"^\d{2}:\d{2}$")


def parse_date(value: str | None) -> date | None:
    """Parse a YYYY-MM-DD string, or None if missing/malformed."""
    if not isinstance(value, str) or not _DATE_PATTERN.match(value):
        return None
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        return None


def parse_deadline(value: str | None) -> date | None:
    """
    Parse a deadline stored as an ISO date or full ISO timestamp.

    Timestamps such as "2025-01-17T00:00:00.000Z" keep the calendar date as
    written; no timezone conversion is applied.
    """
    d = parse_date(value)
    if d is not None:
        return d
    if not isinstance(value, str) or "T" not in value or not _DATE_PATTERN.match(value[:10]):
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
    except ValueError:
        return None


def parse_time(value: str | None) -> time | None:
    """Parse an HH:mm 24-hour string, or None if missing/malformed."""
    if not isinstance(value, str) or not _TIME_PATTERN.match(value):
        return None
    try:
        return datetime.strptime(value, "%H:%M").time()
    except ValueError:
        return None


def minutes_between(start: str, end: str) -> int | None:
    """Minutes from start to end (HH:mm), or None if end is not after start."""
    s = parse_time(start)
    e = parse_time(end)
    if s is None or e is None:
        return None
    minutes = (e.hour * 60 + e.minute) - (s.hour * 60 + s.minute)
    return minutes if minutes > 0 else None


def _int_or_none(value) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


@dataclass
class Task:
    """A one-off action, optionally scheduled on a date and time."""

    id: str
    title: str
    date: str | None = None
    start_time: str | None = None
    duration: int | None = None
    status: str = "pending"
    area_id: str | None = None
    description: str | None = None
    is_focus: bool = False
    kind: str = "task"
    from_routine_id: str | None = None

    @property
    def is_routine_instance(self) -> bool:
        return self.from_routine_id is not None

    @classmethod
    def from_dict(cls, data: dict) -> "Task":
        return cls(
            id=str(data["id"]),
            title=data.get("title", ""),
            date=data.get("date"),
            start_time=data.get("startTime") or None,
            duration=_int_or_none(data.get("duration")),
            status=data.get("status", "pending") or "pending",
            area_id=data.get("areaId"),
            description=data.get("description"),
            is_focus=bool(data.get("isFocus", False)),
            kind=data.get("type", "task") or "task",
            from_routine_id=data.get("fromRoutineId"),
        )


@dataclass
class Event:
    """A fixed-date calendar event."""

    id: str
    title: str
    date: str
    start_time: str | None = None
    end_time: str | None = None
    type: str | None = None
    area_id: str | None = None
    description: str | None = None

    @property
    def is_milestone(self) -> bool:
        return self.type == "milestone"

    @classmethod
    def from_dict(cls, data: dict) -> "Event":
        return cls(
            id=str(data["id"]),
            title=data.get("title", ""),
            date=data["date"],
            start_time=data.get("startTime") or None,
            end_time=data.get("endTime") or None,
            type=data.get("type"),
            area_id=data.get("areaId"),
            description=data.get("description"),
        )


@dataclass
class Routine:
    """
    A recurring rule.

    days_of_week uses 0 = Sunday .. 6 = Saturday.
    """

    id: str
    title: str
    frequency: str
    days_of_week: list[int] = field(default_factory=list)
    time: str | None = None
    duration: int | None = None
    area_id: str | None = None

    @classmethod
    def from_dict(cls, data: dict) -> "Routine":
        return cls(
            id=str(data["id"]),
            title=data.get("title", ""),
            frequency=data.get("frequency", "manual"),
            days_of_week=[int(d) for d in data.get("daysOfWeek") or []],
            time=data.get("time") or None,
            duration=_int_or_none(data.get("duration")),
            area_id=data.get("areaId"),
        )


@dataclass
class RoutineInstance:
    """A routine occurrence that was turned into its own editable record."""

    id: str
    from_routine_id: str
    date: str

    @classmethod
    def from_dict(cls, data: dict) -> "RoutineInstance":
        return cls(
            id=str(data["id"]),
            from_routine_id=str(data["fromRoutineId"]),
            date=data["date"],
        )


@dataclass
class Goal:
    """A goal with an optional deadline."""

    id: str
    title: str
    deadline: str | None = None
    status: str = "active"
    area_id: str | None = None
    type: str | None = None
    horizon: str | None = None

    @property
    def is_strategic(self) -> bool:
        return self.type == "strategic" or self.horizon == "year"

    @classmethod
    def from_dict(cls, data: dict) -> "Goal":
        return cls(
            id=str(data["id"]),
            title=data.get("title", ""),
            deadline=data.get("deadline") or None,
            status=data.get("status", "active") or "active",
            area_id=data.get("areaId"),
            type=data.get("type"),
            horizon=data.get("horizon"),
        )


@dataclass
class Project:
    """A project with an optional deadline."""

    id: str
    title: str
    deadline: str | None = None
    status: str = "active"
    area_id: str | None = None

    @classmethod
    def from_dict(cls, data: dict) -> "Project":
        return cls(
            id=str(data["id"]),
            title=data.get("title", ""),
            deadline=data.get("deadline") or None,
            status=data.get("status", "active") or "active",
            area_id=data.get("areaId"),
        )


@dataclass
class Snapshot:
    """Read-only view of every planning collection at one point in time."""

    tasks: list[Task] = field(default_factory=list)
    events: list[Event] = field(default_factory=list)
    routines: list[Routine] = field(default_factory=list)
    routine_instances: list[RoutineInstance] = field(default_factory=list)
    goals: list[Goal] = field(default_factory=list)
    projects: list[Project] = field(default_factory=list)


class ItemType(Enum):
    """Kind of a schedule item."""

    TASK = "task"
    EVENT = "event"
    ROUTINE = "routine"
    DEADLINE = "deadline"


@dataclass
class ScheduleItem:
    """A normalized, dated entry produced by the aggregator."""

    id: str
    type: ItemType
    title: str
    date: str
    entity_id: str
    status: str
    time: str | None = None
    duration: int | None = None
    area_id: str | None = None
    details: str | None = None
    is_focus: bool = False
    color: str | None = None

    @property
    def is_all_day(self) -> bool:
        return self.time is None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "type": self.type.value,
            "title": self.title,
            "date": self.date,
            "time": self.time,
            "duration": self.duration,
            "status": self.status,
            "entityId": self.entity_id,
            "areaId": self.area_id,
            "details": self.details,
            "isFocus": self.is_focus,
            "color": self.color,
        }


@dataclass
class LayoutRecord:
    """Position of a timed item inside the visible-hour grid."""

    item: ScheduleItem
    column_index: int
    total_columns: int
    top_offset_minutes: int
    span_minutes: int

    @property
    def end_offset_minutes(self) -> int:
        return self.top_offset_minutes + self.span_minutes

    @property
    def width_fraction(self) -> float:
        return 1 / self.total_columns

    def overlaps(self, other: "LayoutRecord") -> bool:
        """Check if the half-open intervals of two records intersect."""
        return (
            self.top_offset_minutes < other.end_offset_minutes
            and other.top_offset_minutes < self.end_offset_minutes
        )

    def to_dict(self) -> dict:
        return {
            "item": self.item.to_dict(),
            "columnIndex": self.column_index,
            "totalColumns": self.total_columns,
            "topOffsetMinutes": self.top_offset_minutes,
            "spanMinutes": self.span_minutes,
        }
