"""Per-zoom inclusion and decoration rules - no I/O dependencies."""

from dataclasses import dataclass
from enum import Enum


class ZoomLevel(Enum):
    """Planning horizon requested by the viewer."""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


# Title glyphs
GOAL_GLYPH = "🎯"
PROJECT_GLYPH = "📁"
MILESTONE_GLYPH = "🚩"
STRATEGIC_GLYPH = "🔭"

# Color tokens
EVENT_COLOR = "sky"
ROUTINE_COLOR = "slate"
GOAL_DEADLINE_COLOR = "emerald"
PROJECT_DEADLINE_COLOR = "blue"
MILESTONE_COLOR = "amber"
STRATEGIC_COLOR = "purple"


@dataclass(frozen=True)
class ViewPolicy:
    """Which entity categories take part at a zoom level."""

    zoom: ZoomLevel
    tasks: bool = False
    events: bool = False
    milestones_only: bool = False
    routines: bool = False
    goal_deadlines: bool = False
    project_deadlines: bool = False
    strategic_goals: bool = False

    @property
    def decorates_milestones(self) -> bool:
        return self.events and self.milestones_only


_POLICIES = {
    # Operational: everything that can carry a time of day
    ZoomLevel.DAY: ViewPolicy(ZoomLevel.DAY, tasks=True, events=True, routines=True),
    ZoomLevel.WEEK: ViewPolicy(
        ZoomLevel.WEEK,
        tasks=True,
        events=True,
        routines=True,
        goal_deadlines=True,
        project_deadlines=True,
    ),
    # Expectations: deadlines and milestones only
    ZoomLevel.MONTH: ViewPolicy(
        ZoomLevel.MONTH,
        events=True,
        milestones_only=True,
        goal_deadlines=True,
        project_deadlines=True,
    ),
    # Direction
    ZoomLevel.YEAR: ViewPolicy(ZoomLevel.YEAR, strategic_goals=True),
}


def policy_for(zoom: ZoomLevel | str) -> ViewPolicy:
    """Look up the policy for a zoom level. Raises ValueError for unknown zooms."""
    return _POLICIES[ZoomLevel(zoom)]


def decorate(glyph: str, title: str) -> str:
    return f"{glyph} {title}"


def deadline_status(status: str) -> str:
    """Collapse a goal/project status into a deadline item status."""
    return "completed" if status == "completed" else "pending"
