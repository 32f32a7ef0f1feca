"""Schedule aggregation across all planning collections - no I/O dependencies."""

import logging
from datetime import date
from itertools import chain

from .models import (
    Event,
    Goal,
    ItemType,
    Project,
    ScheduleItem,
    Snapshot,
    Task,
    minutes_between,
    parse_deadline,
    parse_date,
    parse_time,
)
from .policy import (
    EVENT_COLOR,
    GOAL_DEADLINE_COLOR,
    GOAL_GLYPH,
    MILESTONE_COLOR,
    MILESTONE_GLYPH,
    PROJECT_DEADLINE_COLOR,
    PROJECT_GLYPH,
    STRATEGIC_COLOR,
    STRATEGIC_GLYPH,
    ViewPolicy,
    ZoomLevel,
    deadline_status,
    decorate,
    policy_for,
)
from .projection import project_routines

logger = logging.getLogger(__name__)


def _in_window(value: str | None, start: date, end: date) -> bool:
    d = parse_date(value)
    return d is not None and start <= d <= end


def _valid_time(value: str | None) -> bool:
    """Absent times are fine; present ones must parse."""
    return value is None or parse_time(value) is not None


def task_items(tasks: list[Task], start: date, end: date) -> list[ScheduleItem]:
    """Scheduled tasks whose date falls in the window."""
    items = []
    for task in tasks:
        if task.kind != "task" or not task.date:
            continue
        if not _in_window(task.date, start, end):
            if parse_date(task.date) is None:
                logger.debug(f"Skipping task {task.id}: malformed date {task.date!r}")
            continue
        if not _valid_time(task.start_time):
            logger.debug(f"Skipping task {task.id}: malformed time {task.start_time!r}")
            continue
        items.append(
            ScheduleItem(
                id=f"task-{task.id}",
                type=ItemType.TASK,
                title=task.title,
                date=task.date,
                time=task.start_time,
                duration=task.duration,
                status=task.status,
                entity_id=task.id,
                area_id=task.area_id,
                details=task.description,
                is_focus=task.is_focus,
            )
        )
    return items


def event_items(
    events: list[Event], start: date, end: date, milestones_only: bool = False
) -> list[ScheduleItem]:
    """Events in the window; milestone-only mode decorates titles with a flag."""
    items = []
    for event in events:
        if milestones_only and not event.is_milestone:
            continue
        if not _in_window(event.date, start, end):
            if parse_date(event.date) is None:
                logger.debug(f"Skipping event {event.id}: malformed date {event.date!r}")
            continue
        if not (_valid_time(event.start_time) and _valid_time(event.end_time)):
            logger.debug(f"Skipping event {event.id}: malformed time")
            continue

        if milestones_only:
            items.append(
                ScheduleItem(
                    id=f"event-{event.id}",
                    type=ItemType.EVENT,
                    title=decorate(MILESTONE_GLYPH, event.title),
                    date=event.date,
                    status="future",
                    entity_id=event.id,
                    area_id=event.area_id,
                    color=MILESTONE_COLOR,
                )
            )
            continue

        duration = None
        if event.start_time and event.end_time:
            duration = minutes_between(event.start_time, event.end_time)

        items.append(
            ScheduleItem(
                id=f"event-{event.id}",
                type=ItemType.EVENT,
                title=event.title,
                date=event.date,
                time=event.start_time,
                duration=duration,
                status="future",
                entity_id=event.id,
                area_id=event.area_id,
                details=event.description,
                color=EVENT_COLOR,
            )
        )
    return items


def _deadline_item(
    entity: Goal | Project, day: date, item_id: str, glyph: str, color: str
) -> ScheduleItem:
    return ScheduleItem(
        id=item_id,
        type=ItemType.DEADLINE,
        title=decorate(glyph, entity.title),
        date=day.isoformat(),
        status=deadline_status(entity.status),
        entity_id=entity.id,
        area_id=entity.area_id,
        color=color,
    )


def _deadline_in_window(entity: Goal | Project, start: date, end: date) -> date | None:
    """The deadline's calendar date when it falls in the window."""
    if not entity.deadline:
        return None
    day = parse_deadline(entity.deadline)
    if day is None:
        logger.debug(f"Skipping deadline of {entity.id}: malformed {entity.deadline!r}")
        return None
    return day if start <= day <= end else None


def deadline_items(
    goals: list[Goal], projects: list[Project], start: date, end: date
) -> list[ScheduleItem]:
    """Goal deadlines followed by project deadlines falling in the window."""
    items = []
    for goal in goals:
        day = _deadline_in_window(goal, start, end)
        if day is not None:
            items.append(
                _deadline_item(goal, day, f"deadline-goal-{goal.id}", GOAL_GLYPH, GOAL_DEADLINE_COLOR)
            )
    for project in projects:
        day = _deadline_in_window(project, start, end)
        if day is not None:
            items.append(
                _deadline_item(
                    project, day, f"deadline-project-{project.id}", PROJECT_GLYPH, PROJECT_DEADLINE_COLOR
                )
            )
    return items


def strategic_items(goals: list[Goal], start: date, end: date) -> list[ScheduleItem]:
    """Strategic or year-horizon goals whose deadline falls in the window."""
    items = []
    for goal in goals:
        if not goal.is_strategic:
            continue
        day = _deadline_in_window(goal, start, end)
        if day is not None:
            items.append(
                _deadline_item(goal, day, f"strat-goal-{goal.id}", STRATEGIC_GLYPH, STRATEGIC_COLOR)
            )
    return items


def sort_schedule_items(items: list[ScheduleItem]) -> list[ScheduleItem]:
    """
    Sort by date, then timed items before all-day ones, then by time.

    The sort is stable: items equal on these keys keep their input order.
    """
    return sorted(items, key=lambda i: (i.date, i.time is None, i.time or ""))


def _dedupe(items: list[ScheduleItem]) -> list[ScheduleItem]:
    seen = set()
    unique = []
    for item in items:
        if item.id in seen:
            logger.warning(f"Dropping duplicate schedule item {item.id}")
            continue
        seen.add(item.id)
        unique.append(item)
    return unique


def collect_items(
    snapshot: Snapshot, policy: ViewPolicy, start: date, end: date
) -> list[ScheduleItem]:
    """Gather unsorted items for a policy, in category order."""
    items = []

    if policy.tasks:
        items.extend(task_items(snapshot.tasks, start, end))

    if policy.events and not policy.milestones_only:
        items.extend(event_items(snapshot.events, start, end))

    if policy.routines:
        instances = chain(snapshot.routine_instances, snapshot.tasks)
        items.extend(project_routines(snapshot.routines, instances, start, end))

    if policy.goal_deadlines or policy.project_deadlines:
        goals = snapshot.goals if policy.goal_deadlines else []
        projects = snapshot.projects if policy.project_deadlines else []
        items.extend(deadline_items(goals, projects, start, end))

    if policy.decorates_milestones:
        items.extend(event_items(snapshot.events, start, end, milestones_only=True))

    if policy.strategic_goals:
        items.extend(strategic_items(snapshot.goals, start, end))

    return items


def get_schedule_items(
    snapshot: Snapshot,
    window_start: date,
    window_end: date,
    zoom: ZoomLevel | str = ZoomLevel.DAY,
) -> list[ScheduleItem]:
    """
    Build the ordered schedule for a window at a zoom level.

    Pure function - no I/O. Malformed entities are skipped, never raised.

    Args:
        snapshot: Source collections (read only)
        window_start: First day of the window (inclusive)
        window_end: Last day of the window (inclusive)
        zoom: Zoom level deciding which categories take part

    Returns:
        ScheduleItems sorted by date, timed before all-day, then time
    """
    policy = policy_for(zoom)
    items = collect_items(snapshot, policy, window_start, window_end)
    return sort_schedule_items(_dedupe(items))
