"""Routine occurrence projection - no I/O dependencies."""

import logging
from datetime import date
from typing import Iterable

from .models import ItemType, Routine, RoutineInstance, ScheduleItem, Task, parse_date, parse_time
from .policy import ROUTINE_COLOR
from .windows import iter_days, sunday_index

logger = logging.getLogger(__name__)


def index_instances(instances: Iterable[RoutineInstance | Task]) -> set[tuple[str, str]]:
    """
    Build the (routine_id, date) lookup of materialized occurrences.

    Accepts RoutineInstance records as well as tasks carrying a
    from_routine_id back-reference.
    """
    index = set()
    for instance in instances:
        if instance.from_routine_id is None:
            continue
        day = parse_date(instance.date)
        if day is None:
            continue
        index.add((instance.from_routine_id, day.isoformat()))
    return index


def is_eligible(routine: Routine, day: date) -> bool:
    """Check if a routine recurs on a given day."""
    if routine.frequency == "daily":
        return True
    if routine.frequency == "weekly":
        return sunday_index(day) in routine.days_of_week
    return False


def project_routines(
    routines: list[Routine],
    instances: Iterable[RoutineInstance | Task],
    window_start: date,
    window_end: date,
) -> list[ScheduleItem]:
    """
    Expand recurring routines into dated occurrences within a window.

    Pure function - no I/O. Days where the routine already has a
    materialized instance are skipped. Instances pointing at routines that
    no longer exist suppress nothing.

    Args:
        routines: Recurring rules to expand
        instances: Materialized occurrences (RoutineInstance or Task records)
        window_start: First day of the window (inclusive)
        window_end: Last day of the window (inclusive)

    Returns:
        Projected ScheduleItems, ordered by day then routine input order
    """
    materialized = index_instances(instances)

    valid = []
    for routine in routines:
        if routine.time is not None and parse_time(routine.time) is None:
            logger.debug(f"Skipping routine {routine.id}: malformed time {routine.time!r}")
            continue
        valid.append(routine)

    items = []
    for day in iter_days(window_start, window_end):
        date_str = day.isoformat()
        for routine in valid:
            if not is_eligible(routine, day):
                continue
            if (routine.id, date_str) in materialized:
                continue
            items.append(
                ScheduleItem(
                    id=f"routine-proj-{routine.id}-{date_str}",
                    type=ItemType.ROUTINE,
                    title=routine.title,
                    date=date_str,
                    time=routine.time or None,
                    duration=routine.duration,
                    status="future",
                    entity_id=routine.id,
                    area_id=routine.area_id,
                    color=ROUTINE_COLOR,
                )
            )

    return items
