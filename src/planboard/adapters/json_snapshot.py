"""JSON file snapshot adapter."""

import json
import logging
from pathlib import Path
from typing import Callable, TypeVar

from planboard.core.models import (
    Event,
    Goal,
    Project,
    Routine,
    RoutineInstance,
    Snapshot,
    Task,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SnapshotError(Exception):
    """Raised when a snapshot file cannot be read."""

    pass


class JsonSnapshotReader:
    """
    JSON file snapshot reader.

    Implements SnapshotReader protocol. The document holds one array per
    collection, keyed the way the planning app exports them:
    tasks (or actions), events, routines, routineInstances, goals, projects.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path).expanduser()

    def read(self) -> Snapshot:
        """Read the snapshot file. A missing file reads as an empty snapshot."""
        if not self.path.exists():
            logger.warning(f"Snapshot file not found: {self.path}")
            return Snapshot()

        try:
            data = json.loads(self.path.read_text())
        except json.JSONDecodeError as e:
            raise SnapshotError(f"Invalid snapshot JSON in {self.path}: {e}") from e
        except OSError as e:
            raise SnapshotError(f"Cannot read snapshot {self.path}: {e}") from e

        if not isinstance(data, dict):
            raise SnapshotError(f"Snapshot {self.path} must contain a JSON object")

        return parse_snapshot(data)


def _parse_all(records, factory: Callable[[dict], T], label: str) -> list[T]:
    """Parse a collection, skipping records that lack required keys."""
    parsed = []
    for record in records or []:
        try:
            parsed.append(factory(record))
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(f"Skipping malformed {label} record: {e!r}")
    return parsed


def parse_snapshot(data: dict) -> Snapshot:
    """Build a Snapshot from a decoded JSON document."""
    tasks = data.get("tasks")
    if tasks is None:
        tasks = data.get("actions")

    return Snapshot(
        tasks=_parse_all(tasks, Task.from_dict, "task"),
        events=_parse_all(data.get("events"), Event.from_dict, "event"),
        routines=_parse_all(data.get("routines"), Routine.from_dict, "routine"),
        routine_instances=_parse_all(
            data.get("routineInstances"), RoutineInstance.from_dict, "routine instance"
        ),
        goals=_parse_all(data.get("goals"), Goal.from_dict, "goal"),
        projects=_parse_all(data.get("projects"), Project.from_dict, "project"),
    )
