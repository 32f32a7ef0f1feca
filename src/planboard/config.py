"""Configuration management for Planboard."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from .core.layout import DEFAULT_VISIBLE_END_HOUR, DEFAULT_VISIBLE_START_HOUR, MIN_RENDER_MINUTES
from .core.policy import ZoomLevel

logger = logging.getLogger(__name__)

PLANBOARD_HOME = Path(os.environ.get("PLANBOARD_HOME", Path.home() / "planboard"))
CONFIG_FILE = PLANBOARD_HOME / "config" / "planboard.conf"
DATA_DIR = PLANBOARD_HOME / "data"

WEEKDAYS = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]


@dataclass
class Config:
    """Planboard configuration."""

    snapshot_file: str = ""
    visible_hours: str = f"{DEFAULT_VISIBLE_START_HOUR:02d}-{DEFAULT_VISIBLE_END_HOUR:02d}"
    min_render_minutes: int = MIN_RENDER_MINUTES
    week_start_day: str = "Monday"
    default_zoom: str = ZoomLevel.DAY.value

    def snapshot_path(self) -> Path:
        if self.snapshot_file:
            return Path(self.snapshot_file).expanduser()
        return DATA_DIR / "snapshot.json"

    def visible_range(self) -> tuple[int, int]:
        """Visible grid hours as (start, end)."""
        return parse_hours(self.visible_hours)

    def week_start_index(self) -> int:
        """Week start as a Python weekday index (0 = Monday)."""
        return WEEKDAYS.index(self.week_start_day.lower())


def parse_hours(value: str) -> tuple[int, int]:
    """Parse "HH-HH" (or "HH:MM-HH:MM") into an hour pair. Raises ValueError."""
    start_str, sep, end_str = value.partition("-")
    if not sep:
        raise ValueError(f"Expected START-END hours, got {value!r}")
    start = int(start_str.strip().split(":")[0])
    end = int(end_str.strip().split(":")[0])
    if not (0 <= start <= end <= 23):
        raise ValueError(f"Hours out of range: {value!r}")
    return start, end


def load_config(path: Path | None = None) -> Config:
    """Load configuration from planboard.conf file."""
    config = Config()
    path = path or CONFIG_FILE

    if not path.exists():
        return config

    for line in path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = value.strip()

        # Handle quoted values with inline comments: "value" # comment
        if value.startswith('"') or value.startswith("'"):
            quote = value[0]
            end_quote = value.find(quote, 1)
            value = value[1:end_quote] if end_quote != -1 else value[1:]
        elif "#" in value:
            value = value.split("#")[0].strip()

        match key:
            case "snapshot_file":
                config.snapshot_file = value
            case "visible_hours":
                try:
                    parse_hours(value)
                    config.visible_hours = value
                except ValueError as e:
                    logger.warning(f"Ignoring VISIBLE_HOURS: {e}")
            case "min_render_minutes":
                try:
                    config.min_render_minutes = max(int(value), 1)
                except ValueError:
                    logger.warning(f"Ignoring non-numeric MIN_RENDER_MINUTES: {value!r}")
            case "week_start_day":
                if value.lower() in WEEKDAYS:
                    config.week_start_day = value
                else:
                    logger.warning(f"Ignoring unknown WEEK_START_DAY: {value!r}")
            case "default_zoom":
                try:
                    config.default_zoom = ZoomLevel(value.lower()).value
                except ValueError:
                    logger.warning(f"Ignoring unknown DEFAULT_ZOOM: {value!r}")

    return config
