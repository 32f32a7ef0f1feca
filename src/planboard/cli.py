"""Planboard CLI - unified schedule viewer."""

import json
import logging
import sys
from datetime import date, datetime

import click
from apscheduler.schedulers.blocking import BlockingScheduler
from apscheduler.triggers.interval import IntervalTrigger

from .adapters.json_snapshot import SnapshotError
from .config import load_config
from .core.models import LayoutRecord, ScheduleItem
from .core.now import NOW_REFRESH_SECONDS, now_offset
from .core.policy import ZoomLevel
from .workflows import DayBoard, build_day_board, build_schedule, build_week_board

ZOOM_CHOICES = [z.value for z in ZoomLevel]


@click.group()
@click.version_option()
@click.option("--debug", is_flag=True, help="Enable debug logging")
def main(debug: bool):
    """Planboard - unified schedule viewer."""
    if debug:
        logging.basicConfig(
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            level=logging.DEBUG,
        )


def _parse_date_option(value: str | None) -> date:
    if not value:
        return date.today()
    try:
        return date.fromisoformat(value)
    except ValueError:
        click.echo(f"Error: invalid date {value!r}, expected YYYY-MM-DD", err=True)
        sys.exit(1)


def _format_item(item: ScheduleItem) -> str:
    time_str = item.time or "all day"
    duration = f" ({item.duration} min)" if item.duration is not None else ""
    done = " ✓" if item.status == "completed" else ""
    return f"  {time_str:8} {item.title}{duration} [{item.type.value}]{done}"


def _format_record(record: LayoutRecord, start_hour: int) -> str:
    top = start_hour * 60 + record.top_offset_minutes
    end = top + record.span_minutes
    col = f"{record.column_index + 1}/{record.total_columns}"
    return (
        f"  {top // 60:02d}:{top % 60:02d}-{end // 60:02d}:{end % 60:02d} "
        f"col {col:5} {record.item.title}"
    )


def _show_board(board: DayBoard, start_hour: int) -> None:
    click.echo(f"### {board.date.strftime('%A, %B %d')}")
    if board.all_day:
        click.echo("  All day: " + ", ".join(i.title for i in board.all_day))
    if board.routines:
        click.echo("  Routines: " + ", ".join(i.title for i in board.routines))
    if board.now_offset is not None:
        now_min = start_hour * 60 + board.now_offset
        click.echo(f"  Now: {now_min // 60:02d}:{now_min % 60:02d}")
    if not board.layout:
        click.echo("  No timed items.")
    for record in board.layout:
        click.echo(_format_record(record, start_hour))


@main.command()
@click.option("--zoom", "-z", type=click.Choice(ZOOM_CHOICES), default=None,
              help="Zoom level (defaults to DEFAULT_ZOOM)")
@click.option("--date", "-d", "target_date", default=None,
              help="Anchor date (YYYY-MM-DD), defaults to today")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def schedule(zoom: str | None, target_date: str | None, as_json: bool):
    """List schedule items for a zoom window."""
    config = load_config()
    anchor = _parse_date_option(target_date)
    zoom = zoom or config.default_zoom

    try:
        items = build_schedule(config, zoom, anchor)
    except SnapshotError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if as_json:
        click.echo(json.dumps([i.to_dict() for i in items], indent=2, ensure_ascii=False))
        return

    if not items:
        click.echo("Nothing scheduled.")
        return

    current_date = None
    for item in items:
        if item.date != current_date:
            if current_date is not None:
                click.echo()
            click.echo(f"### {date.fromisoformat(item.date).strftime('%A, %B %d')}")
            current_date = item.date
        click.echo(_format_item(item))


@main.command()
@click.option("--date", "-d", "target_date", default=None,
              help="Date to view (YYYY-MM-DD), defaults to today")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def day(target_date: str | None, as_json: bool):
    """Show one day's time grid layout."""
    config = load_config()
    target = _parse_date_option(target_date)

    try:
        board = build_day_board(config, target)
    except SnapshotError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(board.to_dict(), indent=2, ensure_ascii=False))
        return

    _show_board(board, config.visible_range()[0])


@main.command()
@click.option("--date", "-d", "target_date", default=None,
              help="Any date in the week (YYYY-MM-DD), defaults to today")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def week(target_date: str | None, as_json: bool):
    """Show the week's time grid layout, one column per day."""
    config = load_config()
    anchor = _parse_date_option(target_date)

    try:
        boards = build_week_board(config, anchor)
    except SnapshotError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if as_json:
        click.echo(json.dumps({d: b.to_dict() for d, b in boards.items()}, indent=2, ensure_ascii=False))
        return

    start_hour = config.visible_range()[0]
    for i, board in enumerate(boards.values()):
        if i:
            click.echo()
        _show_board(board, start_hour)


def _echo_now() -> None:
    config = load_config()
    start_hour, end_hour = config.visible_range()
    current = datetime.now()
    offset = now_offset(current, start_hour, end_hour)
    if offset is None:
        click.echo(f"{current:%H:%M} is outside visible hours ({start_hour:02d}-{end_hour:02d})")
    else:
        click.echo(f"{current:%H:%M} is {offset} min from the top of the grid")


@main.command()
@click.option("--watch", is_flag=True, help="Refresh every minute until interrupted")
def now(watch: bool):
    """Show where the current time falls on the grid."""
    _echo_now()
    if not watch:
        return

    scheduler = BlockingScheduler()
    scheduler.add_job(_echo_now, IntervalTrigger(seconds=NOW_REFRESH_SECONDS), id="now_indicator")
    try:
        scheduler.start()
    except KeyboardInterrupt:
        click.echo("\nStopped.")


if __name__ == "__main__":
    main()
