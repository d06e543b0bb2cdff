"""Planner CLI - replay input events and show the month grid."""

import json
import logging
import sys
from datetime import date

import click

from .adapters.event_script import JsonLinesEventSource, ScriptError, replay
from .adapters.text_grid import TextGridRenderer
from .config import load_config
from .core.dates import parse_date_key, to_date_key
from .core.filters import format_time_window
from .core.grid import CalendarDay
from .core.tasks import Task
from .ports import EventSource, GridRenderer
from .session import PlannerSession


@click.group()
@click.version_option(package_name="task-planner")
@click.option("--debug", is_flag=True, help="Enable debug logging")
def main(debug: bool):
    """Planner - month-grid task planner."""
    if debug:
        logging.basicConfig(
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            level=logging.DEBUG,
        )


def _parse_day(value: str | None, option: str) -> date | None:
    if value is None:
        return None
    try:
        return parse_date_key(value)
    except ValueError:
        raise click.BadParameter(f"expected YYYY-MM-DD, got {value!r}", param_hint=option)


def _build_session(script: str | None, today: str | None) -> PlannerSession:
    """Load config, create a session pinned to `today`, and replay the script."""
    config = load_config()
    fixed_today = _parse_day(today, "--today")
    session = PlannerSession(config, today=(lambda: fixed_today) if fixed_today else date.today)

    if script:
        try:
            source: EventSource = JsonLinesEventSource(script)
            replay(session, source.read_events())
        except ScriptError as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(1)
    return session


def _task_json(t: Task) -> dict:
    return {
        "id": t.id,
        "name": t.name,
        "category": t.category.label,
        "start_date": to_date_key(t.start_date),
        "end_date": to_date_key(t.end_date),
    }


def _day_json(d: CalendarDay) -> dict:
    return {
        "date": to_date_key(d.date),
        "in_current_month": d.in_current_month,
        "is_today": d.is_today,
        "is_in_selection_preview": d.is_in_selection_preview,
        "tasks": [
            {
                "id": s.task.id,
                "name": s.task.name,
                "category": s.task.category.label,
                "is_range_start": s.is_range_start,
                "is_range_end": s.is_range_end,
            }
            for s in d.slots
        ],
    }


@main.command()
@click.option("--month", "month", default=None, help="Month to show (YYYY-MM), defaults to today's")
@click.option("--script", type=click.Path(exists=True, dir_okay=False), help="JSON-lines event script to replay")
@click.option("--today", default=None, help="Override today's date (YYYY-MM-DD)")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def grid(month: str | None, script: str | None, today: str | None, as_json: bool):
    """Show the month grid."""
    session = _build_session(script, today)
    if month:
        session.anchor = _parse_day(f"{month}-01", "--month")

    days = session.calendar_days()
    if as_json:
        criteria = session.criteria
        data = {
            "title": session.title,
            "filters": {
                "search_text": criteria.search_text,
                "categories": sorted(c.label for c in criteria.categories),
                "time_window": format_time_window(criteria.time_window_weeks),
            },
            "days": [_day_json(d) for d in days],
        }
        click.echo(json.dumps(data, indent=2))
    else:
        renderer: GridRenderer = TextGridRenderer()
        click.echo(renderer.render(session.title, days))


@main.command()
@click.option("--script", type=click.Path(exists=True, dir_okay=False), help="JSON-lines event script to replay")
@click.option("--today", default=None, help="Override today's date (YYYY-MM-DD)")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def tasks(script: str | None, today: str | None, as_json: bool):
    """List tasks passing the current filters."""
    session = _build_session(script, today)
    visible = session.visible_tasks()

    if as_json:
        click.echo(json.dumps([_task_json(t) for t in visible], indent=2))
        return

    if not visible:
        click.echo("No tasks.")
        return

    for t in visible:
        span = to_date_key(t.start_date)
        if t.end_date != t.start_date:
            span += f"..{to_date_key(t.end_date)}"
        click.echo(f"[{t.category.label:11}] {t.name} ({span})")


if __name__ == "__main__":
    main()
