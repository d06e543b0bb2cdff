"""JSON-lines event script adapter.

Each non-blank line is one JSON object naming a session input event and
its arguments, e.g.

    {"event": "pointer_down_on_empty_cell", "date": "2024-03-10"}
    {"event": "pointer_move", "date": "2024-03-12"}
    {"event": "pointer_up"}
    {"event": "confirm_task_creation", "name": "Design review"}
    {"event": "pointer_down_on_task", "task": "Design review", "offset_px": 2, "chip_width_px": 120}

Lines starting with '#' are comments. A task may be referenced by name
("task") instead of id ("task_id"); the first task with that name wins.
"""

import json
import logging
from pathlib import Path

from planner.core.dates import parse_date_key
from planner.core.errors import PlannerError
from planner.session import INPUT_EVENTS, InputEvent, PlannerSession

logger = logging.getLogger(__name__)

_DATE = "date"
_NUMBER = "number"
_WINDOW = "window"

# Allowed script keys per event: key -> (argument name, value kind, required).
_FORM_ARGS = {
    "name": ("name", str, False),
    "category": ("category", str, False),
    "start_date": ("start_date", _DATE, False),
    "end_date": ("end_date", _DATE, False),
}
_EVENT_ARGS: dict[str, dict[str, tuple[str, object, bool]]] = {
    "pointer_down_on_empty_cell": {"date": ("d", _DATE, True)},
    "pointer_down_on_task": {
        "task_id": ("task_id", str, False),
        "task": ("task", str, False),
        "offset_px": ("offset_px", _NUMBER, True),
        "chip_width_px": ("chip_width_px", _NUMBER, True),
    },
    "pointer_move": {"date": ("d", _DATE, True)},
    "pointer_up": {},
    "pointer_leave_surface": {},
    "month_navigate": {"delta": ("delta", int, True)},
    "set_search_text": {"text": ("text", str, True)},
    "toggle_category_filter": {
        "category": ("category", str, True),
        "enabled": ("enabled", bool, True),
    },
    "set_time_window": {"value": ("value", _WINDOW, True)},
    "update_creation_form": _FORM_ARGS,
    "confirm_task_creation": _FORM_ARGS,
    "cancel_task_creation": {},
}


class ScriptError(PlannerError):
    """Malformed event script."""


def _convert(key: str, value, expected, line_no: int):
    """Check one script value against its expected kind, parsing dates."""
    if expected == _DATE:
        try:
            return parse_date_key(value)
        except (TypeError, ValueError) as e:
            raise ScriptError(f"line {line_no}: bad {key} {value!r}: {e}") from e

    # bool is an int subclass; only "enabled" may be a bool.
    is_bool = isinstance(value, bool)
    if expected == _NUMBER:
        ok = isinstance(value, (int, float)) and not is_bool
    elif expected == _WINDOW:
        ok = isinstance(value, (str, int)) and not is_bool
    elif expected is int:
        ok = isinstance(value, int) and not is_bool
    else:
        ok = isinstance(value, expected)
    if not ok:
        raise ScriptError(f"line {line_no}: bad {key} {value!r}")
    return value

def parse_event(data: dict, line_no: int = 0) -> InputEvent:
    """Build an InputEvent from one decoded script object."""
    if not isinstance(data, dict) or "event" not in data:
        raise ScriptError(f"line {line_no}: expected an object with an 'event' key")
    kind = data["event"]
    if kind not in INPUT_EVENTS:
        raise ScriptError(f"line {line_no}: unknown event {kind!r}")

    schema = _EVENT_ARGS[kind]
    args = {}
    for key, value in data.items():
        if key == "event":
            continue
        if key not in schema:
            raise ScriptError(f"line {line_no}: unexpected argument {key!r} for {kind}")
        name, expected, _ = schema[key]
        args[name] = _convert(key, value, expected, line_no)

    missing = [key for key, (_, _, required) in schema.items() if required and key not in data]
    if missing:
        raise ScriptError(f"line {line_no}: {kind} needs {', '.join(missing)}")
    if kind == "pointer_down_on_task" and ("task" in args) == ("task_id" in args):
        raise ScriptError(f"line {line_no}: {kind} needs exactly one of task, task_id")
    return InputEvent(kind, args)


class JsonLinesEventSource:
    """
    Reads input events from a JSON-lines script file.

    Implements EventSource protocol.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path).expanduser()

    def read_events(self) -> list[InputEvent]:
        try:
            text = self.path.read_text()
        except OSError as e:
            raise ScriptError(f"cannot read {self.path}: {e}") from e

        events = []
        for line_no, line in enumerate(text.splitlines(), start=1):
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            try:
                data = json.loads(line)
            except json.JSONDecodeError as e:
                raise ScriptError(f"line {line_no}: invalid JSON: {e}") from e
            events.append(parse_event(data, line_no))
        return events


def _resolve_task_ref(session: PlannerSession, event: InputEvent) -> InputEvent:
    """Swap a "task" name reference for the matching task_id."""
    if "task" not in event.args:
        return event
    args = dict(event.args)
    name = args.pop("task")
    match = next((t for t in session.store.all() if t.name == name), None)
    # Unknown names fall through to an unknown id, which the session ignores.
    args["task_id"] = match.id if match else f"missing:{name}"
    return InputEvent(event.kind, args)


def replay(session: PlannerSession, events: list[InputEvent]) -> int:
    """Dispatch events into session in order. Returns the number dispatched."""
    for event in events:
        event = _resolve_task_ref(session, event)
        session.dispatch(event)
    logger.debug(f"Replayed {len(events)} events")
    return len(events)
