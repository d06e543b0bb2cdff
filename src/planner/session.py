"""Planner session - the single owner of interactive state.

Wires the task store, filter criteria, gesture controller and month
anchor together and exposes the input surface (pointer, filter,
navigation and creation-form events) and the output surface (grid days,
gesture state, pending creation range) to a rendering collaborator.

Every input method is total: invalid values are logged and ignored.
"""

import logging
from dataclasses import dataclass, field, replace
from datetime import date
from typing import Any, Callable

from .config import Config
from .core.dates import first_of_month, month_title, normalize_range, shift_month
from .core.errors import InvalidInputError
from .core.filters import FilterCriteria, parse_time_window, visible_tasks
from .core.gestures import GestureController, GestureState
from .core.grid import CalendarDay, build_grid
from .core.tasks import Category, Task, TaskStore, parse_category

logger = logging.getLogger(__name__)


def _is_day(value) -> bool:
    return isinstance(value, date)


@dataclass
class CreationForm:
    """Pending task awaiting a name, opened by a finished Create gesture."""

    name: str
    category: Category
    start_date: date
    end_date: date


@dataclass(frozen=True)
class InputEvent:
    """One event for PlannerSession.dispatch: method name plus keyword args."""

    kind: str
    args: dict[str, Any] = field(default_factory=dict)


INPUT_EVENTS = (
    "pointer_down_on_empty_cell",
    "pointer_down_on_task",
    "pointer_move",
    "pointer_up",
    "pointer_leave_surface",
    "month_navigate",
    "set_search_text",
    "toggle_category_filter",
    "set_time_window",
    "update_creation_form",
    "confirm_task_creation",
    "cancel_task_creation",
)


class PlannerSession:
    """Coordinator for one interactive planner surface."""

    def __init__(
        self,
        config: Config | None = None,
        today: Callable[[], date] = date.today,
        store: TaskStore | None = None,
    ):
        self.config = config or Config()
        self._today = today
        self.store = store or TaskStore()
        self.criteria = FilterCriteria(
            categories=set(self.config.categories),
            time_window_weeks=self.config.time_window_weeks,
        )
        self.gestures = GestureController(
            self.store,
            creation_handler=self,
            edge_zone_px=self.config.edge_zone_px,
        )
        self.anchor = first_of_month(self.today())
        self.creation_form: CreationForm | None = None

    def today(self) -> date:
        return self._today()

    # ============== Pointer input ==============

    def pointer_down_on_empty_cell(self, d: date) -> None:
        if not _is_day(d):
            logger.warning(f"Ignoring press on non-date {d!r}")
            return
        if self.creation_form is None:
            self.gestures.pointer_down_on_empty_cell(d)

    def pointer_down_on_task(self, task_id: str, offset_px: float, chip_width_px: float) -> None:
        if self.creation_form is None:
            self.gestures.pointer_down_on_task(task_id, offset_px, chip_width_px)

    def pointer_move(self, d: date) -> None:
        if not _is_day(d):
            logger.warning(f"Ignoring move to non-date {d!r}")
            return
        self.gestures.pointer_move(d)

    def pointer_up(self) -> None:
        self.gestures.pointer_up()

    def pointer_leave_surface(self) -> None:
        self.gestures.pointer_leave_surface()

    # ============== Navigation and filters ==============

    def month_navigate(self, delta: int) -> None:
        """-1/+1 step a month; 0 jumps to today's month."""
        if delta not in (-1, 0, 1):
            logger.warning(f"Ignoring month navigation by {delta!r}")
            return
        if delta == 0:
            self.anchor = first_of_month(self.today())
        else:
            self.anchor = shift_month(self.anchor, delta)

    def set_search_text(self, text: str) -> None:
        if not isinstance(text, str):
            logger.warning(f"Ignoring non-text search {text!r}")
            return
        self.criteria.search_text = text

    def toggle_category_filter(self, category: "str | Category", enabled: bool) -> None:
        try:
            cat = parse_category(category)
        except InvalidInputError as e:
            logger.warning(f"Ignoring category filter: {e}")
            return
        if enabled:
            self.criteria.categories.add(cat)
        else:
            self.criteria.categories.discard(cat)

    def set_time_window(self, value: "str | int | None") -> None:
        try:
            self.criteria.time_window_weeks = parse_time_window(value)
        except InvalidInputError as e:
            logger.warning(f"Ignoring time window: {e}")

    # ============== Creation form ==============

    def request_creation(self, start: date, end: date) -> None:
        """Open the creation form for a finished Create selection."""
        self.creation_form = CreationForm(
            name="",
            category=self.config.default_category,
            start_date=start,
            end_date=end,
        )
        logger.debug(f"Opened creation form for {start}..{end}")

    def update_creation_form(
        self,
        name: str | None = None,
        category: "str | Category | None" = None,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> None:
        form = self.creation_form
        if form is None:
            return
        if category is not None:
            try:
                form.category = parse_category(category)
            except InvalidInputError as e:
                logger.warning(f"Ignoring form category: {e}")
        if isinstance(name, str):
            form.name = name
        if _is_day(start_date):
            form.start_date = start_date
        if _is_day(end_date):
            form.end_date = end_date

    def confirm_task_creation(
        self,
        name: str | None = None,
        category: "str | Category | None" = None,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> Task | None:
        """
        Store a task from the explicit arguments, falling back to the open form.

        Returns None (and keeps the form open) when the name is blank or a
        field is missing or invalid.
        """
        form = self.creation_form
        if form is not None:
            name = form.name if name is None else name
            category = form.category if category is None else category
            start_date = start_date or form.start_date
            end_date = end_date or form.end_date

        if not isinstance(name, str) or not _is_day(start_date) or not _is_day(end_date):
            logger.warning("Ignoring task creation without a name and start/end dates")
            return None
        try:
            cat = parse_category(category if category is not None else self.config.default_category)
        except InvalidInputError as e:
            logger.warning(f"Ignoring task creation: {e}")
            return None

        start, end = normalize_range(start_date, end_date)
        task = self.store.create(name, cat, start, end)
        if task is not None:
            self.creation_form = None
        elif form is not None:
            form.name = name
        return task

    def cancel_task_creation(self) -> None:
        self.creation_form = None

    # ============== Output surface ==============

    @property
    def gesture_state(self) -> GestureState:
        return self.gestures.state

    @property
    def cursor(self) -> str:
        return self.gestures.cursor

    @property
    def pending_creation_range(self) -> tuple[date, date] | None:
        if self.creation_form is None:
            return None
        return self.creation_form.start_date, self.creation_form.end_date

    @property
    def title(self) -> str:
        return month_title(self.anchor)

    def visible_tasks(self) -> list[Task]:
        """Committed tasks passing the current filters."""
        return visible_tasks(self.store.all(), self.criteria, self.today())

    def display_tasks(self) -> list[Task]:
        """Visible tasks, with a dragged task shown at its provisional range."""
        tasks = self.visible_tasks()
        task_id = self.gestures.active_task_id
        if task_id is None:
            return tasks
        provisional = self.gestures.provisional_range(task_id)
        return [
            replace(t, start_date=provisional[0], end_date=provisional[1]) if t.id == task_id else t
            for t in tasks
        ]

    def calendar_days(self) -> list[CalendarDay]:
        return build_grid(
            self.anchor,
            self.today(),
            self.display_tasks(),
            selection_preview=self.gestures.selection_preview(),
            dragged_task_id=self.gestures.active_task_id,
        )

    # ============== Dispatch ==============

    def dispatch(self, event: InputEvent) -> Any:
        """Route an InputEvent to the matching input method."""
        if event.kind not in INPUT_EVENTS:
            logger.warning(f"Ignoring unknown event {event.kind!r}")
            return None
        logger.debug(f"Event {event.kind} {event.args}")
        return getattr(self, event.kind)(**event.args)
