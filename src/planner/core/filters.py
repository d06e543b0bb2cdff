"""Visible-task filtering - no I/O dependencies."""

from dataclasses import dataclass, field
from datetime import date
from typing import Iterable

from .dates import add_days, ranges_intersect
from .errors import InvalidInputError
from .tasks import Category, Task

TIME_WINDOW_CHOICES = ("all", "1", "2", "3")


def parse_time_window(value: "str | int | None") -> int | None:
    """
    Parse a time window choice.

    "all" (or None) means no window; "1".."3" are whole weeks from today.
    Raises InvalidInputError for any other value.
    """
    if value is None:
        return None
    text = str(value).strip().lower()
    if text not in TIME_WINDOW_CHOICES:
        raise InvalidInputError(f"Unknown time window: {value!r}")
    if text == "all":
        return None
    return int(text)


def format_time_window(weeks: int | None) -> str:
    return "all" if weeks is None else str(weeks)


@dataclass
class FilterCriteria:
    """What the user asked to see. Derived each render, never stored with tasks."""

    search_text: str = ""
    categories: set[Category] = field(default_factory=lambda: set(Category))
    time_window_weeks: int | None = None

    def window(self, today: date) -> tuple[date, date] | None:
        """The inclusive [today, today + 7w] window, or None for "all"."""
        if self.time_window_weeks is None:
            return None
        return today, add_days(today, self.time_window_weeks * 7)

    def matches(self, task: Task, today: date) -> bool:
        if task.category not in self.categories:
            return False
        if self.search_text.lower() not in task.name.lower():
            return False
        window = self.window(today)
        if window is None:
            return True
        return ranges_intersect(task.start_date, task.end_date, *window)


def visible_tasks(
    tasks: Iterable[Task],
    criteria: FilterCriteria,
    today: date | None = None,
) -> list[Task]:
    """
    Tasks passing category, case-insensitive name and time-window filters.

    Stable: keeps the input order. Pure function - no I/O.
    """
    today = today or date.today()
    return [t for t in tasks if criteria.matches(t, today)]
