"""Month grid model - no I/O dependencies."""

from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, Sequence

from .dates import days_in_month_grid
from .tasks import Task


@dataclass
class TaskSlot:
    """One task's appearance on one day of the grid."""

    task: Task
    is_range_start: bool
    is_range_end: bool
    is_dragged: bool = False

    @property
    def is_middle(self) -> bool:
        return not self.is_range_start and not self.is_range_end

    @property
    def show_label(self) -> bool:
        """Names are drawn only on the first day of a bar."""
        return self.is_range_start


@dataclass
class CalendarDay:
    """A cell of the 6x7 month grid."""

    date: date
    in_current_month: bool
    is_today: bool
    is_in_selection_preview: bool
    slots: list[TaskSlot] = field(default_factory=list)

    @property
    def tasks(self) -> list[Task]:
        return [s.task for s in self.slots]


def tasks_for_date(d: date, tasks: Iterable[Task]) -> list[Task]:
    """Tasks whose inclusive range contains d, in input order."""
    return [t for t in tasks if t.covers(d)]


def build_grid(
    anchor: date,
    today: date,
    tasks: Sequence[Task],
    selection_preview: Iterable[date] = (),
    dragged_task_id: str | None = None,
) -> list[CalendarDay]:
    """
    Build the 42 CalendarDays for anchor's month.

    `tasks` should already be filtered. Each day lists the tasks touching
    it with start/end flags so renderers can draw continuous bars.
    Pure function - no I/O.
    """
    preview = set(selection_preview)
    days = []
    for d in days_in_month_grid(anchor):
        slots = [
            TaskSlot(
                task=t,
                is_range_start=d == t.start_date,
                is_range_end=d == t.end_date,
                is_dragged=t.id == dragged_task_id,
            )
            for t in tasks_for_date(d, tasks)
        ]
        days.append(
            CalendarDay(
                date=d,
                in_current_month=d.month == anchor.month,
                is_today=d == today,
                is_in_selection_preview=d in preview,
                slots=slots,
            )
        )
    return days


def weeks(days: Sequence[CalendarDay]) -> list[list[CalendarDay]]:
    """Split a grid into rows of seven."""
    return [list(days[i : i + 7]) for i in range(0, len(days), 7)]
