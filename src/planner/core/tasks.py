"""Task model and the authoritative task store - no I/O dependencies."""

import logging
import uuid
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Callable, Iterator, Sequence

from .dates import in_range
from .errors import InvalidInputError

logger = logging.getLogger(__name__)


class Category(Enum):
    """Fixed set of task categories."""

    TODO = "To Do"
    IN_PROGRESS = "In Progress"
    REVIEW = "Review"
    COMPLETED = "Completed"

    @property
    def label(self) -> str:
        return self.value

    @property
    def color(self) -> str:
        """Color key renderers use for this category's chips."""
        return _CATEGORY_COLORS[self]


_CATEGORY_COLORS = {
    Category.TODO: "blue",
    Category.IN_PROGRESS: "yellow",
    Category.REVIEW: "purple",
    Category.COMPLETED: "green",
}


def parse_category(value: "str | Category") -> Category:
    """
    Resolve a category from its label ("In Progress"), member name
    ("IN_PROGRESS") or compact form ("inprogress").

    Raises InvalidInputError for anything else.
    """
    if isinstance(value, Category):
        return value
    compact = value.strip().replace(" ", "").replace("_", "").lower()
    for category in Category:
        if compact in (category.label.replace(" ", "").lower(), category.name.replace("_", "").lower()):
            return category
    raise InvalidInputError(f"Unknown category: {value!r}")


@dataclass
class Task:
    """A planning unit spanning an inclusive range of whole days."""

    id: str
    name: str
    category: Category
    start_date: date
    end_date: date

    @property
    def duration_days(self) -> int:
        """Days from start to end (0 for a single-day task)."""
        return (self.end_date - self.start_date).days

    def covers(self, d: date) -> bool:
        return in_range(d, self.start_date, self.end_date)


def _new_id() -> str:
    return uuid.uuid4().hex


class TaskStore:
    """
    Owns the tasks, in insertion order.

    Mutation goes through create() and update_range() only. Ranges are
    never normalized here; callers order start/end before calling.
    """

    def __init__(self, id_factory: Callable[[], str] = _new_id):
        self._tasks: list[Task] = []
        self._id_factory = id_factory

    def create(
        self,
        name: str,
        category: Category,
        start_date: date,
        end_date: date,
    ) -> Task | None:
        """Add a task. Returns None (nothing stored) if the name is blank."""
        name = name.strip()
        if not name:
            logger.debug("Rejected task creation with blank name")
            return None
        task = Task(
            id=self._id_factory(),
            name=name,
            category=category,
            start_date=start_date,
            end_date=end_date,
        )
        self._tasks.append(task)
        logger.debug(f"Created task {task.id} {start_date}..{end_date}")
        return task

    def update_range(self, task_id: str, start_date: date, end_date: date) -> None:
        """Replace a task's start/end. Unknown ids are ignored."""
        task = self.get(task_id)
        if task is None:
            logger.debug(f"update_range for unknown task {task_id}, ignoring")
            return
        task.start_date = start_date
        task.end_date = end_date
        logger.debug(f"Updated task {task_id} to {start_date}..{end_date}")

    def get(self, task_id: str) -> Task | None:
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    def all(self) -> Sequence[Task]:
        """Read-only view of all tasks in insertion order."""
        return tuple(self._tasks)

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(tuple(self._tasks))
