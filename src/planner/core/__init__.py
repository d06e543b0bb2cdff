"""Functional core - pure planner logic with no I/O."""

from .dates import (
    add_days,
    date_span,
    days_in_month_grid,
    in_range,
    month_title,
    ranges_intersect,
    shift_month,
    to_date_key,
)
from .errors import InvalidInputError, PlannerError
from .filters import FilterCriteria, parse_time_window, visible_tasks
from .gestures import (
    Creating,
    Edge,
    GestureController,
    GestureState,
    Idle,
    Moving,
    Resizing,
    classify_press,
)
from .grid import CalendarDay, TaskSlot, build_grid
from .tasks import Category, Task, TaskStore, parse_category

__all__ = [
    # Dates
    "add_days",
    "date_span",
    "days_in_month_grid",
    "in_range",
    "month_title",
    "ranges_intersect",
    "shift_month",
    "to_date_key",
    # Errors
    "InvalidInputError",
    "PlannerError",
    # Tasks
    "Category",
    "Task",
    "TaskStore",
    "parse_category",
    # Filters
    "FilterCriteria",
    "parse_time_window",
    "visible_tasks",
    # Gestures
    "Creating",
    "Edge",
    "GestureController",
    "GestureState",
    "Idle",
    "Moving",
    "Resizing",
    "classify_press",
    # Grid
    "CalendarDay",
    "TaskSlot",
    "build_grid",
]
