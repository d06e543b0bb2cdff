"""
Pointer gesture state machine for creating, moving and resizing tasks.

Pure state transitions - no I/O. Dates under the pointer are resolved by
the caller; this module never hit-tests anything.

States:
    Idle      - no gesture
    Creating  - dragging across empty cells to select a new range
    Moving    - dragging a task body, duration preserved
    Resizing  - dragging one edge of a task
"""

import logging
from dataclasses import dataclass, replace
from datetime import date
from enum import Enum
from typing import TYPE_CHECKING

from .dates import add_days, date_span, normalize_range
from .tasks import TaskStore

if TYPE_CHECKING:
    from planner.ports.creation_request import CreationRequestHandler

logger = logging.getLogger(__name__)

# Width of the grab zone at each edge of a rendered chip.
EDGE_ZONE_PX = 10.0

MOVE_CURSOR = "move"
RESIZE_CURSOR = "ew-resize"


class Edge(Enum):
    START = "start"
    END = "end"


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Creating:
    anchor_date: date
    current_date: date

    @property
    def range(self) -> tuple[date, date]:
        return normalize_range(self.anchor_date, self.current_date)

    def preview_dates(self) -> list[date]:
        return date_span(self.anchor_date, self.current_date)


@dataclass(frozen=True)
class Moving:
    task_id: str
    provisional_start: date
    provisional_end: date


@dataclass(frozen=True)
class Resizing:
    task_id: str
    edge: Edge
    provisional_start: date
    provisional_end: date


GestureState = Idle | Creating | Moving | Resizing

IDLE = Idle()


def classify_press(
    offset_px: float,
    chip_width_px: float,
    edge_zone_px: float = EDGE_ZONE_PX,
) -> Edge | None:
    """
    Which gesture a press on a task chip starts.

    Returns Edge.START / Edge.END inside the edge zones, None for a move.
    The start zone wins when a narrow chip's zones overlap.
    """
    if offset_px < edge_zone_px:
        return Edge.START
    if offset_px > chip_width_px - edge_zone_px:
        return Edge.END
    return None


def cursor_for(state: GestureState) -> str:
    """Cursor hint for task chips while in the given state."""
    return RESIZE_CURSOR if isinstance(state, Resizing) else MOVE_CURSOR


class GestureController:
    """
    Drives one gesture at a time from pointer events.

    Move/Resize gestures commit to the store on release. A finished Create
    gesture is handed to creation_handler with a normalized (start, end);
    nothing is stored until that collaborator confirms.
    """

    def __init__(
        self,
        store: TaskStore,
        creation_handler: "CreationRequestHandler | None" = None,
        edge_zone_px: float = EDGE_ZONE_PX,
    ):
        self.store = store
        self.creation_handler = creation_handler
        self.edge_zone_px = edge_zone_px
        self._state: GestureState = IDLE

    @property
    def state(self) -> GestureState:
        return self._state

    @property
    def is_idle(self) -> bool:
        return isinstance(self._state, Idle)

    @property
    def cursor(self) -> str:
        return cursor_for(self._state)

    def _set(self, state: GestureState) -> None:
        if type(state) is not type(self._state):
            logger.debug(f"Gesture {type(self._state).__name__} -> {type(state).__name__}")
        self._state = state

    # ---- press ----

    def pointer_down_on_empty_cell(self, d: date) -> None:
        if not self.is_idle:
            return
        self._set(Creating(anchor_date=d, current_date=d))

    def pointer_down_on_task(self, task_id: str, offset_px: float, chip_width_px: float) -> None:
        if not self.is_idle:
            return
        task = self.store.get(task_id)
        if task is None:
            logger.debug(f"Press on unknown task {task_id}, ignoring")
            return
        edge = classify_press(offset_px, chip_width_px, self.edge_zone_px)
        if edge is None:
            self._set(Moving(task_id, task.start_date, task.end_date))
        else:
            self._set(Resizing(task_id, edge, task.start_date, task.end_date))

    # ---- drag ----

    def pointer_move(self, d: date) -> None:
        state = self._state
        match state:
            case Creating():
                self._set(replace(state, current_date=d))
            case Moving():
                task = self.store.get(state.task_id)
                if task is None:
                    return
                self._set(replace(state, provisional_start=d, provisional_end=add_days(d, task.duration_days)))
            case Resizing(edge=Edge.START):
                # The edge may not cross the opposite one.
                if d <= state.provisional_end:
                    self._set(replace(state, provisional_start=d))
            case Resizing(edge=Edge.END):
                if d >= state.provisional_start:
                    self._set(replace(state, provisional_end=d))

    # ---- release ----

    def pointer_up(self) -> None:
        state = self._state
        self._set(IDLE)
        match state:
            case Creating():
                start, end = state.range
                if self.creation_handler is not None:
                    self.creation_handler.request_creation(start, end)
            case Moving() | Resizing():
                self.store.update_range(state.task_id, state.provisional_start, state.provisional_end)

    def pointer_leave_surface(self) -> None:
        """Leaving the grid discards a Create selection and commits Move/Resize."""
        if isinstance(self._state, Creating):
            logger.debug("Pointer left surface, discarding selection")
            self._set(IDLE)
            return
        self.pointer_up()

    # ---- derived ----

    def selection_preview(self) -> list[date]:
        """Dates highlighted by an active Create gesture, chronological."""
        if isinstance(self._state, Creating):
            return self._state.preview_dates()
        return []

    def provisional_range(self, task_id: str) -> tuple[date, date] | None:
        """In-progress range for task_id, if it is being moved or resized."""
        state = self._state
        if isinstance(state, (Moving, Resizing)) and state.task_id == task_id:
            return state.provisional_start, state.provisional_end
        return None

    @property
    def active_task_id(self) -> str | None:
        if isinstance(self._state, (Moving, Resizing)):
            return self._state.task_id
        return None
