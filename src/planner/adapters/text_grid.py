"""Plain-text month grid renderer."""

from typing import Sequence

from planner.core.dates import WEEKDAY_HEADERS
from planner.core.grid import CalendarDay, TaskSlot, weeks


class TextGridRenderer:
    """
    Draws the grid as fixed-width text, one bar row per task slot.

    Implements GridRenderer protocol. Multi-day tasks render as a
    continuous bar: "[Name====" on the first day, "=====" between,
    "====]" on the last. A task being dragged uses "~" instead of "=".
    """

    def __init__(self, cell_width: int = 12):
        self.cell_width = cell_width

    def _day_label(self, day: CalendarDay) -> str:
        number = str(day.date.day) if day.in_current_month else f"({day.date.day})"
        marks = ("*" if day.is_today else "") + ("+" if day.is_in_selection_preview else "")
        return f"{number}{marks}"

    def _slot_text(self, slot: TaskSlot) -> str:
        w = self.cell_width - 1
        fill = "~" if slot.is_dragged else "="
        left = "[" if slot.is_range_start else fill
        right = "]" if slot.is_range_end else fill
        label = slot.task.name if slot.show_label else ""
        inner = label[: w - 2].ljust(w - 2, fill)
        return left + inner + right

    def render(self, title: str, days: Sequence[CalendarDay]) -> str:
        cw = self.cell_width
        lines = [title, " ".join(h.ljust(cw - 1) for h in WEEKDAY_HEADERS).rstrip()]
        for week in weeks(days):
            lines.append(" ".join(self._day_label(d).ljust(cw - 1) for d in week).rstrip())
            depth = max((len(d.slots) for d in week), default=0)
            for row in range(depth):
                cells = [
                    self._slot_text(d.slots[row]) if row < len(d.slots) else " " * (cw - 1)
                    for d in week
                ]
                lines.append(" ".join(cells).rstrip())
        return "\n".join(lines)
