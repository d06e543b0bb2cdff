"""Grid renderer interface."""

from typing import Protocol, Sequence

from planner.core.grid import CalendarDay


class GridRenderer(Protocol):
    """Interface for anything that draws the month grid."""

    def render(self, title: str, days: Sequence[CalendarDay]) -> str:
        """Render a 42-day grid under a month title."""
        ...
