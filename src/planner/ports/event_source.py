"""Input event source interface."""

from typing import Protocol

from planner.session import InputEvent


class EventSource(Protocol):
    """Interface for delivering input events to a session."""

    def read_events(self) -> list[InputEvent]:
        """Return all events in arrival order."""
        ...
