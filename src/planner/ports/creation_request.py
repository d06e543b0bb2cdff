"""Task creation request interface."""

from datetime import date
from typing import Protocol


class CreationRequestHandler(Protocol):
    """Interface for the collaborator that turns a selected range into a task."""

    def request_creation(self, start: date, end: date) -> None:
        """Receive a finished Create selection, normalized so start <= end."""
        ...
