"""Ports - interfaces for the planner's external collaborators."""

from .creation_request import CreationRequestHandler
from .event_source import EventSource
from .renderer import GridRenderer

__all__ = [
    "CreationRequestHandler",
    "EventSource",
    "GridRenderer",
]
