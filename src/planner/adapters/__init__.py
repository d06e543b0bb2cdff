"""Adapters - I/O implementations of ports."""

from .event_script import JsonLinesEventSource, ScriptError, replay
from .text_grid import TextGridRenderer

__all__ = [
    "JsonLinesEventSource",
    "ScriptError",
    "replay",
    "TextGridRenderer",
]
