"""Configuration management for the planner."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from .core.errors import InvalidInputError
from .core.filters import parse_time_window
from .core.gestures import EDGE_ZONE_PX
from .core.tasks import Category, parse_category

logger = logging.getLogger(__name__)

PLANNER_HOME = Path(os.environ.get("PLANNER_HOME", Path.home() / ".planner"))
CONFIG_FILE = PLANNER_HOME / "config" / "planner.conf"


@dataclass
class Config:
    """Planner configuration."""

    edge_zone_px: float = EDGE_ZONE_PX
    default_category: Category = Category.TODO
    time_window_weeks: int | None = None
    categories: set[Category] = field(default_factory=lambda: set(Category))


def _unquote(value: str) -> str:
    """Strip surrounding quotes, or an inline comment from an unquoted value."""
    for quote in ('"', "'"):
        if value.startswith(quote):
            end_quote = value.find(quote, 1)
            return value[1:end_quote] if end_quote != -1 else value[1:]
    if "#" in value:
        value = value.split("#")[0].strip()
    return value


def load_config(path: Path | None = None) -> Config:
    """Load configuration from planner.conf, keeping defaults for bad values."""
    config = Config()
    path = path or CONFIG_FILE

    if not path.exists():
        return config

    for line in path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = _unquote(value.strip())

        try:
            match key:
                case "edge_zone_px":
                    zone = float(value)
                    if zone < 0:
                        raise ValueError(f"negative edge zone {zone}")
                    config.edge_zone_px = zone
                case "default_category":
                    config.default_category = parse_category(value)
                case "time_window":
                    config.time_window_weeks = parse_time_window(value)
                case "categories":
                    config.categories = {parse_category(c) for c in value.split(",") if c.strip()}
                case _:
                    logger.warning(f"Unknown config key: {key}")
        except (InvalidInputError, ValueError) as e:
            logger.warning(f"Ignoring invalid {key.upper()} in {path}: {e}")

    return config
