"""Exceptions raised by the planner core."""


class PlannerError(Exception):
    """Base class for planner errors."""


class InvalidInputError(PlannerError, ValueError):
    """A value from the input surface is outside its closed set."""
