"""Errors raised by colony operations.

All of them are recoverable: callers turn them into event-log entries.
"""


class ColonyError(Exception):
    """Base class for rejected colony operations."""


class NotFoundError(ColonyError):
    """A building or research name is not in its registry."""

    def __init__(self, kind: str, name: str):
        super().__init__(f"{kind} not found")
        self.kind = kind
        self.name = name


class InsufficientResourceError(ColonyError):
    """A construction cost exceeds the available stock."""

    def __init__(self, resource: str):
        super().__init__(f"Not enough {resource}.")
        self.resource = resource


class AlreadyCompletedError(ColonyError):
    """Research was attempted again after completion."""

    def __init__(self, name: str):
        super().__init__("Research already completed")
        self.name = name


class InsufficientTechPointsError(ColonyError):
    """Research cost exceeds the accumulated tech points."""

    def __init__(self, cost: float, available: float):
        super().__init__("Not enough tech points")
        self.cost = cost
        self.available = available
