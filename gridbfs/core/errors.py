# gridbfs/core/errors.py
"""Errors raised by the grid model, the generator and the BFS stepper."""


class GridSearchError(Exception):
    """Base class for every error the core raises."""


class OutOfBounds(GridSearchError, IndexError):
    """A coordinate lies outside [0, N) x [0, N)."""

    def __init__(self, pos, size: int):
        self.pos = pos
        self.size = size
        super().__init__(f"{pos} is outside a {size}x{size} grid")


class InvalidState(GridSearchError, RuntimeError):
    """Operation not allowed in the stepper's current state."""


class DegenerateGrid(GridSearchError, ValueError):
    """Grid too small to hold a distinct source and destination."""
