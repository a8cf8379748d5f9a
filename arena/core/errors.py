"""
Exception types raised by the simulator.

MapFormatError is bad input and is reported to the caller before any
simulation starts. InvariantViolation signals a defect in the simulator
itself; nothing in the core catches it.
"""

from __future__ import annotations

from typing import Optional


class MapFormatError(ValueError):
    """Raised when a text map cannot be turned into a battle grid."""

    def __init__(self, message: str, row: Optional[int] = None, col: Optional[int] = None):
        self.row = row
        self.col = col
        if row is not None and col is not None:
            message = f"{message} (row {row}, column {col})"
        elif row is not None:
            message = f"{message} (row {row})"
        super().__init__(message)


class InvariantViolation(RuntimeError):
    """Raised when grid, registry or engine state disagree."""
    pass
