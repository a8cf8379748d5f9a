"""Core value types, actions and errors."""

from .types import (
    DIRECTIONS,
    ActionType,
    Cell,
    CellKind,
    Direction,
    EngineState,
    Faction,
    GridPos,
    Verdict,
    reading_order,
)
from .actions import Action
from .errors import InvariantViolation, MapFormatError

__all__ = [
    "DIRECTIONS",
    "Action",
    "ActionType",
    "Cell",
    "CellKind",
    "Direction",
    "EngineState",
    "Faction",
    "GridPos",
    "InvariantViolation",
    "MapFormatError",
    "Verdict",
    "reading_order",
]
