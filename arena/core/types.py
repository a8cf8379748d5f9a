"""
Core type definitions for the skirmish simulator.

Everything here is a small value type: coordinates, directions, factions,
cell contents and the enums the engine reports through.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Optional, Tuple

# (row, col). Tuple comparison of two GridPos values is reading order.
GridPos = Tuple[int, int]


def reading_order(pos: GridPos) -> GridPos:
    """Sort key for reading order: top-to-bottom, then left-to-right."""
    return pos[0], pos[1]


class Direction(Enum):
    """Orthogonal step directions, declared in tie-break priority order."""

    NORTH = (-1, 0)
    WEST = (0, -1)
    EAST = (0, 1)
    SOUTH = (1, 0)

    @property
    def delta(self) -> GridPos:
        """Return (d_row, d_col) for this direction."""
        return self.value

    def apply(self, pos: GridPos) -> GridPos:
        """Return the coordinate one step from pos in this direction."""
        d_row, d_col = self.delta
        return pos[0] + d_row, pos[1] + d_col


# North, West, East, South. Load-bearing: shared by movement and targeting.
DIRECTIONS: Tuple[Direction, ...] = (
    Direction.NORTH,
    Direction.WEST,
    Direction.EAST,
    Direction.SOUTH,
)


class Faction(Enum):
    """The two opposing sides. Value is the map marker."""

    ELF = "E"
    GOBLIN = "G"

    @property
    def marker(self) -> str:
        return self.value

    @property
    def enemy(self) -> Faction:
        """The opposing faction."""
        return Faction.GOBLIN if self is Faction.ELF else Faction.ELF

    @classmethod
    def from_marker(cls, marker: str) -> Faction:
        """Resolve a map character to a faction (ValueError if unknown)."""
        return cls(marker)


class CellKind(Enum):
    OPEN = "."
    WALL = "#"
    OCCUPIED = "@"


@dataclass(frozen=True)
class Cell:
    """
    Content of one grid cell.

    Use the shared Cell.OPEN / Cell.WALL values and Cell.occupied(unit_id)
    instead of building cells by hand.
    """

    kind: CellKind
    unit_id: Optional[int] = None

    OPEN: ClassVar[Cell]
    WALL: ClassVar[Cell]

    @classmethod
    def occupied(cls, unit_id: int) -> Cell:
        return cls(CellKind.OCCUPIED, unit_id)

    @property
    def is_open(self) -> bool:
        return self.kind is CellKind.OPEN

    @property
    def is_wall(self) -> bool:
        return self.kind is CellKind.WALL

    @property
    def is_occupied(self) -> bool:
        return self.kind is CellKind.OCCUPIED


Cell.OPEN = Cell(CellKind.OPEN)
Cell.WALL = Cell(CellKind.WALL)


class ActionType(Enum):
    """What a unit did with its turn."""

    WAIT = "wait"
    MOVE = "move"
    ATTACK = "attack"


class EngineState(Enum):
    """Turn engine states."""

    ROUND_START = "round_start"
    PROCESSING_UNIT = "processing_unit"
    ROUND_END = "round_end"
    TERMINATED = "terminated"


class Verdict(Enum):
    """
    Outcome of a run from the Elves' point of view.

    VICTORY: Elves won without losing a single unit.
    DEFEAT: Goblins won, or the Elves won but lost at least one unit.
    DEADLOCK: the run was stopped with both factions still alive.
    """

    VICTORY = "victory"
    DEFEAT = "defeat"
    DEADLOCK = "deadlock"
