"""
BattleWorld - the complete mutable state of one simulation run.
"""

from __future__ import annotations

import copy
from typing import Any, Dict, List, Optional

from ..core.errors import InvariantViolation
from ..core.types import Cell, Faction, GridPos
from ..entities.unit import Unit
from .grid import Grid
from .registry import UnitRegistry


class BattleWorld:
    """
    Grid + unit registry + round bookkeeping.

    A world is owned by exactly one engine run. Use clone() to get an
    independent copy (e.g. for a boosted re-run or a frame snapshot).

    Attributes:
        grid: Dense cell grid
        units: Registry of all units (tombstones included)
        completed_rounds: Rounds that ran to completion
        game_over: Set once the engine terminates
        winner: Faction with survivors, None on deadlock or while running
        game_over_reason: Short machine-friendly reason string
    """

    def __init__(self, grid: Grid):
        self.grid = grid
        self.units = UnitRegistry(grid)
        self.completed_rounds = 0
        self.game_over = False
        self.winner: Optional[Faction] = None
        self.game_over_reason: Optional[str] = None

    # ------------------------------------------------------------------#
    # Convenience queries
    # ------------------------------------------------------------------#
    def get_unit(self, unit_id: int) -> Unit:
        return self.units.get(unit_id)

    def unit_at(self, pos: GridPos) -> Optional[Unit]:
        return self.units.unit_at(pos)

    def living_enemies(self, unit: Unit) -> List[Unit]:
        return self.units.alive_units(unit.faction.enemy)

    def adjacent_enemies(self, unit: Unit) -> List[Unit]:
        """Living enemies orthogonally adjacent to unit, in N/W/E/S order."""
        out: List[Unit] = []
        for pos in self.grid.neighbors(unit.pos):
            other = self.units.unit_at(pos)
            if other is not None and unit.is_enemy(other):
                out.append(other)
        return out

    def remaining_hit_points(self) -> int:
        return self.units.remaining_hit_points()

    # ------------------------------------------------------------------#
    # Integrity
    # ------------------------------------------------------------------#
    def check_invariants(self) -> None:
        """
        Verify that grid cells and unit positions agree.

        Raises:
            InvariantViolation: on the first disagreement found
        """
        seen = set()
        for pos in self.grid.positions():
            cell = self.grid.cell_at(pos)
            if not cell.is_occupied:
                continue
            unit = self.units.get(cell.unit_id)
            if not unit.alive:
                raise InvariantViolation(f"Dead {unit.label()} still on grid at {pos}")
            if unit.pos != pos:
                raise InvariantViolation(f"{unit.label()} recorded at {unit.pos} but found at {pos}")
            seen.add(unit.id)

        for unit in self.units:
            if unit.hit_points < 0:
                raise InvariantViolation(f"{unit.label()} has negative hit points")
            if unit.alive and unit.id not in seen:
                raise InvariantViolation(f"{unit.label()} is alive but missing from the grid")
            if unit.alive and unit.hit_points == 0:
                raise InvariantViolation(f"{unit.label()} has 0 hit points but is alive")

    # ------------------------------------------------------------------#
    # Copy / serialization
    # ------------------------------------------------------------------#
    def clone(self) -> BattleWorld:
        """Deep copy; shares no mutable state with self."""
        return copy.deepcopy(self)

    def to_dict(self) -> Dict[str, Any]:
        terrain = []
        for row in range(self.grid.height):
            terrain.append("".join(
                "#" if self.grid.cell_at((row, col)).is_wall else "."
                for col in range(self.grid.width)
            ))
        return {
            "terrain": terrain,
            "units": [u.to_dict() for u in self.units],
            "completed_rounds": self.completed_rounds,
            "game_over": self.game_over,
            "winner": self.winner.name if self.winner else None,
            "game_over_reason": self.game_over_reason,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> BattleWorld:
        rows = [
            [Cell.WALL if ch == "#" else Cell.OPEN for ch in line]
            for line in data["terrain"]
        ]
        world = cls(Grid(rows))
        for unit_data in sorted(data["units"], key=lambda d: d["id"]):
            world.units.restore(Unit.from_dict(unit_data))
        world.completed_rounds = data.get("completed_rounds", 0)
        world.game_over = data.get("game_over", False)
        winner = data.get("winner")
        world.winner = Faction[winner] if winner else None
        world.game_over_reason = data.get("game_over_reason")
        world.check_invariants()
        return world

    def __repr__(self) -> str:
        return (f"BattleWorld({self.grid.height}x{self.grid.width}, "
                f"units={len(self.units)}, rounds={self.completed_rounds})")
