"""
UnitRegistry - owner of every combatant in a battle.

Units live in a list indexed by their id (the registry slot). Dead units
stay in the list as tombstones so ids stay stable; they are simply no
longer alive and no longer on the grid.
"""

from __future__ import annotations

from typing import Iterator, List, Optional

from ..core.errors import InvariantViolation
from ..core.types import Cell, Faction, GridPos, reading_order
from ..entities.unit import DEFAULT_ATTACK_POWER, DEFAULT_HIT_POINTS, Unit
from .grid import Grid


class UnitRegistry:
    """
    Units indexed by stable id, kept in lock-step with a Grid.

    Every mutation (add, move, damage) updates the unit and the grid cell
    together, so callers never observe the two disagreeing.
    """

    def __init__(self, grid: Grid):
        self.grid = grid
        self._units: List[Unit] = []

    # ------------------------------------------------------------------#
    # Setup
    # ------------------------------------------------------------------#
    def add(
        self,
        faction: Faction,
        pos: GridPos,
        hit_points: int = DEFAULT_HIT_POINTS,
        attack_power: int = DEFAULT_ATTACK_POWER,
    ) -> Unit:
        """Create a unit in the next slot and place it on the grid."""
        if not self.grid.is_open(pos):
            raise InvariantViolation(f"Cannot place unit at {pos}: cell is not open")
        unit = Unit(
            id=len(self._units),
            faction=faction,
            pos=pos,
            hit_points=hit_points,
            attack_power=attack_power,
        )
        self._units.append(unit)
        self.grid.set_cell(pos, Cell.occupied(unit.id))
        return unit

    def restore(self, unit: Unit) -> None:
        """Re-insert a deserialized unit into the next slot."""
        if unit.id != len(self._units):
            raise ValueError(f"Unit ids must be contiguous: expected {len(self._units)}, got {unit.id}")
        self._units.append(unit)
        if unit.alive:
            if not self.grid.is_open(unit.pos):
                raise InvariantViolation(f"Cannot restore {unit.label()} at {unit.pos}: cell is not open")
            self.grid.set_cell(unit.pos, Cell.occupied(unit.id))

    # ------------------------------------------------------------------#
    # Queries
    # ------------------------------------------------------------------#
    def get(self, unit_id: int) -> Unit:
        if not 0 <= unit_id < len(self._units):
            raise InvariantViolation(f"Unknown unit id: {unit_id}")
        return self._units[unit_id]

    def unit_at(self, pos: GridPos) -> Optional[Unit]:
        """The living unit standing on pos, if any."""
        cell = self.grid.cell_at(pos)
        if not cell.is_occupied:
            return None
        return self.get(cell.unit_id)

    def all_units(self) -> List[Unit]:
        """All units, tombstones included, in id order."""
        return list(self._units)

    def alive_units(self, faction: Optional[Faction] = None) -> List[Unit]:
        return [
            u for u in self._units
            if u.alive and (faction is None or u.faction is faction)
        ]

    def turn_order(self) -> List[int]:
        """Ids of living units sorted by reading order of their position."""
        alive = [u for u in self._units if u.alive]
        alive.sort(key=lambda u: reading_order(u.pos))
        return [u.id for u in alive]

    def is_alive(self, unit_id: int) -> bool:
        return self.get(unit_id).alive

    def has_living(self, faction: Faction) -> bool:
        return any(u.alive and u.faction is faction for u in self._units)

    def remaining_hit_points(self, faction: Optional[Faction] = None) -> int:
        return sum(u.hit_points for u in self.alive_units(faction))

    def casualties(self, faction: Faction) -> int:
        """Number of dead units of a faction."""
        return sum(1 for u in self._units if not u.alive and u.faction is faction)

    # ------------------------------------------------------------------#
    # Mutations
    # ------------------------------------------------------------------#
    def apply_damage(self, unit_id: int, amount: int) -> bool:
        """
        Subtract hit points, clamping at 0.

        At 0 the unit dies: it is flagged dead and its cell is freed.

        Returns:
            True exactly when this call killed the unit.
        """
        unit = self.get(unit_id)
        if not unit.alive:
            raise InvariantViolation(f"{unit.label()} is already dead")
        if amount < 0:
            raise InvariantViolation(f"Negative damage: {amount}")

        unit.hit_points = max(0, unit.hit_points - amount)
        if unit.hit_points > 0:
            return False

        unit.alive = False
        self.grid.set_cell(unit.pos, Cell.OPEN)
        return True

    def move_unit(self, unit_id: int, new_pos: GridPos) -> None:
        """Move a living unit one orthogonal step into an open cell."""
        unit = self.get(unit_id)
        if not unit.alive:
            raise InvariantViolation(f"{unit.label()} is dead and cannot move")
        if new_pos not in self.grid.neighbors(unit.pos):
            raise InvariantViolation(f"{unit.label()} cannot jump from {unit.pos} to {new_pos}")
        if not self.grid.is_open(new_pos):
            raise InvariantViolation(f"{unit.label()} cannot move into occupied cell {new_pos}")

        self.grid.set_cell(new_pos, Cell.occupied(unit.id))
        self.grid.set_cell(unit.pos, Cell.OPEN)
        unit.pos = new_pos

    def __iter__(self) -> Iterator[Unit]:
        return iter(self._units)

    def __len__(self) -> int:
        return len(self._units)
