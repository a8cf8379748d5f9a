"""
Pathfinder - movement target and next-step selection.

This module handles:
- Finding the in-range cells (open cells next to a living enemy)
- Breadth-first distances over open cells
- Picking the nearest in-range cell (ties: reading order)
- Picking the first step toward it (ties: reading order)
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, Optional, Set

from ..core.types import GridPos, reading_order

if TYPE_CHECKING:
    from ..entities.unit import Unit
    from ..world.grid import Grid
    from ..world.world import BattleWorld


class PlanStatus(Enum):
    NO_ENEMIES = "no_enemies"    # combat is already over for this unit
    IN_RANGE = "in_range"        # adjacent to an enemy, no move needed
    UNREACHABLE = "unreachable"  # no in-range cell can be reached
    STEP = "step"                # move to `step`


@dataclass(frozen=True)
class PathPlan:
    """
    Movement decision for one unit turn.

    Attributes:
        status: What the pathfinder concluded
        target: Chosen in-range cell (STEP only)
        step: Adjacent cell to move into (STEP only)
        distance: Path length to target (STEP only)
    """
    status: PlanStatus
    target: Optional[GridPos] = None
    step: Optional[GridPos] = None
    distance: Optional[int] = None

    @property
    def moves(self) -> bool:
        return self.status is PlanStatus.STEP

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status.value,
            "target": list(self.target) if self.target else None,
            "step": list(self.step) if self.step else None,
            "distance": self.distance,
        }


def distances_from(grid: Grid, origin: GridPos) -> Dict[GridPos, int]:
    """
    Breadth-first distances from origin to every reachable open cell.

    The origin itself is included at distance 0 whatever it contains
    (usually the acting unit). Walls and occupied cells are not entered.
    Uses an explicit queue, so map size never touches the call stack.
    """
    dist: Dict[GridPos, int] = {origin: 0}
    queue = deque([origin])
    while queue:
        pos = queue.popleft()
        nxt_dist = dist[pos] + 1
        for nxt in grid.open_neighbors(pos):
            if nxt not in dist:
                dist[nxt] = nxt_dist
                queue.append(nxt)
    return dist


class Pathfinder:
    """
    Stateless movement planner.

    All methods read the world; none of them mutate it.
    """

    def in_range_cells(self, world: BattleWorld, unit: Unit) -> Set[GridPos]:
        """Open cells orthogonally adjacent to any living enemy of unit."""
        cells: Set[GridPos] = set()
        for enemy in world.living_enemies(unit):
            cells.update(world.grid.open_neighbors(enemy.pos))
        return cells

    def plan(self, world: BattleWorld, unit: Unit) -> PathPlan:
        """
        Decide whether and where unit should step this turn.

        Tie-breaks are applied independently:
        1. target: nearest in-range cell, first in reading order
        2. step: among neighbours on a shortest path to that target,
           first in reading order
        """
        if not world.living_enemies(unit):
            return PathPlan(PlanStatus.NO_ENEMIES)

        if world.adjacent_enemies(unit):
            return PathPlan(PlanStatus.IN_RANGE)

        targets = self.in_range_cells(world, unit)
        if not targets:
            return PathPlan(PlanStatus.UNREACHABLE)

        dist = distances_from(world.grid, unit.pos)
        reachable = [cell for cell in targets if cell in dist]
        if not reachable:
            return PathPlan(PlanStatus.UNREACHABLE)

        target = min(reachable, key=lambda cell: (dist[cell], reading_order(cell)))
        distance = dist[target]

        # Distances measured back from the target identify shortest-path steps.
        back = distances_from(world.grid, target)
        candidates = [
            cell for cell in world.grid.open_neighbors(unit.pos)
            if back.get(cell) == distance - 1
        ]
        step = min(candidates, key=reading_order)

        return PathPlan(PlanStatus.STEP, target=target, step=step, distance=distance)
