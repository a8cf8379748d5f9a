"""
MovementResolver - applies the pathfinder's decision to the world.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, Optional

from ..core.types import GridPos
from .pathfinding import Pathfinder, PathPlan, PlanStatus

if TYPE_CHECKING:
    from ..entities.unit import Unit
    from ..world.world import BattleWorld


@dataclass
class MoveResult:
    """
    Result of the movement phase of a single unit turn.

    Attributes:
        unit_id: Acting unit
        plan: The pathfinder's decision
        moved: Whether the unit changed cell
        from_pos: Position before the turn
        to_pos: Position after the turn
        log: Human-readable log message
    """
    unit_id: int
    plan: PathPlan
    moved: bool
    from_pos: GridPos
    to_pos: GridPos
    log: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "unit_id": self.unit_id,
            "plan": self.plan.to_dict(),
            "moved": self.moved,
            "from_pos": list(self.from_pos),
            "to_pos": list(self.to_pos),
            "log": self.log,
        }


class MovementResolver:
    """
    Moves a unit one step toward the nearest reachable in-range cell.
    """

    def __init__(self, pathfinder: Optional[Pathfinder] = None):
        self._pathfinder = pathfinder or Pathfinder()

    def resolve(self, world: BattleWorld, unit: Unit) -> MoveResult:
        """
        Plan and, when the plan is a step, perform the move.

        The registry updates grid and unit together, so the world is
        consistent again as soon as this returns.
        """
        start = unit.pos
        plan = self._pathfinder.plan(world, unit)

        if plan.status is PlanStatus.STEP:
            world.units.move_unit(unit.id, plan.step)
            log = f"{unit.label()} moves {start} -> {plan.step} (target {plan.target}, d={plan.distance})"
            return MoveResult(unit.id, plan, True, start, unit.pos, log)

        if plan.status is PlanStatus.UNREACHABLE:
            log = f"{unit.label()} has no reachable target"
        elif plan.status is PlanStatus.IN_RANGE:
            log = f"{unit.label()} holds position next to an enemy"
        else:
            log = f"{unit.label()} sees no enemies"
        return MoveResult(unit.id, plan, False, start, start, log)
