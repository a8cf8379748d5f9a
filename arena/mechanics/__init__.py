from .pathfinding import Pathfinder, PathPlan, PlanStatus, distances_from
from .movement import MovementResolver, MoveResult
from .combat import AttackResult, CombatResolver
from .victory import (
    REASON_ELF_CASUALTY,
    REASON_ELIMINATION,
    REASON_ROUND_CAP,
    REASON_STALEMATE,
    BattleOutcome,
    OutcomeEvaluator,
)

__all__ = [
    "Pathfinder",
    "PathPlan",
    "PlanStatus",
    "distances_from",
    "MovementResolver",
    "MoveResult",
    "AttackResult",
    "CombatResolver",
    "BattleOutcome",
    "OutcomeEvaluator",
    "REASON_ELIMINATION",
    "REASON_ELF_CASUALTY",
    "REASON_ROUND_CAP",
    "REASON_STALEMATE",
]
