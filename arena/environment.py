"""
CombatEngine - the round-by-round turn engine.

Usage:
    from arena import CombatEngine, create_sample_scenario

    engine = CombatEngine()
    state = engine.reset(scenario=create_sample_scenario())

    done = False
    while not done:
        state, done, info = engine.step()

    print(engine.outcome())

State machine:
    ROUND_START -> PROCESSING_UNIT -> ROUND_END -> (ROUND_START | TERMINATED)

A run can also terminate from PROCESSING_UNIT: when the acting unit finds
no living enemy anywhere, combat ends on the spot and that partial round
is not counted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from infra.logger import get_logger
from .core.actions import Action
from .core.types import EngineState, Faction, GridPos
from .entities.unit import Unit
from .mechanics import (
    REASON_ELF_CASUALTY,
    REASON_ELIMINATION,
    REASON_ROUND_CAP,
    REASON_STALEMATE,
    AttackResult,
    BattleOutcome,
    CombatResolver,
    MovementResolver,
    OutcomeEvaluator,
)
from .rendering.text import render_board
from .scenario import Scenario
from .world.world import BattleWorld

logger = get_logger(__name__)


@dataclass
class TurnRecord:
    """
    What one unit did during its turn.

    Attributes:
        unit_id: Acting unit
        label: Unit label at the time of the turn
        actions: Actions taken in order ([WAIT], [MOVE], [ATTACK] or [MOVE, ATTACK])
        from_pos: Position at the start of the turn
        to_pos: Position at the end of the turn
        attack: Attack resolution, if the unit attacked
    """
    unit_id: int
    label: str
    actions: List[Action]
    from_pos: GridPos
    to_pos: GridPos
    attack: Optional[AttackResult] = None

    @property
    def moved(self) -> bool:
        return self.from_pos != self.to_pos

    @property
    def active(self) -> bool:
        """True if the turn changed the world."""
        return self.moved or self.attack is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "unit_id": self.unit_id,
            "label": self.label,
            "actions": [a.to_dict() for a in self.actions],
            "from_pos": list(self.from_pos),
            "to_pos": list(self.to_pos),
            "attack": self.attack.to_dict() if self.attack else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> TurnRecord:
        attack = data.get("attack")
        return cls(
            unit_id=data["unit_id"],
            label=data["label"],
            actions=[Action.from_dict(a) for a in data["actions"]],
            from_pos=tuple(data["from_pos"]),
            to_pos=tuple(data["to_pos"]),
            attack=AttackResult.from_dict(attack) if attack else None,
        )


@dataclass
class RoundInfo:
    """
    Per-round metadata returned by CombatEngine.step().

    Attributes:
        round_number: 1-based number of the round that was played
        turn_order: Unit ids in the order fixed at round start
        turns: One record per unit that acted
        completed: Whether the round ran to the end
        terminated: Whether the run ended during or after this round
        reason: Termination reason, if terminated
    """
    round_number: int
    turn_order: List[int]
    turns: List[TurnRecord] = field(default_factory=list)
    completed: bool = False
    terminated: bool = False
    reason: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "round_number": self.round_number,
            "turn_order": list(self.turn_order),
            "turns": [t.to_dict() for t in self.turns],
            "completed": self.completed,
            "terminated": self.terminated,
            "reason": self.reason,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> RoundInfo:
        return cls(
            round_number=data["round_number"],
            turn_order=list(data["turn_order"]),
            turns=[TurnRecord.from_dict(t) for t in data.get("turns", [])],
            completed=data.get("completed", False),
            terminated=data.get("terminated", False),
            reason=data.get("reason"),
        )


class CombatEngine:
    """
    Turn engine for one battle run at a time.

    The engine orchestrates the mechanics modules:
    - MovementResolver (pathfinding + step)
    - CombatResolver (target choice + damage)
    - OutcomeEvaluator (termination checks + scoring)

    Everything is synchronous and deterministic; the same scenario always
    produces the same rounds.

    Attributes:
        world: Current battle world (None before reset())
        state: Current EngineState
        verbose: Log the board at every round start at INFO level
        strict: Check grid/registry agreement after every unit turn
    """

    def __init__(self, verbose: bool = False, strict: bool = False):
        self.verbose = verbose
        self.strict = strict

        self.world: Optional[BattleWorld] = None
        self.state = EngineState.ROUND_START
        self._scenario: Optional[Scenario] = None

        # Mechanics modules (stateless, can be reused)
        self._movement = MovementResolver()
        self._combat = CombatResolver()
        self._evaluator = OutcomeEvaluator()

    def reset(self, scenario: Scenario | Dict[str, Any]) -> Dict[str, Any]:
        """
        Start a fresh run from a scenario.

        The scenario is cloned, so the caller's object is never shared
        with the run.

        Args:
            scenario: Scenario instance or dict from Scenario.to_dict()

        Returns:
            Initial state (same structure as step())
        """
        if isinstance(scenario, Scenario):
            scenario_obj = scenario.clone()
        else:
            scenario_obj = Scenario.from_dict(scenario)

        self._scenario = scenario_obj
        self.world = scenario_obj.build_world()
        self.state = EngineState.ROUND_START

        logger.debug("Battle reset: %s", scenario_obj)
        return self._build_state()

    @property
    def scenario(self) -> Optional[Scenario]:
        return self._scenario

    @property
    def is_game_over(self) -> bool:
        return self.state is EngineState.TERMINATED

    @property
    def winner(self) -> Optional[Faction]:
        return self.world.winner if self.world else None

    # ------------------------------------------------------------------#
    # Round loop
    # ------------------------------------------------------------------#
    def step(self) -> Tuple[Dict[str, Any], bool, RoundInfo]:
        """
        Play one round.

        Returns:
            Tuple of (state, done, info):
            - state: {"world": BattleWorld}
            - done: whether the run has terminated
            - info: RoundInfo for the round just played

        Raises:
            RuntimeError: If reset() hasn't been called or the run is over
        """
        if self.world is None or self._scenario is None:
            raise RuntimeError("Must call reset() before calling step()")
        if self.is_game_over:
            raise RuntimeError("Battle is already over")

        world = self.world
        scenario = self._scenario

        self.state = EngineState.ROUND_START
        turn_order = world.units.turn_order()
        info = RoundInfo(round_number=world.completed_rounds + 1, turn_order=turn_order)

        if self._evaluator.round_cap_reached(world, scenario.max_rounds):
            return self._finish(info, None, REASON_ROUND_CAP)
        if not turn_order:
            return self._finish(info, None, REASON_ELIMINATION)

        if self.verbose:
            logger.info("Round %d:\n%s", info.round_number, render_board(world))

        self.state = EngineState.PROCESSING_UNIT
        for unit_id in turn_order:
            # Tombstone: died earlier this round.
            if not world.units.is_alive(unit_id):
                continue

            unit = world.get_unit(unit_id)
            if not world.units.has_living(unit.faction.enemy):
                return self._finish(info, unit.faction, REASON_ELIMINATION)

            record = self._take_turn(world, unit)
            info.turns.append(record)

            if self.strict:
                world.check_invariants()

            if (
                scenario.stop_on_elf_death
                and record.attack is not None
                and record.attack.target_killed
                and world.get_unit(record.attack.target_id).faction is Faction.ELF
            ):
                return self._finish(info, None, REASON_ELF_CASUALTY)

        self.state = EngineState.ROUND_END
        world.completed_rounds += 1
        info.completed = True

        survivor = self._evaluator.surviving_faction(world)
        if survivor is not None:
            return self._finish(info, survivor, REASON_ELIMINATION)
        if self._evaluator.round_cap_reached(world, scenario.max_rounds):
            return self._finish(info, None, REASON_ROUND_CAP)
        if scenario.detect_stalemate and not any(t.active for t in info.turns):
            return self._finish(info, None, REASON_STALEMATE)

        self.state = EngineState.ROUND_START
        return self._build_state(), False, info

    def run(self) -> BattleOutcome:
        """Step until termination and return the outcome."""
        if self.world is None:
            raise RuntimeError("Must call reset() before calling run()")
        while not self.is_game_over:
            self.step()
        return self.outcome()

    def outcome(self) -> BattleOutcome:
        """
        Final outcome of the run.

        Raises:
            RuntimeError: If the run has not terminated yet
        """
        if self.world is None or not self.is_game_over:
            raise RuntimeError("Battle has not terminated yet")
        return self._evaluator.evaluate(self.world)

    # ------------------------------------------------------------------#
    # Helpers
    # ------------------------------------------------------------------#
    def _take_turn(self, world: BattleWorld, unit: Unit) -> TurnRecord:
        """Move (if no enemy is adjacent), then attack (if one is)."""
        start = unit.pos
        actions: List[Action] = []

        if not world.adjacent_enemies(unit):
            move = self._movement.resolve(world, unit)
            logger.debug(move.log)
            if move.moved:
                actions.append(Action.move(move.to_pos))

        attack = self._combat.resolve(world, unit)
        if attack is not None:
            logger.debug(attack.log)
            actions.append(Action.attack(attack.target_id))

        if not actions:
            actions.append(Action.wait())

        return TurnRecord(
            unit_id=unit.id,
            label=unit.label(),
            actions=actions,
            from_pos=start,
            to_pos=unit.pos,
            attack=attack,
        )

    def _finish(
        self,
        info: RoundInfo,
        winner: Optional[Faction],
        reason: str,
    ) -> Tuple[Dict[str, Any], bool, RoundInfo]:
        world = self.world
        world.game_over = True
        world.winner = winner
        world.game_over_reason = reason
        self.state = EngineState.TERMINATED

        info.terminated = True
        info.reason = reason

        logger.info(
            "Battle over after %d full rounds: %s (%s), %d hp left",
            world.completed_rounds,
            winner.name if winner else "no winner",
            reason,
            world.remaining_hit_points(),
        )
        return self._build_state(), True, info

    def _build_state(self) -> Dict[str, Any]:
        return {"world": self.world}
