"""
Outcome evaluation - termination checks and final scoring.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, Optional

from ..core.types import Faction, Verdict

if TYPE_CHECKING:
    from ..world.world import BattleWorld


# Termination reasons recorded on the world and the outcome.
REASON_ELIMINATION = "elimination"
REASON_ELF_CASUALTY = "elf_casualty"
REASON_ROUND_CAP = "round_cap"
REASON_STALEMATE = "stalemate"


@dataclass(frozen=True)
class BattleOutcome:
    """
    Final summary of a terminated run.

    Attributes:
        completed_rounds: Rounds that ran to completion
        remaining_hit_points: Sum over every living unit of both factions
        winner: Faction with survivors (None on deadlock or early abort)
        verdict: VICTORY / DEFEAT / DEADLOCK from the Elves' point of view
        elf_losses: Elves that died during the run
        elf_attack_power: Attack power the Elves fought with
        reason: Why the run ended
    """
    completed_rounds: int
    remaining_hit_points: int
    winner: Optional[Faction]
    verdict: Verdict
    elf_losses: int
    elf_attack_power: Optional[int]
    reason: str

    @property
    def score(self) -> int:
        return self.completed_rounds * self.remaining_hit_points

    @property
    def summary(self) -> tuple[int, int]:
        """(completed_rounds, remaining_hit_points)"""
        return self.completed_rounds, self.remaining_hit_points

    def to_dict(self) -> Dict[str, Any]:
        return {
            "completed_rounds": self.completed_rounds,
            "remaining_hit_points": self.remaining_hit_points,
            "score": self.score,
            "winner": self.winner.name if self.winner else None,
            "verdict": self.verdict.value,
            "elf_losses": self.elf_losses,
            "elf_attack_power": self.elf_attack_power,
            "reason": self.reason,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> BattleOutcome:
        winner = data.get("winner")
        return cls(
            completed_rounds=data["completed_rounds"],
            remaining_hit_points=data["remaining_hit_points"],
            winner=Faction[winner] if winner else None,
            verdict=Verdict(data["verdict"]),
            elf_losses=data.get("elf_losses", 0),
            elf_attack_power=data.get("elf_attack_power"),
            reason=data.get("reason", REASON_ELIMINATION),
        )

    def __str__(self) -> str:
        winner = self.winner.name if self.winner else "nobody"
        return (f"{self.completed_rounds} rounds x {self.remaining_hit_points} hp = {self.score} "
                f"({winner} wins, {self.verdict.value})")


class OutcomeEvaluator:
    """
    Stateless checks used by the engine at round boundaries and on exit.
    """

    def surviving_faction(self, world: BattleWorld) -> Optional[Faction]:
        """
        The only faction with living units, or None if both (or neither) have any.
        """
        alive = [f for f in Faction if world.units.has_living(f)]
        if len(alive) == 1:
            return alive[0]
        return None

    def round_cap_reached(self, world: BattleWorld, max_rounds: Optional[int]) -> bool:
        return max_rounds is not None and world.completed_rounds >= max_rounds

    def verdict(self, world: BattleWorld) -> Verdict:
        if world.winner is None:
            if world.game_over_reason == REASON_ELF_CASUALTY:
                return Verdict.DEFEAT
            return Verdict.DEADLOCK
        if world.winner is Faction.ELF and world.units.casualties(Faction.ELF) == 0:
            return Verdict.VICTORY
        return Verdict.DEFEAT

    def evaluate(self, world: BattleWorld) -> BattleOutcome:
        """
        Build the final outcome of a terminated world.

        Score is completed_rounds * total remaining hit points of all
        living units, both factions included.
        """
        elves = [u for u in world.units if u.faction is Faction.ELF]
        return BattleOutcome(
            completed_rounds=world.completed_rounds,
            remaining_hit_points=world.remaining_hit_points(),
            winner=world.winner,
            verdict=self.verdict(world),
            elf_losses=world.units.casualties(Faction.ELF),
            elf_attack_power=elves[0].attack_power if elves else None,
            reason=world.game_over_reason or REASON_ELIMINATION,
        )
