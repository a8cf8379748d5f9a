"""
Boost search - the smallest Elf attack boost that wins without losses.

Every attempt is an independent engine run on a fresh copy of the
scenario, so nothing leaks from one attempt into the next.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from infra.logger import get_logger
from .core.types import Verdict
from .environment import CombatEngine
from .mechanics.victory import BattleOutcome
from .scenario import Scenario

logger = get_logger(__name__)


@dataclass(frozen=True)
class BoostResult:
    """
    The minimal winning boost and the battle it produced.

    Attributes:
        boost: Amount added to the Elves' base attack power
        attack_power: Resulting Elf attack power
        outcome: Outcome of the full run at that boost
        attempts: Number of boosted runs tried, this one included
    """
    boost: int
    attack_power: int
    outcome: BattleOutcome
    attempts: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "boost": self.boost,
            "attack_power": self.attack_power,
            "outcome": self.outcome.to_dict(),
            "attempts": self.attempts,
        }


class BoostSearch:
    """
    Linear search over Elf attack boosts.

    A loss-free Elf victory is not guaranteed to be monotonic in the boost
    for every map, so boosts are tried one by one instead of bisected.
    """

    def __init__(self, verbose: bool = False):
        self.verbose = verbose

    def run_with_boost(self, scenario: Scenario, boost: int, **overrides: Any) -> BattleOutcome:
        """Run the whole battle once with the Elves' attack raised by boost."""
        engine = CombatEngine(verbose=self.verbose)
        engine.reset(scenario.with_boost(boost, **overrides))
        return engine.run()

    def find_minimal_boost(
        self,
        scenario: Scenario,
        start: int = 1,
        max_boost: Optional[int] = None,
    ) -> Optional[BoostResult]:
        """
        Find the smallest boost >= start for which the Elves win with no losses.

        Attempts abort as soon as an Elf dies. A deadlock (round cap or
        stalemate) counts as a failed attempt and the search moves on.

        Args:
            scenario: Base scenario (not modified)
            start: First boost to try
            max_boost: Last boost to try (default: the scenario's hit points,
                at which every Elf hit is lethal)

        Returns:
            BoostResult of the first successful attempt, or None if no boost
            in range wins. A successful attempt never hit the early abort,
            so its outcome is that of a full run.
        """
        if start < 0:
            raise ValueError(f"Boost cannot be negative: {start}")
        if max_boost is None:
            max_boost = max(start, scenario.hit_points)

        attempts = 0
        for boost in range(start, max_boost + 1):
            attempts += 1
            outcome = self.run_with_boost(scenario, boost, stop_on_elf_death=True)
            logger.info(
                "Boost %d (attack %d): %s after %d rounds (%s)",
                boost,
                scenario.attack_power + boost,
                outcome.verdict.value,
                outcome.completed_rounds,
                outcome.reason,
            )
            if outcome.verdict is Verdict.VICTORY:
                return BoostResult(
                    boost=boost,
                    attack_power=scenario.attack_power + boost,
                    outcome=outcome,
                    attempts=attempts,
                )

        logger.warning("No winning boost in [%d, %d]", start, max_boost)
        return None


def find_minimal_boost(
    scenario: Scenario,
    start: int = 1,
    max_boost: Optional[int] = None,
) -> Optional[BoostResult]:
    """Module-level shortcut for BoostSearch().find_minimal_boost()."""
    return BoostSearch().find_minimal_boost(scenario, start=start, max_boost=max_boost)
