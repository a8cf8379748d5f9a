from __future__ import annotations

from typing import List, Optional

from arena import CombatEngine
from arena.environment import RoundInfo
from arena.mechanics import BattleOutcome
from arena.scenario import Scenario
from arena.world import BattleWorld

from game_frame import Frame


class BattleRunner:
    """
    Step-by-step battle runner that returns UI-friendly frames.

    Use get_initial_frame() before any rounds, then step() until done.
    """

    def __init__(
        self,
        scenario: Scenario,
        verbose: bool = False,
        strict: bool = False,
    ):
        self.scenario = scenario.clone()
        self.verbose = verbose

        self.engine = CombatEngine(verbose=verbose, strict=strict)
        self.engine.reset(scenario=self.scenario)

        self._last_info: RoundInfo | None = None

    # ------------------------------------------------------------------#
    # Properties
    # ------------------------------------------------------------------#
    @property
    def world(self) -> BattleWorld:
        if self.engine.world is None:
            raise RuntimeError("World state is not initialized")
        return self.engine.world

    @property
    def done(self) -> bool:
        return self.engine.is_game_over

    @property
    def round(self) -> int:
        """Completed rounds pulled directly from the world."""
        return self.world.completed_rounds

    @property
    def last_round(self) -> Optional[RoundInfo]:
        return self._last_info

    @property
    def outcome(self) -> Optional[BattleOutcome]:
        return self.engine.outcome() if self.done else None

    # ------------------------------------------------------------------#
    # Core API
    # ------------------------------------------------------------------#
    def get_initial_frame(self) -> Frame:
        return Frame(world=self.world.clone(), done=self.done)

    def step(self) -> Frame:
        """
        Play one round and return its frame.

        Raises:
            RuntimeError: If the battle is already over
        """
        if self.done:
            raise RuntimeError("Battle is already finished")

        world_before = self.world.clone()
        _state, done, self._last_info = self.engine.step()

        return Frame(
            world=world_before,
            round_info=self._last_info,
            outcome=self.engine.outcome() if done else None,
            done=done,
        )

    def run(self, *, include_history: bool = False) -> Frame | List[Frame]:
        """
        Run the battle to completion.

        Returns the final frame, or the full frame history if include_history
        is True.
        """
        frames: List[Frame] = []
        while True:
            frame = self.step()
            frames.append(frame)
            if frame.done:
                break

        return frames if include_history else frames[-1]

    def get_final_frame(self) -> Frame:
        """
        Return the final board without round data for the terminal view.
        """
        return Frame(world=self.world.clone(), outcome=self.outcome, done=self.done)


def run_single_game(scenario: Scenario, verbose: bool = False) -> BattleOutcome:
    """Run one battle to completion and return its outcome."""
    engine = CombatEngine(verbose=verbose)
    engine.reset(scenario=scenario)
    return engine.run()
