from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from arena.environment import RoundInfo
from arena.mechanics import BattleOutcome
from arena.rendering import RenderStateBuilder, render_board
from arena.world import BattleWorld


@dataclass
class Frame:
    """
    Immutable snapshot of a single round, with helpers to serialize for transport.

    `world` is the board as it stood when the round started; `round_info`
    says what happened during it.
    """

    world: BattleWorld
    round_info: Optional[RoundInfo] = None
    outcome: Optional[BattleOutcome] = None
    done: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize the frame into a JSON-friendly dictionary.
        """
        frame: Dict[str, Any] = RenderStateBuilder.build({"world": self.world}, self.round_info)
        frame["done"] = self.done
        if self.outcome is not None:
            frame["outcome"] = self.outcome.to_dict()
        return frame

    def to_text(self) -> str:
        """Board trace for this frame, AoC style."""
        return render_board(self.world)
