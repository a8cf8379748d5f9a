"""
Helper utilities for converting battle state into render-friendly payloads.

The HTTP API and any browser client expect plain JSON data. The builder in
this module translates the internal world objects and round metadata into
a serializable dict.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional

from ..core.types import Faction
from .text import render_row

if TYPE_CHECKING:
    from ..environment import RoundInfo
    from ..world.world import BattleWorld


class RenderStateBuilder:
    """Build JSON-serializable render state snapshots."""

    @staticmethod
    def build(state: Dict[str, Any], round_info: Optional[RoundInfo] = None) -> Dict[str, Any]:
        """
        Convert the engine state (and optional round metadata) into a JSON-friendly dict.

        Args:
            state: Engine state dict returned by CombatEngine
            round_info: RoundInfo of the round that produced this state

        Returns:
            Dictionary ready to send to a client
        """
        if "world" not in state:
            raise ValueError("State missing 'world' key required for rendering")

        world: BattleWorld = state["world"]

        payload: Dict[str, Any] = {
            "completed_rounds": world.completed_rounds,
            "grid": {
                "width": world.grid.width,
                "height": world.grid.height,
            },
            "board": [render_row(world, row) for row in range(world.grid.height)],
            "game_over": world.game_over,
            "winner": world.winner.name if world.winner else None,
            "game_over_reason": world.game_over_reason,
            "totals": RenderStateBuilder._serialize_totals(world),
            "units": RenderStateBuilder._serialize_units(world),
        }
        if round_info is not None:
            payload["round"] = round_info.to_dict()
        return payload

    @staticmethod
    def _serialize_units(world: BattleWorld) -> List[Dict[str, Any]]:
        """Serialize all units (including tombstones) for the frontend."""
        serialized: List[Dict[str, Any]] = []
        for unit in world.units:
            data = unit.to_dict()
            data["label"] = unit.label()
            data["marker"] = unit.faction.marker
            serialized.append(data)
        return serialized

    @staticmethod
    def _serialize_totals(world: BattleWorld) -> Dict[str, Any]:
        totals: Dict[str, Any] = {}
        for faction in Faction:
            totals[faction.name.lower()] = {
                "alive": len(world.units.alive_units(faction)),
                "dead": world.units.casualties(faction),
                "hit_points": world.units.remaining_hit_points(faction),
            }
        return totals
