from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict

from ..core.types import Faction, GridPos

DEFAULT_HIT_POINTS = 200
DEFAULT_ATTACK_POWER = 3


@dataclass
class Unit:
    """
    A combatant on the battle grid.

    Both factions share this one type; the faction tag decides who counts
    as an enemy. Units are created by the registry, which also assigns
    `id` (the registry slot) and keeps `pos` in sync with the grid.
    """

    id: int
    faction: Faction
    pos: GridPos
    hit_points: int = DEFAULT_HIT_POINTS
    attack_power: int = DEFAULT_ATTACK_POWER
    alive: bool = True

    def __post_init__(self):
        if self.hit_points < 0:
            raise ValueError(f"Hit points cannot be negative: {self.hit_points}")
        if self.attack_power < 0:
            raise ValueError(f"Attack power cannot be negative: {self.attack_power}")

    def is_enemy(self, other: Unit) -> bool:
        """True if other belongs to the opposing faction."""
        return self.faction is not other.faction

    def label(self) -> str:
        """
        Human-readable label, e.g. "Elf#3(E)".
        """
        return f"{self.faction.name.capitalize()}#{self.id}({self.faction.marker})"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "faction": self.faction.name,
            "pos": list(self.pos),
            "hit_points": self.hit_points,
            "attack_power": self.attack_power,
            "alive": self.alive,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Unit:
        return cls(
            id=data["id"],
            faction=Faction[data["faction"]],
            pos=tuple(data["pos"]),
            hit_points=data["hit_points"],
            attack_power=data["attack_power"],
            alive=data.get("alive", True),
        )

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    def __str__(self) -> str:
        status = f"{self.hit_points} hp" if self.alive else "dead"
        return f"{self.label()} at {self.pos} [{status}]"
