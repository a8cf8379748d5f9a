"""
CombatResolver - melee attack resolution.

This module handles:
- Choosing which adjacent enemy to hit
- Applying damage through the registry
- Reporting kills
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, Optional

from ..core.types import reading_order

if TYPE_CHECKING:
    from ..entities.unit import Unit
    from ..world.world import BattleWorld


@dataclass
class AttackResult:
    """
    Result of resolving a single attack.

    Attributes:
        attacker_id: Unit that attacked
        target_id: Unit that was hit
        damage: Attack power applied
        target_hit_points: Target hit points after the hit
        target_killed: Whether this hit killed the target
        log: Human-readable log message
    """
    attacker_id: int
    target_id: int
    damage: int
    target_hit_points: int
    target_killed: bool
    log: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "attacker_id": self.attacker_id,
            "target_id": self.target_id,
            "damage": self.damage,
            "target_hit_points": self.target_hit_points,
            "target_killed": self.target_killed,
            "log": self.log,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> AttackResult:
        return cls(
            attacker_id=data["attacker_id"],
            target_id=data["target_id"],
            damage=data["damage"],
            target_hit_points=data["target_hit_points"],
            target_killed=data.get("target_killed", False),
            log=data.get("log", ""),
        )


class CombatResolver:
    """
    Stateless resolver for melee attacks.

    The same rules apply to both factions; only the enemy test differs,
    and that lives on Unit.
    """

    def select_target(self, world: BattleWorld, attacker: Unit) -> Optional[Unit]:
        """
        Adjacent enemy with the fewest hit points, ties broken by reading order.

        Returns:
            The target, or None if no enemy is adjacent
        """
        candidates = world.adjacent_enemies(attacker)
        if not candidates:
            return None
        return min(candidates, key=lambda u: (u.hit_points, reading_order(u.pos)))

    def resolve(self, world: BattleWorld, attacker: Unit) -> Optional[AttackResult]:
        """
        Attack the selected target, if any.

        A target brought to 0 hit points is removed from the grid at once,
        so it neither acts later this round nor gets targeted again.
        """
        target = self.select_target(world, attacker)
        if target is None:
            return None

        killed = world.units.apply_damage(target.id, attacker.attack_power)
        outcome = "KILLED" if killed else f"{target.hit_points} hp left"
        log = f"{attacker.label()} attacks {target.label()} for {attacker.attack_power} -> {outcome}"

        return AttackResult(
            attacker_id=attacker.id,
            target_id=target.id,
            damage=attacker.attack_power,
            target_hit_points=target.hit_points,
            target_killed=killed,
            log=log,
        )
