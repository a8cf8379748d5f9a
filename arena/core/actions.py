"""
Action records produced by the turn engine.

Units are not driven by agents: each turn the engine decides the action
itself and records it here so runners, renderers and the API can report
what happened.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict

from .types import ActionType, GridPos


@dataclass(frozen=True)
class Action:
    """
    A single decided action.

    params by type:
        WAIT:   {}
        MOVE:   {"to": (row, col)}
        ATTACK: {"target_id": int}
    """

    type: ActionType
    params: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def wait(cls) -> Action:
        return cls(ActionType.WAIT)

    @classmethod
    def move(cls, to: GridPos) -> Action:
        return cls(ActionType.MOVE, {"to": tuple(to)})

    @classmethod
    def attack(cls, target_id: int) -> Action:
        return cls(ActionType.ATTACK, {"target_id": target_id})

    def to_dict(self) -> Dict[str, Any]:
        params = dict(self.params)
        if "to" in params:
            params["to"] = list(params["to"])
        return {"type": self.type.value, "params": params}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Action:
        params = dict(data.get("params", {}))
        if "to" in params:
            params["to"] = tuple(params["to"])
        return cls(ActionType(data["type"]), params)

    def __str__(self) -> str:
        if self.type is ActionType.MOVE:
            return f"MOVE->{self.params['to']}"
        if self.type is ActionType.ATTACK:
            return f"ATTACK#{self.params['target_id']}"
        return "WAIT"
