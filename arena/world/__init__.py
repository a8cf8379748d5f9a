from .grid import Grid
from .registry import UnitRegistry
from .world import BattleWorld

__all__ = ["Grid", "UnitRegistry", "BattleWorld"]
