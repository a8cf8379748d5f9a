"""
Grid Skirmish - a deterministic turn-based battle simulator.

Two factions (Elves and Goblins) share a walled grid. Every round each
living unit, in reading order, steps toward the nearest enemy along a
shortest path and attacks the weakest adjacent enemy, until one faction
is wiped out.

Quick Start:
    from arena import CombatEngine, Scenario, find_minimal_boost

    scenario = Scenario.from_map_file("maps/sample.txt")

    engine = CombatEngine()
    engine.reset(scenario=scenario)
    outcome = engine.run()
    print(outcome.completed_rounds, outcome.remaining_hit_points, outcome.score)

    best = find_minimal_boost(scenario)
    print(best.attack_power, best.outcome.score)
"""

__version__ = "1.0.0"

# Main engine interface
from .environment import CombatEngine, RoundInfo, TurnRecord

# Scenario system
from .scenario import (
    ParsedMap,
    Scenario,
    create_sample_scenario,
    parse_map,
)

# Boosted re-runs
from .boost import BoostResult, BoostSearch, find_minimal_boost

# Core types available at package level
from .core import (
    Action,
    ActionType,
    Cell,
    CellKind,
    Direction,
    EngineState,
    Faction,
    GridPos,
    InvariantViolation,
    MapFormatError,
    Verdict,
)

from .mechanics import BattleOutcome
from .rendering import RenderStateBuilder, render_board
from .world import BattleWorld, Grid, UnitRegistry

__all__ = [
    # Main interface
    "CombatEngine",
    "RoundInfo",
    "TurnRecord",
    "BattleOutcome",

    # Scenario system
    "Scenario",
    "ParsedMap",
    "parse_map",
    "create_sample_scenario",

    # Boost search
    "BoostSearch",
    "BoostResult",
    "find_minimal_boost",

    # World
    "BattleWorld",
    "Grid",
    "UnitRegistry",

    # Core types
    "Action",
    "ActionType",
    "Cell",
    "CellKind",
    "Direction",
    "EngineState",
    "Faction",
    "GridPos",
    "Verdict",
    "InvariantViolation",
    "MapFormatError",

    # Rendering
    "RenderStateBuilder",
    "render_board",
]
