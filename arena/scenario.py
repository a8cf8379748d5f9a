"""
Scenario system for creating and managing battle setups.

A scenario is the text map plus every rule knob for one run. Map text is
parsed and validated when the scenario is built, so malformed input is
reported before any simulation starts.
"""

from __future__ import annotations

import json
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from infra.logger import get_logger
from infra.paths import PROJECT_ROOT, SCENARIO_STORAGE_DIR
from .core.errors import MapFormatError
from .core.types import Cell, Faction, GridPos
from .entities.unit import DEFAULT_ATTACK_POWER, DEFAULT_HIT_POINTS
from .world.grid import Grid
from .world.world import BattleWorld

logger = get_logger(__name__)

TERRAIN_MARKERS = {".": Cell.OPEN, "#": Cell.WALL}
UNIT_MARKERS = {faction.marker: faction for faction in Faction}


@dataclass(frozen=True)
class ParsedMap:
    """
    Validated map contents.

    Attributes:
        terrain: Rows of OPEN/WALL cells (unit spawn cells are OPEN)
        spawns: (faction, position) pairs in reading order
    """
    terrain: Tuple[Tuple[Cell, ...], ...]
    spawns: Tuple[Tuple[Faction, GridPos], ...]

    @property
    def height(self) -> int:
        return len(self.terrain)

    @property
    def width(self) -> int:
        return len(self.terrain[0])


def parse_map(text: str) -> ParsedMap:
    """
    Parse a text map.

    `.` is open floor, `#` a wall, `E` an Elf and `G` a Goblin. Trailing
    blank lines and carriage returns are ignored.

    Raises:
        MapFormatError: empty map, no line break, unknown character or
            rows of different widths
    """
    if not text or not text.strip():
        raise MapFormatError("Map is empty")
    if "\n" not in text:
        raise MapFormatError("Map has no line break")

    lines = [line.rstrip("\r") for line in text.split("\n")]
    while lines and not lines[-1]:
        lines.pop()

    width = len(lines[0])
    terrain: List[Tuple[Cell, ...]] = []
    spawns: List[Tuple[Faction, GridPos]] = []

    for row, line in enumerate(lines):
        if len(line) != width:
            raise MapFormatError(
                f"Map is not rectangular: width {len(line)}, expected {width}", row=row
            )
        cells: List[Cell] = []
        for col, ch in enumerate(line):
            if ch in TERRAIN_MARKERS:
                cells.append(TERRAIN_MARKERS[ch])
            elif ch in UNIT_MARKERS:
                cells.append(Cell.OPEN)
                spawns.append((UNIT_MARKERS[ch], (row, col)))
            else:
                raise MapFormatError(f"Unrecognized map character {ch!r}", row=row, col=col)
        terrain.append(tuple(cells))

    return ParsedMap(terrain=tuple(terrain), spawns=tuple(spawns))


class Scenario:
    """
    A complete, self-contained battle definition.

    A scenario includes EVERYTHING needed to initialize an engine run:
    - The map (terrain + unit spawns)
    - Unit stats (hit points, attack power, Elf boost)
    - Stopping rules (round cap, stalemate detection, abort on Elf death)

    There is no module-level configuration; two engines built from two
    scenarios never share state.

    Example:
        scenario = Scenario(map_text, max_rounds=500)
        boosted = scenario.with_boost(12)
        scenario.save_json("my_scenario.json")
        scenario = Scenario.load_json("my_scenario.json")
    """

    def __init__(
        self,
        map_text: str,
        hit_points: int = DEFAULT_HIT_POINTS,
        attack_power: int = DEFAULT_ATTACK_POWER,
        elf_attack_boost: int = 0,
        max_rounds: Optional[int] = None,
        stop_on_elf_death: bool = False,
        detect_stalemate: bool = True,
        name: Optional[str] = None,
    ):
        """
        Args:
            map_text: Text map (validated immediately)
            hit_points: Starting hit points of every unit
            attack_power: Base attack power of every unit
            elf_attack_boost: Added to the Elves' attack power
            max_rounds: Completed rounds after which the run is a deadlock
            stop_on_elf_death: Abort as a defeat as soon as an Elf dies
            detect_stalemate: End as a deadlock after a round with no move and no attack
            name: Optional label for logs and storage
        """
        if hit_points <= 0:
            raise ValueError(f"Hit points must be positive: {hit_points}")
        if attack_power < 0:
            raise ValueError(f"Attack power cannot be negative: {attack_power}")
        if elf_attack_boost < 0:
            raise ValueError(f"Elf attack boost cannot be negative: {elf_attack_boost}")
        if max_rounds is not None and max_rounds < 0:
            raise ValueError(f"Round cap cannot be negative: {max_rounds}")

        self.parsed = parse_map(map_text)
        self.map_text = map_text
        self.hit_points = hit_points
        self.attack_power = attack_power
        self.elf_attack_boost = elf_attack_boost
        self.max_rounds = max_rounds
        self.stop_on_elf_death = stop_on_elf_death
        self.detect_stalemate = detect_stalemate
        self.name = name

    @classmethod
    def from_map_file(cls, filepath: str | Path, **config: Any) -> Scenario:
        """Build a scenario from a map file; extra kwargs are scenario settings."""
        path = Path(filepath)
        text = path.read_text(encoding="utf-8")
        config.setdefault("name", path.stem)
        return cls(text, **config)

    # ------------------------------------------------------------------#
    # Derived values
    # ------------------------------------------------------------------#
    @property
    def elf_attack_power(self) -> int:
        return self.attack_power + self.elf_attack_boost

    def attack_power_for(self, faction: Faction) -> int:
        return self.elf_attack_power if faction is Faction.ELF else self.attack_power

    @property
    def width(self) -> int:
        return self.parsed.width

    @property
    def height(self) -> int:
        return self.parsed.height

    def unit_count(self, faction: Faction) -> int:
        return sum(1 for f, _ in self.parsed.spawns if f is faction)

    def build_world(self) -> BattleWorld:
        """
        Create a fresh world for one run.

        Units are registered in reading order of their spawn cells, so
        slot ids follow reading order at setup.
        """
        world = BattleWorld(Grid(self.parsed.terrain))
        for faction, pos in self.parsed.spawns:
            world.units.add(
                faction,
                pos,
                hit_points=self.hit_points,
                attack_power=self.attack_power_for(faction),
            )
        return world

    # ------------------------------------------------------------------#
    # Copies
    # ------------------------------------------------------------------#
    def clone(self, **overrides: Any) -> Scenario:
        """Independent copy, optionally with some settings replaced."""
        data = self.to_dict()
        data.update(overrides)
        return Scenario.from_dict(data)

    def with_boost(self, boost: int, **overrides: Any) -> Scenario:
        """Copy with the Elves' attack power raised by boost."""
        return self.clone(elf_attack_boost=boost, **overrides)

    # ------------------------------------------------------------------#
    # Serialization
    # ------------------------------------------------------------------#
    def to_dict(self) -> Dict[str, Any]:
        return {
            "map": self.map_text,
            "hit_points": self.hit_points,
            "attack_power": self.attack_power,
            "elf_attack_boost": self.elf_attack_boost,
            "max_rounds": self.max_rounds,
            "stop_on_elf_death": self.stop_on_elf_death,
            "detect_stalemate": self.detect_stalemate,
            "name": self.name,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Scenario:
        if "map" not in data:
            raise ValueError("Scenario must contain a 'map' entry")
        return cls(
            map_text=data["map"],
            hit_points=data.get("hit_points", DEFAULT_HIT_POINTS),
            attack_power=data.get("attack_power", DEFAULT_ATTACK_POWER),
            elf_attack_boost=data.get("elf_attack_boost", 0),
            max_rounds=data.get("max_rounds"),
            stop_on_elf_death=data.get("stop_on_elf_death", False),
            detect_stalemate=data.get("detect_stalemate", True),
            name=data.get("name"),
        )

    def save_json(self, filepath: str | Path | None = None, indent: int = 2) -> Path:
        """
        Save scenario to a JSON file.

        Args:
            filepath: Path to save to. If None, saves under storage/scenarios with a timestamped name.
            indent: JSON indentation (default: 2)

        Returns:
            The path written
        """
        if filepath is None:
            base_dir = SCENARIO_STORAGE_DIR
            base_dir.mkdir(parents=True, exist_ok=True)
            timestamp = time.strftime("%Y%m%d_%H%M%S")
            filepath = base_dir / f"scenario_{timestamp}.json"
        else:
            filepath = Path(filepath)
            if not filepath.is_absolute():
                filepath = PROJECT_ROOT / filepath
            filepath.parent.mkdir(parents=True, exist_ok=True)

        logger.info("Saving scenario JSON to %s", filepath)
        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=indent, ensure_ascii=False)
        return filepath

    @classmethod
    def load_json(cls, filepath: str | Path) -> Scenario:
        with open(filepath, "r", encoding="utf-8") as f:
            data = json.load(f)
        return cls.from_dict(data)

    def __str__(self) -> str:
        label = self.name or "Scenario"
        return (f"{label}({self.height}x{self.width}, "
                f"elves={self.unit_count(Faction.ELF)}, goblins={self.unit_count(Faction.GOBLIN)})")

    def __repr__(self) -> str:
        return f"Scenario({self.to_dict()!r})"


# =============================================================================
# SCENARIO BUILDERS (Examples/Templates)
# =============================================================================

SAMPLE_MAP = """\
#######
#.G...#
#...EG#
#.#.#G#
#..G#E#
#.....#
#######
"""


def create_sample_scenario(**config: Any) -> Scenario:
    """
    The reference 7x7 skirmish: 2 Elves against 4 Goblins.

    With default stats the Goblins win after 47 full rounds with 590 hit
    points left (score 27730).
    """
    config.setdefault("name", "sample")
    return Scenario(SAMPLE_MAP, **config)


if __name__ == "__main__":
    from infra.logger import configure_logging
    configure_logging(level="INFO", json=True)
    create_sample_scenario().save_json()
