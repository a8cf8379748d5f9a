"""
Plain-text board rendering for traces and the CLI.

    #######
    #..G..#   G(200)
    #...EG#   E(197), G(197)
    #######
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List

if TYPE_CHECKING:
    from ..world.world import BattleWorld


def render_row(world: BattleWorld, row: int) -> str:
    chars: List[str] = []
    for col in range(world.grid.width):
        cell = world.grid.cell_at((row, col))
        if cell.is_occupied:
            chars.append(world.get_unit(cell.unit_id).faction.marker)
        elif cell.is_wall:
            chars.append("#")
        else:
            chars.append(".")
    return "".join(chars)


def render_board(world: BattleWorld, with_hit_points: bool = True) -> str:
    """
    Draw the board, one text line per grid row.

    With hit points, units on a row are listed after it in reading order.
    """
    lines: List[str] = []
    for row in range(world.grid.height):
        line = render_row(world, row)
        if with_hit_points:
            units = [
                world.get_unit(world.grid.cell_at((row, col)).unit_id)
                for col in range(world.grid.width)
                if world.grid.cell_at((row, col)).is_occupied
            ]
            if units:
                line += "   " + ", ".join(f"{u.faction.marker}({u.hit_points})" for u in units)
        lines.append(line)
    return "\n".join(lines)
