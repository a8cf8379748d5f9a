"""
Grid store - the dense 2-D array of cells.

Coordinate system:
- (0, 0) is top-left
- positions are (row, col)
- row increases downward, col increases to the right
"""

from __future__ import annotations

from typing import Iterator, List, Sequence

from ..core.errors import InvariantViolation
from ..core.types import DIRECTIONS, Cell, GridPos


class Grid:
    """
    Fixed-size dense grid of Cell values.

    The grid only knows what sits in each cell. Keeping cells in sync with
    unit positions is the registry's job.
    """

    def __init__(self, rows: Sequence[Sequence[Cell]]):
        if not rows or not rows[0]:
            raise ValueError("Grid must have at least one row and one column")
        width = len(rows[0])
        if any(len(row) != width for row in rows):
            raise ValueError("Grid rows must all have the same length")
        self._cells: List[List[Cell]] = [list(row) for row in rows]
        self.height = len(self._cells)
        self.width = width

    @classmethod
    def empty(cls, height: int, width: int) -> Grid:
        """Create an all-open grid."""
        return cls([[Cell.OPEN] * width for _ in range(height)])

    def in_bounds(self, pos: GridPos) -> bool:
        row, col = pos
        return 0 <= row < self.height and 0 <= col < self.width

    def _require(self, pos: GridPos) -> None:
        if not self.in_bounds(pos):
            raise InvariantViolation(f"Position {pos} outside {self.height}x{self.width} grid")

    def cell_at(self, pos: GridPos) -> Cell:
        self._require(pos)
        return self._cells[pos[0]][pos[1]]

    def set_cell(self, pos: GridPos, cell: Cell) -> None:
        self._require(pos)
        self._cells[pos[0]][pos[1]] = cell

    def is_open(self, pos: GridPos) -> bool:
        """True if pos is inside the grid and nothing (wall or unit) is there."""
        return self.in_bounds(pos) and self._cells[pos[0]][pos[1]].is_open

    def neighbors(self, pos: GridPos) -> List[GridPos]:
        """
        In-bounds orthogonal neighbours of pos in North, West, East, South order.

        For orthogonal neighbours this order is also their reading order.
        """
        out: List[GridPos] = []
        for direction in DIRECTIONS:
            nxt = direction.apply(pos)
            if self.in_bounds(nxt):
                out.append(nxt)
        return out

    def open_neighbors(self, pos: GridPos) -> List[GridPos]:
        return [n for n in self.neighbors(pos) if self._cells[n[0]][n[1]].is_open]

    def positions(self) -> Iterator[GridPos]:
        """Every coordinate in reading order."""
        for row in range(self.height):
            for col in range(self.width):
                yield row, col

    def copy(self) -> Grid:
        return Grid(self._cells)

    def __repr__(self) -> str:
        return f"Grid({self.height}x{self.width})"
