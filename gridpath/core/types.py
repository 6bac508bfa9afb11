# gridpath/core/types.py
#!/usr/bin/env python3
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Iterable, Iterator, List, Optional, Tuple

Coord = Tuple[int, int]  # (x, y) == (col, row)

# (dx, dy) in the fixed expansion order N, S, E, W, NE, NW, SE, SW
ORTHOGONAL_DELTAS: Tuple[Coord, ...] = ((0, -1), (0, 1), (1, 0), (-1, 0))
DIAGONAL_DELTAS: Tuple[Coord, ...] = ((1, -1), (-1, -1), (1, 1), (-1, 1))


class OutOfBoundsError(IndexError):
    """A coordinate outside ``[0, cols) x [0, rows)`` was handed to the core."""

    def __init__(self, coord: Coord, rows: int, cols: int):
        self.coord = coord
        self.rows = rows
        self.cols = cols
        super().__init__(f"cell {coord!r} is outside a {cols}x{rows} grid")


@dataclass(frozen=True)
class Cell:
    coord: Coord
    passable: bool = True

    @property
    def x(self) -> int:
        return self.coord[0]

    @property
    def y(self) -> int:
        return self.coord[1]


class Grid:
    """Fixed-shape grid of cells; a cell is blocked iff it matches a wall.

    The grid carries no search state, so any number of searches may share
    one instance. Changing the walls means building a new grid.
    """

    def __init__(self, rows: int, cols: int, walls: Iterable[Coord] = ()):
        self.rows = max(0, int(rows))
        self.cols = max(0, int(cols))
        # walls outside the grid are inert
        self.walls: FrozenSet[Coord] = frozenset(
            (int(x), int(y)) for x, y in walls if 0 <= x < self.cols and 0 <= y < self.rows
        )
        self.cells: List[List[Cell]] = [
            [Cell((x, y), (x, y) not in self.walls) for x in range(self.cols)]
            for y in range(self.rows)
        ]  # [row][col]

    def __repr__(self) -> str:
        return f"Grid(rows={self.rows}, cols={self.cols}, walls={len(self.walls)})"

    def __len__(self) -> int:
        return self.rows * self.cols

    def __iter__(self) -> Iterator[Cell]:
        for row in self.cells:
            yield from row

    def __contains__(self, c: object) -> bool:
        return isinstance(c, tuple) and len(c) == 2 and self.in_bounds(c)

    def in_bounds(self, c: Coord) -> bool:
        x, y = c
        return 0 <= x < self.cols and 0 <= y < self.rows

    def is_wall(self, c: Coord) -> bool:
        return c in self.walls

    def get_cell(self, c: Coord) -> Cell:
        # explicit check: a negative index would otherwise wrap around
        if not self.in_bounds(c):
            raise OutOfBoundsError(c, self.rows, self.cols)
        x, y = c
        return self.cells[y][x]

    def get_neighbours(self, cell: Cell, diagonals: bool = False) -> List[Cell]:
        """Return in-bounds neighbours of ``cell``: N, S, E, W then NE, NW, SE, SW.

        Passability is not checked here; the search decides what it may enter.
        """
        x, y = cell.coord
        deltas = ORTHOGONAL_DELTAS + DIAGONAL_DELTAS if diagonals else ORTHOGONAL_DELTAS
        out: List[Cell] = []
        for dx, dy in deltas:
            n = (x + dx, y + dy)
            if self.in_bounds(n):
                out.append(self.cells[n[1]][n[0]])
        return out


@dataclass
class StepResult:
    status: str                   # "running" | "done" | "no_path"
    opened: List[Coord] = field(default_factory=list)
    closed: List[Coord] = field(default_factory=list)
    current: Optional[Coord] = None
    path: Optional[List[Coord]] = None
    metrics: Dict[str, Any] = field(default_factory=dict)
