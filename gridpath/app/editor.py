# gridpath/app/editor.py
#!/usr/bin/env python3
"""
Editor state behind the viewer: walls, start/end and movement options.

Kept free of pygame so the editing rules can be used and tested headless.
The grid is rebuilt from scratch on every change, never edited in place.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from gridpath.core.astar import AStarSearch
from gridpath.core.heuristics import HEURISTICS
from gridpath.core.types import Coord, Grid

logger = logging.getLogger(__name__)

CELLS_PER_LENGTH = 10

ALGO_NAMES = {"manhattan": "A*", "octile": "A* (octile)", "dijkstra": "Dijkstra"}


@dataclass
class SearchOutcome:
    path: List[Coord]
    elapsed_ms: float
    metrics: Dict[str, Any]

    @property
    def found(self) -> bool:
        return bool(self.path)

    @property
    def message(self) -> str:
        verb = "Pathfinding took" if self.found else "Pathfinding failed in"
        return f"{verb} {self.elapsed_ms:.0f}ms."


@dataclass
class Editor:
    rows: int = 10
    cols: int = 10
    walls: List[Coord] = field(default_factory=list)
    start: Coord = (0, 0)
    end: Coord = (2, 2)
    diagonals: bool = False
    heuristic: str = "manhattan"

    # next right click places the end cell when True
    _placing_end: bool = field(default=False, init=False, repr=False)

    @classmethod
    def with_length(cls, length: int, **kwargs: Any) -> "Editor":
        side = int(length) * CELLS_PER_LENGTH
        return cls(rows=side, cols=side, **kwargs)

    @property
    def algo_name(self) -> str:
        return ALGO_NAMES.get(self.heuristic, self.heuristic)

    def in_bounds(self, c: Coord) -> bool:
        x, y = c
        return 0 <= x < self.cols and 0 <= y < self.rows

    # -------------------- edits --------------------

    def toggle_wall(self, c: Coord) -> bool:
        """Remove the wall at ``c`` if there is one, else add it. Returns True if now a wall."""
        if not self.in_bounds(c):
            return False
        c = (int(c[0]), int(c[1]))
        if c in self.walls:
            self.walls.remove(c)
            return False
        self.walls.append(c)
        return True

    def place_endpoint(self, c: Coord) -> str:
        """Alternate between placing the start and the end cell. Returns which one was set."""
        if not self.in_bounds(c):
            return ""
        c = (int(c[0]), int(c[1]))
        if self._placing_end:
            self.end = c
            self._placing_end = False
            return "end"
        self.start = c
        self._placing_end = True
        return "start"

    def set_size(self, length: int) -> None:
        """Resize to a square of ``length * 10`` cells. Walls and endpoints are kept as-is."""
        side = max(1, int(length)) * CELLS_PER_LENGTH
        self.rows = self.cols = side
        logger.info("Grid resized to %dx%d", side, side)

    @property
    def length(self) -> int:
        return max(1, self.rows // CELLS_PER_LENGTH)

    def toggle_diagonals(self) -> bool:
        self.diagonals = not self.diagonals
        return self.diagonals

    def cycle_heuristic(self) -> str:
        names = list(HEURISTICS)
        i = names.index(self.heuristic) if self.heuristic in names else -1
        self.heuristic = names[(i + 1) % len(names)]
        return self.heuristic

    def clear_walls(self) -> None:
        self.walls.clear()

    # -------------------- search --------------------

    def build_grid(self) -> Grid:
        return Grid(self.rows, self.cols, self.walls)

    def endpoints_valid(self) -> bool:
        return self.in_bounds(self.start) and self.in_bounds(self.end)

    def new_search(self, grid: Optional[Grid] = None) -> AStarSearch:
        grid = self.build_grid() if grid is None else grid
        return AStarSearch(grid, self.start, self.end, self.diagonals,
                           self.heuristic, name=self.algo_name)

    def run(self) -> SearchOutcome:
        """Solve the current configuration in one go and time it."""
        search = self.new_search()
        t0 = time.perf_counter()
        path = search.run()
        elapsed_ms = (time.perf_counter() - t0) * 1000.0
        outcome = SearchOutcome(path=path, elapsed_ms=elapsed_ms, metrics=search.metrics())
        logger.info("%s (%s, diagonals=%s)", outcome.message, self.algo_name, self.diagonals)
        return outcome
