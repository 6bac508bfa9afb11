# gridpath/core/astar.py
#!/usr/bin/env python3
"""
A* over a Grid — one expansion per step(), or run() to completion.

Step costs: 10 for N/S/E/W, 14 for diagonals (only when diagonals=True).
Heuristic: Manhattan by default, see gridpath.core.heuristics for the others.

Per-run state (g, h, parent, open/closed flags) lives in a dict keyed by
coordinate that belongs to this search only. The Grid is never written to,
so several searches can share one.

Tie-breaking in the frontier is (f, h, seq): lower f, then lower h, then
FIFO by first insertion.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union

from gridpath.core.frontier import Frontier
from gridpath.core.heuristics import Heuristic, resolve, step_cost
from gridpath.core.types import Coord, Grid, StepResult

logger = logging.getLogger(__name__)


@dataclass
class SearchNode:
    g: int = 0
    h: int = 0
    parent: Optional[Coord] = None
    visited: bool = False
    closed: bool = False
    open: bool = False

    @property
    def f(self) -> int:
        return self.g + self.h


@dataclass
class AStarSearch:
    grid: Grid
    start: Coord
    end: Coord
    diagonals: bool = False
    heuristic: Union[str, Heuristic] = "manhattan"
    name: str = "A*"

    # Internal state
    nodes: Dict[Coord, SearchNode] = field(default_factory=dict, init=False, repr=False)
    frontier: Frontier = field(default_factory=Frontier, init=False, repr=False)
    popped_count: int = field(default=0, init=False)
    closed_count: int = field(default=0, init=False)
    done: bool = field(default=False, init=False)
    no_path: bool = field(default=False, init=False)
    path: List[Coord] = field(default_factory=list, init=False, repr=False)

    def __post_init__(self) -> None:
        self.start = (int(self.start[0]), int(self.start[1]))
        self.end = (int(self.end[0]), int(self.end[1]))
        # raises OutOfBoundsError before any work is done
        self.grid.get_cell(self.start)
        self.grid.get_cell(self.end)
        self._h = resolve(self.heuristic)
        self.reset()

    # -------------------- lifecycle --------------------

    def reset(self) -> None:
        """Clear all state and seed the frontier with the start cell."""
        self.nodes.clear()
        self.frontier.clear()
        self.popped_count = 0
        self.closed_count = 0
        self.done = False
        self.no_path = False
        self.path = []

        # the start is seeded even when it sits on a wall
        s = self._node(self.start)
        s.g = 0
        s.h = self._estimate(self.start)
        s.visited = True
        s.open = True
        self.frontier.push(self.start, s.f, s.h)

    @property
    def finished(self) -> bool:
        return self.done or self.no_path

    def node(self, c: Coord) -> Optional[SearchNode]:
        """Scratch record for ``c``, or None if the search never reached it."""
        return self.nodes.get(c)

    # -------------------- helpers --------------------

    def _node(self, c: Coord) -> SearchNode:
        n = self.nodes.get(c)
        if n is None:
            n = self.nodes[c] = SearchNode()
        return n

    def _estimate(self, c: Coord) -> int:
        return self._h(c, self.end, self.diagonals)

    def _reconstruct_path(self, last: Coord) -> List[Coord]:
        path: List[Coord] = []
        cur: Optional[Coord] = last
        while cur is not None:
            path.append(cur)
            cur = self.nodes[cur].parent
        path.reverse()
        return path

    # -------------------- main stepping logic --------------------

    def step(self) -> StepResult:
        """
        Run ONE expansion:
          - Pop the lowest-f cell.
          - If it is the end cell, rebuild the path and finish.
          - Else close it and relax its passable, unclosed neighbours.
        """
        if self.done:
            return StepResult(status="done", path=list(self.path),
                              metrics=self.metrics())

        if self.no_path:
            return StepResult(status="no_path", metrics=self.metrics())

        if not self.frontier:
            self.no_path = True
            logger.debug("%s: %s -> %s unreachable after %d expansions",
                         self.name, self.start, self.end, self.popped_count)
            return StepResult(status="no_path", metrics=self.metrics())

        u = self.frontier.pop()
        node_u = self.nodes[u]
        node_u.open = False
        self.popped_count += 1

        if u == self.end:
            self.done = True
            self.path = self._reconstruct_path(u)
            logger.debug("%s: %s -> %s found, %d cells, cost %d, %d expansions",
                         self.name, self.start, self.end, len(self.path),
                         node_u.g, self.popped_count)
            return StepResult(status="done", current=u, path=list(self.path),
                              metrics=self.metrics())

        node_u.closed = True
        self.closed_count += 1

        opened_now: List[Coord] = []
        cell_u = self.grid.get_cell(u)
        for cell_v in self.grid.get_neighbours(cell_u, self.diagonals):
            if not cell_v.passable:
                continue
            v = cell_v.coord
            node_v = self._node(v)
            if node_v.closed:
                continue

            alt = node_u.g + step_cost(u, v)
            if not node_v.visited or alt < node_v.g:
                node_v.g = alt
                node_v.h = self._estimate(v)
                node_v.parent = u
                node_v.visited = True
                if not node_v.open:
                    node_v.open = True
                    opened_now.append(v)
                self.frontier.push(v, node_v.f, node_v.h)

        return StepResult(status="running", opened=opened_now, closed=[u], current=u,
                          metrics=self.metrics())

    def run(self) -> List[Coord]:
        """Step until the end is reached or the frontier is exhausted."""
        while not self.finished:
            self.step()
        return list(self.path)

    # -------------------- metrics --------------------

    def metrics(self) -> dict:
        end_node = self.nodes.get(self.end)
        return {
            "algo": self.name,
            "popped": self.popped_count,
            "open_size": len(self.frontier),
            "closed_count": self.closed_count,
            "path_len": len(self.path),
            "total_cost": end_node.g if self.done and end_node is not None else None,
        }


def pathfind(grid: Grid, start: Coord, end: Coord, diagonals: bool = False,
             heuristic: Union[str, Heuristic] = "manhattan") -> List[Coord]:
    """Return the cheapest path from ``start`` to ``end`` inclusive, or [] if none.

    Raises OutOfBoundsError if either endpoint lies outside ``grid``.
    """
    return AStarSearch(grid, start, end, diagonals, heuristic).run()
