# gridpath/core/heuristics.py
#!/usr/bin/env python3
"""
Distance estimates from a cell to the goal.

Every heuristic takes (a, b, diagonals) and returns an int:
- manhattan: |dx| + |dy| in grid units (the default).
- octile:    exact obstacle-free cost under the 10/14 step costs.
- dijkstra:  always 0, so A* degrades to uniform-cost search.
"""

from typing import Callable, Dict, Union

from gridpath.core.types import Coord

ORTHOGONAL_COST = 10
DIAGONAL_COST = 14

Heuristic = Callable[[Coord, Coord, bool], int]


def manhattan(a: Coord, b: Coord, diagonals: bool = False) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def octile(a: Coord, b: Coord, diagonals: bool = False) -> int:
    dx = abs(a[0] - b[0])
    dy = abs(a[1] - b[1])
    if not diagonals:
        return ORTHOGONAL_COST * (dx + dy)
    return ORTHOGONAL_COST * (dx + dy) + (DIAGONAL_COST - 2 * ORTHOGONAL_COST) * min(dx, dy)


def dijkstra(a: Coord, b: Coord, diagonals: bool = False) -> int:
    return 0


HEURISTICS: Dict[str, Heuristic] = {
    "manhattan": manhattan,
    "octile": octile,
    "dijkstra": dijkstra,
}


def resolve(heuristic: Union[str, Heuristic]) -> Heuristic:
    """Look up a heuristic by name; callables pass through unchanged."""
    if callable(heuristic):
        return heuristic
    try:
        return HEURISTICS[str(heuristic).lower()]
    except KeyError:
        raise ValueError(
            f"unknown heuristic {heuristic!r}; expected one of {sorted(HEURISTICS)}"
        ) from None


def step_cost(a: Coord, b: Coord) -> int:
    """Cost of moving between two adjacent cells, decided by their coordinates."""
    if a[0] != b[0] and a[1] != b[1]:
        return DIAGONAL_COST
    return ORTHOGONAL_COST
