from gridpath.core.astar import AStarSearch, SearchNode, pathfind
from gridpath.core.types import Cell, Coord, Grid, OutOfBoundsError, StepResult

__all__ = [
    "AStarSearch",
    "Cell",
    "Coord",
    "Grid",
    "OutOfBoundsError",
    "SearchNode",
    "StepResult",
    "pathfind",
]
