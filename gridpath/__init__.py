"""Grid pathfinding with A*, plus an interactive pygame editor."""

__version__ = "0.1.0"
