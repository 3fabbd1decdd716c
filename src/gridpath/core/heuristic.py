# src/gridpath/core/heuristic.py
#!/usr/bin/env python3
"""
Distance estimates for the 4-connected grid search.

- legacy:    |ax - bx| + |ay + by|   (the y term adds instead of subtracting;
             kept as-is so results match existing grid solutions)
- manhattan: |ax - bx| + |ay - by|

The legacy estimate is not admissible, so with it the returned path is not
guaranteed to be the shortest one.
"""

from typing import Callable, Dict

from gridpath.core.types import Cell, SearchNode

Distance = Callable[[Cell, Cell], int]


def skewed_manhattan(a: Cell, b: Cell) -> int:
    return abs(a[0] - b[0]) + abs(a[1] + b[1])


def manhattan(a: Cell, b: Cell) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


HEURISTICS: Dict[str, Distance] = {
    "legacy": skewed_manhattan,
    "manhattan": manhattan,
}

DEFAULT_HEURISTIC = "legacy"


def get_heuristic(name: str) -> Distance:
    try:
        return HEURISTICS[name]
    except KeyError:
        raise ValueError(
            f"Unknown heuristic {name!r}; expected one of {sorted(HEURISTICS)}"
        ) from None


def estimate(node: SearchNode, goal: Cell, distance: Distance = skewed_manhattan) -> int:
    """Total estimated cost: moves so far plus distance to goal."""
    return node.cost + distance(node.position, goal)
