# src/gridpath/core/types.py
#!/usr/bin/env python3
from dataclasses import dataclass, field
from typing import List, Tuple, Optional, Dict, Any, FrozenSet

Cell = Tuple[int, int]  # (x, y), 1-indexed

@dataclass(frozen=True)
class Grid:
    width: int
    height: int
    start: Cell
    goal: Cell
    obstacles: FrozenSet[Cell] = frozenset()

    def __post_init__(self):
        # accept lists / any iterable of cells; store hashable tuples
        object.__setattr__(self, "start", tuple(self.start))
        object.__setattr__(self, "goal", tuple(self.goal))
        object.__setattr__(self, "obstacles", frozenset(tuple(c) for c in self.obstacles))

    def in_bounds(self, c: Cell) -> bool:
        x, y = c
        return 1 <= x <= self.width and 1 <= y <= self.height

    def is_blocked(self, c: Cell) -> bool:
        return tuple(c) in self.obstacles

    def is_passable(self, c: Cell) -> bool:
        return self.in_bounds(c) and not self.is_blocked(c)

    def passable_count(self) -> int:
        """Number of in-bounds cells that are not obstacles."""
        if self.width <= 0 or self.height <= 0:
            return 0
        inside = sum(1 for c in self.obstacles if self.in_bounds(c))
        return self.width * self.height - inside

@dataclass(frozen=True)
class SearchNode:
    position: Cell
    cost: int                                                   # moves from start (g)
    parent: Optional[int] = field(default=None, compare=False)  # arena index

    @property
    def key(self) -> Tuple[Cell, int]:
        return (self.position, self.cost)

@dataclass
class StepResult:
    status: str                   # "idle" | "running" | "done" | "no_path"
    opened: List[Cell] = field(default_factory=list)
    closed: List[Cell] = field(default_factory=list)
    current: Optional[Cell] = None
    path: Optional[List[Cell]] = None
    metrics: Dict[str, Any] = field(default_factory=dict)
