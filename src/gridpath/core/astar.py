# src/gridpath/core/astar.py
#!/usr/bin/env python3
"""
A* over a 1-indexed obstacle grid — one expansion per step() for animation.

Implements the Algorithm API expected by the viewer:
- init(grid) - reset() - step() -> StepResult
and run() / find_path() for one-shot use.

Bookkeeping:
- Nodes live in an append-only arena (self.nodes); parents are arena indices.
- Frontier is a heap of (estimate, seq, index): lower estimate, then FIFO by seq.
- Visited maps (position, cost) -> index. Two nodes at one position with
  different cost are different states.

Duplicate handling (kept exactly, even though it looks backwards):
- a successor is dropped if the frontier holds a node at the same position
  with a strictly greater estimate;
- a successor whose (position, cost) was already expanded is dropped if some
  expanded node at the same position has a strictly greater estimate.
Both checks scan the whole collection.

Termination:
- a (position, cost) state is expanded at most once (stale pops are skipped);
- successors costing more than passable_count() - 1 moves are never opened,
  since no simple path is that long.
"""

from dataclasses import dataclass, field
from typing import Dict, Tuple, List, Optional
import heapq
import logging

from gridpath.core.types import StepResult, Grid, SearchNode, Cell
from gridpath.core.heuristic import Distance, get_heuristic, estimate, DEFAULT_HEURISTIC

logger = logging.getLogger(__name__)

# up, down, right, left
MOVES: Tuple[Cell, ...] = ((0, 1), (0, -1), (1, 0), (-1, 0))


@dataclass
class AStarAlgo:
    name: str = "A*"
    heuristic: str = DEFAULT_HEURISTIC

    # Internal state
    grid: Optional[Grid] = None
    nodes: List[SearchNode] = field(default_factory=list)                 # arena
    open_pq: List[Tuple[int, int, int]] = field(default_factory=list)     # (f, seq, index)
    closed: Dict[Tuple[Cell, int], int] = field(default_factory=dict)     # (pos, g) -> index
    max_cost: int = 0
    popped_count: int = 0
    done: bool = False
    no_path: bool = False
    goal_index: Optional[int] = None
    seq: int = 0  # monotonic counter for PQ stability

    def __post_init__(self):
        self._distance: Distance = get_heuristic(self.heuristic)

    # -------------------- lifecycle --------------------

    def init(self, grid: Grid) -> None:
        """Initialize on a given grid."""
        self.grid = grid
        self.reset()

    def set_heuristic(self, heuristic: str) -> None:
        self._distance = get_heuristic(heuristic)
        self.heuristic = heuristic
        self.reset()

    def reset(self) -> None:
        """Clear all state and seed with the start node."""
        if self.grid is None:
            return
        self.nodes.clear()
        self.open_pq.clear()
        self.closed.clear()
        self.popped_count = 0
        self.done = False
        self.no_path = False
        self.goal_index = None
        self.seq = 0
        self.max_cost = max(0, self.grid.passable_count() - 1)

        self._push(SearchNode(self.grid.start, 0, None))
        logger.debug("A* reset: start=%s goal=%s heuristic=%s max_cost=%d",
                     self.grid.start, self.grid.goal, self.heuristic, self.max_cost)

    # -------------------- helpers --------------------

    def _bump(self) -> int:
        self.seq += 1
        return self.seq

    def _f(self, node: SearchNode) -> int:
        return estimate(node, self.grid.goal, self._distance)

    def _push(self, node: SearchNode) -> int:
        self.nodes.append(node)
        index = len(self.nodes) - 1
        heapq.heappush(self.open_pq, (self._f(node), self._bump(), index))
        return index

    def _successors(self, index: int) -> List[SearchNode]:
        """Passable 4-connected successors of nodes[index], one move dearer."""
        node = self.nodes[index]
        x, y = node.position
        g = node.cost + 1
        if g > self.max_cost:
            return []
        out: List[SearchNode] = []
        for dx, dy in MOVES:
            c = (x + dx, y + dy)
            if self.grid.is_passable(c):
                out.append(SearchNode(c, g, index))
        return out

    def _frontier_rejects(self, succ: SearchNode, f_succ: int) -> bool:
        for f_n, _, i in self.open_pq:
            if self.nodes[i].position == succ.position and f_n > f_succ:
                return True
        return False

    def _visited_rejects(self, succ: SearchNode, f_succ: int) -> bool:
        if succ.key not in self.closed:
            return False
        for (pos, _), i in self.closed.items():
            if pos == succ.position and self._f(self.nodes[i]) > f_succ:
                return True
        return False

    def _reconstruct_path(self, end: int) -> List[Cell]:
        """Positions from the first move after start through end; the root is left out."""
        path: List[Cell] = []
        cur: Optional[int] = end
        while cur is not None and self.nodes[cur].parent is not None:
            path.append(self.nodes[cur].position)
            cur = self.nodes[cur].parent
        path.reverse()
        return path

    # -------------------- main stepping logic --------------------

    def step(self) -> StepResult:
        """
        Run ONE expansion step:
          - Pop the lowest-estimate node.
          - If it sits on the goal, reconstruct and finish.
          - Else open its successors that survive the duplicate checks.
        """
        if self.grid is None:
            return StepResult(status="idle", metrics={"algo": self.name})

        if self.done:
            path = self._reconstruct_path(self.goal_index)
            return StepResult(status="done", path=path,
                              metrics=self._metrics(path_len=len(path)))

        if self.no_path:
            return StepResult(status="no_path", metrics=self._metrics())

        if not self.open_pq:
            self.no_path = True
            logger.info("No path from %s to %s after %d expansions",
                        self.grid.start, self.grid.goal, self.popped_count)
            return StepResult(status="no_path", metrics=self._metrics())

        _, _, u = heapq.heappop(self.open_pq)
        node = self.nodes[u]

        # Ignore stale pops
        if node.key in self.closed:
            return StepResult(status="running", current=node.position, metrics=self._metrics())

        self.popped_count += 1

        if node.position == self.grid.goal:
            self.done = True
            self.goal_index = u
            path = self._reconstruct_path(u)
            logger.info("Path found: %d moves, %d expansions", len(path), self.popped_count)
            return StepResult(status="done", closed=[node.position], current=node.position,
                              path=path, metrics=self._metrics(path_len=len(path)))

        opened_now: List[Cell] = []
        for succ in self._successors(u):
            f_succ = self._f(succ)
            if self._frontier_rejects(succ, f_succ):
                continue
            if self._visited_rejects(succ, f_succ):
                continue
            self._push(succ)
            opened_now.append(succ.position)

        self.closed[node.key] = u

        return StepResult(status="running", opened=opened_now, closed=[node.position],
                          current=node.position, metrics=self._metrics())

    def run(self) -> StepResult:
        """Step until the search finishes; returns the terminal StepResult."""
        if self.grid is None:
            return StepResult(status="idle", metrics={"algo": self.name})
        res = self.step()
        while res.status == "running":
            res = self.step()
        return res

    # -------------------- metrics --------------------

    def _metrics(self, path_len: int = 0) -> dict:
        total = self.nodes[self.goal_index].cost if self.goal_index is not None else None
        return {
            "algo": self.name,
            "heuristic": self.heuristic,
            "popped": self.popped_count,
            "open_size": len(self.open_pq),
            "closed_count": len(self.closed),
            "path_len": path_len,
            "total_cost": total,
        }


def find_path(grid: Grid, heuristic: str = DEFAULT_HEURISTIC) -> Optional[List[Cell]]:
    """Search grid from start to goal.

    Returns the cells from the first move through the goal ([] when start is
    the goal), or None when the goal cannot be reached.
    """
    algo = AStarAlgo(heuristic=heuristic)
    algo.init(grid)
    res = algo.run()
    return res.path if res.status == "done" else None
