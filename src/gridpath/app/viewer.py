# src/gridpath/app/viewer.py
#!/usr/bin/env python3
"""
Grid Pathfinding Viewer — watch AStarAlgo expand one node at a time.

- Keyboard:
    [SPACE]      -> run/pause
    [N]          -> single step
    [R]          -> restart search
    [H]          -> toggle heuristic (legacy / manhattan)
    [1]/[2]/[3]  -> load bundled map
    [+]/[-]      -> steps/sec
    [Q]/[ESC]    -> quit

Heuristic and logging follow GRIDPATH_* env vars; --heuristic=NAME overrides.

Cells are 1-indexed with y growing upward: (1, 1) sits bottom-left.
"""

import logging
import sys
from pathlib import Path
from typing import List, Optional, Tuple

import pygame

from gridpath.app.cli import setup_logging
from gridpath.app.loader import load_grid, InputNotFound, MalformedInput
from gridpath.core.astar import AStarAlgo
from gridpath.core.config import load_settings, resolve_heuristic
from gridpath.core.types import Cell, Grid, StepResult

logger = logging.getLogger(__name__)

MAP_DIR = Path(__file__).resolve().parents[3] / "maps"
MAP_FILES = {
    pygame.K_1: MAP_DIR / "01_open.txt",
    pygame.K_2: MAP_DIR / "02_detour.txt",
    pygame.K_3: MAP_DIR / "03_walled.txt",
}

MARGIN = 16
SIDEBAR_W = 240
MAX_BOARD_PX = 640

FLOOR    = (205, 205, 205)
WALL     = ( 45,  48,  56)
GRIDLINE = ( 20,  20,  20)
OPENED   = (  0, 150, 255, 110)
CLOSED   = (255,   0, 120,  90)
ROUTE    = (  0, 255, 200)
START    = ( 70, 130, 180)
GOAL     = (220,  50,  47)
TEXT     = (230, 235, 240)
BG       = ( 24,  26,  32)


def cell_topleft(cell: Cell, grid: Grid, origin: Tuple[int, int], cs: int) -> Tuple[int, int]:
    """Screen position of a cell's top-left corner (row 0 on screen is y == height)."""
    x, y = cell
    ox, oy = origin
    return ox + (x - 1) * cs, oy + (grid.height - y) * cs


def cell_center(cell: Cell, grid: Grid, origin: Tuple[int, int], cs: int) -> Tuple[int, int]:
    left, top = cell_topleft(cell, grid, origin, cs)
    return left + cs // 2, top + cs // 2


def cell_size_for(grid: Grid) -> int:
    return max(8, MAX_BOARD_PX // max(1, grid.width, grid.height))


class Viewer:
    def __init__(self, grid: Grid, heuristic: str = "legacy", title: str = "custom"):
        pygame.init()
        self.font = pygame.font.Font(None, 20)
        self.clock = pygame.time.Clock()
        self.algo = AStarAlgo(heuristic=heuristic)
        self.steps_per_sec = 8
        self._next_step_ms = 0
        self.load(grid, title)

    def load(self, grid: Grid, title: str) -> None:
        self.grid = grid
        self.cs = cell_size_for(grid)
        board_w, board_h = grid.width * self.cs, grid.height * self.cs
        self.screen = pygame.display.set_mode(
            (board_w + SIDEBAR_W + 2 * MARGIN, max(board_h + 2 * MARGIN, 320)))
        pygame.display.set_caption(f"gridpath — {title}")
        self.algo.init(grid)
        self.restart()

    def restart(self) -> None:
        self.algo.reset()
        self.opened: set[Cell] = set()
        self.closed: set[Cell] = set()
        self.route: List[Cell] = []
        self.last: Optional[StepResult] = None
        self.running = False

    def advance(self) -> None:
        res = self.algo.step()
        self.opened.update(res.opened)
        self.closed.update(res.closed)
        self.opened.difference_update(res.closed)
        if res.path is not None:
            self.route = res.path
        if res.status in ("done", "no_path"):
            self.running = False
        self.last = res

    def on_key(self, key: int) -> None:
        if key in (pygame.K_ESCAPE, pygame.K_q):
            raise SystemExit(0)
        if key == pygame.K_SPACE:
            self.running = not self.running
        elif key == pygame.K_n:
            self.advance()
        elif key == pygame.K_r:
            self.restart()
        elif key == pygame.K_h:
            self.algo.set_heuristic("manhattan" if self.algo.heuristic == "legacy" else "legacy")
            self.restart()
        elif key in (pygame.K_PLUS, pygame.K_EQUALS, pygame.K_KP_PLUS):
            self.steps_per_sec = min(60, self.steps_per_sec + 1)
        elif key in (pygame.K_MINUS, pygame.K_KP_MINUS):
            self.steps_per_sec = max(1, self.steps_per_sec - 1)
        elif key in MAP_FILES:
            path = MAP_FILES[key]
            try:
                self.load(load_grid(path), path.stem)
            except (InputNotFound, MalformedInput) as ex:
                logger.warning("Cannot load %s: %s", path, ex)

    def run(self) -> None:
        try:
            while True:
                for e in pygame.event.get():
                    if e.type == pygame.QUIT:
                        return
                    if e.type == pygame.KEYDOWN:
                        self.on_key(e.key)
                now = pygame.time.get_ticks()
                if self.running and now >= self._next_step_ms:
                    self._next_step_ms = now + 1000 // self.steps_per_sec
                    self.advance()
                self.draw()
                self.clock.tick(60)
        finally:
            pygame.quit()

    # ---------- drawing ----------

    def _tint(self, cells, rgba) -> None:
        patch = pygame.Surface((self.cs, self.cs), pygame.SRCALPHA)
        patch.fill(rgba)
        for c in cells:
            if self.grid.in_bounds(c):
                self.screen.blit(patch, cell_topleft(c, self.grid, (MARGIN, MARGIN), self.cs))

    def draw(self) -> None:
        origin = (MARGIN, MARGIN)
        self.screen.fill(BG)
        for y in range(1, self.grid.height + 1):
            for x in range(1, self.grid.width + 1):
                rect = pygame.Rect(cell_topleft((x, y), self.grid, origin, self.cs), (self.cs, self.cs))
                pygame.draw.rect(self.screen, WALL if self.grid.is_blocked((x, y)) else FLOOR, rect)
                pygame.draw.rect(self.screen, GRIDLINE, rect, 1)
        self._tint(self.closed, CLOSED)
        self._tint(self.opened, OPENED)

        # search results leave the start out
        if self.route:
            pts = [cell_center(c, self.grid, origin, self.cs) for c in [self.grid.start] + self.route]
            pygame.draw.lines(self.screen, ROUTE, False, pts, 4)

        for cell, color in ((self.grid.start, START), (self.grid.goal, GOAL)):
            if self.grid.in_bounds(cell):
                pygame.draw.circle(self.screen, color, cell_center(cell, self.grid, origin, self.cs),
                                   max(3, self.cs // 2 - 3))

        self._draw_sidebar(MARGIN * 2 + self.grid.width * self.cs)
        pygame.display.flip()

    def _draw_sidebar(self, left: int) -> None:
        m = self.last.metrics if self.last else {}
        status = self.last.status if self.last else "idle"
        rows = [
            f"status: {status}{' (running)' if self.running else ''}",
            f"heuristic: {self.algo.heuristic}",
            f"expanded: {m.get('popped', 0)}",
            f"frontier: {m.get('open_size', len(self.algo.open_pq))}",
            f"visited: {m.get('closed_count', 0)}",
            f"path moves: {m.get('path_len', 0)}",
            f"speed: {self.steps_per_sec}/s",
            "",
            "space run  n step  r reset",
            "h heuristic  1-3 maps  q quit",
        ]
        top = MARGIN
        for text in rows:
            surf = self.font.render(text, True, TEXT)
            self.screen.blit(surf, (left, top))
            top += surf.get_height() + 6


def main() -> None:
    argv = sys.argv[1:]
    try:
        settings = resolve_heuristic(argv, load_settings())
        setup_logging(settings.log_level, settings.log_file)
    except (ValueError, OSError) as ex:
        print(f"gridpath-view: {ex}", file=sys.stderr)
        sys.exit(1)

    paths = [a for a in argv if not a.startswith("--")]
    map_path = Path(paths[0]) if paths else MAP_FILES[pygame.K_1]
    try:
        grid = load_grid(map_path)
    except (InputNotFound, MalformedInput) as ex:
        print(f"gridpath-view: {ex}", file=sys.stderr)
        sys.exit(1)
    Viewer(grid, heuristic=settings.heuristic, title=map_path.stem).run()


if __name__ == "__main__":
    main()
