# src/gridpath/app/loader.py
#!/usr/bin/env python3
"""Grid text files.

Format (example):
5,5
1,1
3,1
2,1-2,2

line 1 = height,width
line 2 = start x,y
line 3 = goal x,y
line 4 = obstacle cells x,y joined by '-' (may be left out or blank)
"""

import logging
from pathlib import Path
from typing import List, Union

from gridpath.core.types import Cell, Grid

logger = logging.getLogger(__name__)


class InputNotFound(FileNotFoundError):
    """The grid description file does not exist."""


class MalformedInput(ValueError):
    """The grid description could not be parsed."""


def _parse_pair(text: str, lineno: int, what: str) -> Cell:
    parts = [p.strip() for p in text.split(",")]
    if len(parts) != 2:
        raise MalformedInput(f"line {lineno}: expected {what} as 'a,b', got {text.strip()!r}")
    try:
        return (int(parts[0]), int(parts[1]))
    except ValueError:
        raise MalformedInput(f"line {lineno}: non-integer value in {what} {text.strip()!r}") from None


def parse_grid(text: str) -> Grid:
    lines: List[str] = [ln.strip() for ln in text.splitlines()]
    while lines and not lines[-1]:
        lines.pop()

    if len(lines) < 3:
        raise MalformedInput(f"expected at least 3 lines (size, start, goal), got {len(lines)}")
    if len(lines) > 4:
        raise MalformedInput(f"expected at most 4 lines, got {len(lines)}")

    height, width = _parse_pair(lines[0], 1, "height,width")
    start = _parse_pair(lines[1], 2, "start")
    goal = _parse_pair(lines[2], 3, "goal")

    obstacles: List[Cell] = []
    if len(lines) == 4 and lines[3]:
        for chunk in lines[3].split("-"):
            obstacles.append(_parse_pair(chunk, 4, "obstacle"))

    return Grid(width, height, start, goal, frozenset(obstacles))


def load_grid(path: Union[str, Path]) -> Grid:
    p = Path(path)
    if not p.is_file():
        raise InputNotFound(f"Grid file not found: {p}")
    try:
        with open(p, "r", encoding="utf-8") as f:
            text = f.read()
    except UnicodeDecodeError as ex:
        raise MalformedInput(f"not UTF-8 text at byte {ex.start}") from None
    grid = parse_grid(text)
    logger.debug("Loaded %s: %dx%d, %d obstacles", p, grid.width, grid.height, len(grid.obstacles))
    return grid


def dump_grid(grid: Grid) -> str:
    """Render grid back to the text format (obstacles sorted)."""
    obstacles = "-".join(f"{x},{y}" for x, y in sorted(grid.obstacles))
    return (
        f"{grid.height},{grid.width}\n"
        f"{grid.start[0]},{grid.start[1]}\n"
        f"{grid.goal[0]},{grid.goal[1]}\n"
        f"{obstacles}\n"
    )
