# src/gridpath/app/report.py
import sys
from typing import List, Optional, Sequence, TextIO

from gridpath.core.types import Cell

NO_PATH = "No path found"


def format_cell(c: Cell) -> str:
    return f"({c[0]}, {c[1]})"


def format_path(path: Optional[Sequence[Cell]]) -> List[str]:
    # one line per move, first move through goal
    if path is None:
        return [NO_PATH]
    return [format_cell(c) for c in path]


def report(path: Optional[Sequence[Cell]], out: Optional[TextIO] = None) -> None:
    out = sys.stdout if out is None else out
    for line in format_path(path):
        print(line, file=out)
