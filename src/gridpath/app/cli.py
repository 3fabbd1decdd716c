# src/gridpath/app/cli.py
#!/usr/bin/env python3
"""
Command-line entry point: solve one grid file and print the path.

Usage:
    gridpath maps/02_detour.txt
    gridpath maps/02_detour.txt --heuristic manhattan --log-level DEBUG
"""

import argparse
import logging
import sys
from typing import List, Optional

from gridpath.app.loader import dump_grid, load_grid, InputNotFound, MalformedInput
from gridpath.app.report import report
from gridpath.core.astar import find_path
from gridpath.core.config import LOG_FORMAT, LOG_LEVELS, Settings, load_settings
from gridpath.core.heuristic import HEURISTICS

logger = logging.getLogger(__name__)


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gridpath",
        description="Shortest 4-directional path on an obstacle grid (A*)",
    )
    parser.add_argument("input", help="Path to the grid text file")
    parser.add_argument("--heuristic", choices=sorted(HEURISTICS), default=settings.heuristic,
                        help="Distance estimate (default: %(default)s)")
    parser.add_argument("--log-level", choices=LOG_LEVELS, default=settings.log_level,
                        type=str.upper, help="Logging level (default: %(default)s)")
    parser.add_argument("--log-file", default=settings.log_file,
                        help="Also write log records to this file")
    return parser


def setup_logging(level: str, log_file: Optional[str] = None) -> None:
    """Configure the root logger; raises OSError when log_file cannot be opened."""
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="w"))
    logging.basicConfig(level=getattr(logging, level), format=LOG_FORMAT,
                        handlers=handlers)


def main(argv: Optional[List[str]] = None) -> int:
    try:
        settings = load_settings()
    except ValueError as ex:
        print(f"gridpath: {ex}", file=sys.stderr)
        return 1

    args = build_parser(settings).parse_args(argv)
    try:
        setup_logging(args.log_level, args.log_file)
    except OSError as ex:
        print(f"gridpath: cannot open log file: {ex}", file=sys.stderr)
        return 1

    try:
        grid = load_grid(args.input)
    except InputNotFound as ex:
        logger.error("%s", ex)
        return 1
    except MalformedInput as ex:
        logger.error("Malformed grid file %s: %s", args.input, ex)
        return 1

    logger.debug("Grid as read:\n%s", dump_grid(grid))
    logger.info("Searching %dx%d grid from %s to %s (%s)",
                grid.width, grid.height, grid.start, grid.goal, args.heuristic)
    report(find_path(grid, heuristic=args.heuristic))
    return 0


if __name__ == "__main__":
    sys.exit(main())
