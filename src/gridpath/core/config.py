# src/gridpath/core/config.py
#!/usr/bin/env python3
"""
Runtime settings.

- ENV: GRIDPATH_HEURISTIC=legacy|manhattan
       GRIDPATH_LOG_LEVEL=DEBUG|INFO|WARNING|ERROR
       GRIDPATH_LOG_FILE=<path>
- CLI: flags of the same name override the environment.
"""

import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional, Sequence

from gridpath.core.heuristic import HEURISTICS, DEFAULT_HEURISTIC

ENV_HEURISTIC = "GRIDPATH_HEURISTIC"
ENV_LOG_LEVEL = "GRIDPATH_LOG_LEVEL"
ENV_LOG_FILE  = "GRIDPATH_LOG_FILE"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s"


@dataclass(frozen=True)
class Settings:
    heuristic: str = DEFAULT_HEURISTIC
    log_level: str = "WARNING"
    log_file: Optional[str] = None

    def __post_init__(self):
        if self.heuristic not in HEURISTICS:
            raise ValueError(f"Unknown heuristic {self.heuristic!r}; expected one of {sorted(HEURISTICS)}")
        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level {self.log_level!r}; expected one of {list(LOG_LEVELS)}")


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    env = os.environ if environ is None else environ
    return Settings(
        heuristic=env.get(ENV_HEURISTIC, DEFAULT_HEURISTIC).strip().lower(),
        log_level=env.get(ENV_LOG_LEVEL, "WARNING").strip().upper(),
        log_file=env.get(ENV_LOG_FILE) or None,
    )


def resolve_heuristic(argv: Sequence[str], settings: Settings) -> Settings:
    """Apply a --heuristic=NAME argument (last one wins) on top of settings."""
    name = settings.heuristic
    for arg in argv:
        if arg.startswith("--heuristic="):
            name = arg.split("=", 1)[1].lower()
    return replace(settings, heuristic=name)
