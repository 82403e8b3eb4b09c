#!/usr/bin/env python3
"""
Runtime settings.

Each setting is read from its environment variable first and can be
overridden on the command line with --key=value, e.g.

    MAZEVIZ_ROWS=41 python -m mazeviz --cols=81 --algorithm=astar
"""

import os
import sys
from dataclasses import dataclass
from typing import List, Mapping, Optional

from mazeviz.app.playback import DEFAULT_SPEED_SETTING
from mazeviz.core.maze import DFS_BACKTRACKING, MAZE_TYPES
from mazeviz.core.pathfinding import ALGORITHMS, BFS

MIN_SIDE = 3


@dataclass
class Settings:
    rows: int = 31
    cols: int = 61
    speed: int = DEFAULT_SPEED_SETTING     # slider value, see speed_setting_to_delay
    maze: str = DFS_BACKTRACKING
    algorithm: str = BFS
    explain_url: Optional[str] = None


# setting name -> environment variable
ENV_VARS = {
    "rows": "MAZEVIZ_ROWS",
    "cols": "MAZEVIZ_COLS",
    "speed": "MAZEVIZ_SPEED",
    "maze": "MAZEVIZ_MAZE",
    "algorithm": "MAZEVIZ_ALGORITHM",
    "explain_url": "MAZEVIZ_EXPLAIN_URL",
}


def _raw_values(argv: List[str], environ: Mapping[str, str]) -> dict:
    raw = {}
    for key, var in ENV_VARS.items():
        if environ.get(var):
            raw[key] = environ[var]
    for arg in argv:
        if not arg.startswith("--") or "=" not in arg:
            continue
        key, value = arg[2:].split("=", 1)
        key = key.replace("-", "_")
        if key in ENV_VARS:
            raw[key] = value
    return raw


def _as_int(key: str, value: str, default: int) -> int:
    try:
        return int(value)
    except ValueError:
        print(f"Ignoring {key}={value!r}: not an integer, using {default}")
        return default


def resolve_settings(argv: Optional[List[str]] = None,
                     environ: Optional[Mapping[str, str]] = None) -> Settings:
    argv = sys.argv[1:] if argv is None else argv
    environ = os.environ if environ is None else environ
    raw = _raw_values(argv, environ)
    s = Settings()

    for key in ("rows", "cols", "speed"):
        if key in raw:
            setattr(s, key, _as_int(key, raw[key], getattr(s, key)))
    s.rows = max(MIN_SIDE, s.rows)
    s.cols = max(MIN_SIDE, s.cols)

    maze = raw.get("maze", s.maze).lower()
    if maze in MAZE_TYPES:
        s.maze = maze
    else:
        print(f"Unknown maze type {maze!r}, using {s.maze}")

    algorithm = raw.get("algorithm", s.algorithm).lower()
    if algorithm in ALGORITHMS:
        s.algorithm = algorithm
    else:
        print(f"Unknown algorithm {algorithm!r}, using {s.algorithm}")

    s.explain_url = raw.get("explain_url") or None
    return s
