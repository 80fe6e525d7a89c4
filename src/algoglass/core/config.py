# src/algoglass/core/config.py
#!/usr/bin/env python3
"""
Run-time configuration for the simulator.

Values come from defaults, then environment variables, then `--key=value`
command line arguments (last one wins):

    ALGOGLASS_ROWS  / --rows=20
    ALGOGLASS_COLS  / --cols=40
    ALGOGLASS_ALGO  / --algo=bfs|dfs|dijkstra|astar
    ALGOGLASS_SPEED / --speed=slow|normal|fast|instant
    ALGOGLASS_MAP   / --map=maps/02_walled_target.json
"""

import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Mapping, Optional

from algoglass.core.registry import check_algorithm
from algoglass.core.types import Coord

GRID_ROWS = 20
GRID_COLS = 40
DEFAULT_START: Coord = (10, 10)
DEFAULT_TARGET: Coord = (10, 30)

# milliseconds per cursor advance
SPEEDS: Dict[str, int] = {
    "slow": 500,
    "normal": 200,
    "fast": 50,
    "instant": 0,
}

ENV_PREFIX = "ALGOGLASS_"
KEYS = ("rows", "cols", "algo", "speed", "map")


def check_speed(speed: str) -> str:
    if speed not in SPEEDS:
        raise ValueError(f"unknown speed {speed!r}; expected one of {', '.join(SPEEDS)}")
    return speed


@dataclass
class SimConfig:
    rows: int = GRID_ROWS
    cols: int = GRID_COLS
    start: Coord = DEFAULT_START
    target: Coord = DEFAULT_TARGET
    algorithm: str = "bfs"
    speed: str = "normal"
    map_path: Optional[Path] = None

    def __post_init__(self):
        if self.rows <= 0 or self.cols <= 0:
            raise ValueError(f"grid dimensions must be positive, got {self.rows}x{self.cols}")
        check_algorithm(self.algorithm)
        check_speed(self.speed)
        if self.start == DEFAULT_START and self.target == DEFAULT_TARGET:
            self.start, self.target = default_endpoints(self.rows, self.cols)
        for label, (r, c) in (("start", self.start), ("target", self.target)):
            if not (0 <= r < self.rows and 0 <= c < self.cols):
                raise ValueError(f"{label} ({r}, {c}) is outside the {self.rows}x{self.cols} grid")
        if self.start == self.target:
            raise ValueError("start and target must differ")


def default_endpoints(rows: int, cols: int):
    """Default start/target, pulled inside grids smaller than the 20x40 default."""
    if rows * cols < 2:
        raise ValueError("grid needs at least two cells for start and target")
    if (rows, cols) == (GRID_ROWS, GRID_COLS):
        return DEFAULT_START, DEFAULT_TARGET
    r = rows // 2
    sc, tc = cols // 4, (3 * cols) // 4
    if sc == tc:
        if cols > 1:
            sc, tc = 0, cols - 1
        else:
            return (0, 0), (rows - 1, 0)
    return (r, sc), (r, tc)


def _raw_values(argv: List[str], env: Mapping[str, str]) -> Dict[str, str]:
    raw: Dict[str, str] = {}
    for key in KEYS:
        v = env.get(ENV_PREFIX + key.upper())
        if v:
            raw[key] = v
    for arg in argv:
        if not arg.startswith("--") or "=" not in arg:
            continue
        key, value = arg[2:].split("=", 1)
        if key in KEYS:
            raw[key] = value
    return raw


def resolve_config(argv: Optional[List[str]] = None,
                   env: Optional[Mapping[str, str]] = None) -> SimConfig:
    argv = sys.argv[1:] if argv is None else argv
    env = os.environ if env is None else env
    raw = _raw_values(argv, env)

    kwargs = {}
    for key in ("rows", "cols"):
        if key in raw:
            try:
                kwargs[key] = int(raw[key])
            except ValueError:
                raise ValueError(f"{key} must be an integer, got {raw[key]!r}")
    if "algo" in raw:
        kwargs["algorithm"] = raw["algo"].lower()
    if "speed" in raw:
        kwargs["speed"] = raw["speed"].lower()
    if "map" in raw:
        kwargs["map_path"] = Path(raw["map"])
    return SimConfig(**kwargs)
