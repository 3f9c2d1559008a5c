# gridbfs/config.py
"""
Runtime settings.

Resolution order (later wins):
- module defaults below
- ENV: GRIDBFS_SIZE, GRIDBFS_DENSITY, GRIDBFS_INTERVAL_MS, GRIDBFS_SEED, GRIDBFS_LOG_LEVEL
- CLI: --size, --density, --interval, --seed, --log-level, --map, --headless
"""

import argparse
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Mapping, Optional, Sequence

# ---------- Defaults ----------
GRID_SIZE = 30
OBSTACLE_DENSITY = 0.3
STEP_INTERVAL_MS = 10
MIN_INTERVAL_MS = 1
MAX_INTERVAL_MS = 1000
LOG_LEVEL = "WARNING"

MAP_DIR = Path(__file__).resolve().parents[1] / "maps"


def clamp_density(value: float) -> float:
    return max(0.0, min(1.0, float(value)))


def clamp_interval(value: int) -> int:
    return int(max(MIN_INTERVAL_MS, min(MAX_INTERVAL_MS, int(value))))


@dataclass(frozen=True)
class Settings:
    grid_size: int = GRID_SIZE
    obstacle_density: float = OBSTACLE_DENSITY
    step_interval_ms: int = STEP_INTERVAL_MS
    seed: Optional[int] = None
    log_level: str = LOG_LEVEL
    map_path: Optional[Path] = None
    headless: bool = False

    def __post_init__(self):
        if self.grid_size < 2:
            raise ValueError(f"grid_size must be at least 2, got {self.grid_size}")
        # frozen: normalise through object.__setattr__
        object.__setattr__(self, "obstacle_density", clamp_density(self.obstacle_density))
        object.__setattr__(self, "step_interval_ms", clamp_interval(self.step_interval_ms))
        object.__setattr__(self, "log_level", str(self.log_level).upper())


def from_env(environ: Optional[Mapping[str, str]] = None, base: Optional[Settings] = None) -> Settings:
    env = os.environ if environ is None else environ
    s = base or Settings()
    changes = {}
    if env.get("GRIDBFS_SIZE"):
        changes["grid_size"] = int(env["GRIDBFS_SIZE"])
    if env.get("GRIDBFS_DENSITY"):
        changes["obstacle_density"] = float(env["GRIDBFS_DENSITY"])
    if env.get("GRIDBFS_INTERVAL_MS"):
        changes["step_interval_ms"] = int(env["GRIDBFS_INTERVAL_MS"])
    if env.get("GRIDBFS_SEED"):
        changes["seed"] = int(env["GRIDBFS_SEED"])
    if env.get("GRIDBFS_LOG_LEVEL"):
        changes["log_level"] = env["GRIDBFS_LOG_LEVEL"]
    return replace(s, **changes) if changes else s


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gridbfs",
        description="Animated breadth-first search on a random grid",
    )
    parser.add_argument("--size", type=int, default=None,
                        help=f"cells per side (default: {GRID_SIZE})")
    parser.add_argument("--density", type=float, default=None,
                        help=f"obstacle probability per cell, clamped to [0, 1] (default: {OBSTACLE_DENSITY})")
    parser.add_argument("--interval", type=int, default=None,
                        help=f"milliseconds between steps (default: {STEP_INTERVAL_MS})")
    parser.add_argument("--seed", type=int, default=None,
                        help="seed for the grid generator")
    parser.add_argument("--log-level", type=str, default=None,
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help=f"logging level (default: {LOG_LEVEL})")
    parser.add_argument("--map", type=Path, default=None,
                        help="load a JSON map instead of generating one")
    parser.add_argument("--headless", action="store_true",
                        help="run to completion and print the grid to the terminal")
    return parser


def resolve_settings(argv: Optional[Sequence[str]] = None,
                     environ: Optional[Mapping[str, str]] = None) -> Settings:
    parser = build_parser()
    args = parser.parse_args(argv)
    changes = {}
    if args.size is not None:
        changes["grid_size"] = args.size
    if args.density is not None:
        changes["obstacle_density"] = args.density
    if args.interval is not None:
        changes["step_interval_ms"] = args.interval
    if args.seed is not None:
        changes["seed"] = args.seed
    if args.log_level is not None:
        changes["log_level"] = args.log_level
    if args.map is not None:
        changes["map_path"] = args.map
    if args.headless:
        changes["headless"] = True
    try:
        s = from_env(environ)
        return replace(s, **changes) if changes else s
    except ValueError as ex:
        parser.error(str(ex))
