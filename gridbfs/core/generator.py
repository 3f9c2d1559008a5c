# gridbfs/core/generator.py
#!/usr/bin/env python3
"""Random grids: independent per-cell obstacles plus two distinct endpoints."""

import logging
import random
from typing import Optional, Tuple

from gridbfs.core.errors import DegenerateGrid
from gridbfs.core.types import CellKind, Coord, Grid

log = logging.getLogger(__name__)


def random_point(size: int, rng: random.Random) -> Coord:
    x = rng.randrange(size)
    y = rng.randrange(size)
    return (x, y)


def generate(size: int, obstacle_density: float,
             rng: Optional[random.Random] = None) -> Tuple[Grid, Coord, Coord]:
    """
    Build a size x size grid where every cell is BLOCKED with probability
    `obstacle_density`, then place source and destination uniformly at random.

    The destination is redrawn until its coordinates differ from the source.
    Endpoints overwrite any block under them; whether the destination is
    reachable is left to the search.
    """
    if size <= 1:
        raise DegenerateGrid(f"need at least a 2x2 grid, got size={size}")
    if not 0.0 <= obstacle_density <= 1.0:
        raise ValueError(f"obstacle_density must be in [0, 1], got {obstacle_density}")
    rng = rng or random.Random()

    cells = [
        [CellKind.BLOCKED if rng.random() < obstacle_density else CellKind.FREE for _ in range(size)]
        for _ in range(size)
    ]

    source = random_point(size, rng)
    destination = random_point(size, rng)
    while destination == source:
        destination = random_point(size, rng)

    grid = Grid(size, cells, source, destination)
    log.debug("generated %dx%d grid, density=%.2f, blocked=%d, %s -> %s",
              size, size, obstacle_density, grid.count(CellKind.BLOCKED), source, destination)
    return grid, source, destination
