from collections import deque
from typing import Dict, Optional

import pytest

from gridbfs.core.bfs_stepper import BFSStepper
from gridbfs.core.types import CellKind, Coord, Grid


def run_search(grid: Grid, source: Optional[Coord] = None, destination: Optional[Coord] = None,
               max_steps: int = 100_000):
    """Start a stepper on `grid` and step it to the end; returns (stepper, results)."""
    stepper = BFSStepper()
    stepper.start(grid, source or grid.source, destination or grid.destination)
    results = []
    while not stepper.is_terminal and len(results) < max_steps:
        results.append(stepper.step())
    return stepper, results


def reference_distance(grid: Grid, source: Coord, goal: Coord) -> Optional[int]:
    """Plain one-shot BFS used to check the stepper's answers."""
    dist: Dict[Coord, int] = {source: 0}
    queue = deque([source])
    while queue:
        x, y = queue.popleft()
        if (x, y) == goal:
            return dist[(x, y)]
        for n in ((x + 1, y), (x - 1, y), (x, y + 1), (x, y - 1)):
            if n in dist or not grid.in_bounds(n):
                continue
            if grid.classify(n) == CellKind.BLOCKED:
                continue
            dist[n] = dist[(x, y)] + 1
            queue.append(n)
    return None


@pytest.fixture
def open_3x3() -> Grid:
    return Grid.empty(3, (0, 0), (2, 2))


@pytest.fixture
def pillar_3x3() -> Grid:
    """3x3, centre blocked."""
    return Grid.from_rows([[0, 0, 0],
                           [0, 1, 0],
                           [0, 0, 0]], (0, 0), (2, 2))


@pytest.fixture
def cut_2x2() -> Grid:
    """2x2 where both cells next to the source are blocked."""
    return Grid.from_rows([[0, 1],
                           [1, 0]], (0, 0), (1, 1))
