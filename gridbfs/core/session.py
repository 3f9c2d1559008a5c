# gridbfs/core/session.py
#!/usr/bin/env python3
"""One search session: the grid being searched and the stepper searching it."""

import logging
import random
from typing import Optional

from gridbfs.config import Settings, clamp_density
from gridbfs.core.bfs_stepper import BFSStepper
from gridbfs.core.generator import generate
from gridbfs.core.types import Grid, SearchResult, Status, StepResult

log = logging.getLogger(__name__)


class SearchSession:
    def __init__(self, settings: Optional[Settings] = None, rng: Optional[random.Random] = None):
        self.settings = settings or Settings()
        self.rng = rng or random.Random(self.settings.seed)
        self.grid: Optional[Grid] = None
        self.stepper = BFSStepper()
        self.generation = 0          # bumped on every (re)start
        self.density = self.settings.obstacle_density
        self.size = self.settings.grid_size

    # -------------------- starting searches --------------------

    def randomize(self, size: Optional[int] = None, density: Optional[float] = None) -> Grid:
        """Generate a new grid and start searching it."""
        size = self.size if size is None else size
        density = self.density if density is None else clamp_density(density)
        grid, _, _ = generate(size, density, self.rng)
        self.size, self.density = size, density
        self._begin(grid)
        return grid

    def load(self, grid: Grid) -> None:
        """Search a ready-made grid (e.g. one read from a map file)."""
        grid.clear_marks()
        self.size = grid.size
        self._begin(grid)

    def restart(self) -> None:
        """Search the current grid again from scratch."""
        if self.grid is None:
            return
        self.stepper.reset()
        self.generation += 1
        log.info("restart #%d", self.generation)

    def _begin(self, grid: Grid) -> None:
        self.grid = grid
        self.stepper.start(grid, grid.source, grid.destination)
        self.generation += 1
        log.info("session #%d: %dx%d grid, %s -> %s",
                 self.generation, grid.size, grid.size, grid.source, grid.destination)

    # -------------------- state --------------------

    def step(self) -> StepResult:
        return self.stepper.step()

    @property
    def status(self) -> Status:
        return self.stepper.status

    @property
    def is_terminal(self) -> bool:
        return self.stepper.is_terminal

    @property
    def result(self) -> Optional[SearchResult]:
        return self.stepper.result

    def run_to_end(self, max_steps: Optional[int] = None) -> Optional[SearchResult]:
        """Step synchronously until terminal (or max_steps); returns the result."""
        n = 0
        while not self.is_terminal and (max_steps is None or n < max_steps):
            self.step()
            n += 1
        return self.result
