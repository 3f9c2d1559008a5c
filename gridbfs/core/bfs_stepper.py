# gridbfs/core/bfs_stepper.py
#!/usr/bin/env python3
"""
Breadth-first search, one frontier expansion per step() for animation.

Lifecycle:
- start(grid, source, destination) -> RUNNING
- step() -> StepResult, until FOUND or EXHAUSTED
- reset() -> replay the same search from scratch

A coordinate may sit in the frontier several times; only its first dequeue is
expanded and later copies are dropped. Every discovered Position lives in an
arena and refers to its parent by arena id, so the parent of a coordinate is
fixed by the copy that is expanded first.
"""

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, List, Optional, Set

from gridbfs.core.errors import InvalidState
from gridbfs.core.types import (
    CellKind, Coord, ENDPOINT_KINDS, Grid, NO_PARENT, Position, SearchResult, Status, StepResult,
)

log = logging.getLogger(__name__)

# up, down, left, right as (dx, dy); row 0 is the top of the grid
NEIGHBOR_ORDER = ((0, -1), (0, 1), (-1, 0), (1, 0))


@dataclass
class BFSStepper:
    name: str = "BFS"

    # Internal state
    grid: Optional[Grid] = None
    source: Optional[Coord] = None
    destination: Optional[Coord] = None
    status: Status = Status.IDLE
    arena: List[Position] = field(default_factory=list)
    frontier: Deque[int] = field(default_factory=deque)     # arena ids, FIFO
    visited: Set[Coord] = field(default_factory=set)
    path: List[Coord] = field(default_factory=list)
    popped_count: int = 0
    skipped_count: int = 0
    steps: int = 0

    # -------------------- lifecycle --------------------

    def start(self, grid: Grid, source: Coord, destination: Coord) -> None:
        """Begin a fresh search; any previous search state is dropped."""
        grid.classify(source)          # OutOfBounds for bad endpoints
        grid.classify(destination)
        self.grid = grid
        self.source = tuple(source)
        self.destination = tuple(destination)
        self._seed()
        log.debug("%s start %s -> %s on %dx%d grid",
                  self.name, self.source, self.destination, grid.size, grid.size)

    def reset(self) -> None:
        """Replay the search on the same grid, clearing its VISITING/PATH marks."""
        if self.grid is None:
            return
        self.grid.clear_marks()
        self._seed()

    def _seed(self) -> None:
        self.arena.clear()
        self.frontier.clear()
        self.visited.clear()
        self.path = []
        self.popped_count = 0
        self.skipped_count = 0
        self.steps = 0
        self.arena.append(Position(self.source[0], self.source[1], NO_PARENT))
        self.frontier.append(0)
        self.status = Status.RUNNING

    @property
    def is_terminal(self) -> bool:
        return self.status.is_terminal

    @property
    def result(self) -> Optional[SearchResult]:
        if self.status == Status.FOUND:
            return SearchResult(found=True, path=tuple(self.path))
        if self.status == Status.EXHAUSTED:
            return SearchResult.unreachable()
        return None

    def frontier_coords(self) -> List[Coord]:
        return [self.arena[i].coord for i in self.frontier]

    # -------------------- helpers --------------------

    def _enqueue(self, x: int, y: int, parent: int) -> None:
        self.arena.append(Position(x, y, parent))
        self.frontier.append(len(self.arena) - 1)

    def _reconstruct_path(self, end: int) -> List[Coord]:
        path: List[Coord] = []
        cur = end
        while cur != NO_PARENT:
            pos = self.arena[cur]
            path.append(pos.coord)
            cur = pos.parent
        path.reverse()
        return path

    def _mark_path(self, path: List[Coord]) -> None:
        for c in path:
            if self.grid.classify(c) not in ENDPOINT_KINDS:
                self.grid.set_class(c, CellKind.PATH)

    # -------------------- main stepping logic --------------------

    def step(self) -> StepResult:
        """
        Run ONE BFS iteration:
          - Empty frontier: the destination is unreachable.
          - Pop the oldest position; drop it if its cell was already expanded.
          - Mark it visited; if it is the destination, trace and mark the path.
          - Else queue every traversable neighbour (up, down, left, right).
        """
        if self.status == Status.IDLE:
            raise InvalidState("step() called before start()")
        if self.status.is_terminal:
            raise InvalidState(f"step() called after search ended ({self.status.value})")

        self.steps += 1

        if not self.frontier:
            self.status = Status.EXHAUSTED
            log.debug("%s exhausted after %d expansions", self.name, self.popped_count)
            return StepResult(status=self.status, metrics=self.metrics())

        pid = self.frontier.popleft()
        pos = self.arena[pid]
        c = pos.coord

        if c in self.visited:
            self.skipped_count += 1
            return StepResult(status=self.status, current=c, skipped=True, metrics=self.metrics())

        self.visited.add(c)
        self.popped_count += 1

        marked = None
        if self.grid.classify(c) not in ENDPOINT_KINDS:
            self.grid.set_class(c, CellKind.VISITING)
            marked = c

        if c == self.destination:
            self.path = self._reconstruct_path(pid)
            self._mark_path(self.path)
            self.status = Status.FOUND
            log.debug("%s found path of %d edges after %d expansions",
                      self.name, len(self.path) - 1, self.popped_count)
            return StepResult(status=self.status, current=c, marked=marked,
                              path=list(self.path), metrics=self.metrics())

        # visited neighbours are queued as well; the dequeue check drops them
        for dx, dy in NEIGHBOR_ORDER:
            n = (pos.x + dx, pos.y + dy)
            if self.grid.is_traversable(n):
                self._enqueue(n[0], n[1], pid)

        return StepResult(status=self.status, current=c, marked=marked, metrics=self.metrics())

    # -------------------- metrics --------------------

    def metrics(self) -> dict:
        return {
            "algo": self.name,
            "popped": self.popped_count,
            "skipped": self.skipped_count,
            "frontier_size": len(self.frontier),
            "visited_count": len(self.visited),
            "path_len": len(self.path) - 1 if self.path else 0,
            "steps": self.steps,
        }
