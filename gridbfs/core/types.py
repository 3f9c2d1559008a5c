# gridbfs/core/types.py
#!/usr/bin/env python3
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import List, Tuple, Optional, Dict, Any, Iterator

from gridbfs.core.errors import OutOfBounds, DegenerateGrid

Coord = Tuple[int, int]  # (col, row)

NO_PARENT = -1  # arena id of the search root's parent


class CellKind(IntEnum):
    # values double as colour-map keys and map-file cell codes
    FREE = 0
    BLOCKED = 1
    SOURCE = 2
    DESTINATION = 3
    VISITING = 4
    PATH = 5


ENDPOINT_KINDS = (CellKind.SOURCE, CellKind.DESTINATION)
MARK_KINDS = (CellKind.VISITING, CellKind.PATH)


class Status(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    FOUND = "found"
    EXHAUSTED = "exhausted"

    @property
    def is_terminal(self) -> bool:
        return self in (Status.FOUND, Status.EXHAUSTED)


@dataclass
class Grid:
    size: int
    cells: List[List[CellKind]]        # [row][col]
    source: Coord
    destination: Coord

    def __post_init__(self):
        if self.size <= 0:
            raise DegenerateGrid(f"grid size must be positive, got {self.size}")
        if len(self.cells) != self.size or any(len(r) != self.size for r in self.cells):
            raise ValueError("cells size mismatch")
        self.source = (int(self.source[0]), int(self.source[1]))
        self.destination = (int(self.destination[0]), int(self.destination[1]))
        self._check(self.source)
        self._check(self.destination)
        if self.source == self.destination:
            raise DegenerateGrid(f"source and destination are both {self.source}")

        self.cells = [[CellKind(v) for v in row] for row in self.cells]
        for (x, y) in self.coords():
            if self.cells[y][x] in ENDPOINT_KINDS and (x, y) not in (self.source, self.destination):
                raise ValueError(f"stray {self.cells[y][x].name} cell at {(x, y)}")

        # endpoints win over whatever the cell held before
        sx, sy = self.source
        gx, gy = self.destination
        self.cells[sy][sx] = CellKind.SOURCE
        self.cells[gy][gx] = CellKind.DESTINATION

    # -------------------- factories --------------------

    @classmethod
    def empty(cls, size: int, source: Coord, destination: Coord) -> "Grid":
        cells = [[CellKind.FREE] * max(size, 0) for _ in range(max(size, 0))]
        return cls(size, cells, source, destination)

    @classmethod
    def from_rows(cls, rows: List[List[int]], source: Coord, destination: Coord) -> "Grid":
        """Build from a square list of rows of cell codes (0 free, 1 blocked)."""
        return cls(len(rows), [list(r) for r in rows], source, destination)

    # -------------------- queries --------------------

    def in_bounds(self, c: Coord) -> bool:
        x, y = c
        return 0 <= x < self.size and 0 <= y < self.size

    def _check(self, c: Coord) -> None:
        if not self.in_bounds(c):
            raise OutOfBounds(c, self.size)

    def classify(self, c: Coord) -> CellKind:
        self._check(c)
        x, y = c
        return self.cells[y][x]

    def is_traversable(self, c: Coord) -> bool:
        return self.in_bounds(c) and self.classify(c) != CellKind.BLOCKED

    def coords(self) -> Iterator[Coord]:
        for y in range(self.size):
            for x in range(self.size):
                yield (x, y)

    def count(self, kind: CellKind) -> int:
        return sum(row.count(kind) for row in self.cells)

    # -------------------- mutation --------------------

    def set_class(self, c: Coord, kind: CellKind) -> None:
        self._check(c)
        kind = CellKind(kind)
        if kind in ENDPOINT_KINDS:
            raise ValueError(f"{kind.name} is fixed at construction")
        if c in (self.source, self.destination):
            raise ValueError(f"cannot reclassify endpoint {c}")
        x, y = c
        self.cells[y][x] = kind

    def clear_marks(self) -> None:
        """Return every VISITING / PATH cell to FREE."""
        for row in self.cells:
            for i, v in enumerate(row):
                if v in MARK_KINDS:
                    row[i] = CellKind.FREE


@dataclass(frozen=True)
class Position:
    x: int
    y: int
    parent: int = NO_PARENT       # arena id, NO_PARENT for the root

    @property
    def coord(self) -> Coord:
        return (self.x, self.y)


@dataclass
class StepResult:
    status: Status
    current: Optional[Coord] = None
    marked: Optional[Coord] = None      # cell that became VISITING this step
    skipped: bool = False               # dequeued an already-visited duplicate
    path: Optional[List[Coord]] = None
    metrics: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class SearchResult:
    found: bool
    path: Tuple[Coord, ...] = ()

    @classmethod
    def unreachable(cls) -> "SearchResult":
        return cls(found=False)

    @property
    def edges(self) -> Optional[int]:
        return len(self.path) - 1 if self.found else None
