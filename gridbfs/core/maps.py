# gridbfs/core/maps.py
#!/usr/bin/env python3
"""
JSON map files:

    {"size": 5, "source": [0, 0], "destination": [4, 4],
     "cells": [[0, 0, 1, 0, 0], ...]}

cells are [row][col] with 0 = free and 1 = blocked; source/destination are [x, y].
"""

import json
from pathlib import Path
from typing import Any, Dict, Tuple, Union

from gridbfs.config import MAP_DIR
from gridbfs.core.types import CellKind, Grid

MAP_FILES = {
    "01_open_field": MAP_DIR / "01_open_field.json",
    "02_wall_gap":   MAP_DIR / "02_wall_gap.json",
    "03_sealed":     MAP_DIR / "03_sealed.json",
}


def _coord(raw, label: str) -> Tuple[int, int]:
    if len(raw) != 2:
        raise ValueError(f"{label} must have exactly 2 values, got {raw!r}")
    return int(raw[0]), int(raw[1])


def grid_from_dict(data: Dict[str, Any]) -> Grid:
    cells = data["cells"]
    size = int(data.get("size", len(cells)))
    for row in cells:
        for v in row:
            if v not in (CellKind.FREE, CellKind.BLOCKED):
                raise ValueError(f"map cells must be 0 or 1, got {v!r}")
    source = _coord(data["source"], "source")
    destination = _coord(data["destination"], "destination")
    return Grid(size, [list(r) for r in cells], source, destination)


def grid_to_dict(grid: Grid) -> Dict[str, Any]:
    return {
        "size": grid.size,
        "source": list(grid.source),
        "destination": list(grid.destination),
        "cells": [[int(v == CellKind.BLOCKED) for v in row] for row in grid.cells],
    }


def load_map(path: Union[str, Path]) -> Grid:
    with open(path, "r") as f:
        data = json.load(f)
    return grid_from_dict(data)


def save_map(grid: Grid, path: Union[str, Path]) -> None:
    with open(path, "w") as f:
        json.dump(grid_to_dict(grid), f)
