import json

import pytest

from gridbfs.core.errors import OutOfBounds
from gridbfs.core.maps import MAP_FILES, grid_from_dict, load_map, save_map
from gridbfs.core.session import SearchSession
from gridbfs.core.types import CellKind, Status


@pytest.mark.parametrize("key", sorted(MAP_FILES))
def test_bundled_maps_load(key):
    grid = load_map(MAP_FILES[key])
    assert grid.count(CellKind.SOURCE) == 1
    assert grid.count(CellKind.DESTINATION) == 1


@pytest.mark.parametrize("key, status, edges", [
    ("01_open_field", Status.FOUND, 18),
    ("02_wall_gap", Status.FOUND, 21),
    ("03_sealed", Status.EXHAUSTED, None),
])
def test_bundled_map_outcomes(key, status, edges):
    session = SearchSession()
    session.load(load_map(MAP_FILES[key]))
    result = session.run_to_end()
    assert session.status == status
    assert result.edges == edges


def test_save_then_load(tmp_path, pillar_3x3):
    path = tmp_path / "pillar.json"
    save_map(pillar_3x3, path)
    data = json.loads(path.read_text())
    assert data["cells"][1] == [0, 1, 0]
    assert load_map(path) == pillar_3x3


def test_search_marks_are_not_saved(tmp_path, pillar_3x3):
    session = SearchSession()
    session.load(pillar_3x3)
    session.run_to_end()
    path = tmp_path / "after.json"
    save_map(pillar_3x3, path)
    assert load_map(path).count(CellKind.PATH) == 0


def test_unknown_cell_code_rejected():
    with pytest.raises(ValueError):
        grid_from_dict({"size": 2, "source": [0, 0], "destination": [1, 1],
                        "cells": [[0, 4], [0, 0]]})


def test_missing_key_rejected():
    with pytest.raises(KeyError):
        grid_from_dict({"cells": [[0, 0], [0, 0]], "source": [0, 0]})


def test_endpoint_with_wrong_arity_rejected():
    with pytest.raises(ValueError):
        grid_from_dict({"size": 2, "source": [0], "destination": [1, 1],
                        "cells": [[0, 0], [0, 0]]})


def test_endpoint_outside_grid_rejected():
    with pytest.raises(OutOfBounds):
        grid_from_dict({"size": 2, "source": [0, 0], "destination": [5, 5],
                        "cells": [[0, 0], [0, 0]]})
