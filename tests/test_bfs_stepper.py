import random

import pytest

from conftest import reference_distance, run_search
from gridbfs.core.bfs_stepper import BFSStepper
from gridbfs.core.errors import InvalidState, OutOfBounds
from gridbfs.core.generator import generate
from gridbfs.core.types import CellKind, Grid, Status


def assert_valid_path(grid, path):
    assert path[0] == grid.source
    assert path[-1] == grid.destination
    assert len(set(path)) == len(path)
    for (ax, ay), (bx, by) in zip(path, path[1:]):
        assert abs(ax - bx) + abs(ay - by) == 1
    for c in path:
        assert grid.classify(c) != CellKind.BLOCKED


@pytest.mark.parametrize("n", [2, 3, 6, 11])
def test_open_grid_path_is_manhattan(n):
    grid = Grid.empty(n, (0, 0), (n - 1, n - 1))
    stepper, _ = run_search(grid)
    assert stepper.status == Status.FOUND
    assert stepper.result.edges == 2 * (n - 1)
    assert_valid_path(grid, stepper.path)


def test_pillar_scenario(pillar_3x3):
    stepper, results = run_search(pillar_3x3)
    assert stepper.status == Status.FOUND
    assert stepper.result.found
    assert stepper.result.edges == 4
    assert (1, 1) not in stepper.path
    assert_valid_path(pillar_3x3, stepper.path)
    assert results[-1].path == list(stepper.path)


def test_cut_off_destination_exhausts(cut_2x2):
    stepper, results = run_search(cut_2x2)
    assert stepper.status == Status.EXHAUSTED
    assert stepper.result.found is False
    assert stepper.result.edges is None
    assert len(results) == 2
    assert stepper.visited == {(0, 0)}


def test_enclosed_source_never_leaves_its_wall():
    rows = [[0] * 5 for _ in range(5)]
    for x, y in [(2, 1), (2, 3), (1, 2), (3, 2)]:
        rows[y][x] = 1
    grid = Grid.from_rows(rows, (2, 2), (4, 4))
    stepper, _ = run_search(grid)
    assert stepper.status == Status.EXHAUSTED
    assert stepper.visited == {(2, 2)}
    assert grid.count(CellKind.VISITING) == 0


def test_path_cells_are_marked(pillar_3x3):
    stepper, _ = run_search(pillar_3x3)
    interior = stepper.path[1:-1]
    for c in interior:
        assert pillar_3x3.classify(c) == CellKind.PATH
    assert pillar_3x3.count(CellKind.PATH) == len(interior)
    assert pillar_3x3.classify((0, 0)) == CellKind.SOURCE
    assert pillar_3x3.classify((2, 2)) == CellKind.DESTINATION


def test_first_visits_follow_up_down_left_right(open_3x3):
    _, results = run_search(open_3x3)
    marked = [r.marked for r in results if r.marked is not None]
    assert marked[:4] == [(0, 1), (1, 0), (0, 2), (1, 1)]


def test_visiting_order_is_reproducible():
    def visiting_order():
        grid, _, _ = generate(15, 0.25, random.Random(7))
        _, results = run_search(grid)
        return [r.marked for r in results if r.marked is not None]

    assert visiting_order() == visiting_order()


def test_duplicates_are_skipped_without_side_effects(open_3x3):
    stepper = BFSStepper()
    stepper.start(open_3x3, (0, 0), (2, 2))
    results = [stepper.step() for _ in range(4)]
    dup = results[3]
    assert dup.skipped
    assert dup.current == (0, 0)
    assert dup.marked is None
    assert dup.status == Status.RUNNING
    assert open_3x3.classify((0, 0)) == CellKind.SOURCE
    assert stepper.metrics()["skipped"] == 1


def test_source_and_destination_keep_their_class(pillar_3x3):
    stepper, results = run_search(pillar_3x3)
    assert results[0].current == (0, 0)
    assert results[0].marked is None
    assert results[-1].current == (2, 2)
    assert results[-1].marked is None


def test_step_before_start_is_invalid():
    with pytest.raises(InvalidState):
        BFSStepper().step()


def test_step_after_terminal_is_invalid(pillar_3x3, cut_2x2):
    found, _ = run_search(pillar_3x3)
    with pytest.raises(InvalidState):
        found.step()
    exhausted, _ = run_search(cut_2x2)
    with pytest.raises(InvalidState):
        exhausted.step()


def test_start_rejects_out_of_bounds(open_3x3):
    with pytest.raises(OutOfBounds):
        BFSStepper().start(open_3x3, (0, 0), (3, 3))


def test_result_is_none_while_running(open_3x3):
    stepper = BFSStepper()
    assert stepper.status == Status.IDLE
    assert stepper.result is None
    stepper.start(open_3x3, (0, 0), (2, 2))
    stepper.step()
    assert stepper.status == Status.RUNNING
    assert stepper.result is None
    assert stepper.frontier_coords() == [(0, 1), (1, 0)]


def test_reset_replays_the_same_search(pillar_3x3):
    stepper, first = run_search(pillar_3x3)
    path = list(stepper.path)
    stepper.reset()
    assert stepper.status == Status.RUNNING
    assert pillar_3x3.count(CellKind.PATH) == 0
    assert pillar_3x3.count(CellKind.VISITING) == 0
    second = []
    while not stepper.is_terminal:
        second.append(stepper.step())
    assert stepper.path == path
    assert [r.current for r in second] == [r.current for r in first]


def test_restart_on_fresh_grid_drops_old_state(pillar_3x3, cut_2x2):
    stepper, _ = run_search(pillar_3x3)
    stepper.start(cut_2x2, (0, 0), (1, 1))
    assert stepper.visited == set()
    assert stepper.path == []
    assert stepper.frontier_coords() == [(0, 0)]


@pytest.mark.parametrize("seed", range(25))
def test_random_grids_match_reference_bfs(seed):
    grid, source, destination = generate(12, 0.3, random.Random(seed))
    expected = reference_distance(grid, source, destination)
    stepper, _ = run_search(grid, source, destination)
    if expected is None:
        assert stepper.status == Status.EXHAUSTED
    else:
        assert stepper.status == Status.FOUND
        assert stepper.result.edges == expected
        assert_valid_path(grid, stepper.path)


def test_metrics_track_progress(pillar_3x3):
    stepper, results = run_search(pillar_3x3)
    m = results[-1].metrics
    assert m["algo"] == "BFS"
    assert m["path_len"] == 4
    assert m["steps"] == len(results)
    assert m["visited_count"] == len(stepper.visited)
    assert m["popped"] + m["skipped"] == len(results)
