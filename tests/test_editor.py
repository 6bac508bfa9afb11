import logging

import pytest

from gridpath.app.editor import Editor, SearchOutcome
from gridpath.core.types import OutOfBoundsError


def test_defaults_match_a_fresh_page() -> None:
    ed = Editor()
    assert (ed.rows, ed.cols) == (10, 10)
    assert ed.start == (0, 0)
    assert ed.end == (2, 2)
    assert ed.walls == []
    assert not ed.diagonals


def test_with_length_builds_square_grid() -> None:
    ed = Editor.with_length(3, diagonals=True, heuristic="octile")
    assert (ed.rows, ed.cols) == (30, 30)
    assert ed.diagonals
    assert ed.heuristic == "octile"
    assert ed.length == 3


def test_toggle_wall_adds_then_removes() -> None:
    ed = Editor()
    assert ed.toggle_wall((4, 5)) is True
    assert ed.walls == [(4, 5)]
    assert ed.build_grid().is_wall((4, 5))
    assert ed.toggle_wall((4, 5)) is False
    assert ed.walls == []


def test_toggle_wall_ignores_clicks_outside_grid() -> None:
    ed = Editor()
    assert ed.toggle_wall((10, 0)) is False
    assert ed.walls == []


def test_place_endpoint_alternates() -> None:
    ed = Editor()
    assert ed.place_endpoint((3, 3)) == "start"
    assert ed.place_endpoint((7, 8)) == "end"
    assert ed.place_endpoint((1, 1)) == "start"
    assert (ed.start, ed.end) == ((1, 1), (7, 8))
    assert ed.place_endpoint((-1, 1)) == ""
    assert ed.start == (1, 1)


def test_every_change_builds_a_new_grid() -> None:
    ed = Editor()
    first = ed.build_grid()
    ed.toggle_wall((1, 0))
    second = ed.build_grid()
    assert first is not second
    assert first.get_cell((1, 0)).passable
    assert not second.get_cell((1, 0)).passable


def test_set_size_and_stale_endpoints() -> None:
    ed = Editor.with_length(2)
    ed.end = (15, 15)
    assert ed.endpoints_valid()
    ed.set_size(1)
    assert (ed.rows, ed.cols) == (10, 10)
    assert not ed.endpoints_valid()
    with pytest.raises(OutOfBoundsError):
        ed.run()


def test_cycle_heuristic_and_algo_name() -> None:
    ed = Editor()
    assert ed.algo_name == "A*"
    assert ed.cycle_heuristic() == "octile"
    assert ed.cycle_heuristic() == "dijkstra"
    assert ed.algo_name == "Dijkstra"
    assert ed.cycle_heuristic() == "manhattan"


def test_toggle_diagonals() -> None:
    ed = Editor()
    assert ed.toggle_diagonals() is True
    assert ed.toggle_diagonals() is False


def test_run_reports_success(caplog) -> None:
    ed = Editor()
    with caplog.at_level(logging.INFO, logger="gridpath.app.editor"):
        outcome = ed.run()
    assert outcome.found
    assert outcome.path[0] == (0, 0) and outcome.path[-1] == (2, 2)
    assert outcome.metrics["total_cost"] == 40
    assert outcome.message.startswith("Pathfinding took ")
    assert outcome.message.endswith("ms.")
    assert "Pathfinding took" in caplog.text


def test_run_reports_failure() -> None:
    ed = Editor()
    for c in [(1, 0), (1, 1), (0, 1)]:
        ed.toggle_wall(c)
    outcome = ed.run()
    assert outcome.path == []
    assert outcome.message.startswith("Pathfinding failed in ")

    ed.toggle_diagonals()
    assert ed.run().path == []


def test_new_search_steps_on_given_grid() -> None:
    ed = Editor(diagonals=True)
    search = ed.new_search()
    assert search.name == "A*"
    assert search.run() == [(0, 0), (1, 1), (2, 2)]


def test_search_outcome_message_rounds() -> None:
    assert SearchOutcome([(0, 0)], 3.4, {}).message == "Pathfinding took 3ms."
    assert SearchOutcome([], 0.2, {}).message == "Pathfinding failed in 0ms."
