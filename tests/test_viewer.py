"""
Viewer tests; windows use SDL's dummy video driver.
"""

import pytest

pygame = pytest.importorskip("pygame")

from gridpath.app.loader import load_grid
from gridpath.app.viewer import MAP_FILES, Viewer, cell_center, cell_topleft
from gridpath.core.types import Grid


def test_origin_cell_is_drawn_bottom_left():
    grid = Grid(4, 3, (1, 1), (4, 3))
    assert cell_topleft((1, 1), grid, (10, 20), 8) == (10, 20 + 2 * 8)
    assert cell_topleft((4, 3), grid, (10, 20), 8) == (10 + 3 * 8, 20)
    assert cell_center((1, 3), grid, (0, 0), 10) == (5, 5)


def test_bundled_maps_load():
    for key, path in MAP_FILES.items():
        grid = load_grid(path)
        assert grid.is_passable(grid.start), key
        assert grid.is_passable(grid.goal), key


@pytest.fixture
def viewer(monkeypatch):
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    v = Viewer(Grid(5, 5, (1, 1), (3, 1), {(2, 1)}), title="test")
    yield v
    pygame.quit()


def test_viewer_steps_to_the_route(viewer):
    while viewer.last is None or viewer.last.status == "running":
        viewer.advance()
    assert viewer.last.status == "done"
    assert viewer.route == [(1, 2), (2, 2), (3, 2), (3, 1)]
    assert (1, 1) in viewer.closed
    viewer.draw()


def test_viewer_keys_toggle_heuristic_and_reset(viewer):
    viewer.on_key(pygame.K_n)
    assert viewer.closed == {(1, 1)}
    viewer.on_key(pygame.K_h)
    assert viewer.algo.heuristic == "manhattan"
    assert viewer.closed == set() and viewer.last is None
    viewer.on_key(pygame.K_2)
    assert viewer.grid.obstacles == frozenset({(2, 1)})
    with pytest.raises(SystemExit):
        viewer.on_key(pygame.K_q)


def test_view_command_reports_bad_map_on_stderr(tmp_path, monkeypatch, capsys):
    from gridpath.app.viewer import main

    monkeypatch.delenv("GRIDPATH_LOG_FILE", raising=False)
    monkeypatch.setattr("sys.argv", ["gridpath-view", str(tmp_path / "nope.txt")])
    with pytest.raises(SystemExit) as info:
        main()
    assert info.value.code == 1
    captured = capsys.readouterr()
    assert "nope.txt" in captured.err
    assert captured.out == ""
