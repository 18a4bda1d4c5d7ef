import matplotlib.pyplot as plt

from GlobalAlign import pairwise
from GlobalAlign.seq_alignment import plot_score_grid, render_path, render_score_grid, render_traceback_grid


def golden():
    return pairwise("GAATTC", "GATTA", keep_grids=True)


def test_render_score_grid_row_major():
    result = golden()
    lines = render_score_grid(result.score_grid, "GAATTC", "GATTA").splitlines()
    assert len(lines) == 8
    assert lines[0].split() == ["G", "A", "T", "T", "A"]
    assert lines[1].split() == ["0", "-2", "-4", "-6", "-8", "-10"]
    assert lines[7].split() == ["C", "-12", "-8", "-4", "0", "4", "5"]


def test_render_score_grid_column_major():
    result = golden()
    lines = render_score_grid(result.score_grid, "GAATTC", "GATTA", column_major=True).splitlines()
    assert len(lines) == 7
    assert lines[0].split() == ["G", "A", "A", "T", "T", "C"]
    assert lines[-1].split() == ["A", "-10", "-6", "-2", "2", "3", "4", "5"]


def test_render_traceback_grid():
    result = golden()
    lines = render_traceback_grid(result.traceback_grid, "GAATTC", "GATTA").splitlines()
    assert lines[1].split() == ["S", "U", "U", "U", "U", "U"]
    assert lines[2].split() == ["G", "L", "D", "U", "U", "U", "U"]
    assert lines[7].split() == ["C", "L", "L", "L", "L", "L", "D"]


def test_render_without_labels():
    result = pairwise("", "", keep_grids=True)
    assert render_score_grid(result.score_grid).splitlines()[1].split() == ["0"]


def test_render_path():
    assert render_path(golden().path) == "S D L D D D D E"


def test_plot_score_grid_draws_path():
    result = golden()
    fig = plot_score_grid(result.score_grid, "GAATTC", "GATTA", path=result.path, title="GAATTC vs GATTA")
    try:
        assert isinstance(fig, plt.Figure)
        ax = fig.axes[0]
        xs, ys = ax.lines[0].get_data()
        assert list(zip(ys, xs))[:3] == [(0, 0), (1, 1), (2, 1)]
        assert list(zip(ys, xs))[-1] == (6, 5)
    finally:
        plt.close(fig)
