"""
Diagnostic rendering of the score and traceback grids
Output is for inspection only and carries no meaning for callers.
"""
from typing import List, Optional, Sequence, Tuple

import matplotlib.pyplot as plt
import numpy as np

from .grid import Grid
from .state import State
from .traceback import path_cells


# ---------- helpers ----------
def _labels(seq: str) -> List[str]:
    """header labels: blank for the boundary row/column, then one per symbol"""
    return [" "] + list(seq)


def _table(cells: np.ndarray, row_labels: List[str], col_labels: List[str]) -> str:
    width = max([len(c) for c in cells.ravel()] + [len(c) for c in col_labels] + [1])
    lines = ["  " + " ".join(label.rjust(width) for label in col_labels)]
    for label, row in zip(row_labels, cells):
        lines.append(label + " " + " ".join(c.rjust(width) for c in row))
    return "\n".join(lines)


def _oriented(grid: Grid, seq1: str, seq2: str, column_major: bool
              ) -> Tuple[np.ndarray, List[str], List[str]]:
    arr = grid.as_array()
    rows, cols = _labels(seq1), _labels(seq2)
    if column_major:
        return arr.T, cols, rows
    return arr, rows, cols


# ---------- main API ----------
def render_score_grid(grid: Grid, seq1: str = "", seq2: str = "", column_major: bool = False) -> str:
    """
    Score grid as text, one line per row (per column with column_major).
    Symbols of seq1 label the rows, symbols of seq2 the columns.
    """
    arr, rows, cols = _oriented(grid, seq1 or " " * (grid.height - 1),
                                seq2 or " " * (grid.width - 1), column_major)
    cells = np.vectorize(lambda v: str(int(v)), otypes=[object])(arr)
    return _table(cells, rows, cols)


def render_traceback_grid(grid: Grid, seq1: str = "", seq2: str = "", column_major: bool = False) -> str:
    """Traceback grid as text using S/D/U/L/E for the states."""
    arr, rows, cols = _oriented(grid, seq1 or " " * (grid.height - 1),
                                seq2 or " " * (grid.width - 1), column_major)
    cells = np.vectorize(lambda v: State(int(v)).short, otypes=[object])(arr)
    return _table(cells, rows, cols)


def render_path(path: Sequence[State]) -> str:
    """``START D L ... END`` rendered as ``S D L ... E``."""
    return " ".join(State(op).short for op in path)


def plot_score_grid(
    scores: Grid,
    seq1: str = "",
    seq2: str = "",
    path: Optional[Sequence[State]] = None,
    figsize: Tuple[int, int] = (8, 6),
    annotate: bool = True,
    title: Optional[str] = None,
) -> plt.Figure:
    """
    Heatmap of the score grid, with the traceback path drawn on top.
    - rows follow seq1, columns follow seq2
    - annotate writes every score into its cell (keep it for small grids)
    """
    arr = scores.as_array()
    fig, ax = plt.subplots(figsize=figsize)
    im = ax.imshow(arr, cmap="viridis", aspect="auto")
    fig.colorbar(im, ax=ax, label="score")

    ax.set_xticks(range(scores.width))
    ax.set_xticklabels(_labels(seq2 or " " * (scores.width - 1)))
    ax.set_yticks(range(scores.height))
    ax.set_yticklabels(_labels(seq1 or " " * (scores.height - 1)))
    ax.xaxis.tick_top()

    if annotate:
        for (i, j), v in np.ndenumerate(arr):
            ax.text(j, i, str(int(v)), va="center", ha="center", fontsize=8, color="white")

    if path is not None:
        cells = path_cells(path)
        ax.plot([j for _, j in cells], [i for i, _ in cells], color="red", linewidth=2, marker="o")

    if title:
        ax.set_title(title, pad=20)
    fig.tight_layout()
    return fig
