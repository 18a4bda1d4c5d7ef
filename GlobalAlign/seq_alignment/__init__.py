"""
Sequence Alignment Module
Provides Needleman-Wunsch global pairwise alignment
"""

from .state import State, choose_state
from .grid import Grid
from .builder import AlignmentGrids, ScoreMatrixBuilder, validate_sequences
from .traceback import traceback, reconstruct
from .incremental import IncrementalAligner
from .render import render_score_grid, render_traceback_grid, render_path, plot_score_grid
from .pairwise import (
    PairwiseAligner,
    AlignmentResult,
    pairwise,
    pairwise_async
)

__all__ = [
    "State",
    "choose_state",
    "Grid",
    "AlignmentGrids",
    "ScoreMatrixBuilder",
    "validate_sequences",
    "traceback",
    "reconstruct",
    "IncrementalAligner",
    "render_score_grid",
    "render_traceback_grid",
    "render_path",
    "plot_score_grid",
    "PairwiseAligner",
    "AlignmentResult",
    "pairwise",
    "pairwise_async"
]
