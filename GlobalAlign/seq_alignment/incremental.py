"""
Row-streaming Needleman-Wunsch
Keeps two score rows instead of the full score grid. Scores and tie-breaks are
the same as ScoreMatrixBuilder, so paths are identical.
"""

import logging
from typing import Callable, Iterator, List, Optional, Tuple

import numpy as np

from GlobalAlign.exceptions import AlignmentCancelled
from .builder import DEFAULT_MAX_CELLS, check_allocation, symbol_table, validate_sequences
from .grid import Grid
from .state import State, choose_state
from .traceback import GAP, traceback

logger = logging.getLogger(__name__)


class IncrementalAligner:
    """
    Global aligner with O(n) score memory.

    ``fill()`` streams the score grid one row at a time and stores only the
    traceback states (one byte per cell). ``steps()`` then replays the optimal
    path as cursor positions ``START -> ... -> END``.
    """

    def __init__(
        self,
        seq1: str,
        seq2: str,
        substitution: Callable[[str, str], int],
        gap_penalty: int = -2,
        empty_policy: str = "gap",
        max_cells: Optional[int] = DEFAULT_MAX_CELLS,
        should_cancel: Optional[Callable[[], bool]] = None,
        gap_symbol: str = GAP,
    ):
        validate_sequences(
            seq1, seq2,
            alphabet=getattr(substitution, "alphabet", None),
            empty_policy=empty_policy,
            gap_symbol=gap_symbol,
        )
        self.seq1 = seq1
        self.seq2 = seq2
        self.substitution = substitution
        self.gap_penalty = int(gap_penalty)
        self.max_cells = max_cells
        self.should_cancel = should_cancel
        self.trace: Optional[Grid] = None
        self.score: Optional[int] = None

    def _rows(self, seq1: str, seq2: str, table: np.ndarray, idx1: np.ndarray, idx2: np.ndarray
              ) -> Iterator[Tuple[int, np.ndarray, np.ndarray]]:
        """Yield (i, score_row, state_row) for i = 0..len(seq1)."""
        n = len(seq2)
        gap = self.gap_penalty

        previous = np.arange(n + 1, dtype=np.int64) * gap
        states = np.full(n + 1, int(State.UP), dtype=np.int8)
        states[0] = State.START
        yield 0, previous, states

        for i in range(1, len(seq1) + 1):
            if self.should_cancel is not None and self.should_cancel():
                logger.info(f"Alignment cancelled at row {i}")
                raise AlignmentCancelled(f"Alignment cancelled at row {i}")

            current = np.empty(n + 1, dtype=np.int64)
            states = np.empty(n + 1, dtype=np.int8)
            current[0] = i * gap
            states[0] = State.LEFT

            diagonal_row = previous[:-1] + table[idx1[i - 1], idx2]
            left_row = previous[1:] + gap
            for j in range(1, n + 1):
                diagonal_score = int(diagonal_row[j - 1])
                up_score = int(current[j - 1]) + gap
                left_score = int(left_row[j - 1])
                states[j] = choose_state(diagonal_score, up_score, left_score)
                current[j] = max(diagonal_score, up_score, left_score)

            yield i, current, states
            previous = current

    def fill(self) -> int:
        """Compute the traceback states and the optimal score."""
        m, n = len(self.seq1), len(self.seq2)
        check_allocation(m, n, self.max_cells)
        table, idx1, idx2 = symbol_table(self.seq1, self.seq2, self.substitution)

        trace = Grid(m + 1, n + 1, dtype=np.int8, fill=State.START)
        T = trace.as_array()
        last = None
        for i, scores, states in self._rows(self.seq1, self.seq2, table, idx1, idx2):
            T[i] = states
            last = scores

        self.trace = trace.freeze()
        self.score = int(last[n])
        logger.debug(f"Incremental fill of {m + 1}x{n + 1} finished, score {self.score}")
        return self.score

    def score_only(self) -> int:
        """
        Optimal score without a traceback grid, in O(min(m, n)) memory.

        The shorter sequence indexes the rows kept in memory; the symbol table
        is transposed along with it so asymmetric scorers stay correct.
        """
        seq1, seq2 = self.seq1, self.seq2
        table, idx1, idx2 = symbol_table(seq1, seq2, self.substitution)
        if len(seq2) > len(seq1):
            seq1, seq2 = seq2, seq1
            table, idx1, idx2 = table.T, idx2, idx1

        last = None
        for _, scores, _ in self._rows(seq1, seq2, table, idx1, idx2):
            last = scores
        return int(last[len(seq2)])

    def steps(self) -> Iterator[Tuple[State, int, int]]:
        """
        Yield ``(state, i, j)`` from START at (0, 0) to END at (m, n).

        (i, j) is the cursor after the state has been applied.
        """
        if self.trace is None:
            self.fill()
        path: List[State] = traceback(self.trace)
        path.reverse()

        i = j = 0
        for state in path:
            if state is State.DIAGONAL:
                i, j = i + 1, j + 1
            elif state is State.UP:
                j += 1
            elif state is State.LEFT:
                i += 1
            yield state, i, j

    def alignment(self, gap_symbol: str = GAP) -> Tuple[str, str]:
        """Aligned pair built from the cursor positions reported by steps()."""
        out1, out2 = [], []
        for state, i, j in self.steps():
            if state is State.DIAGONAL:
                out1.append(self.seq1[i - 1])
                out2.append(self.seq2[j - 1])
            elif state is State.UP:
                out1.append(gap_symbol)
                out2.append(self.seq2[j - 1])
            elif state is State.LEFT:
                out1.append(self.seq1[i - 1])
                out2.append(gap_symbol)
        return "".join(out1), "".join(out2)
