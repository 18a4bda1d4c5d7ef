"""
Score-matrix builder for Needleman-Wunsch global alignment
- Row-major, column-major and anti-diagonal (wavefront) fill orders
- Wavefront fill evaluates a whole anti-diagonal at once with NumPy
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Literal, Optional, Tuple

import numpy as np

from GlobalAlign.exceptions import AlignmentCancelled, AllocationFailure, InvalidInput
from .grid import Grid
from .state import State, choose_state

logger = logging.getLogger(__name__)

FillOrder = Literal["row", "column", "wavefront"]
EmptyPolicy = Literal["gap", "reject"]

FILL_ORDERS = ("row", "column", "wavefront")
EMPTY_POLICIES = ("gap", "reject")
DEFAULT_MAX_CELLS = 100_000_000


def validate_sequences(
    seq1: str,
    seq2: str,
    alphabet=None,
    empty_policy: EmptyPolicy = "gap",
    gap_symbol: Optional[str] = "-",
) -> None:
    """
    Reject input that cannot be aligned, before anything is allocated.

    :param seq1: First sequence.
    :param seq2: Second sequence.
    :param alphabet: Symbols accepted by the scorer, or None for any symbol.
    :param empty_policy: "gap" aligns an empty sequence as all gaps, "reject" raises.
    :param gap_symbol: Gap marker of the aligned output; it may not occur in either sequence.
    :raises InvalidInput: On None, empty (under "reject"), out-of-alphabet or gap-marker input.
    """
    for name, seq in (("seq1", seq1), ("seq2", seq2)):
        if seq is None:
            logger.error(f"Invalid input: {name} is None")
            raise InvalidInput(f"{name} must not be None")
        if not isinstance(seq, str):
            logger.error(f"Invalid input: {name} is {type(seq).__name__}, expected str")
            raise InvalidInput(f"{name} must be a string, got {type(seq).__name__}")
        if not seq and empty_policy == "reject":
            logger.error(f"Invalid input: {name} is empty")
            raise InvalidInput(f"{name} is empty")
        if gap_symbol and gap_symbol in seq:
            logger.error(f"Invalid input: {name} contains the gap marker {gap_symbol!r}")
            raise InvalidInput(f"{name} contains the gap marker {gap_symbol!r}")
        if alphabet is not None:
            unknown = sorted(set(seq) - set(alphabet))
            if unknown:
                logger.error(f"Invalid input: {name} contains symbols outside the alphabet: {unknown}")
                raise InvalidInput(
                    f"{name} contains symbols not accepted by the scorer: {''.join(unknown)}"
                )


def symbol_table(
    seq1: str, seq2: str, substitution: Callable[[str, str], int]
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Score every distinct symbol pair once.

    Returns (table, idx1, idx2) where ``table[idx1[i], idx2[j]]`` is the
    substitution score of ``seq1[i]`` against ``seq2[j]``.
    """
    symbols1 = sorted(set(seq1))
    symbols2 = sorted(set(seq2))
    pos1: Dict[str, int] = {c: k for k, c in enumerate(symbols1)}
    pos2: Dict[str, int] = {c: k for k, c in enumerate(symbols2)}

    table = np.zeros((len(symbols1), len(symbols2)), dtype=np.int64)
    for a in symbols1:
        for b in symbols2:
            table[pos1[a], pos2[b]] = int(substitution(a, b))

    idx1 = np.fromiter((pos1[c] for c in seq1), dtype=np.intp, count=len(seq1))
    idx2 = np.fromiter((pos2[c] for c in seq2), dtype=np.intp, count=len(seq2))
    return table, idx1, idx2


def substitution_matrix(
    seq1: str, seq2: str, substitution: Callable[[str, str], int]
) -> np.ndarray:
    """(m x n) matrix of substitution scores, entry [i, j] for seq1[i] vs seq2[j]."""
    table, idx1, idx2 = symbol_table(seq1, seq2, substitution)
    return table[np.ix_(idx1, idx2)]


@dataclass
class AlignmentGrids:
    """Score and traceback grids for one alignment request."""
    seq1: str
    seq2: str
    scores: Grid
    trace: Grid

    @property
    def score(self) -> int:
        """Optimal global score, read from the terminal cell."""
        return int(self.scores[self.scores.height - 1, self.scores.width - 1])


class ScoreMatrixBuilder:
    """Fills the (m+1) x (n+1) score and traceback grids."""

    def __init__(
        self,
        substitution: Callable[[str, str], int],
        gap_penalty: int = -2,
        fill_order: FillOrder = "wavefront",
        empty_policy: EmptyPolicy = "gap",
        max_cells: Optional[int] = DEFAULT_MAX_CELLS,
        should_cancel: Optional[Callable[[], bool]] = None,
        gap_symbol: str = "-",
    ):
        """
        Parameters:
        -----------
        substitution : callable
            ``(symbol, symbol) -> int``; an ``alphabet`` attribute, when present,
            restricts the accepted symbols
        gap_penalty : int
            Linear cost added per gap column (negative)
        fill_order : str
            "row", "column" or "wavefront"; every order yields the same grids
        empty_policy : str
            "gap" (all-gap alignment) or "reject" (raise InvalidInput)
        max_cells : int or None
            Upper bound on (m+1)*(n+1); None disables the check
        should_cancel : callable, optional
            Polled between rows, columns or anti-diagonals
        gap_symbol : str
            Gap marker the input is checked against
        """
        if fill_order not in FILL_ORDERS:
            raise ValueError(f"Unknown fill order: {fill_order}")
        if empty_policy not in EMPTY_POLICIES:
            raise ValueError(f"Unknown empty-sequence policy: {empty_policy}")
        self.substitution = substitution
        self.gap_penalty = int(gap_penalty)
        self.fill_order = fill_order
        self.empty_policy = empty_policy
        self.max_cells = max_cells
        self.should_cancel = should_cancel
        self.gap_symbol = gap_symbol

    def build(self, seq1: str, seq2: str) -> AlignmentGrids:
        """
        Validate the input, allocate both grids and fill them.

        :raises InvalidInput: See validate_sequences.
        :raises AllocationFailure: When the grids exceed max_cells or memory.
        :raises AlignmentCancelled: When should_cancel fires mid-fill.
        """
        validate_sequences(
            seq1, seq2,
            alphabet=getattr(self.substitution, "alphabet", None),
            empty_policy=self.empty_policy,
            gap_symbol=self.gap_symbol,
        )
        m, n = len(seq1), len(seq2)
        check_allocation(m, n, self.max_cells)

        scores, trace = self._initialize(m, n)
        sub = substitution_matrix(seq1, seq2, self.substitution)

        logger.debug(f"Filling {m + 1}x{n + 1} grids ({self.fill_order} order)")
        if m > 0 and n > 0:
            if self.fill_order == "row":
                self._fill_row_major(scores, trace, sub)
            elif self.fill_order == "column":
                self._fill_column_major(scores, trace, sub)
            else:
                self._fill_wavefront(scores, trace, sub)

        grids = AlignmentGrids(seq1, seq2, scores.freeze(), trace.freeze())
        logger.debug(f"Terminal score: {grids.score}")
        return grids

    def _initialize(self, m: int, n: int) -> Tuple[Grid, Grid]:
        """Seed row 0 and column 0 with cumulative gap cost and sentinel states."""
        scores = Grid(m + 1, n + 1, dtype=np.int64)
        trace = Grid(m + 1, n + 1, dtype=np.int8, fill=State.START)

        S = scores.as_array()
        T = trace.as_array()
        S[:, 0] = np.arange(m + 1, dtype=np.int64) * self.gap_penalty
        S[0, :] = np.arange(n + 1, dtype=np.int64) * self.gap_penalty
        # a walk that reaches the boundary slides along it to the origin
        T[1:, 0] = State.LEFT
        T[0, 1:] = State.UP
        T[0, 0] = State.START
        return scores, trace

    def _check_cancel(self, where: str) -> None:
        if self.should_cancel is not None and self.should_cancel():
            logger.info(f"Alignment cancelled at {where}")
            raise AlignmentCancelled(f"Alignment cancelled at {where}")

    def _fill_cell(self, scores: Grid, trace: Grid, sub: np.ndarray, i: int, j: int) -> None:
        S = scores.data
        here = scores.index(i, j)
        width = scores.width

        diagonal_score = int(S[here - width - 1]) + int(sub[i - 1, j - 1])
        up_score = int(S[here - 1]) + self.gap_penalty
        left_score = int(S[here - width]) + self.gap_penalty

        trace.data[here] = choose_state(diagonal_score, up_score, left_score)
        S[here] = max(diagonal_score, up_score, left_score)

    def _fill_row_major(self, scores: Grid, trace: Grid, sub: np.ndarray) -> None:
        m, n = sub.shape
        for i in range(1, m + 1):
            self._check_cancel(f"row {i}")
            for j in range(1, n + 1):
                self._fill_cell(scores, trace, sub, i, j)

    def _fill_column_major(self, scores: Grid, trace: Grid, sub: np.ndarray) -> None:
        m, n = sub.shape
        for j in range(1, n + 1):
            self._check_cancel(f"column {j}")
            for i in range(1, m + 1):
                self._fill_cell(scores, trace, sub, i, j)

    def _fill_wavefront(self, scores: Grid, trace: Grid, sub: np.ndarray) -> None:
        """
        Anti-diagonal fill. Cells with the same i + j only read the two
        previous anti-diagonals, so each one is computed as a single vector
        operation; finishing one anti-diagonal before the next is the barrier.
        """
        m, n = sub.shape
        S = scores.as_array()
        T = trace.as_array()
        gap = self.gap_penalty

        for d in range(2, m + n + 1):
            self._check_cancel(f"anti-diagonal {d}")
            i = np.arange(max(1, d - n), min(m, d - 1) + 1)
            j = d - i

            diagonal_score = S[i - 1, j - 1] + sub[i - 1, j - 1]
            up_score = S[i, j - 1] + gap
            left_score = S[i - 1, j] + gap

            take_diagonal = (diagonal_score >= up_score) & (diagonal_score >= left_score)
            T[i, j] = np.where(
                take_diagonal,
                int(State.DIAGONAL),
                np.where(up_score >= left_score, int(State.UP), int(State.LEFT)),
            )
            S[i, j] = np.maximum(diagonal_score, np.maximum(up_score, left_score))


def check_allocation(m: int, n: int, max_cells: Optional[int]) -> None:
    """Raise AllocationFailure when an (m+1) x (n+1) grid exceeds ``max_cells``."""
    cells = (m + 1) * (n + 1)
    if max_cells is not None and cells > max_cells:
        logger.error(f"Refusing to allocate {cells} cells (limit {max_cells})")
        raise AllocationFailure(
            f"Alignment of {m}x{n} symbols needs {cells} cells, limit is {max_cells}"
        )

