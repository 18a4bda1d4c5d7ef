"""
Pairwise Global Sequence Alignment Module
Needleman-Wunsch with a linear gap penalty and pluggable substitution scores
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Callable, Literal, Optional, Tuple

from GlobalAlign.config import get_config_loader
from GlobalAlign.scores import get_scorer
from .builder import AlignmentGrids, ScoreMatrixBuilder
from .grid import Grid
from .incremental import IncrementalAligner
from .render import render_path, render_score_grid, render_traceback_grid
from .state import State
from .traceback import reconstruct, traceback

logger = logging.getLogger(__name__)


@dataclass
class AlignmentResult:
    """Store alignment results and metadata"""
    seq1_aligned: str
    seq2_aligned: str
    score: int
    path: Tuple[State, ...]
    match_string: str
    identity: float
    similarity: float
    gaps: int
    seq1_original: str
    seq2_original: str
    gap_symbol: str = "-"
    score_grid: Optional[Grid] = None
    traceback_grid: Optional[Grid] = None

    def __str__(self) -> str:
        """String representation of alignment"""
        return (
            f"Alignment Score: {self.score}\n"
            f"Length: {len(self.seq1_aligned)}\n"
            f"Identity: {self.identity:.2%}\n"
            f"Similarity: {self.similarity:.2%}\n"
            f"Gaps: {self.gaps}\n"
            f"Path: {render_path(self.path)}\n"
        )

    @property
    def steps(self) -> Tuple[State, ...]:
        """Productive operations only (no START/END)."""
        return tuple(op for op in self.path if op.is_productive)

    def format(self, width: int = 80) -> str:
        """Alignment blocks with match indicators"""
        lines = []
        lines.append("")
        lines.append(f"Sequence 1: {self.seq1_original}")
        lines.append(f"Sequence 2: {self.seq2_original}")
        lines.append("")
        lines.append(f"Identity: {self.identity:.2%}")
        lines.append(f"Similarity: {self.similarity:.2%}")
        lines.append(f"Gaps: {self.gaps}")
        lines.append("")
        lines.append(f"Score: {self.score}")
        lines.append("")

        for start in range(0, len(self.seq1_aligned), width):
            end = min(start + width, len(self.seq1_aligned))
            lines.append(f"seq1: {self.seq1_aligned[start:end]}")
            lines.append(f"      {self.match_string[start:end]}")
            lines.append(f"seq2: {self.seq2_aligned[start:end]}")
            lines.append("")

        return "\n".join(lines)

    def plot(self, width: int = 80) -> None:
        """Display alignment with match indicators"""
        print(self.format(width))

    def view(self, width: int = 80) -> None:
        """Alias for plot method"""
        self.plot(width)

    def nmatch(self) -> int:
        """Number of matching positions"""
        return sum(1 for a, b in zip(self.seq1_aligned, self.seq2_aligned)
                   if a == b and a != self.gap_symbol)


class PairwiseAligner:
    """Global pairwise aligner (Needleman-Wunsch, linear gaps)"""

    def __init__(
        self,
        match_score: Optional[int] = None,
        mismatch_score: Optional[int] = None,
        gap_penalty: Optional[int] = None,
        substitution: Optional[Callable[[str, str], int]] = None,
        substitution_matrix: Optional[str] = None,
        fill_order: Optional[Literal["row", "column", "wavefront"]] = None,
        empty_policy: Optional[Literal["gap", "reject"]] = None,
        gap_symbol: Optional[str] = None,
        max_cells: Optional[int] = None,
    ):
        """
        Initialize aligner; parameters left as None come from the configuration

        Parameters:
        -----------
        match_score, mismatch_score : int
            Scores of the built-in substitution rule (default +2 / -1)
        gap_penalty : int
            Score added per gap column (default -2)
        substitution : callable, optional
            ``(symbol, symbol) -> int`` replacing the built-in rule
        substitution_matrix : str, optional
            Named table, e.g. "blosum62"; ignored when substitution is given
        fill_order : str
            "row", "column" or "wavefront" (default from config)
        empty_policy : str
            "gap" aligns empty input as all gaps, "reject" raises InvalidInput
        gap_symbol : str
            Gap marker in the aligned strings (default "-")
        max_cells : int
            Largest grid the aligner will allocate
        """
        config = get_config_loader().get_config()
        scoring = config["scoring"]
        engine = config["engine"]

        self.match_score = match_score if match_score is not None else scoring["match_score"]
        self.mismatch_score = mismatch_score if mismatch_score is not None else scoring["mismatch_score"]
        self.gap_penalty = gap_penalty if gap_penalty is not None else scoring["gap_penalty"]
        self.fill_order = fill_order or engine["fill_order"]
        self.empty_policy = empty_policy or engine["empty_policy"]
        self.gap_symbol = gap_symbol if gap_symbol is not None else engine["gap_symbol"]
        self.max_cells = max_cells if max_cells is not None else engine["max_cells"]

        if not isinstance(self.gap_symbol, str) or len(self.gap_symbol) != 1:
            raise ValueError(f"gap_symbol must be a single character, got {self.gap_symbol!r}")

        if substitution is not None:
            self.substitution = substitution
        else:
            self.substitution = get_scorer(
                substitution_matrix or scoring["substitution_matrix"],
                self.match_score,
                self.mismatch_score,
            )

    def _builder(self, should_cancel: Optional[Callable[[], bool]] = None) -> ScoreMatrixBuilder:
        return ScoreMatrixBuilder(
            self.substitution,
            gap_penalty=self.gap_penalty,
            fill_order=self.fill_order,
            empty_policy=self.empty_policy,
            max_cells=self.max_cells,
            should_cancel=should_cancel,
            gap_symbol=self.gap_symbol,
        )

    def build_grids(
        self, seq1: str, seq2: str, should_cancel: Optional[Callable[[], bool]] = None
    ) -> AlignmentGrids:
        """Fill the score and traceback grids without tracing back"""
        return self._builder(should_cancel).build(seq1, seq2)

    def _calculate_match_string(self, aligned1: str, aligned2: str) -> str:
        """Generate match string"""
        match_str = []
        for a, b in zip(aligned1, aligned2):
            if a == self.gap_symbol or b == self.gap_symbol:
                match_str.append(' ')
            elif a == b:
                match_str.append('|')
            elif self.substitution(a, b) > 0:
                match_str.append(':')
            else:
                match_str.append('.')
        return ''.join(match_str)

    def _calculate_statistics(
        self,
        match_string: str,
        aligned1: str,
        aligned2: str
    ) -> Tuple[float, float, int]:
        """Calculate alignment statistics"""
        matches = match_string.count('|')
        similar = matches + match_string.count(':')
        gaps = aligned1.count(self.gap_symbol) + aligned2.count(self.gap_symbol)

        identity = matches / len(aligned1) if len(aligned1) > 0 else 0
        similarity = similar / len(aligned1) if len(aligned1) > 0 else 0

        return identity, similarity, gaps

    def align(
        self,
        seq1: str,
        seq2: str,
        strategy: Literal["full", "incremental"] = "full",
        keep_grids: bool = False,
        verbose: bool = False,
        should_cancel: Optional[Callable[[], bool]] = None,
    ) -> AlignmentResult:
        """
        Perform global pairwise sequence alignment

        Parameters:
        -----------
        seq1 : str
            First sequence; LEFT steps put a gap opposite its symbols
        seq2 : str
            Second sequence; UP steps put a gap opposite its symbols
        strategy : str
            "full" fills the whole score grid, "incremental" keeps two score rows
        keep_grids : bool
            Attach the grids to the result (the incremental strategy only has
            a traceback grid)
        verbose : bool
            Print both grids and the path
        should_cancel : callable, optional
            Polled during the fill; AlignmentCancelled is raised when it returns True

        Returns:
        --------
        AlignmentResult
        """
        if strategy == "full":
            grids = self.build_grids(seq1, seq2, should_cancel)
            score_grid, trace_grid, score = grids.scores, grids.trace, grids.score
        elif strategy == "incremental":
            incremental = IncrementalAligner(
                seq1, seq2, self.substitution,
                gap_penalty=self.gap_penalty,
                empty_policy=self.empty_policy,
                max_cells=self.max_cells,
                should_cancel=should_cancel,
                gap_symbol=self.gap_symbol,
            )
            score = incremental.fill()
            score_grid, trace_grid = None, incremental.trace
        else:
            raise ValueError(f"Unknown strategy: {strategy}")

        backward = traceback(trace_grid)
        path = tuple(reversed(backward))
        aligned1, aligned2 = reconstruct(path, seq1, seq2, self.gap_symbol)

        if verbose:
            if score_grid is not None:
                print(render_score_grid(score_grid, seq1, seq2))
            print("TRACEBACK MATRIX")
            print(render_traceback_grid(trace_grid, seq1, seq2))
            print(f"PATH: {render_path(path)}")

        match_string = self._calculate_match_string(aligned1, aligned2)
        identity, similarity, gaps = self._calculate_statistics(match_string, aligned1, aligned2)
        logger.debug(f"Aligned {len(seq1)}x{len(seq2)} symbols: score {score}, {gaps} gaps")

        return AlignmentResult(
            seq1_aligned=aligned1,
            seq2_aligned=aligned2,
            score=score,
            path=path,
            match_string=match_string,
            identity=identity,
            similarity=similarity,
            gaps=gaps,
            seq1_original=seq1,
            seq2_original=seq2,
            gap_symbol=self.gap_symbol,
            score_grid=score_grid if keep_grids else None,
            traceback_grid=trace_grid if keep_grids else None,
        )

    def score(self, seq1: str, seq2: str) -> int:
        """Optimal global score only, computed in linear memory"""
        return IncrementalAligner(
            seq1, seq2, self.substitution,
            gap_penalty=self.gap_penalty,
            empty_policy=self.empty_policy,
            gap_symbol=self.gap_symbol,
        ).score_only()


# MAIN CONVENIENCE FUNCTION
def pairwise(
    seq1: str,
    seq2: str,
    match_score: Optional[int] = None,
    mismatch_score: Optional[int] = None,
    gap_penalty: Optional[int] = None,
    substitution_matrix: Optional[str] = None,
    substitution: Optional[Callable[[str, str], int]] = None,
    fill_order: Optional[Literal["row", "column", "wavefront"]] = None,
    empty_policy: Optional[Literal["gap", "reject"]] = None,
    gap_symbol: Optional[str] = None,
    strategy: Literal["full", "incremental"] = "full",
    keep_grids: bool = False,
    verbose: bool = False
) -> AlignmentResult:
    """
    Global pairwise alignment with configured defaults

    Options left as None come from the configuration; see PairwiseAligner
    for their meaning. strategy and keep_grids are passed to
    PairwiseAligner.align.

    Examples:
    ---------
    >>> result = pairwise("GAATTC", "GATTA")
    >>> result.score
    5
    >>> result.seq2_aligned
    'G-ATTA'
    >>> result.view()
    """
    aligner = PairwiseAligner(
        match_score=match_score,
        mismatch_score=mismatch_score,
        gap_penalty=gap_penalty,
        substitution=substitution,
        substitution_matrix=substitution_matrix,
        fill_order=fill_order,
        empty_policy=empty_policy,
        gap_symbol=gap_symbol,
    )
    return aligner.align(seq1, seq2, strategy=strategy, keep_grids=keep_grids, verbose=verbose)


async def pairwise_async(seq1: str, seq2: str, **kwargs) -> AlignmentResult:
    """
    Async version: runs pairwise() in the default thread pool.
    (Does not speed the alignment up; only keeps the event loop responsive.)
    """
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, lambda: pairwise(seq1, seq2, **kwargs))
