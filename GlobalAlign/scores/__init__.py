"""
Substitution score providers
Any callable ``(symbol, symbol) -> int`` can be used as a scorer; an optional
``alphabet`` attribute restricts the accepted symbols.
"""

from typing import Optional

from .simple import DEFAULT_MATCH_SCORE, DEFAULT_MISMATCH_SCORE, MatchMismatchScorer
from .blosum62 import BLOSUM62, AMINO_ACIDS, Blosum62Scorer


def get_scorer(
    name: Optional[str] = None,
    match_score: int = DEFAULT_MATCH_SCORE,
    mismatch_score: int = DEFAULT_MISMATCH_SCORE,
):
    """
    Build a scorer by name.

    Parameters:
    -----------
    name : str or None
        None or "match_mismatch" for the plain rule, "blosum62" for the
        amino-acid table (case-insensitive)
    match_score, mismatch_score : int
        Only used by the match/mismatch rule
    """
    if name is None or name.lower() == "match_mismatch":
        return MatchMismatchScorer(match_score, mismatch_score)
    if name.lower() == "blosum62":
        return Blosum62Scorer()
    raise ValueError(f"Unknown substitution matrix: {name}")


__all__ = [
    "BLOSUM62",
    "AMINO_ACIDS",
    "Blosum62Scorer",
    "MatchMismatchScorer",
    "get_scorer",
]
