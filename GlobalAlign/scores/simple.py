"""
Match/mismatch substitution scoring
"""

DEFAULT_MATCH_SCORE = 2
DEFAULT_MISMATCH_SCORE = -1


class MatchMismatchScorer:
    """Scores exact symbol equality with ``match``, anything else with ``mismatch``."""

    # any symbol is accepted
    alphabet = None

    def __init__(self, match: int = DEFAULT_MATCH_SCORE, mismatch: int = DEFAULT_MISMATCH_SCORE):
        self.match = int(match)
        self.mismatch = int(mismatch)

    def __call__(self, a: str, b: str) -> int:
        return self.match if a == b else self.mismatch

    def __repr__(self) -> str:
        return f"MatchMismatchScorer(match={self.match}, mismatch={self.mismatch})"
