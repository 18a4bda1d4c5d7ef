import pytest

from GlobalAlign.exceptions import InvalidInput
from GlobalAlign.scores import (
    AMINO_ACIDS,
    BLOSUM62,
    Blosum62Scorer,
    MatchMismatchScorer,
    get_scorer,
)


def test_default_rule():
    scorer = MatchMismatchScorer()
    assert (scorer("G", "G"), scorer("G", "T")) == (2, -1)
    assert scorer.alphabet is None


def test_blosum62_is_complete_and_symmetric():
    assert len(BLOSUM62) == len(AMINO_ACIDS) ** 2
    for a in AMINO_ACIDS:
        for b in AMINO_ACIDS:
            assert BLOSUM62[(a, b)] == BLOSUM62[(b, a)]


def test_blosum62_scorer():
    scorer = Blosum62Scorer()
    assert scorer("W", "W") == 11
    assert scorer("w", "W") == 11
    assert scorer("A", "R") == -1
    assert "Y" in scorer.alphabet
    with pytest.raises(InvalidInput):
        scorer("A", "*")


def test_blosum62_scorer_with_default():
    scorer = Blosum62Scorer(default=-4)
    assert scorer("A", "*") == -4
    assert scorer.alphabet is None


def test_get_scorer():
    assert isinstance(get_scorer(None), MatchMismatchScorer)
    assert get_scorer("match_mismatch", 3, -3)("A", "C") == -3
    assert isinstance(get_scorer("BLOSUM62"), Blosum62Scorer)
    with pytest.raises(ValueError):
        get_scorer("pam250")
