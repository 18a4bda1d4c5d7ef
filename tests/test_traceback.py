import pytest

from GlobalAlign.exceptions import AlignmentError
from GlobalAlign.scores import MatchMismatchScorer
from GlobalAlign.seq_alignment import ScoreMatrixBuilder, State, reconstruct, traceback
from GlobalAlign.seq_alignment.traceback import path_cells

S, D, U, L, E = State.START, State.DIAGONAL, State.UP, State.LEFT, State.END


def build(seq1, seq2, match=2, mismatch=-1, gap=-2):
    return ScoreMatrixBuilder(MatchMismatchScorer(match, mismatch), gap_penalty=gap).build(seq1, seq2)


def test_golden_traceback_runs_terminal_to_origin():
    path = traceback(build("GAATTC", "GATTA").trace)
    assert path == [E, D, D, D, D, L, D, S]


def test_golden_reconstruction():
    path = list(reversed(traceback(build("GAATTC", "GATTA").trace)))
    assert reconstruct(path, "GAATTC", "GATTA") == ("GAATTC", "G-ATTA")


def test_gap_symbol_is_configurable():
    path = list(reversed(traceback(build("GAATTC", "GATTA").trace)))
    assert reconstruct(path, "GAATTC", "GATTA", gap_symbol=".") == ("GAATTC", "G.ATTA")


def test_walk_slides_along_boundary():
    path = traceback(build("A", "C", mismatch=-10, gap=-1).trace)
    assert path == [E, U, L, S]
    assert reconstruct(list(reversed(path)), "A", "C") == ("A-", "-C")


def test_empty_first_sequence_is_all_up():
    path = traceback(build("", "ACG").trace)
    assert path == [E, U, U, U, S]
    assert reconstruct(list(reversed(path)), "", "ACG") == ("---", "ACG")


def test_empty_second_sequence_is_all_left():
    path = traceback(build("ACG", "").trace)
    assert path == [E, L, L, L, S]


def test_both_empty():
    path = traceback(build("", "").trace)
    assert path == [E, S]
    assert reconstruct([S, E], "", "") == ("", "")


def test_reconstruct_requires_start():
    with pytest.raises(AlignmentError):
        reconstruct([D, E], "A", "A")


def test_reconstruct_rejects_paths_that_do_not_consume_everything():
    with pytest.raises(AlignmentError):
        reconstruct([S, D, E], "AC", "A")
    with pytest.raises(AlignmentError):
        reconstruct([S, D, D, E], "A", "A")


def test_reconstruct_rejects_unknown_operations():
    with pytest.raises(AlignmentError):
        reconstruct([S, "X", E], "A", "A")


def test_path_cells_follow_operations():
    assert path_cells([S, D, L, U, E]) == [(0, 0), (1, 1), (2, 1), (2, 2)]
