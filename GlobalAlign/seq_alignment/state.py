"""
Traceback states for the Needleman-Wunsch walk
"""

from enum import IntEnum


class State(IntEnum):
    """
    Operation recorded in a traceback cell.

    DIAGONAL consumes one symbol from each sequence, UP puts a gap in the
    first sequence (consumes the second only), LEFT puts a gap in the second
    sequence (consumes the first only). START and END only mark the ends of
    a path.
    """
    START = 0
    DIAGONAL = 1
    UP = 2
    LEFT = 3
    END = 4

    @property
    def is_productive(self) -> bool:
        return self in (State.DIAGONAL, State.UP, State.LEFT)

    @property
    def short(self) -> str:
        return _SHORT[self]


_SHORT = {
    State.START: "S",
    State.DIAGONAL: "D",
    State.UP: "U",
    State.LEFT: "L",
    State.END: "E",
}


def choose_state(diagonal_score: int, up_score: int, left_score: int) -> State:
    """
    Pick the predecessor of a cell.

    DIAGONAL wins when it is >= both alternatives, otherwise UP wins when it is
    >= LEFT. UP is never compared against a DIAGONAL that already lost, which
    makes the preference order DIAGONAL > UP > LEFT on ties.
    """
    if diagonal_score >= up_score and diagonal_score >= left_score:
        return State.DIAGONAL
    if up_score >= left_score:
        return State.UP
    return State.LEFT
