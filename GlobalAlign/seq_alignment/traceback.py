"""
Traceback walk and reconstruction of the gapped sequences
"""

import logging
from typing import List, Optional, Sequence, Tuple

from GlobalAlign.exceptions import AlignmentError
from .grid import Grid
from .state import State

logger = logging.getLogger(__name__)

GAP = "-"


def traceback(trace: Grid, start: Optional[Tuple[int, int]] = None) -> List[State]:
    """
    Walk the traceback grid from the terminal cell back to the origin.

    :param trace: A filled traceback grid.
    :param start: Cell to start from, (m, n) by default.
    :return: The path in terminal-to-origin order, ``[END, ..., START]``.
    :raises AlignmentError: When the grid holds a sentinel away from the origin.
    """
    i, j = start if start is not None else (trace.height - 1, trace.width - 1)
    path = [State.END]

    while i > 0 or j > 0:
        state = State(int(trace[i, j]))
        if state is State.DIAGONAL:
            i -= 1
            j -= 1
        elif state is State.UP:
            j -= 1
        elif state is State.LEFT:
            i -= 1
        else:
            raise AlignmentError(f"Unexpected {state.name} state at ({i}, {j}) during traceback")
        if i < 0 or j < 0:
            raise AlignmentError(f"Traceback left the grid after {state.name}")
        path.append(state)

    path.append(State.START)
    logger.debug(f"Traceback produced {len(path) - 2} steps")
    return path


def reconstruct(
    path: Sequence[State],
    seq1: str,
    seq2: str,
    gap_symbol: str = GAP,
) -> Tuple[str, str]:
    """
    Replay a forward path (``START ... END``) over both sequences.

    :param path: Operations in origin-to-terminal order.
    :param seq1: First sequence; LEFT steps consume it alone.
    :param seq2: Second sequence; UP steps consume it alone.
    :param gap_symbol: Marker written opposite a consumed symbol.
    :return: The two aligned strings, always of equal length.
    :raises AlignmentError: When the path does not consume both sequences exactly.
    """
    if not path or path[0] is not State.START:
        raise AlignmentError("Path must begin with START")

    out1, out2 = [], []
    cursor1 = cursor2 = 0

    try:
        for op in path:
            if op is State.DIAGONAL:
                out1.append(seq1[cursor1])
                out2.append(seq2[cursor2])
                cursor1 += 1
                cursor2 += 1
            elif op is State.UP:
                out1.append(gap_symbol)
                out2.append(seq2[cursor2])
                cursor2 += 1
            elif op is State.LEFT:
                out1.append(seq1[cursor1])
                out2.append(gap_symbol)
                cursor1 += 1
            elif op is State.START or op is State.END:
                continue
            else:
                raise AlignmentError(f"Unhandled path operation: {op!r}")
    except IndexError as e:
        raise AlignmentError("Path consumes more symbols than the sequences hold") from e

    if cursor1 != len(seq1) or cursor2 != len(seq2):
        raise AlignmentError(
            f"Path consumed {cursor1}/{len(seq1)} and {cursor2}/{len(seq2)} symbols"
        )
    return "".join(out1), "".join(out2)


def path_cells(path: Sequence[State], start: Tuple[int, int] = (0, 0)) -> List[Tuple[int, int]]:
    """Grid cells visited by a forward path, starting at ``start``."""
    i, j = start
    cells = [(i, j)]
    for op in path:
        if op is State.DIAGONAL:
            i, j = i + 1, j + 1
        elif op is State.UP:
            j += 1
        elif op is State.LEFT:
            i += 1
        else:
            continue
        cells.append((i, j))
    return cells
