"""
Dense 2D grids backed by a flat numpy buffer
"""

import logging
from typing import Tuple

import numpy as np

from GlobalAlign.exceptions import AllocationFailure

logger = logging.getLogger(__name__)


class Grid:
    """
    A (height x width) grid stored in one contiguous 1-D array.

    Cell (row, col) lives at ``row * width + col``. Rows follow the first
    sequence and columns the second, so a grid for sequences of length m and
    n has shape (m + 1, n + 1).
    """

    def __init__(self, height: int, width: int, dtype=np.int64, fill=0):
        self.height = height
        self.width = width
        try:
            self.data = np.full(height * width, fill, dtype=dtype)
        except MemoryError as e:
            logger.error(f"Cannot allocate {height}x{width} grid of {np.dtype(dtype).name}")
            raise AllocationFailure(
                f"Cannot allocate a {height}x{width} grid"
            ) from e

    @property
    def shape(self) -> Tuple[int, int]:
        return self.height, self.width

    def index(self, row: int, col: int) -> int:
        return row * self.width + col

    def __getitem__(self, cell: Tuple[int, int]):
        row, col = cell
        return self.data[row * self.width + col]

    def __setitem__(self, cell: Tuple[int, int], value) -> None:
        row, col = cell
        self.data[row * self.width + col] = value

    def as_array(self) -> np.ndarray:
        """2-D view over the flat buffer (no copy)."""
        return self.data.reshape(self.height, self.width)

    def freeze(self) -> "Grid":
        """Make the buffer read-only; the builder calls this once filling is done."""
        self.data.flags.writeable = False
        return self

    @property
    def frozen(self) -> bool:
        return not self.data.flags.writeable

    def __repr__(self) -> str:
        return f"Grid({self.height}x{self.width}, dtype={self.data.dtype.name})"
