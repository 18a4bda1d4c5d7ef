"""
Exceptions raised by the alignment engine
"""


class AlignmentError(Exception):
    """Base class for every error raised while aligning two sequences."""
    pass


class InvalidInput(AlignmentError, ValueError):
    """Raised when a sequence cannot be aligned under the chosen scoring policy."""
    pass


class AllocationFailure(AlignmentError, MemoryError):
    """Raised when the score and traceback grids do not fit in memory."""
    pass


class AlignmentCancelled(AlignmentError):
    """Raised when a cooperative cancellation check fires during the matrix fill."""
    pass
