"""
GlobalAlign
Needleman-Wunsch global alignment of two symbol sequences
"""

from .exceptions import AlignmentError, InvalidInput, AllocationFailure, AlignmentCancelled
from .seq_alignment import (
    PairwiseAligner,
    AlignmentResult,
    State,
    pairwise,
    pairwise_async
)

__version__ = "0.1.0"

__all__ = [
    "AlignmentError",
    "InvalidInput",
    "AllocationFailure",
    "AlignmentCancelled",
    "PairwiseAligner",
    "AlignmentResult",
    "State",
    "pairwise",
    "pairwise_async"
]
