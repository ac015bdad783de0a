from __future__ import annotations
from typing import Optional, Tuple

__all__ = [
    "InvalidSequenceError",
    "EmptyCandidateSetError",
    "UnfilledCellError",
    "TooManyStructuresError",
]


class InvalidSequenceError(ValueError):
    """
    Raised when an input sequence is empty or contains a symbol outside the
    accepted nucleotide alphabet.

    Attributes
    ----------
    position : Optional[int]
        Index of the first offending character, or `None` for an empty input.
    symbol : Optional[str]
        The offending character, or `None` for an empty input.
    """

    def __init__(self, message: str, position: Optional[int] = None, symbol: Optional[str] = None):
        super().__init__(message)
        self.position = position
        self.symbol = symbol


class EmptyCandidateSetError(RuntimeError):
    """Raised when a non-diagonal cell is evaluated and no recurrence branch applies."""

    def __init__(self, base_i: int, base_j: int):
        super().__init__(
            f"No recurrence candidate for cell (i={base_i}, j={base_j}); recurrence bounds are inconsistent"
        )
        self.position: Tuple[int, int] = (base_i, base_j)


class UnfilledCellError(RuntimeError):
    """Raised when a cell is read before the fill has computed it."""

    def __init__(self, base_i: int, base_j: int, branch: Optional[str] = None):
        if branch is None:
            message = f"Cell (i={base_i}, j={base_j}) has not been filled"
        else:
            message = f"Cell (i={base_i}, j={base_j}) read by {branch} branch before it was filled"
        super().__init__(message)
        self.position: Tuple[int, int] = (base_i, base_j)
        self.branch = branch


class TooManyStructuresError(RuntimeError):
    """Raised when traceback enumeration exceeds the caller-supplied path cap."""

    def __init__(self, limit: int):
        super().__init__(f"Traceback produced more than {limit} optimal paths")
        self.limit = limit
