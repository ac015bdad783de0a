from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True, slots=True, order=True)
class Pair:
    """
    Immutable (i, j) index pair used to represent a realized base pair.

    Parameters
    ----------
    base_i : int
        Left (opening) index, 0-based.
    base_j : int
        Right (closing) index, 0-based, `base_j > base_i`.
    """
    base_i: int
    base_j: int

    def as_tuple(self) -> tuple[int, int]:
        """Pair indices as a plain ``(i, j)`` tuple."""
        return self.base_i, self.base_j
