from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True, slots=True, order=True)
class Position:
    """
    A cell of the Nussinov matrix, addressing the half-open interval `[i, j)`.

    Positions live on the `(n + 1) x (n + 1)` boundary grid of a sequence of
    length `n`, so `0 <= i <= j <= n`. Diagonal positions (`i == j`) denote the
    empty interval and are the base case of the recurrence.

    Attributes
    ----------
    i : int
        Inclusive start of the interval.
    j : int
        Exclusive end of the interval.
    """
    i: int
    j: int

    @property
    def gap(self) -> int:
        """Interval length `j - i`."""
        return self.j - self.i

    def is_diagonal(self) -> bool:
        return self.i == self.j

    def is_diagonal_relation(self, other: Position) -> bool:
        """
        True if `other` is this position stepped inward by one on each side.

        This is the relation produced by a complementary step, which pairs
        index `self.i` with index `other.j` (i.e. `self.j - 1`).
        """
        return self.i + 1 == other.i and self.j == other.j + 1

    def complementary(self) -> Position:
        """Inner interval left after pairing `i` with `j - 1`."""
        return Position(self.i + 1, self.j - 1)

    def unpaired_left(self) -> Position:
        """Interval left after dropping the last index `j - 1`."""
        return Position(self.i, self.j - 1)

    def unpaired_bottom(self) -> Position:
        """Interval left after dropping the first index `i`."""
        return Position(self.i + 1, self.j)

    def decomposition(self, k: int) -> Tuple[Position, Position]:
        """Split into `[i, k)` and `[k, j)`."""
        return Position(self.i, k), Position(k, self.j)

    def as_tuple(self) -> Tuple[int, int]:
        return self.i, self.j

    def __str__(self) -> str:
        return f"({self.i},{self.j})"
