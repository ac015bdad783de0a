from __future__ import annotations
from typing import Generic, TypeVar, List, Tuple, Iterator

import numpy as np

T = TypeVar("T")


class NussinovTriMatrix(Generic[T]):
    """
    An upper-triangular matrix over the interval boundaries of a sequence.

    A sequence of length N has N + 1 boundaries, and a cell `(i, j)` with
    `0 <= i <= j <= N` addresses the half-open interval `[i, j)`. Only the
    upper triangle is allocated: row `i` holds the N + 1 - i cells `j = i..N`.
    """
    __slots__ = ("_seq_len", "_rows")

    def __init__(self, seq_len: int, fill: T):
        if seq_len < 0:
            raise ValueError(f"Sequence length must be non-negative, got {seq_len}")
        self._seq_len = seq_len
        dim = seq_len + 1
        self._rows: List[List[T]] = [[fill for _ in range(dim - i)] for i in range(dim)]

    @property
    def size(self) -> int:
        """Returns the sequence length N the matrix was built for."""
        return self._seq_len

    @property
    def shape(self) -> Tuple[int, int]:
        """Returns the boundary-grid shape `(N + 1, N + 1)`."""
        return self._seq_len + 1, self._seq_len + 1

    def _offset(self, base_i: int, base_j: int) -> int:
        """Calculates the column offset within a row and validates indices."""
        dim = self._seq_len + 1
        if base_i < 0 or base_j < 0 or base_i >= dim or base_j >= dim or base_j < base_i:
            raise IndexError(f"TriMatrix invalid index: (i={base_i}, j={base_j}) for N={self._seq_len}")
        return base_j - base_i

    def get(self, base_i: int, base_j: int) -> T:
        """
        Retrieves the value at cell `(i, j)`.

        Parameters
        ----------
        base_i : int
            Interval start, 0-based.
        base_j : int
            Exclusive interval end.

        Returns
        -------
        T
            The value stored at the specified cell.

        Raises
        ------
        IndexError
            If `(i, j)` is outside the upper triangle.
        """
        return self._rows[base_i][self._offset(base_i, base_j)]

    def set(self, base_i: int, base_j: int, value: T) -> None:
        """
        Sets the `value` at cell `(i, j)`.

        Raises
        ------
        IndexError
            If `(i, j)` is outside the upper triangle.
        """
        self._rows[base_i][self._offset(base_i, base_j)] = value

    def iter_upper_indices(self) -> Iterator[Tuple[int, int]]:
        """
        Yields all valid `(i, j)` index tuples in row-major order.
        """
        dim = self._seq_len + 1
        for i in range(dim):
            for j in range(i, dim):
                yield i, j

    def to_numpy(self, default: float = 0) -> np.ndarray:
        """
        Copies the matrix into a dense square NumPy array.

        Cells below the diagonal, and cells holding `None`, take `default`.

        Returns
        -------
        np.ndarray
            An array of shape `(N + 1, N + 1)`.
        """
        dense = np.full(self.shape, default)
        for i, j in self.iter_upper_indices():
            value = self.get(i, j)
            if value is not None:
                dense[i, j] = value
        return dense
