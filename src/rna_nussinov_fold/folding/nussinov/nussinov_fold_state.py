from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from rna_nussinov_fold.errors import UnfilledCellError
from rna_nussinov_fold.structures import NussinovTriMatrix, Position, RnaSequence
from rna_nussinov_fold.folding.nussinov.nussinov_back_pointer import NussinovTrace

Traces = Tuple[NussinovTrace, ...]


@dataclass(frozen=True, slots=True)
class NussinovFoldState:
    """
    Holds the DP tables of a Nussinov run for one sequence.

    Both tables live on the `(N + 1) x (N + 1)` boundary grid. A cell is
    written exactly once by the fill and is read-only afterwards.

    Attributes
    ----------
    seq : RnaSequence
        The validated sequence the tables were allocated for.
    value_matrix : NussinovTriMatrix[Optional[int]]
        `value_matrix[i, j]` is the maximum number of pairs on `[i, j)`;
        `None` until the cell is filled.
    trace_matrix : NussinovTriMatrix[Traces]
        Every recurrence choice attaining `value_matrix[i, j]`, in recurrence
        order. Empty for diagonal cells.
    """
    seq: RnaSequence
    value_matrix: NussinovTriMatrix[Optional[int]]
    trace_matrix: NussinovTriMatrix[Traces]

    @property
    def seq_len(self) -> int:
        return len(self.seq)

    @property
    def root(self) -> Position:
        """The full-sequence interval `(0, N)`."""
        return Position(0, len(self.seq))

    def is_filled(self, i: int, j: int) -> bool:
        return self.value_matrix.get(i, j) is not None

    def value(self, i: int, j: int) -> int:
        """
        Returns the optimal pair count of `[i, j)`.

        Raises
        ------
        UnfilledCellError
            If the cell has not been filled yet.
        """
        value = self.value_matrix.get(i, j)
        if value is None:
            raise UnfilledCellError(i, j)
        return value

    def traces(self, i: int, j: int) -> Traces:
        return self.trace_matrix.get(i, j)

    def commit_cell(self, i: int, j: int, value: int, traces: Traces) -> None:
        """
        Writes a cell. Cells are write-once.

        Raises
        ------
        RuntimeError
            If the cell already holds a value.
        """
        if self.value_matrix.get(i, j) is not None:
            raise RuntimeError(f"Cell (i={i}, j={j}) is already filled")
        self.value_matrix.set(i, j, value)
        self.trace_matrix.set(i, j, traces)

    @property
    def max_pairs(self) -> int:
        """Optimal pair count of the whole sequence, `value(0, N)`."""
        root = self.root
        return self.value(root.i, root.j)

    def values_as_array(self) -> np.ndarray:
        """
        Dense integer copy of the value table.

        Returns
        -------
        np.ndarray
            Shape `(N + 1, N + 1)`; lower-triangle and unfilled cells are 0.
        """
        return self.value_matrix.to_numpy(default=0).astype(np.int64)


def make_fold_state(seq: RnaSequence) -> NussinovFoldState:
    """
    Allocates and initializes the Nussinov tables for `seq`.

    Parameters
    ----------
    seq : RnaSequence
        The validated sequence (length N).

    Returns
    -------
    NussinovFoldState
        A new state whose diagonal cells hold the base case (value 0, no traces)
        and whose other cells are unfilled.

    Notes
    -----
    The diagonal `(i, i)` is the empty interval: it holds no pairs and is a
    terminal node of every traceback.
    """
    seq_len = len(seq)
    value_matrix = NussinovTriMatrix[Optional[int]](seq_len, None)
    trace_matrix = NussinovTriMatrix[Traces](seq_len, ())

    for i in range(seq_len + 1):
        value_matrix.set(i, i, 0)

    return NussinovFoldState(
        seq=seq,
        value_matrix=value_matrix,
        trace_matrix=trace_matrix,
    )
