from typing import Iterator, Tuple


def iter_spans_of_gap(n: int, gap: int) -> Iterator[Tuple[int, int]]:
    """
    Iterates through all half-open intervals `[i, j)` of a fixed length `gap`.

    Intervals are addressed on the `(n + 1) x (n + 1)` boundary grid, so `j` may
    equal `n`.

    Parameters
    ----------
    n : int
        The length of the sequence.
    gap : int
        The interval length `j - i`.

    Yields
    ------
    Iterator[Tuple[int, int]]
        `(i, j)` tuples with `j - i == gap`, by increasing `i`.
    """
    for i in range(0, n - gap + 1):
        yield i, i + gap


def iter_split_points(outer_i: int, outer_j: int) -> Iterator[int]:
    """
    Iterates through the decomposition split points `k` of the interval `[i, j)`.

    A split produces `[i, k)` and `[k, j)`; both halves must be able to hold a
    pair, so `i + 1 < k < j - 1`.

    Parameters
    ----------
    outer_i : int
        The start of the interval.
    outer_j : int
        The (exclusive) end of the interval.

    Yields
    ------
    Iterator[int]
        Split indices in increasing order.
    """
    for k in range(outer_i + 2, outer_j - 1):
        yield k
