from __future__ import annotations
from typing import Final

from rna_nussinov_fold.utils.nucleotide_utils import normalize_base

# Accepted nucleotide alphabet.
RNA_ALPHABET: Final[frozenset[str]] = frozenset("ACGU")

# Default minimal loop length. A pair closing the interval [i, j) requires
# j - i > MIN_LOOP_LENGTH.
MIN_LOOP_LENGTH: Final[int] = 1

# ---- Pairing rules (RNA) -----------------------------------------------------

# Three unordered pairs: Watson-Crick A-U, G-C and the G-U wobble.
# Both orientations are listed for quick membership checks.
_RNA_ALLOWED_PAIRS: Final[frozenset[str]] = frozenset(
    {"AU", "UA", "GC", "CG", "GU", "UG"}
)


def can_pair(base_i: str, base_j: str) -> bool:
    """
    Return True if nucleotides `base_i` and `base_j` can form a base pair.

    Parameters
    ----------
    base_i, base_j : str
        Single-character nucleotides, case-insensitive. Expected in {A, C, G, U}.

    Returns
    -------
    bool
        True if the unordered pair is one of {A,U}, {G,C}, {G,U}; False otherwise.
    """
    if not isinstance(base_i, str) or not isinstance(base_j, str):
        return False

    if len(base_i) != 1 or len(base_j) != 1:
        return False

    return (normalize_base(base_i) + normalize_base(base_j)) in _RNA_ALLOWED_PAIRS


def interval_gap(i: int, j: int) -> int:
    """
    Length of the half-open interval `[i, j)`.

    Parameters
    ----------
    i, j : int
        Interval bounds with i <= j.

    Returns
    -------
    int
        `j - i`.
    """
    return j - i


def satisfies_min_loop(i: int, j: int, min_loop_length: int = MIN_LOOP_LENGTH) -> bool:
    """
    Check whether a pair closing the interval `[i, j)` honours the loop-length rule.

    Parameters
    ----------
    i, j : int
        Interval bounds; the candidate pair is `(i, j - 1)`.
    min_loop_length : int, optional
        Minimal loop length. Defaults to `MIN_LOOP_LENGTH`.

    Returns
    -------
    bool
        True if `j - i > min_loop_length`.
    """
    return interval_gap(i, j) > min_loop_length
