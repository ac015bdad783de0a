from __future__ import annotations
from dataclasses import dataclass
import logging
from typing import Iterator, Tuple

from rna_nussinov_fold.errors import InvalidSequenceError
from rna_nussinov_fold.rules.constraints import RNA_ALPHABET, can_pair
from rna_nussinov_fold.utils.nucleotide_utils import normalize_sequence

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RnaSequence:
    """
    A validated, immutable RNA sequence over the alphabet {A, C, G, U}.

    Instances are built with `RnaSequence.from_string`, which upper-cases the
    input and rejects any other symbol. The object is read-only after
    construction and is shared between the matrix fill and the renderer.

    Attributes
    ----------
    bases : Tuple[str, ...]
        The nucleotide symbols, one per position.
    """
    bases: Tuple[str, ...]

    @classmethod
    def from_string(cls, raw_sequence: str) -> RnaSequence:
        """
        Validates and normalizes a raw sequence string.

        Parameters
        ----------
        raw_sequence : str
            The sequence as supplied by the caller (case-insensitive).

        Returns
        -------
        RnaSequence
            The validated sequence.

        Raises
        ------
        InvalidSequenceError
            If the sequence is empty or contains a character outside A, C, G, U.
        """
        if not isinstance(raw_sequence, str):
            raise InvalidSequenceError(f"Sequence must be a string, got {type(raw_sequence).__name__}.")

        normalized = normalize_sequence(raw_sequence)
        if not normalized:
            raise InvalidSequenceError("Sequence is empty.")

        for pos, char in enumerate(normalized):
            if char not in RNA_ALPHABET:
                raise InvalidSequenceError(
                    f"Invalid character at position {pos} ('{char}'). Only A,C,G,U are allowed.",
                    position=pos,
                    symbol=char,
                )

        logger.debug(f"Sequence validated: length={len(normalized)}")
        return cls(bases=tuple(normalized))

    @property
    def length(self) -> int:
        return len(self.bases)

    def __len__(self) -> int:
        return len(self.bases)

    def __getitem__(self, index: int) -> str:
        return self.bases[index]

    def __iter__(self) -> Iterator[str]:
        return iter(self.bases)

    def __str__(self) -> str:
        return "".join(self.bases)

    def is_complementary_pair(self, i: int, j: int) -> bool:
        """
        Whether the interval `[i, j)` is closed by a valid base pair.

        The candidate pair is formed by the symbol at `i` and the symbol at
        `j - 1`; a position cannot pair with itself.

        Parameters
        ----------
        i : int
            Interval start (index of the 5' base).
        j : int
            Exclusive interval end (the 3' base is at `j - 1`).

        Returns
        -------
        bool
            True if the two symbols form one of the allowed unordered pairs.

        Raises
        ------
        IndexError
            If `i` or `j - 1` falls outside the sequence.
        """
        n = len(self.bases)
        if i < 0 or i >= n or j - 1 < 0 or j - 1 >= n:
            raise IndexError(f"Complementarity query out of range: (i={i}, j={j}) for N={n}")

        if i >= j - 1:
            return False

        return can_pair(self.bases[i], self.bases[j - 1])
