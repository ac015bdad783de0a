from rna_nussinov_fold.rules.constraints import (
    MIN_LOOP_LENGTH,
    RNA_ALPHABET,
    can_pair,
    interval_gap,
    satisfies_min_loop,
)

__all__ = [
    "MIN_LOOP_LENGTH",
    "RNA_ALPHABET",
    "can_pair",
    "interval_gap",
    "satisfies_min_loop",
]
