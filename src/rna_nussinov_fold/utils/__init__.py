from rna_nussinov_fold.utils.iter_utils import iter_spans_of_gap, iter_split_points
from rna_nussinov_fold.utils.nucleotide_utils import normalize_base, normalize_sequence

__all__ = [
    "iter_spans_of_gap",
    "iter_split_points",
    "normalize_base",
    "normalize_sequence",
]
