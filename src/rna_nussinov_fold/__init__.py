from rna_nussinov_fold.errors import InvalidSequenceError, TooManyStructuresError
from rna_nussinov_fold.folding.nussinov import NussinovFoldResult, fold_sequence, predict_structures

__version__ = "0.1.0"

__all__ = [
    "InvalidSequenceError",
    "TooManyStructuresError",
    "NussinovFoldResult",
    "fold_sequence",
    "predict_structures",
]
