from rna_nussinov_fold.folding.common_traceback import (
    DecompositionStep,
    StructuralPath,
    TraceResult,
    flatten_path,
    path_to_dotbracket,
    path_to_pairs,
    pairs_to_dotbracket,
)

__all__ = [
    "DecompositionStep",
    "StructuralPath",
    "TraceResult",
    "flatten_path",
    "path_to_dotbracket",
    "path_to_pairs",
    "pairs_to_dotbracket",
]
