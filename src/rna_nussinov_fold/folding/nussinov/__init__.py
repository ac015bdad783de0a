from rna_nussinov_fold.folding.nussinov.nussinov_back_pointer import NussinovTraceOp, NussinovTrace
from rna_nussinov_fold.folding.nussinov.nussinov_fold_state import NussinovFoldState, make_fold_state
from rna_nussinov_fold.folding.nussinov.nussinov_recurrences import NussinovFoldingConfig, NussinovFoldingEngine
from rna_nussinov_fold.folding.nussinov.nussinov_traceback import (
    NussinovTracebackEnumerator,
    count_paths,
    traceback_all,
)
from rna_nussinov_fold.folding.nussinov.nussinov_fold import NussinovFoldResult, fold_sequence, predict_structures

__all__ = [
    "NussinovTraceOp",
    "NussinovTrace",
    "NussinovFoldState",
    "make_fold_state",
    "NussinovFoldingConfig",
    "NussinovFoldingEngine",
    "NussinovTracebackEnumerator",
    "count_paths",
    "traceback_all",
    "NussinovFoldResult",
    "fold_sequence",
    "predict_structures",
]
