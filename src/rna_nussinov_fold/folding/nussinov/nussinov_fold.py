from __future__ import annotations
from dataclasses import dataclass
import logging
import time
from typing import List, Optional, Union

from rna_nussinov_fold.folding.common_traceback import TraceResult, pairs_to_dotbracket, render_path
from rna_nussinov_fold.folding.nussinov.nussinov_fold_state import NussinovFoldState, make_fold_state
from rna_nussinov_fold.folding.nussinov.nussinov_recurrences import NussinovFoldingConfig, NussinovFoldingEngine
from rna_nussinov_fold.folding.nussinov.nussinov_traceback import NussinovTracebackEnumerator
from rna_nussinov_fold.rules import MIN_LOOP_LENGTH
from rna_nussinov_fold.structures import RnaSequence

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class NussinovFoldResult:
    """
    Outcome of a complete Nussinov run.

    Attributes
    ----------
    sequence : RnaSequence
        The validated input sequence.
    min_loop_length : int
        The loop-length constraint used for the fill.
    max_pairs : int
        The optimal number of base pairs, `value(0, N)`.
    path_count : int
        Number of optimal derivations in the traceback graph.
    structures : List[TraceResult]
        Distinct optimal structures, in enumeration order.
    state : NussinovFoldState
        The filled tables.
    """
    sequence: RnaSequence
    min_loop_length: int
    max_pairs: int
    path_count: int
    structures: List[TraceResult]
    state: NussinovFoldState

    @property
    def dot_brackets(self) -> List[str]:
        return [result.dot_bracket for result in self.structures]


def fold_sequence(
    raw_sequence: Union[str, RnaSequence],
    min_loop_length: int = MIN_LOOP_LENGTH,
    max_structures: Optional[int] = None,
    *,
    collapse_derivations: bool = True,
    workers: int = 1,
    verbose: bool = False,
) -> NussinovFoldResult:
    """
    Runs validation, matrix fill, traceback enumeration and rendering.

    Parameters
    ----------
    raw_sequence : Union[str, RnaSequence]
        The sequence to fold. Strings are validated before any table is
        allocated.
    min_loop_length : int, optional
        Minimal loop length, by default 1.
    max_structures : Optional[int], optional
        Cap on the number of distinct structures (or, with
        `collapse_derivations=False`, enumerated paths).
    collapse_derivations : bool, optional
        If True (the default), merge derivations realizing the same pairs
        during the traceback. If False, enumerate every path and de-duplicate
        the rendered strings afterwards; the path count grows exponentially on
        low-complexity input, so pair it with `max_structures`.
    workers : int, optional
        Threads used per gap level of the fill.
    verbose : bool, optional
        Show a progress bar during the fill.

    Returns
    -------
    NussinovFoldResult
        The optimal pair count and every distinct optimal structure.

    Raises
    ------
    InvalidSequenceError
        If the sequence contains a symbol outside A, C, G, U.
    TooManyStructuresError
        If the enumeration exceeds `max_structures`.
    """
    start_time = time.perf_counter()
    seq = raw_sequence if isinstance(raw_sequence, RnaSequence) else RnaSequence.from_string(raw_sequence)

    config = NussinovFoldingConfig(min_loop_length=min_loop_length, workers=workers, verbose=verbose)
    engine = NussinovFoldingEngine(config=config)
    state = make_fold_state(seq)
    engine.fill_all_matrices(state)

    enumerator = NussinovTracebackEnumerator(state, max_paths=max_structures)
    path_count = enumerator.count_paths()
    logger.info(f"Traceback graph holds {path_count:,} optimal derivation(s)")

    seq_len = len(seq)
    if collapse_derivations:
        structures = []
        for pair_set in enumerator.enumerate_pair_sets():
            pairs = sorted(pair_set, key=lambda pr: (pr.base_i, pr.base_j))
            structures.append(TraceResult(pairs=pairs, dot_bracket=pairs_to_dotbracket(seq_len, pairs)))
    else:
        structures = _unique_by_dotbracket(render_path(seq_len, path) for path in enumerator.enumerate())

    elapsed = time.perf_counter() - start_time
    logger.info(f"Found {len(structures)} distinct optimal structure(s) with {state.max_pairs} pair(s) "
                f"in {elapsed:.2f}s")

    return NussinovFoldResult(
        sequence=seq,
        min_loop_length=min_loop_length,
        max_pairs=state.max_pairs,
        path_count=path_count,
        structures=structures,
        state=state,
    )


def predict_structures(
    raw_sequence: str,
    min_loop_length: int = MIN_LOOP_LENGTH,
    max_structures: Optional[int] = None,
    collapse_derivations: bool = True,
) -> List[str]:
    """
    Returns every distinct optimal dot-bracket string for `raw_sequence`.
    """
    return fold_sequence(
        raw_sequence,
        min_loop_length,
        max_structures,
        collapse_derivations=collapse_derivations,
    ).dot_brackets


def _unique_by_dotbracket(results) -> List[TraceResult]:
    seen = set()
    unique: List[TraceResult] = []
    for result in results:
        if result.dot_bracket in seen:
            continue
        seen.add(result.dot_bracket)
        unique.append(result)
    return unique
