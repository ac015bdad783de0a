from __future__ import annotations
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
import logging
import time
from typing import List, Optional, Tuple

from tqdm import tqdm

from rna_nussinov_fold.errors import EmptyCandidateSetError, UnfilledCellError
from rna_nussinov_fold.folding.nussinov.nussinov_back_pointer import NussinovTrace
from rna_nussinov_fold.folding.nussinov.nussinov_fold_state import NussinovFoldState, Traces
from rna_nussinov_fold.rules import MIN_LOOP_LENGTH, satisfies_min_loop
from rna_nussinov_fold.structures import Position
from rna_nussinov_fold.utils.iter_utils import iter_spans_of_gap, iter_split_points

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class NussinovFoldingConfig:
    """
    Configuration settings for the Nussinov folding algorithm.

    Attributes
    ----------
    min_loop_length : int
        A pair may close the interval `[i, j)` only if `j - i > min_loop_length`.
        Defaults to 1.
    workers : int
        Number of threads used to evaluate the cells of one gap level. With 1
        (the default) the fill runs sequentially.
    verbose : bool
        If True, shows a progress bar over gap levels.
    """
    min_loop_length: int = MIN_LOOP_LENGTH
    workers: int = 1
    verbose: bool = False

    def __post_init__(self) -> None:
        if self.min_loop_length < 0:
            raise ValueError(f"min_loop_length must be >= 0, got {self.min_loop_length}")
        if self.workers < 1:
            raise ValueError(f"workers must be >= 1, got {self.workers}")


@dataclass(slots=True)
class NussinovFoldingEngine:
    """
    Fills the Nussinov maximum-pairing tables, keeping every tied optimum.

    Cells are computed by increasing gap `j - i`, so every dependency of a
    cell is final before the cell is evaluated. All cells of one gap are
    independent of each other; with `config.workers > 1` they are evaluated
    concurrently and committed together before the next gap starts.

    Attributes
    ----------
    config : NussinovFoldingConfig
        Settings for the fill.
    """
    config: NussinovFoldingConfig

    def fill_all_matrices(self, state: NussinovFoldState) -> None:
        """
        Executes the Nussinov dynamic programming fill.

        Parameters
        ----------
        state : NussinovFoldState
            A freshly allocated state (see `make_fold_state`). Every
            non-diagonal cell is written exactly once.
        """
        start_time = time.perf_counter()
        n = state.seq_len

        if n == 0:
            logger.info("Nussinov DP: empty sequence; nothing to fill.")
            return

        logger.info("=" * 60)
        logger.info(f"Nussinov DP for sequence length N={n}, min loop length={self.config.min_loop_length}")
        logger.info(f"Expected complexity: O(N³) ≈ {n ** 3:,} operations")
        logger.info("=" * 60)

        show_progress = self.config.verbose or logger.isEnabledFor(logging.INFO)
        gap_iter = tqdm(range(1, n + 1), desc="Nussinov DP", leave=True, disable=not show_progress)

        if self.config.workers == 1:
            for gap in gap_iter:
                for i, j in iter_spans_of_gap(n, gap):
                    value, traces = self.evaluate_cell(state, i, j)
                    state.commit_cell(i, j, value, traces)
        else:
            with ThreadPoolExecutor(max_workers=self.config.workers) as executor:
                for gap in gap_iter:
                    spans = list(iter_spans_of_gap(n, gap))
                    results = list(executor.map(lambda span: self.evaluate_cell(state, *span), spans))
                    # Barrier: the whole gap level is committed before the next one is read.
                    for (i, j), (value, traces) in zip(spans, results):
                        state.commit_cell(i, j, value, traces)

        elapsed = time.perf_counter() - start_time
        cell_count = n * (n + 1) / 2

        logger.info(f"Nussinov DP completed in {elapsed:.2f}s ({elapsed * 1000:.0f}ms)")
        logger.info(f"Final value[0,{n}] = {state.max_pairs} pairs, {len(state.traces(0, n))} tied trace(s) at root")
        logger.info(f"Average time per cell: {elapsed * 1000 * 1000 / cell_count:.2f} μs")

    def evaluate_cell(self, state: NussinovFoldState, i: int, j: int) -> Tuple[int, Traces]:
        """
        Evaluates the recurrence for the interval `[i, j)` without writing it.

        Parameters
        ----------
        state : NussinovFoldState
            The state holding all cells of gap smaller than `j - i`.
        i : int
            Interval start.
        j : int
            Exclusive interval end, `j > i`.

        Returns
        -------
        Tuple[int, Traces]
            The optimal pair count and every trace attaining it.

        Raises
        ------
        UnfilledCellError
            If a dependency has not been filled (fill order violated).
        EmptyCandidateSetError
            If no recurrence branch applies to the interval.

        Notes
        -----
        The value is the maximum of four cases:
        1.  COMPLEMENTARY: `value(i+1, j-1) + 1` when `i` and `j - 1` can pair
            and `j - i > min_loop_length`.
        2.  UNPAIRED_LEFT: `value(i, j-1)`.
        3.  UNPAIRED_BOTTOM: `value(i+1, j)`.
        4.  DECOMPOSITION: `value(i, k) + value(k, j)` for `i + 1 < k < j - 1`.
        Every candidate equal to the maximum is kept, in the order above.
        """
        pos = Position(i, j)
        candidates: List[Tuple[int, NussinovTrace]] = []

        # --- Case 1: i pairs with j - 1 ---
        if satisfies_min_loop(i, j, self.config.min_loop_length) and state.seq.is_complementary_pair(i, j):
            inner = pos.complementary()
            inner_value = self._read(state, inner, "COMPLEMENTARY")
            candidates.append((inner_value + 1, NussinovTrace.complementary(inner)))

        # --- Case 2: j - 1 unpaired ---
        left = pos.unpaired_left()
        candidates.append((self._read(state, left, "UNPAIRED_LEFT"), NussinovTrace.unpaired_left(left)))

        # --- Case 3: i unpaired ---
        bottom = pos.unpaired_bottom()
        candidates.append((self._read(state, bottom, "UNPAIRED_BOTTOM"), NussinovTrace.unpaired_bottom(bottom)))

        # --- Case 4: bifurcation into two independent halves ---
        for k in iter_split_points(i, j):
            left_half, right_half = pos.decomposition(k)
            split_value = (self._read(state, left_half, "DECOMPOSITION")
                           + self._read(state, right_half, "DECOMPOSITION"))
            candidates.append((split_value, NussinovTrace.decomposition(left_half, right_half)))

        if not candidates:
            raise EmptyCandidateSetError(i, j)

        best_value = max(value for value, _ in candidates)
        traces = tuple(trace for value, trace in candidates if value == best_value)

        if len(traces) > 1:
            logger.debug(f"Cell {pos}: value={best_value} with {len(traces)} tied traces")

        return best_value, traces

    @staticmethod
    def _read(state: NussinovFoldState, pos: Position, branch: str) -> int:
        value: Optional[int] = state.value_matrix.get(pos.i, pos.j)
        if value is None:
            raise UnfilledCellError(pos.i, pos.j, branch)
        return value
