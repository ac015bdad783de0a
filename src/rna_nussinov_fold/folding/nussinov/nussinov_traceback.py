from __future__ import annotations
import logging
from typing import Dict, FrozenSet, List, Optional, Tuple

from rna_nussinov_fold.errors import TooManyStructuresError, UnfilledCellError
from rna_nussinov_fold.folding.common_traceback import DecompositionStep, StructuralPath
from rna_nussinov_fold.folding.nussinov.nussinov_back_pointer import NussinovTraceOp
from rna_nussinov_fold.folding.nussinov.nussinov_fold_state import NussinovFoldState
from rna_nussinov_fold.structures import Pair, Position

logger = logging.getLogger(__name__)

PairSet = FrozenSet[Pair]


class NussinovTracebackEnumerator:
    """
    Enumerates every optimal derivation stored in a filled Nussinov state.

    The trace matrix is used directly as an acyclic graph: a cell's traces
    point at strictly shorter intervals, down to the diagonal base cases. Each
    position is expanded once; its list of paths is memoized and shared by
    every ancestor that reaches it. The cross product of the two halves of a
    decomposition is memoized per `(left, right)` pair.

    A structural path starts at the root `(0, N)`. A complementary or unpaired
    step contributes its own position followed by a path of its child; a
    decomposition contributes its position followed by one `DecompositionStep`
    holding a left and a right sub-path. A base case contributes only itself,
    so a complementary step into an empty interval stays visible to the
    renderer.

    Parameters
    ----------
    state : NussinovFoldState
        A fully filled state.
    max_paths : Optional[int]
        Upper bound on the number of root paths. Enumeration is refused with
        `TooManyStructuresError` if the bound would be exceeded.
    """

    def __init__(self, state: NussinovFoldState, max_paths: Optional[int] = None):
        if max_paths is not None and max_paths < 1:
            raise ValueError(f"max_paths must be >= 1, got {max_paths}")
        self._state = state
        self._max_paths = max_paths
        self._paths: Dict[Position, List[StructuralPath]] = {}
        self._cross: Dict[Tuple[Position, Position], List[DecompositionStep]] = {}
        self._counts: Dict[Position, int] = {}
        self._pair_sets: Dict[Position, List[PairSet]] = {}

    @property
    def state(self) -> NussinovFoldState:
        return self._state

    def enumerate(self) -> List[StructuralPath]:
        """
        Returns one structural path per optimal derivation of the root.

        The order is stable for a given state: traces are followed in the
        order the fill recorded them, and decomposition combinations are
        ordered left-major.

        Raises
        ------
        TooManyStructuresError
            If the number of paths exceeds `max_paths`.
        UnfilledCellError
            If the state has not been filled.
        """
        root = self._state.root
        total = self.count_paths()
        if self._max_paths is not None and total > self._max_paths:
            raise TooManyStructuresError(self._max_paths)

        logger.info(f"Enumerating {total:,} optimal path(s) from root {root}")
        for pos in self._reachable_by_gap():
            if pos not in self._paths:
                self._paths[pos] = self._expand_paths(pos)

        return list(self._paths[root])

    def count_paths(self) -> int:
        """
        Counts the optimal derivations of the root without materializing them.

        Returns
        -------
        int
            The number of paths `enumerate()` would return.
        """
        for pos in self._reachable_by_gap():
            if pos in self._counts:
                continue
            traces = self._state.traces(pos.i, pos.j)
            if not traces:
                self._counts[pos] = 1
                continue
            count = 0
            for trace in traces:
                if trace.is_decomposition:
                    count += self._counts[trace.child] * self._counts[trace.right]
                else:
                    count += self._counts[trace.child]
            self._counts[pos] = count

        return self._counts[self._state.root]

    def enumerate_pair_sets(self) -> List[PairSet]:
        """
        Returns the distinct optimal structures as sets of base pairs.

        Derivations that only differ in the order unpaired positions are
        peeled off realize the same pairs; here they are merged at every
        position instead of after rendering, so the work is bounded by the
        number of distinct structures rather than the number of paths.

        Returns
        -------
        List[PairSet]
            Distinct pair sets, in first-derivation order.
        """
        for pos in self._reachable_by_gap():
            if pos not in self._pair_sets:
                self._pair_sets[pos] = self._expand_pair_sets(pos)
                if self._max_paths is not None and len(self._pair_sets[pos]) > self._max_paths:
                    raise TooManyStructuresError(self._max_paths)

        return list(self._pair_sets[self._state.root])

    # ------------------------------------------------------------------
    # Expansion helpers
    # ------------------------------------------------------------------
    def _expand_paths(self, pos: Position) -> List[StructuralPath]:
        traces = self._state.traces(pos.i, pos.j)
        if not traces:
            return [(pos,)]

        paths: List[StructuralPath] = []
        for trace in traces:
            if trace.is_decomposition:
                for step in self._combine(trace.child, trace.right):
                    paths.append((pos, step))
            else:
                for child_path in self._paths[trace.child]:
                    paths.append((pos,) + child_path)
        return paths

    def _combine(self, left: Position, right: Position) -> List[DecompositionStep]:
        key = (left, right)
        steps = self._cross.get(key)
        if steps is None:
            steps = [
                DecompositionStep(left=left_path, right=right_path)
                for left_path in self._paths[left]
                for right_path in self._paths[right]
            ]
            self._cross[key] = steps
        return steps

    def _expand_pair_sets(self, pos: Position) -> List[PairSet]:
        traces = self._state.traces(pos.i, pos.j)
        if not traces:
            return [frozenset()]

        # dict keeps first-seen order while merging duplicates.
        merged: Dict[PairSet, None] = {}
        for trace in traces:
            if trace.operation is NussinovTraceOp.COMPLEMENTARY:
                closing = Pair(pos.i, pos.j - 1)
                for inner in self._pair_sets[trace.child]:
                    merged.setdefault(inner | {closing})
            elif trace.is_decomposition:
                for left_set in self._pair_sets[trace.child]:
                    for right_set in self._pair_sets[trace.right]:
                        merged.setdefault(left_set | right_set)
            else:
                for inner in self._pair_sets[trace.child]:
                    merged.setdefault(inner)
        return list(merged)

    def _reachable_by_gap(self) -> List[Position]:
        """
        Collects every position reachable from the root, shortest first.

        Processing in this order guarantees each position's children are
        expanded before the position itself.
        """
        root = self._state.root
        if not self._state.is_filled(root.i, root.j):
            raise UnfilledCellError(root.i, root.j)

        seen = {root}
        stack = [root]
        while stack:
            pos = stack.pop()
            for trace in self._state.traces(pos.i, pos.j):
                for child in trace.children():
                    if child not in seen:
                        seen.add(child)
                        stack.append(child)

        return sorted(seen, key=lambda p: (p.gap, p.i))


def traceback_all(state: NussinovFoldState, max_paths: Optional[int] = None) -> List[StructuralPath]:
    """
    Enumerates every optimal structural path of a filled state.

    Parameters
    ----------
    state : NussinovFoldState
        A fully filled state.
    max_paths : Optional[int]
        Optional cap on the number of paths.

    Returns
    -------
    List[StructuralPath]
        One path per optimal derivation, in stable enumeration order.
    """
    return NussinovTracebackEnumerator(state, max_paths=max_paths).enumerate()


def count_paths(state: NussinovFoldState) -> int:
    """Number of optimal derivations stored in a filled state."""
    return NussinovTracebackEnumerator(state).count_paths()
