"""
Unit tests for the Nussinov matrix fill.

These tests check the recurrence on small hand-worked sequences (values and
the exact tied traces kept per cell), the bounds every filled table must
satisfy, the fill-order and write-once guards, and that the threaded
wavefront fill produces the same tables as the sequential one.
"""
import itertools
import logging

import numpy as np
import pytest

from rna_nussinov_fold.errors import EmptyCandidateSetError, UnfilledCellError
from rna_nussinov_fold.folding.nussinov import (
    NussinovFoldingConfig,
    NussinovFoldingEngine,
    NussinovTrace,
    NussinovTraceOp,
    make_fold_state,
)
from rna_nussinov_fold.structures import Position, RnaSequence


def _filled(sequence: str, min_loop_length: int = 1, workers: int = 1):
    state = make_fold_state(RnaSequence.from_string(sequence))
    engine = NussinovFoldingEngine(NussinovFoldingConfig(min_loop_length=min_loop_length, workers=workers))
    engine.fill_all_matrices(state)
    return state


SAMPLE_SEQUENCES = [
    "GCGC",
    "AUAU",
    "GGGAAACCC",
    "GGUCCAGUAC",
    "ACGUACGUAC",
    "UUUUAAAAGC",
]


# ---------------------- Config ----------------------
def test_config_defaults():
    cfg = NussinovFoldingConfig()
    assert cfg.min_loop_length == 1
    assert cfg.workers == 1
    assert cfg.verbose is False


@pytest.mark.parametrize("kwargs", [{"min_loop_length": -1}, {"workers": 0}])
def test_config_rejects_invalid_values(kwargs):
    with pytest.raises(ValueError):
        NussinovFoldingConfig(**kwargs)


# ---------------------- Hand-worked example ----------------------
def test_gcgc_value_table():
    """
    For GCGC the root holds 2 pairs and every gap-2 complementary window 1.
    """
    state = _filled("GCGC")

    expected = np.array([
        [0, 0, 1, 1, 2],
        [0, 0, 0, 1, 1],
        [0, 0, 0, 0, 1],
        [0, 0, 0, 0, 0],
        [0, 0, 0, 0, 0],
    ])
    assert np.array_equal(state.values_as_array(), expected)
    assert state.max_pairs == 2


def test_gcgc_tied_traces_kept_in_recurrence_order():
    """
    The root ties a nested pairing with a split at k=2; both are kept with
    the complementary branch first.
    """
    state = _filled("GCGC")

    assert state.traces(0, 4) == (
        NussinovTrace.complementary(Position(1, 3)),
        NussinovTrace.decomposition(Position(0, 2), Position(2, 4)),
    )
    assert state.traces(0, 2) == (NussinovTrace.complementary(Position(1, 1)),)
    # Neither end pairs on [0, 3): drop either end.
    assert state.traces(0, 3) == (
        NussinovTrace.unpaired_left(Position(0, 2)),
        NussinovTrace.unpaired_bottom(Position(1, 3)),
    )


def test_single_nucleotide_windows_never_pair():
    """A window of length 1 has only the two unpaired branches, both of value 0."""
    state = _filled("GCGC")
    for i in range(4):
        assert state.value(i, i + 1) == 0
        ops = [t.operation for t in state.traces(i, i + 1)]
        assert ops == [NussinovTraceOp.UNPAIRED_LEFT, NussinovTraceOp.UNPAIRED_BOTTOM]


def test_min_loop_length_zero_allows_adjacent_pairs_only_across_two_bases():
    """With min loop 0, a length-1 window still cannot pair (i == j - 1)."""
    state = _filled("GC", min_loop_length=0)
    assert state.value(0, 1) == 0
    assert state.max_pairs == 1


def test_min_loop_length_blocks_short_hairpins():
    assert _filled("GGGGCCCC").max_pairs == 4
    # A pair (a, b) needs b - a >= min loop, so the innermost stack pairs drop out.
    assert _filled("GGGGCCCC", min_loop_length=3).max_pairs == 3
    assert _filled("GGGGCCCC", min_loop_length=5).max_pairs == 2


def test_no_pairs_when_no_complementary_bases():
    state = _filled("AAAAAA")
    assert state.max_pairs == 0
    assert not state.values_as_array().any()


def test_gu_wobble_pairs():
    assert _filled("GU").max_pairs == 1
    assert _filled("UG").max_pairs == 1
    assert _filled("GA").max_pairs == 0


# ---------------------- Bounds on a filled table ----------------------
@pytest.mark.parametrize("sequence", SAMPLE_SEQUENCES)
def test_value_bounds_and_monotonicity(sequence):
    """
    Extending an interval by one base never loses a pair and gains at most
    one; no interval holds more than half its length in pairs.
    """
    state = _filled(sequence)
    n = len(sequence)

    for i, j in itertools.combinations(range(n + 1), 2):
        value = state.value(i, j)
        assert 0 <= value <= (j - i) // 2
        assert state.value(i, j - 1) <= value <= state.value(i, j - 1) + 1
        assert state.value(i + 1, j) <= value <= state.value(i + 1, j) + 1
        if j - i >= 2:
            assert value <= state.value(i + 1, j - 1) + 2
        for k in range(i + 2, j - 1):
            assert value >= state.value(i, k) + state.value(k, j)


@pytest.mark.parametrize("sequence", SAMPLE_SEQUENCES)
def test_every_stored_trace_attains_cell_value(sequence):
    state = _filled(sequence)
    n = len(sequence)

    for i, j in itertools.combinations(range(n + 1), 2):
        traces = state.traces(i, j)
        assert traces, f"cell ({i},{j}) has no traces"
        for trace in traces:
            if trace.operation is NussinovTraceOp.COMPLEMENTARY:
                assert state.seq.is_complementary_pair(i, j)
                assert state.value(trace.child.i, trace.child.j) + 1 == state.value(i, j)
            elif trace.is_decomposition:
                left, right = trace.child, trace.right
                assert left.i == i and right.j == j and left.j == right.i
                assert i + 1 < left.j < j - 1
                assert state.value(left.i, left.j) + state.value(right.i, right.j) == state.value(i, j)
            else:
                assert state.value(trace.child.i, trace.child.j) == state.value(i, j)


# ---------------------- Guards ----------------------
def test_evaluate_cell_before_dependencies_raises_unfilled():
    state = make_fold_state(RnaSequence.from_string("GCGC"))
    engine = NussinovFoldingEngine(NussinovFoldingConfig())

    with pytest.raises(UnfilledCellError) as excinfo:
        engine.evaluate_cell(state, 0, 3)
    assert excinfo.value.branch == "UNPAIRED_LEFT"
    assert excinfo.value.position == (0, 2)

    with pytest.raises(UnfilledCellError) as excinfo:
        engine.evaluate_cell(state, 0, 4)
    assert excinfo.value.branch == "COMPLEMENTARY"
    assert excinfo.value.position == (1, 3)


def test_refilling_a_state_raises():
    state = _filled("GCGC")
    engine = NussinovFoldingEngine(NussinovFoldingConfig())
    with pytest.raises(RuntimeError, match="already filled"):
        engine.fill_all_matrices(state)


def test_empty_candidate_error_carries_position():
    err = EmptyCandidateSetError(2, 5)
    assert isinstance(err, RuntimeError)
    assert err.position == (2, 5)


# ---------------------- Parallel fill ----------------------
@pytest.mark.parametrize("sequence", SAMPLE_SEQUENCES)
def test_threaded_fill_matches_sequential(sequence):
    sequential = _filled(sequence)
    threaded = _filled(sequence, workers=3)

    assert np.array_equal(sequential.values_as_array(), threaded.values_as_array())
    n = len(sequence)
    for i, j in itertools.combinations(range(n + 1), 2):
        assert sequential.traces(i, j) == threaded.traces(i, j)


# ---------------------- Logging ----------------------
def test_tied_cells_are_logged_at_debug(caplog):
    caplog.set_level(logging.DEBUG, logger="rna_nussinov_fold.folding.nussinov.nussinov_recurrences")
    _filled("GCGC")

    assert any("tied traces" in record.getMessage() for record in caplog.records)
    assert any("Final value[0,4] = 2" in record.getMessage() for record in caplog.records)
