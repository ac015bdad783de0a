"""
Unit tests for the Nussinov trace records.

A `NussinovTrace` names one recurrence branch attaining a cell's optimum and
the sub-interval(s) it continues on.
"""
from rna_nussinov_fold.folding.nussinov.nussinov_back_pointer import NussinovTrace, NussinovTraceOp
from rna_nussinov_fold.structures import Position


def test_trace_op_members_are_in_recurrence_order():
    assert [op.name for op in NussinovTraceOp] == [
        "COMPLEMENTARY",
        "UNPAIRED_LEFT",
        "UNPAIRED_BOTTOM",
        "DECOMPOSITION",
    ]


def test_single_child_constructors():
    """Non-decomposition traces carry one child and no right half."""
    child = Position(1, 3)
    for factory, op in [
        (NussinovTrace.complementary, NussinovTraceOp.COMPLEMENTARY),
        (NussinovTrace.unpaired_left, NussinovTraceOp.UNPAIRED_LEFT),
        (NussinovTrace.unpaired_bottom, NussinovTraceOp.UNPAIRED_BOTTOM),
    ]:
        trace = factory(child)
        assert trace.operation is op
        assert trace.child == child
        assert trace.right is None
        assert not trace.is_decomposition
        assert trace.children() == (child,)


def test_decomposition_constructor():
    left, right = Position(0, 2), Position(2, 4)
    trace = NussinovTrace.decomposition(left, right)

    assert trace.operation is NussinovTraceOp.DECOMPOSITION
    assert trace.is_decomposition
    assert trace.children() == (left, right)


def test_traces_are_hashable_values():
    a = NussinovTrace.decomposition(Position(0, 2), Position(2, 4))
    b = NussinovTrace.decomposition(Position(0, 2), Position(2, 4))
    assert a == b
    assert len({a, b}) == 1
