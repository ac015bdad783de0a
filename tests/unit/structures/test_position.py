"""
Unit tests for the `Position` interval key.
"""
import pytest

from rna_nussinov_fold.structures import Position


def test_position_is_hashable_and_ordered():
    """Positions are used as dict keys and sorted by (i, j)."""
    cells = {Position(0, 3): "a", Position(1, 2): "b"}
    assert cells[Position(0, 3)] == "a"
    assert sorted([Position(1, 2), Position(0, 3), Position(0, 1)]) == [
        Position(0, 1), Position(0, 3), Position(1, 2)
    ]


def test_position_is_immutable():
    pos = Position(0, 2)
    with pytest.raises(AttributeError):
        pos.i = 1


def test_gap_and_diagonal():
    assert Position(2, 5).gap == 3
    assert Position(3, 3).is_diagonal()
    assert not Position(3, 4).is_diagonal()


def test_neighbour_helpers():
    """
    The helpers produce the sub-intervals used by each recurrence branch.
    """
    pos = Position(1, 6)
    assert pos.complementary() == Position(2, 5)
    assert pos.unpaired_left() == Position(1, 5)
    assert pos.unpaired_bottom() == Position(2, 6)
    assert pos.decomposition(3) == (Position(1, 3), Position(3, 6))


@pytest.mark.parametrize("first, second, expected", [
    (Position(0, 4), Position(1, 3), True),   # complementary step
    (Position(1, 3), Position(2, 2), True),   # complementary step into the base case
    (Position(0, 4), Position(0, 3), False),  # unpaired left
    (Position(0, 4), Position(1, 4), False),  # unpaired bottom
    (Position(0, 4), Position(0, 2), False),  # decomposition child
    (Position(1, 3), Position(0, 4), False),  # wrong direction
])
def test_is_diagonal_relation(first, second, expected):
    assert first.is_diagonal_relation(second) is expected


def test_str_and_tuple():
    assert str(Position(0, 4)) == "(0,4)"
    assert Position(0, 4).as_tuple() == (0, 4)
