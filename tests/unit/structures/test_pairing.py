"""
Unit tests for the `Pair` base-pair value object.
"""
import pytest

from rna_nussinov_fold.structures import Pair


def test_pair_as_tuple():
    assert Pair(2, 7).as_tuple() == (2, 7)


def test_pairs_sort_by_opening_index():
    assert sorted([Pair(2, 3), Pair(0, 5), Pair(0, 1)]) == [Pair(0, 1), Pair(0, 5), Pair(2, 3)]


def test_pair_is_frozen_and_hashable():
    pair = Pair(0, 3)
    assert {pair, Pair(0, 3)} == {Pair(0, 3)}
    with pytest.raises(AttributeError):
        pair.base_i = 1
