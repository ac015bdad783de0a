"""
Unit tests for the base-pairing rules and the loop-length constraint.
"""
import pytest

from rna_nussinov_fold.rules.constraints import (
    MIN_LOOP_LENGTH,
    RNA_ALPHABET,
    can_pair,
    interval_gap,
    satisfies_min_loop,
)


def test_alphabet_and_default_loop_length():
    assert RNA_ALPHABET == frozenset("ACGU")
    assert MIN_LOOP_LENGTH == 1


def test_can_pair_allows_watson_crick_and_wobble():
    """
    The three unordered pairs A-U, G-C and G-U are accepted in both orientations.
    """
    allowed = [("A", "U"), ("U", "A"), ("G", "C"), ("C", "G"), ("G", "U"), ("U", "G")]
    for i, j in allowed:
        assert can_pair(i, j) is True


def test_can_pair_is_case_insensitive():
    assert can_pair("a", "u")
    assert can_pair("G", "c")


def test_can_pair_does_not_translate_thymine():
    """T is outside the alphabet and never pairs."""
    assert can_pair("A", "T") is False


def test_can_pair_rejects_invalid_inputs():
    # Non-string inputs.
    assert can_pair(None, "A") is False
    assert can_pair("A", 3) is False
    # Multi-character inputs.
    assert can_pair("AU", "A") is False
    # Disallowed combinations.
    assert can_pair("A", "G") is False
    assert can_pair("C", "U") is False
    assert can_pair("A", "A") is False


def test_interval_gap():
    assert interval_gap(2, 2) == 0
    assert interval_gap(1, 5) == 4


@pytest.mark.parametrize("i, j, min_loop, expected", [
    (0, 2, 1, True),    # adjacent bases under the default rule
    (0, 1, 1, False),   # a single position
    (0, 3, 3, False),
    (0, 4, 3, True),
    (5, 5, 0, False),
])
def test_satisfies_min_loop(i, j, min_loop, expected):
    assert satisfies_min_loop(i, j, min_loop) is expected


def test_satisfies_min_loop_uses_default():
    assert satisfies_min_loop(0, 2) is True
    assert satisfies_min_loop(0, 1) is False
