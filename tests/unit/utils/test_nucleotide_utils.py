"""
Unit tests for nucleotide normalization helpers.
"""
from rna_nussinov_fold.utils.nucleotide_utils import normalize_base, normalize_sequence


def test_normalize_base_uppercases():
    assert normalize_base("a") == "A"
    assert normalize_base("U") == "U"


def test_normalize_base_leaves_thymine_alone():
    assert normalize_base("t") == "T"


def test_normalize_base_passes_through_non_bases():
    assert normalize_base(None) is None
    assert normalize_base("AU") == "AU"


def test_normalize_sequence_strips_and_uppercases():
    assert normalize_sequence("  gcgc\n") == "GCGC"
    assert normalize_sequence("") == ""
