from rna_nussinov_fold.structures.pairing import Pair
from rna_nussinov_fold.structures.position import Position
from rna_nussinov_fold.structures.rna_sequence import RnaSequence
from rna_nussinov_fold.structures.tri_matrix import NussinovTriMatrix

__all__ = [
    "Pair",
    "Position",
    "RnaSequence",
    "NussinovTriMatrix",
]
