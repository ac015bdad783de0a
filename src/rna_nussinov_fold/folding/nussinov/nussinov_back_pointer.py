from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Tuple

from rna_nussinov_fold.structures import Position

__all__ = ["NussinovTraceOp", "NussinovTrace"]


class NussinovTraceOp(Enum):
    """
    The recurrence branches of the Nussinov maximum-pairing algorithm.

    Each member names one way the optimal pair count of an interval `[i, j)`
    can be obtained. A matrix cell stores every branch that attains its
    optimum, so several members may appear in the same cell.

    COMPLEMENTARY   : `i` pairs with `j - 1`; continue on `[i+1, j-1)`.
    UNPAIRED_LEFT   : `j - 1` stays unpaired; continue on `[i, j-1)`.
    UNPAIRED_BOTTOM : `i` stays unpaired; continue on `[i+1, j)`.
    DECOMPOSITION   : split into independent `[i, k)` and `[k, j)`.
    """
    COMPLEMENTARY = auto()
    UNPAIRED_LEFT = auto()
    UNPAIRED_BOTTOM = auto()
    DECOMPOSITION = auto()


@dataclass(frozen=True, slots=True)
class NussinovTrace:
    """
    One tied-optimal recurrence choice recorded in a matrix cell.

    Attributes
    ----------
    operation : NussinovTraceOp
        The recurrence branch.
    child : Position
        The sub-interval the branch continues on. For a `DECOMPOSITION` this is
        the left half `[i, k)`.
    right : Optional[Position]
        The right half `[k, j)` of a `DECOMPOSITION`; `None` otherwise.
    """
    operation: NussinovTraceOp
    child: Position
    right: Optional[Position] = None

    @classmethod
    def complementary(cls, child: Position) -> NussinovTrace:
        return cls(NussinovTraceOp.COMPLEMENTARY, child)

    @classmethod
    def unpaired_left(cls, child: Position) -> NussinovTrace:
        return cls(NussinovTraceOp.UNPAIRED_LEFT, child)

    @classmethod
    def unpaired_bottom(cls, child: Position) -> NussinovTrace:
        return cls(NussinovTraceOp.UNPAIRED_BOTTOM, child)

    @classmethod
    def decomposition(cls, left: Position, right: Position) -> NussinovTrace:
        return cls(NussinovTraceOp.DECOMPOSITION, left, right)

    @property
    def is_decomposition(self) -> bool:
        return self.operation is NussinovTraceOp.DECOMPOSITION

    def children(self) -> Tuple[Position, ...]:
        """The sub-intervals this trace continues on, left to right."""
        if self.right is None:
            return (self.child,)
        return self.child, self.right
