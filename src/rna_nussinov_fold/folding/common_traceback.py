from __future__ import annotations
from dataclasses import dataclass
from typing import List, Sequence, Set, Tuple, Union

from rna_nussinov_fold.structures import Pair, Position


@dataclass(frozen=True, slots=True)
class DecompositionStep:
    """
    A path element standing for a decomposition of an interval into two halves.

    The two sub-paths are kept un-flattened so the split can still be
    recovered from the path.

    Attributes
    ----------
    left : StructuralPath
        A derivation of the left half `[i, k)`.
    right : StructuralPath
        A derivation of the right half `[k, j)`.
    """
    left: "StructuralPath"
    right: "StructuralPath"


PathElement = Union[Position, DecompositionStep]
StructuralPath = Tuple[PathElement, ...]


@dataclass(frozen=True, slots=True)
class TraceResult:
    """
    A rendered traceback: the realized base pairs and their dot-bracket string.

    Attributes
    ----------
    pairs : List[Pair]
        Base pairs `(i, j)` with `i < j`, sorted by the 5' index.
    dot_bracket : str
        The dot-bracket string of the structure.
    """
    pairs: List[Pair]
    dot_bracket: str


def flatten_path(path: StructuralPath) -> List[Position]:
    """
    Flattens a structural path into the ordered positions it visits.

    A `DecompositionStep` is replaced by the flattened left sub-path followed
    by the flattened right sub-path.

    Parameters
    ----------
    path : StructuralPath
        A derivation as produced by the traceback enumerator.

    Returns
    -------
    List[Position]
        The visited positions, in path order.
    """
    positions: List[Position] = []
    # Explicit stack of pending elements, consumed left to right.
    stack: List[PathElement] = list(reversed(path))
    while stack:
        element = stack.pop()
        if isinstance(element, DecompositionStep):
            stack.extend(reversed(element.right))
            stack.extend(reversed(element.left))
        else:
            positions.append(element)
    return positions


def path_to_pairs(path: StructuralPath) -> List[Pair]:
    """
    Extracts the base pairs realized by a structural path.

    Consecutive positions `(p, q)` of the flattened path in diagonal relation
    (`p.i + 1 == q.i` and `p.j == q.j + 1`) come from a complementary step and
    pair index `p.i` with index `q.j`.

    Parameters
    ----------
    path : StructuralPath
        A derivation as produced by the traceback enumerator.

    Returns
    -------
    List[Pair]
        The realized pairs, sorted by their 5' index.
    """
    positions = flatten_path(path)
    pairs = [
        Pair(first.i, second.j)
        for first, second in zip(positions, positions[1:])
        if first.is_diagonal_relation(second)
    ]
    return sorted(pairs, key=lambda pr: (pr.base_i, pr.base_j))


def pairs_to_dotbracket(seq_len: int, pairs: Sequence[Pair]) -> str:
    """
    Converts a list of base pairs into a dot-bracket string.

    Parameters
    ----------
    seq_len : int
        The total length of the RNA sequence.
    pairs : Sequence[Pair]
        Non-crossing base pairs.

    Returns
    -------
    str
        `(`/`)` at paired positions and `.` everywhere else.
    """
    chars = ['.'] * seq_len
    for pr in pairs:
        i, j = pr.base_i, pr.base_j
        if 0 <= i < j < seq_len:
            chars[i] = '('
            chars[j] = ')'
    return ''.join(chars)


def path_to_dotbracket(seq_len: int, path: StructuralPath) -> str:
    """Renders one structural path as a dot-bracket string of length `seq_len`."""
    return pairs_to_dotbracket(seq_len, path_to_pairs(path))


def render_path(seq_len: int, path: StructuralPath) -> TraceResult:
    """Renders one structural path as a `TraceResult`."""
    pairs = path_to_pairs(path)
    return TraceResult(pairs=pairs, dot_bracket=pairs_to_dotbracket(seq_len, pairs))


def dotbracket_to_pairs(db: str) -> Set[Tuple[int, int]]:
    """
    Parses a single-layer dot-bracket string into a set of base pairs.

    Unmatched brackets are ignored; use `is_balanced_dotbracket` to validate.

    Parameters
    ----------
    db : str
        The dot-bracket string to parse.

    Returns
    -------
    Set[Tuple[int, int]]
        The `(i, j)` pairs encoded by the string.
    """
    stack: List[int] = []
    out: Set[Tuple[int, int]] = set()
    for idx, ch in enumerate(db):
        if ch == '(':
            stack.append(idx)
        elif ch == ')':
            if stack:
                i = stack.pop()
                out.add((i, idx))
    return out


def is_balanced_dotbracket(db: str) -> bool:
    """
    True if `db` only uses `.`, `(`, `)` and every bracket is matched.

    A stack scan that never underflows and ends empty also proves the pairs
    are non-crossing.
    """
    depth = 0
    for ch in db:
        if ch == '(':
            depth += 1
        elif ch == ')':
            depth -= 1
            if depth < 0:
                return False
        elif ch != '.':
            return False
    return depth == 0
