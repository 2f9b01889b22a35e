"""
Some utils for dexpreopt
"""

import posixpath
from typing import Iterable, List, Sequence, TypeVar

T = TypeVar('T')

# ----------------------
#
#  List Helpers
#
# ----------------------

def remove_list_from_list(items: Iterable[T], remove: Iterable[T]) -> List[T]:
    """
    Return `items` without any element that also appears in `remove`.
    Order of `items` is kept and nothing is added.
    """
    drop = set(remove)
    return [item for item in items if item not in drop]


def concat(*seqs: Sequence[T]) -> List[T]:
    """
    Concatenate sequences into a new list, never aliasing an input
    """
    out: List[T] = []
    for seq in seqs:
        out.extend(seq)
    return out


def copy_of(seq: Sequence[T]) -> List[T]:
    return list(seq)


# ----------------------
#
#  Paths
#
# ----------------------

def join_path(*segments: str) -> str:
    """
    Join path segments with '/' and clean the result.

    Unlike posixpath.join, a segment starting with '/' does not discard the
    segments before it. Empty segments are skipped and '.', '..' and repeated
    separators are resolved, as in Go's filepath.Join.
    """
    parts = [segment for segment in segments if segment]
    if not parts:
        return ""
    joined = posixpath.normpath("/".join(parts))
    # normpath keeps a leading '//'
    if joined.startswith("//"):
        joined = "/" + joined.lstrip("/")
    return joined
