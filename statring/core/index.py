# statring/core/index.py
"""
Slot arithmetic shared by every ring operation.

All helpers take plain ``int`` indices and keep them inside ``[0, capacity)``
with a compare-and-reset instead of ``%``; the ring never lets a raw index
leave that range.
"""

from __future__ import annotations

from typing import Iterator, Tuple

import numpy as np

__all__ = [
    "advance",
    "retreat",
    "physical",
    "runs",
    "index_dtype_for",
    "resolve_index_dtype",
]


# --------------------------------------------------------------------------- #
#  Wraparound
# --------------------------------------------------------------------------- #

def advance(i: int, capacity: int) -> int:
    """Step one slot forward, wrapping ``capacity - 1 → 0``."""
    i += 1
    return 0 if i == capacity else i


def retreat(i: int, capacity: int) -> int:
    """Step one slot backward, wrapping ``0 → capacity - 1``."""
    return capacity - 1 if i == 0 else i - 1


def physical(head: int, offset: int, capacity: int) -> int:
    """Slot holding logical element ``offset`` (``0 <= offset < capacity``)."""
    j = head + offset
    return j - capacity if j >= capacity else j


def runs(head: int, n: int, capacity: int) -> Iterator[Tuple[int, int]]:
    """
    Yield the contiguous ``(start, stop)`` slot ranges covering the first *n*
    logical elements.  At most two ranges: the run up to the physical end of
    storage, then the wrapped remainder from slot 0.
    """
    if n <= 0:
        return
    first = min(n, capacity - head)
    yield head, head + first
    if first < n:
        yield 0, n - first


# --------------------------------------------------------------------------- #
#  Index width
# --------------------------------------------------------------------------- #

def index_dtype_for(capacity: int) -> np.dtype:
    """Narrowest unsigned integer dtype that can represent *capacity*."""
    return np.dtype(np.min_scalar_type(capacity))


def resolve_index_dtype(capacity: int, requested: object | None) -> np.dtype:
    """
    Validate a caller-supplied index dtype (or pick the default).

    Raises
    ------
    ValueError
        *requested* is not an integer dtype, or is too narrow for *capacity*.
    """
    if requested is None:
        return index_dtype_for(capacity)

    try:
        dt = np.dtype(requested)
    except TypeError as e:
        raise ValueError(f"unknown index_dtype {requested!r}") from e
    if dt.kind not in "ui":
        raise ValueError(f"index_dtype must be an integer type (got {dt})")
    if np.iinfo(dt).max < capacity:
        raise ValueError(
            f"index_dtype {dt} cannot represent capacity {capacity}"
        )
    return dt
