"""
Fixed-capacity double-ended ring utilities.

* `Deque` – structural protocol (type-checker contract)
* `RingBuffer` – NumPy-backed implementation over one pre-allocated block
"""

from __future__ import annotations

import logging
from typing import (
    TYPE_CHECKING,
    Any,
    Generic,
    Iterator,
    MutableSequence,
    Protocol,
    Tuple,
    TypeVar,
    runtime_checkable,
)

import numpy as np

from statring.core.errors import EmptyBufferError, IndexOutOfRangeError
from statring.core.index import advance, physical, resolve_index_dtype, retreat, runs
from statring.core.types import Converter, RingConfig
from statring.utils.types import to_ring_config

if TYPE_CHECKING:
    from omegaconf import DictConfig

__all__ = ["Deque", "RingBuffer"]

logger = logging.getLogger(__name__)

T = TypeVar("T")


@runtime_checkable
class Deque(Protocol[T]):
    """Minimal API any double-ended ring must expose."""

    # producer
    def push_back(self, item: T) -> bool: ...
    def push_front(self, item: T) -> bool: ...
    # consumer
    def pop_front(self) -> T: ...
    def pop_back(self) -> T: ...
    # diagnostics
    def __len__(self) -> int: ...
    @property
    def push_count(self) -> int: ...
    @property
    def pop_count(self) -> int: ...


class RingBuffer(Generic[T]):
    """
    Bounded deque over a single NumPy block of ``capacity`` slots.

    Parameters
    ----------
    capacity : int
        Number of slots, ``≥ 1``.  Never changes after construction.
    dtype : numpy dtype-like, optional
        Element type of the backing array.  ``object`` (default) stores any
        Python value by reference.
    shape : tuple[int, ...], optional
        Shape of one element, e.g. ``(3,)`` for xyz samples.  ``()`` stores
        scalars.
    index_dtype : numpy integer dtype-like, optional
        Width of `size()` / `available()` results.  Defaults to the narrowest
        unsigned type that can hold ``capacity``.
    strict : bool
        ``False`` keeps the permissive policies below; ``True`` turns them into
        `EmptyBufferError` / `IndexOutOfRangeError`.

    Notes
    -----
    • Pushing into a full ring overwrites the element at the *opposite* end
      and returns ``False``.
    • Non-strict `pop_front` / `pop_back` on an empty ring return whatever
      stale value sits in the head / tail slot and do not mutate anything.
      Treat that value as unspecified.
    • Non-strict `at` / `set_at` with an index outside ``[0, len)`` resolve to
      the tail slot instead of failing.
    • `clear` is lazy: old elements stay in storage (and stay referenced, for
      ``object`` rings) until a later push overwrites their slot.
    • No internal locking.  Callers sharing a ring across threads must
      serialise every call with their own lock.
    """

    __slots__ = (
        "_buf",
        "_cap",
        "_shape",
        "_index_dtype",
        "_strict",
        "_head",
        "_tail",
        "_count",
        "_push_ctr",
        "_pop_ctr",
        "_overwrite_ctr",
    )

    def __init__(
        self,
        capacity: int,
        *,
        dtype: Any = object,
        shape: Tuple[int, ...] = (),
        index_dtype: Any = None,
        strict: bool = False,
    ) -> None:
        if isinstance(capacity, bool) or not isinstance(capacity, (int, np.integer)):
            raise ValueError(f"capacity must be an integer (got {capacity!r})")
        if capacity < 1:
            raise ValueError(f"RingBuffer capacity must be ≥ 1 (got {capacity})")

        self._cap         = int(capacity)
        self._shape       = tuple(int(n) for n in shape)
        self._index_dtype = resolve_index_dtype(self._cap, index_dtype)
        self._strict      = bool(strict)

        try:
            dt = np.dtype(dtype)
        except TypeError as e:
            raise ValueError(f"unknown element dtype {dtype!r}") from e
        if dt == np.dtype(object):
            self._buf = np.full((self._cap, *self._shape), None, dtype=dt)
        else:
            self._buf = np.zeros((self._cap, *self._shape), dtype=dt)

        self._head  = 0
        self._tail  = 0
        self._count = 0

        self._push_ctr      = 0          # total pushes, overwriting ones included
        self._pop_ctr       = 0          # non-degenerate pops and drops
        self._overwrite_ctr = 0          # pushes that evicted an element

        logger.debug(
            "Allocated ring: capacity=%d dtype=%s shape=%s index_dtype=%s strict=%s",
            self._cap, dt, self._shape, self._index_dtype, self._strict,
        )

    @classmethod
    def from_config(cls, config: "RingConfig | DictConfig | dict[str, Any]") -> "RingBuffer[Any]":
        """Build a ring from a `RingConfig`, omegaconf node, or plain dict."""
        cfg = to_ring_config(config)
        return cls(
            cfg.capacity,
            dtype=cfg.dtype,
            shape=cfg.shape,
            index_dtype=cfg.index_dtype,
            strict=cfg.strict,
        )

    # ------------------------------------------------------------------ #
    #  Producer API
    # ------------------------------------------------------------------ #

    def push_back(self, item: T) -> bool:
        """
        Append *item* after the newest element.

        Returns ``False`` when the ring was full and the oldest element was
        overwritten, ``True`` otherwise.
        """
        slot = advance(self._tail, self._cap)
        self._store(slot, item)
        self._tail = slot
        self._push_ctr += 1
        if self._count == self._cap:
            self._head = advance(self._head, self._cap)
            self._overwrite_ctr += 1
            return False
        if self._count == 0:
            self._head = self._tail
        self._count += 1
        return True

    def push_front(self, item: T) -> bool:
        """
        Prepend *item* before the oldest element.

        Returns ``False`` when the ring was full and the newest element was
        overwritten, ``True`` otherwise.
        """
        slot = retreat(self._head, self._cap)
        self._store(slot, item)
        self._head = slot
        self._push_ctr += 1
        if self._count == self._cap:
            self._tail = retreat(self._tail, self._cap)
            self._overwrite_ctr += 1
            return False
        if self._count == 0:
            self._tail = self._head
        self._count += 1
        return True

    # ------------------------------------------------------------------ #
    #  Consumer API
    # ------------------------------------------------------------------ #

    def pop_front(self) -> T:
        """Remove and return the oldest element."""
        if self._count == 0:
            self._empty("pop_front")
            return self._load(self._head)
        out = self._load(self._head)
        self.drop_front()
        return out

    def pop_back(self) -> T:
        """Remove and return the newest element."""
        if self._count == 0:
            self._empty("pop_back")
            return self._load(self._tail)
        out = self._load(self._tail)
        self.drop_back()
        return out

    def drop_front(self) -> None:
        """Discard the oldest element without reading it."""
        if self._count == 0:
            self._empty("drop_front")
            return
        self._count -= 1
        self._pop_ctr += 1
        if self._count:
            self._head = advance(self._head, self._cap)

    def drop_back(self) -> None:
        """Discard the newest element without reading it."""
        if self._count == 0:
            self._empty("drop_back")
            return
        self._count -= 1
        self._pop_ctr += 1
        if self._count:
            self._tail = retreat(self._tail, self._cap)

    def clear(self) -> None:
        """Forget every element in O(1); slots are reused by later pushes."""
        self._head = self._tail = self._count = 0

    # ------------------------------------------------------------------ #
    #  Accessors
    # ------------------------------------------------------------------ #

    def size(self) -> np.integer:
        """Number of elements held, as an ``index_dtype`` scalar."""
        return self._index_dtype.type(self._count)

    def available(self) -> np.integer:
        """Free slots before the next push overwrites, as ``index_dtype``."""
        return self._index_dtype.type(self._cap - self._count)

    def is_empty(self) -> bool:
        return self._count == 0

    def is_full(self) -> bool:
        return self._count == self._cap

    def at(self, index: int) -> T:
        """
        Unchecked read of logical element *index* (0 = oldest).

        Out-of-range indices resolve to the tail slot unless ``strict``.
        Array-shaped elements come back as writable views into storage.
        """
        return self._buf[self._resolve(index)]

    def set_at(self, index: int, item: T) -> None:
        """Unchecked in-place write; same index resolution as `at`."""
        self._store(self._resolve(index), item)

    def front(self) -> T:
        return self.at(0)

    def back(self) -> T:
        return self.at(self._count - 1)

    def copy_to(self, dest: "np.ndarray | MutableSequence[Any]") -> int:
        """
        Copy up to ``len(dest)`` elements, oldest first, into *dest*.

        The ring keeps its elements.  Returns the number of elements copied.
        """
        n = min(self._count, len(dest))
        out = 0
        for lo, hi in runs(self._head, n, self._cap):
            run = self._buf[lo:hi]
            if isinstance(dest, np.ndarray):
                dest[out : out + hi - lo] = run
            else:
                dest[out : out + hi - lo] = run.tolist()
            out += hi - lo
        return out

    def copy_to_with(self, dest: "np.ndarray | MutableSequence[Any]", convert: Converter) -> int:
        """Like `copy_to`, but writes ``convert(element)`` into *dest*."""
        n = min(self._count, len(dest))
        out = 0
        for lo, hi in runs(self._head, n, self._cap):
            for j in range(lo, hi):
                dest[out] = convert(self._buf[j])
                out += 1
        return out

    def to_array(self) -> np.ndarray:
        """Return a fresh array of shape ``(len, *shape)``, oldest first."""
        out = np.empty((self._count, *self._shape), dtype=self._buf.dtype)
        self.copy_to(out)
        return out

    def to_list(self) -> list[Any]:
        """Return the logical contents as a list (NumPy scalars unboxed)."""
        out: list[Any] = [None] * self._count
        self.copy_to(out)
        return out

    # ------------------------------------------------------------------ #
    #  Python container protocol
    # ------------------------------------------------------------------ #

    def __len__(self) -> int:
        return self._count

    def __iter__(self) -> Iterator[T]:
        for lo, hi in runs(self._head, self._count, self._cap):
            for j in range(lo, hi):
                yield self._buf[j]

    def __getitem__(self, index: int) -> T:
        """Checked read; negative indices count from the newest element."""
        return self._buf[self._checked(index)]

    def __setitem__(self, index: int, item: T) -> None:
        self._store(self._checked(index), item)

    def __repr__(self) -> str:
        return f"RingBuffer(size={self._count}/{self._cap})"

    # ------------------------------------------------------------------ #
    #  Introspection
    # ------------------------------------------------------------------ #

    @property
    def capacity(self) -> int:
        return self._cap

    @property
    def head(self) -> int:           # slot of the oldest element
        return self._head

    @property
    def tail(self) -> int:           # slot of the newest element
        return self._tail

    @property
    def dtype(self) -> np.dtype:
        return self._buf.dtype

    @property
    def shape(self) -> Tuple[int, ...]:
        return self._shape

    @property
    def index_dtype(self) -> np.dtype:
        return self._index_dtype

    @property
    def strict(self) -> bool:
        return self._strict

    @property
    def slots(self) -> np.ndarray:
        """Read-only view of the physical storage, in slot order."""
        view = self._buf.view()
        view.flags.writeable = False
        return view

    @property
    def push_count(self) -> int:        # total pushes since construction
        return self._push_ctr

    @property
    def pop_count(self) -> int:         # total non-degenerate pops / drops
        return self._pop_ctr

    @property
    def overwrite_count(self) -> int:   # pushes that evicted an element
        return self._overwrite_ctr

    # ------------------------------------------------------------------ #
    #  Internals
    # ------------------------------------------------------------------ #

    def _store(self, slot: int, item: T) -> None:
        if self._shape:
            arr = np.asarray(item)
            if arr.shape != self._shape:
                raise ValueError(f"expected shape {self._shape}, got {arr.shape}")
            self._buf[slot] = arr
        else:
            self._buf[slot] = item

    def _load(self, slot: int) -> T:
        if self._shape:
            return self._buf[slot].copy()    # copy out so later pushes may overwrite
        return self._buf[slot]

    def _resolve(self, index: int) -> int:
        if 0 <= index < self._count:
            return physical(self._head, index, self._cap)
        if self._strict:
            raise IndexOutOfRangeError(index, self._count)
        return self._tail

    def _checked(self, index: int) -> int:
        i = index + self._count if index < 0 else index
        if not 0 <= i < self._count:
            raise IndexOutOfRangeError(index, self._count)
        return physical(self._head, i, self._cap)

    def _empty(self, op: str) -> None:
        if self._strict:
            raise EmptyBufferError(f"{op} from empty ring")
