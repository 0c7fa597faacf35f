from __future__ import annotations

import numpy as np
import pytest

from statring.core.index import (
    advance,
    index_dtype_for,
    physical,
    resolve_index_dtype,
    retreat,
    runs,
)


def test_advance_and_retreat_wrap_at_the_boundaries() -> None:
    assert advance(0, 4) == 1
    assert advance(3, 4) == 0
    assert retreat(1, 4) == 0
    assert retreat(0, 4) == 3


def test_single_slot_ring_always_stays_on_slot_zero() -> None:
    assert advance(0, 1) == 0
    assert retreat(0, 1) == 0


def test_physical_offsets_wrap_past_the_end() -> None:
    assert physical(2, 0, 4) == 2
    assert physical(2, 1, 4) == 3
    assert physical(2, 2, 4) == 0
    assert physical(2, 3, 4) == 1


@pytest.mark.parametrize(
    ("head", "n", "capacity", "expected"),
    [
        (0, 0, 4, []),
        (0, 4, 4, [(0, 4)]),
        (1, 2, 4, [(1, 3)]),
        (3, 3, 4, [(3, 4), (0, 2)]),
        (2, 4, 4, [(2, 4), (0, 2)]),
    ],
)
def test_runs_split_at_the_physical_end(head: int, n: int, capacity: int, expected: list) -> None:
    assert list(runs(head, n, capacity)) == expected


@pytest.mark.parametrize(
    ("capacity", "expected"),
    [(1, np.uint8), (255, np.uint8), (256, np.uint16), (70_000, np.uint32)],
)
def test_default_index_dtype_is_the_narrowest_fit(capacity: int, expected: type) -> None:
    assert index_dtype_for(capacity) == np.dtype(expected)
    assert resolve_index_dtype(capacity, None) == np.dtype(expected)


def test_requested_index_dtype_is_validated() -> None:
    assert resolve_index_dtype(10, "int32") == np.dtype(np.int32)
    with pytest.raises(ValueError, match="cannot represent"):
        resolve_index_dtype(300, np.uint8)
    with pytest.raises(ValueError, match="integer"):
        resolve_index_dtype(10, np.float32)
    with pytest.raises(ValueError, match="unknown index_dtype"):
        resolve_index_dtype(10, "notadtype")
