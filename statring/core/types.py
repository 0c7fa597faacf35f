"""Defines config and callable types shared by the ring and its helpers."""

from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Tuple

Converter = Callable[[Any], Any]
Formatter = Callable[[Any], str]


@dataclass(frozen=True, slots=True)
class RingConfig:
    """Static ring options, fixed at construction time."""

    capacity: int = 8
    dtype: str = "object"
    shape: Tuple[int, ...] = field(default_factory=tuple)

    # ↓ None picks the narrowest unsigned type that fits `capacity`
    index_dtype: Optional[str] = None
    strict: bool = False

