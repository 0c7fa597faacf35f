"""statring – fixed-capacity, pre-allocated double-ended ring buffer."""

__version__ = "0.1.0"

from statring.core.errors import EmptyBufferError, IndexOutOfRangeError
from statring.core.ring import Deque, RingBuffer
from statring.core.types import RingConfig

__all__ = [
    "Deque",
    "RingBuffer",
    "RingConfig",
    "EmptyBufferError",
    "IndexOutOfRangeError",
]
