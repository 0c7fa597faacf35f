"""Exceptions raised by the checked and strict access paths."""


class EmptyBufferError(IndexError):
    """Pop or drop on an empty ring while ``strict=True``."""


class IndexOutOfRangeError(IndexError):
    """Logical index outside ``[0, len(ring))``."""

    def __init__(self, index: int, size: int) -> None:
        super().__init__(f"ring index {index} out of range for size {size}")
        self.index = index
        self.size = size
