# statring/debug/dump.py
"""
Slot-by-slot diagnostic dump of a `RingBuffer`.

Nothing in `statring` imports this module; pull it in explicitly when you need
to see the physical layout (head / tail position, stale slots, wraparound).

* `Sink`       – "print" + "println" protocol the dump writes through
* `StreamSink` – adapter over any text stream (``sys.stdout``, ``StringIO``)
* `LogSink`    – adapter that turns every finished line into a log record
* `dump`       – one line per physical slot
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Protocol, TextIO, runtime_checkable

from statring.core.ring import RingBuffer
from statring.core.types import Formatter

__all__ = ["Sink", "StreamSink", "LogSink", "dump"]


@runtime_checkable
class Sink(Protocol):
    """Line-oriented text output."""

    def write(self, text: str) -> None: ...
    def writeline(self, text: str = "") -> None: ...


class StreamSink:
    """Write straight through to a text stream."""

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream

    def write(self, text: str) -> None:
        self._stream.write(text)

    def writeline(self, text: str = "") -> None:
        self._stream.write(text + "\n")


class LogSink:
    """
    Buffer partial writes and log each completed line.

    Emits one record per `writeline` call at *level* on *logger*.
    """

    def __init__(self, logger: logging.Logger, level: int = logging.DEBUG) -> None:
        self._logger  = logger
        self._level   = level
        self._pending: list[str] = []

    def write(self, text: str) -> None:
        self._pending.append(text)

    def writeline(self, text: str = "") -> None:
        self._pending.append(text)
        line, self._pending = "".join(self._pending), []
        self._logger.log(self._level, "%s", line)


def dump(ring: RingBuffer[Any], sink: Sink, fmt: Optional[Formatter] = None) -> None:
    """
    Write every physical slot of *ring* to *sink*, in storage order.

    Each line holds the slot number, the slot content (``repr`` or
    ``fmt(value)``), then ``<- head`` / ``<- tail`` markers.  Stale slots are
    printed too; an empty ring marks neither end.
    """
    fmt   = fmt or repr
    width = len(str(ring.capacity - 1))
    slots = ring.slots
    live  = not ring.is_empty()

    for i in range(ring.capacity):
        sink.write(f"[{i:>{width}}] ")
        sink.write(fmt(slots[i]))
        if live and i == ring.head:
            sink.write(" <- head")
        if live and i == ring.tail:
            sink.write(" <- tail")
        sink.writeline()
