from __future__ import annotations

import io
import logging

import pytest

from statring import RingBuffer
from statring.debug.dump import LogSink, Sink, StreamSink, dump


def _dump_text(ring: RingBuffer, **kwargs: object) -> str:
    out = io.StringIO()
    dump(ring, StreamSink(out), **kwargs)  # type: ignore[arg-type]
    return out.getvalue()


def test_dump_prints_every_physical_slot_with_markers() -> None:
    ring = RingBuffer[int](3)
    ring.push_back(1)
    ring.push_back(2)

    assert _dump_text(ring) == "[0] None\n[1] 1 <- head\n[2] 2 <- tail\n"


def test_dump_marks_both_ends_on_a_single_element() -> None:
    ring = RingBuffer[str](1)
    ring.push_back("a")

    assert _dump_text(ring) == "[0] 'a' <- head <- tail\n"


def test_dump_of_empty_ring_has_no_markers() -> None:
    ring = RingBuffer[int](2)
    ring.push_back(5)
    ring.pop_front()

    assert _dump_text(ring) == "[0] None\n[1] 5\n"


def test_dump_uses_custom_formatter_and_pads_slot_numbers() -> None:
    ring = RingBuffer[int](11)
    for value in range(12):
        ring.push_back(value)

    lines = _dump_text(ring, fmt=lambda v: f"<{v}>").splitlines()

    assert len(lines) == 11
    assert lines[0] == "[ 0] <10>"
    assert lines[1] == "[ 1] <11> <- tail"
    assert lines[2] == "[ 2] <1> <- head"


def test_log_sink_emits_one_record_per_line(caplog: pytest.LogCaptureFixture) -> None:
    logger = logging.getLogger("statring.tests.dump")
    ring = RingBuffer[int](2)
    ring.push_back(7)

    with caplog.at_level(logging.DEBUG, logger=logger.name):
        dump(ring, LogSink(logger))

    assert [r.getMessage() for r in caplog.records] == ["[0] None", "[1] 7 <- head <- tail"]
    assert all(r.levelno == logging.DEBUG for r in caplog.records)


def test_sinks_satisfy_sink_protocol() -> None:
    assert isinstance(StreamSink(io.StringIO()), Sink)
    assert isinstance(LogSink(logging.getLogger(__name__)), Sink)
