"""CLI entry-point:  python -m statring --capacity 3 push_back=1 push_front=0 pop_back"""

import argparse
import logging
import sys
from typing import Any, Sequence, cast

import colorlogging
from omegaconf import DictConfig, OmegaConf

from statring.core.ring import RingBuffer
from statring.debug.dump import StreamSink, dump

logger = logging.getLogger(__name__)

_PUSH_OPS = ("push_back", "push_front")
_BARE_OPS = ("pop_front", "pop_back", "drop_front", "drop_back", "clear")


def _parse_value(ring: RingBuffer[Any], text: str) -> Any:
    """Convert a command-line literal to the ring's element type."""
    kind = ring.dtype.kind
    if kind in "iu":
        return int(text)
    if kind == "f":
        return float(text)
    if kind == "b":
        return text.lower() in ("1", "true", "yes")
    return text


def run_ops(ring: RingBuffer[Any], ops: Sequence[str]) -> list[Any]:
    """Apply ``name`` / ``name=value`` operations in order and return each result."""
    results: list[Any] = []
    for op in ops:
        name, sep, arg = op.partition("=")
        if name in _PUSH_OPS:
            if not sep:
                raise ValueError(f"{name} needs a value, e.g. {name}=1")
            result = getattr(ring, name)(_parse_value(ring, arg))
        elif name in _BARE_OPS:
            if sep:
                raise ValueError(f"{name} takes no value")
            result = getattr(ring, name)()
        else:
            raise ValueError(f"unknown operation {op!r}")
        logger.info("%s -> %r  %r", op, result, ring)
        results.append(result)
    return results


def build_config(args: argparse.Namespace) -> DictConfig:
    """YAML file (optional) < explicit flags < ``--set key=value`` overrides."""
    cfg = OmegaConf.load(args.config) if args.config else OmegaConf.create()
    flags: dict[str, Any] = {}
    if args.capacity is not None:
        flags["capacity"] = args.capacity
    if args.dtype is not None:
        flags["dtype"] = args.dtype
    if args.strict:
        flags["strict"] = True
    return cast(DictConfig, OmegaConf.merge(cfg, OmegaConf.create(flags), OmegaConf.from_dotlist(args.set)))


def main(argv: Sequence[str] | None = None) -> int:
    colorlogging.configure()

    parser = argparse.ArgumentParser(description="Run operations against a statring ring buffer")
    parser.add_argument("ops", nargs="*", help="push_back=V, push_front=V, pop_front, pop_back, drop_front, drop_back, clear")
    parser.add_argument("--config", help="YAML file with capacity / dtype / shape / index_dtype / strict")
    parser.add_argument("--capacity", type=int, default=None)
    parser.add_argument("--dtype", default=None, help="NumPy dtype of the elements (default: object)")
    parser.add_argument("--strict", action="store_true", help="raise on empty pops and out-of-range access")
    parser.add_argument("--set", action="append", default=[], metavar="KEY=VALUE", help="extra config override")
    args = parser.parse_args(argv)

    try:
        ring = RingBuffer.from_config(build_config(args))
        logger.info("Created %r with index dtype %s", ring, ring.index_dtype)
        run_ops(ring, args.ops)
    except (ValueError, TypeError, OverflowError, IndexError, OSError) as e:
        logger.error(f"Error: {e}")
        return 1

    dump(ring, StreamSink(sys.stdout), fmt=str)
    return 0


if __name__ == "__main__":
    sys.exit(main())
