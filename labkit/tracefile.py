"""Allocator trace files and the bookkeeping of allocated payload extents.

A trace file starts with four integers: the suggested heap size, the
number of block ids, the number of requests and a weight. Then come the
requests, one per line: ``a <id> <size>`` allocates, ``r <id> <size>``
reallocates and ``f <id>`` frees.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Optional

from labkit.memlib import ALIGNMENT

# Number of header lines before the first request in a trace file.
HDRLINES = 4


class OpType(Enum):
    """The kind of an allocator request."""

    ALLOC = "a"
    FREE = "f"
    REALLOC = "r"


@dataclass(frozen=True)
class TraceOp:
    """One allocator request."""

    type: OpType
    index: int
    size: int = 0


@dataclass
class Trace:
    """A trace file held in memory, with room for the blocks it creates."""

    sugg_heapsize: int
    num_ids: int
    num_ops: int
    weight: int
    ops: list[TraceOp]
    name: str = ""
    blocks: list[Optional[int]] = field(init=False)
    block_sizes: list[int] = field(init=False)

    def __post_init__(self) -> None:
        self.blocks = [None] * max(self.num_ids, 0)
        self.block_sizes = [0] * max(self.num_ids, 0)


class TraceError(ValueError):
    """Raised when a trace file is malformed or cannot be read."""


class RangeError(ValueError):
    """Raised when a payload is misaligned, outside the heap or overlapping."""


def _next_int(tokens: Iterator[str], name: str, what: str) -> int:
    try:
        token = next(tokens)
    except StopIteration:
        raise TraceError(f"Missing {what} in tracefile {name}") from None
    try:
        return int(token)
    except ValueError:
        raise TraceError(f"Bad {what} ({token}) in tracefile {name}") from None


def _next_unsigned(tokens: Iterator[str], name: str, what: str) -> int:
    value = _next_int(tokens, name, what)
    if value < 0:
        raise TraceError(f"Negative {what} ({value}) in tracefile {name}")
    return value


def parse_trace(text: str, name: str = "") -> Trace:
    """Parse the text of a trace file into a :class:`Trace`."""
    tokens = iter(text.split())
    sugg_heapsize = _next_int(tokens, name, "heap size")
    num_ids = _next_int(tokens, name, "number of ids")
    num_ops = _next_int(tokens, name, "number of ops")
    weight = _next_int(tokens, name, "weight")

    ops: list[TraceOp] = []
    max_index = 0
    for token in tokens:
        kind = token[0]
        if kind in ("a", "r"):
            index = _next_unsigned(tokens, name, "block id")
            size = _next_unsigned(tokens, name, "block size")
            op_type = OpType.ALLOC if kind == "a" else OpType.REALLOC
            ops.append(TraceOp(op_type, index, size))
            max_index = max(max_index, index)
        elif kind == "f":
            index = _next_unsigned(tokens, name, "block id")
            ops.append(TraceOp(OpType.FREE, index))
        else:
            raise TraceError(f"Bogus type character ({kind}) in tracefile {name}")

    if max_index != num_ids - 1:
        raise TraceError(
            f"tracefile {name} declares {num_ids} ids but uses ids up to {max_index}"
        )
    if num_ops != len(ops):
        raise TraceError(
            f"tracefile {name} declares {num_ops} ops but holds {len(ops)}"
        )
    for op in ops:
        if op.index >= num_ids:
            raise TraceError(f"block id {op.index} out of range in tracefile {name}")

    return Trace(sugg_heapsize, num_ids, num_ops, weight, ops, name)


def read_trace(tracedir: str, filename: str) -> Trace:
    """Read the trace file ``filename`` found in the directory ``tracedir``."""
    path = tracedir + filename
    try:
        with open(path, encoding="ascii") as handle:
            text = handle.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise TraceError(f"Could not open {path} in read_trace: {exc}") from exc
    return parse_trace(text, path)


class RangeList:
    """The extents of all allocated payloads, used to detect overlaps."""

    def __init__(self) -> None:
        self._ranges: list[tuple[int, int]] = []

    def __len__(self) -> int:
        return len(self._ranges)

    def __iter__(self) -> Iterator[tuple[int, int]]:
        """Yield ``(lo, hi)`` pairs, most recently added first."""
        return reversed(self._ranges)

    def add(self, lo: int, size: int, heap_lo: int, heap_hi: int) -> None:
        """Check a new payload of ``size`` bytes at ``lo`` and remember it."""
        if size <= 0:
            raise ValueError("size must be positive")
        hi = lo + size - 1

        if lo % ALIGNMENT != 0:
            raise RangeError(
                f"Payload address ({lo:#x}) not aligned to {ALIGNMENT} bytes"
            )

        if lo < heap_lo or lo > heap_hi or hi < heap_lo or hi > heap_hi:
            raise RangeError(
                f"Payload ({lo:#x}:{hi:#x}) lies outside heap "
                f"({heap_lo:#x}:{heap_hi:#x})"
            )

        for plo, phi in self:
            if plo <= lo <= phi or plo <= hi <= phi:
                raise RangeError(
                    f"Payload ({lo:#x}:{hi:#x}) overlaps another payload "
                    f"({plo:#x}:{phi:#x})"
                )

        self._ranges.append((lo, hi))

    def remove(self, lo: int) -> None:
        """Forget the payload that starts at ``lo``, if there is one."""
        for position in range(len(self._ranges) - 1, -1, -1):
            if self._ranges[position][0] == lo:
                del self._ranges[position]
                return

    def clear(self) -> None:
        """Forget every payload."""
        self._ranges.clear()