"""A simulated memory system with a single growable heap.

The heap lives in one fixed ``bytearray``. Addresses are integer offsets
into it, so the first heap byte is at address 0. The heap only grows
through :meth:`SimulatedMemory.sbrk`; it can be emptied again with
:meth:`SimulatedMemory.reset_brk`.
"""

from __future__ import annotations

import mmap

# Default directory and trace files used by the allocator driver.
TRACEDIR = "/afs/cs/project/ics2/im/labs/malloclab/traces/"
DEFAULT_TRACEFILES = (
    "amptjp-bal.rep",
    "cccp-bal.rep",
    "cp-decl-bal.rep",
    "expr-bal.rep",
    "coalescing-bal.rep",
    "random-bal.rep",
    "random2-bal.rep",
    "binary-bal.rep",
    "binary2-bal.rep",
    "realloc-bal.rep",
    "realloc2-bal.rep",
)

# Reference libc throughput (ops/sec); throughput beyond it earns nothing.
AVG_LIBC_THRUPUT = 600e3

# Share of the performance index given to space utilisation.
UTIL_WEIGHT = 0.60

# Payload alignment in bytes.
ALIGNMENT = 8

# Maximum heap size in bytes (20 MB).
MAX_HEAP = 20 * (1 << 20)


class HeapExhausted(MemoryError):
    """Raised when the heap cannot be extended as requested."""


class SimulatedMemory:
    """A model of the process heap and its ``brk`` pointer."""

    def __init__(self, max_heap: int = MAX_HEAP) -> None:
        if max_heap < 0:
            raise ValueError("max_heap must not be negative")
        self._storage = bytearray(max_heap)
        self._max_heap = max_heap
        self._brk = 0

    @property
    def max_heap(self) -> int:
        """The largest size the heap can reach, in bytes."""
        return self._max_heap

    def reset_brk(self) -> None:
        """Make the heap empty again."""
        self._brk = 0

    def sbrk(self, incr: int) -> int:
        """Extend the heap by ``incr`` bytes and return the old break address."""
        if incr < 0 or self._brk + incr > self._max_heap:
            raise HeapExhausted("ERROR: mem_sbrk failed. Ran out of memory...")
        old_brk = self._brk
        self._brk += incr
        return old_brk

    def heap_lo(self) -> int:
        """Address of the first heap byte."""
        return 0

    def heap_hi(self) -> int:
        """Address of the last heap byte (one below ``heap_lo`` when empty)."""
        return self._brk - 1

    def heapsize(self) -> int:
        """Current heap size in bytes."""
        return self._brk

    def pagesize(self) -> int:
        """The page size of the host system."""
        return mmap.PAGESIZE

    def _check(self, addr: int, size: int) -> None:
        if size < 0 or addr < 0 or addr + size > self._brk:
            raise IndexError(
                f"access of {size} bytes at {addr} lies outside heap (0:{self._brk - 1})"
            )

    def read(self, addr: int, size: int) -> bytes:
        """Return ``size`` bytes starting at ``addr``."""
        self._check(addr, size)
        return bytes(self._storage[addr:addr + size])

    def write(self, addr: int, data: bytes) -> None:
        """Store ``data`` starting at ``addr``."""
        self._check(addr, len(data))
        self._storage[addr:addr + len(data)] = data

    def fill(self, addr: int, value: int, size: int) -> None:
        """Set ``size`` bytes starting at ``addr`` to the low byte of ``value``."""
        self._check(addr, size)
        self._storage[addr:addr + size] = bytes([value & 0xFF]) * size