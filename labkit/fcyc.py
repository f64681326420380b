"""Estimate the running time of a function with a K-best scheme.

The function is run repeatedly. The run stops once the K smallest
measurements agree within a tolerance, or once a maximum number of
samples has been taken. The smallest measurement is the estimate.
"""

from __future__ import annotations

import bisect
from dataclasses import dataclass
from functools import lru_cache
from typing import Callable, Optional, Protocol

from labkit.clock import CycleCounter


@dataclass
class FcycConfig:
    """Parameters for :func:`fcyc`."""

    k: int = 3
    maxsamples: int = 20
    epsilon: float = 0.01
    compensate: bool = False
    clear_cache: bool = False
    cache_bytes: int = 1 << 19
    cache_block: int = 32


class _Counter(Protocol):
    def start(self) -> None: ...

    def elapsed(self) -> float: ...

    def start_compensated(self) -> None: ...

    def elapsed_compensated(self) -> float: ...


class KBestSampler:
    """Keeps the ``k`` smallest samples seen so far, in ascending order."""

    def __init__(self, k: int = 3) -> None:
        if k < 1:
            raise ValueError("k must be at least 1")
        self.k = k
        self.count = 0
        self._values: list[float] = []

    @property
    def values(self) -> tuple[float, ...]:
        """The smallest samples, ascending."""
        return tuple(self._values)

    def add(self, value: float) -> None:
        """Record one sample."""
        if len(self._values) < self.k:
            bisect.insort(self._values, value)
        elif value < self._values[-1]:
            self._values.pop()
            bisect.insort(self._values, value)
        self.count += 1

    def converged(self, epsilon: float = 0.01) -> bool:
        """Whether the ``k`` smallest samples lie within ``epsilon`` of each other."""
        return (
            self.count >= self.k
            and (1 + epsilon) * self._values[0] >= self._values[self.k - 1]
        )

    def best(self) -> float:
        """The smallest sample."""
        if not self._values:
            raise ValueError("no samples recorded")
        return self._values[0]


@lru_cache(maxsize=1)
def _cache_buffer(size: int) -> bytearray:
    return bytearray(size)


def _clear_cache(config: FcycConfig) -> int:
    """Touch one byte of every cache block in a buffer as large as the cache."""
    if config.cache_block < 1:
        raise ValueError("cache_block must be positive")
    buf = _cache_buffer(config.cache_bytes)
    return sum(memoryview(buf)[:: config.cache_block])


def fcyc(
    func: Callable[[], object],
    config: Optional[FcycConfig] = None,
    counter: Optional[_Counter] = None,
) -> float:
    """Return the estimated number of counter ticks one call of ``func`` takes."""
    if config is None:
        config = FcycConfig()
    if counter is None:
        counter = CycleCounter()
    sampler = KBestSampler(config.k)
    if config.compensate:
        start, stop = counter.start_compensated, counter.elapsed_compensated
    else:
        start, stop = counter.start, counter.elapsed
    while True:
        if config.clear_cache:
            _clear_cache(config)
        start()
        func()
        sampler.add(stop())
        if sampler.converged(config.epsilon) or sampler.count >= config.maxsamples:
            break
    return sampler.best()