"""Estimate the running time of a function, in seconds.

``ftimer_itimer`` reads the Unix interval timers; ``ftimer_gettod`` reads
the time of day. Both return the average over ``n`` runs.
"""

from __future__ import annotations

import signal
import time
from typing import Callable

# Initial value of the interval timers, in seconds.
MAX_ETIME = 86400

_TIMERS = (signal.ITIMER_VIRTUAL, signal.ITIMER_REAL, signal.ITIMER_PROF)


def _check_runs(n: int) -> None:
    if n <= 0:
        raise ValueError("n must be positive")


def _etime() -> float:
    """Real seconds elapsed since the interval timers were armed."""
    remaining, _ = signal.getitimer(signal.ITIMER_REAL)
    return MAX_ETIME - remaining


def ftimer_itimer(func: Callable[[], object], n: int = 10) -> float:
    """Average running time of ``func`` over ``n`` runs, by interval timer."""
    _check_runs(n)
    for which in _TIMERS:
        signal.setitimer(which, MAX_ETIME)
    try:
        start = _etime()
        for _ in range(n):
            func()
        tmeas = _etime() - start
    finally:
        for which in _TIMERS:
            signal.setitimer(which, 0)
    return tmeas / n


def ftimer_gettod(func: Callable[[], object], n: int = 10) -> float:
    """Average running time of ``func`` over ``n`` runs, by time of day."""
    _check_runs(n)
    start = time.time()
    for _ in range(n):
        func()
    return (time.time() - start) / n