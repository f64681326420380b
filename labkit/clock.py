"""A high-resolution counter for timing short stretches of code.

The counter ticks once per nanosecond of the performance clock. A
compensated variant subtracts an estimate of the time lost to timer
interrupts, measured by watching the process user time advance.
"""

from __future__ import annotations

import os
import sys
import time

_NEVENT = 100
_THRESHOLD = 1000
_RECORDTHRESH = 3000


def _clock_ticks_per_second() -> int:
    try:
        return os.sysconf("SC_CLK_TCK")
    except (AttributeError, ValueError, OSError):
        return 100


_CLK_TCK = _clock_ticks_per_second()


def _user_ticks() -> int:
    return int(os.times().user * _CLK_TCK)


class CycleCounter:
    """Measures elapsed counter ticks since the last call to :meth:`start`."""

    def __init__(self) -> None:
        self._start = 0
        self._start_tick = 0
        self.cyc_per_tick = 0.0

    def start(self) -> None:
        """Record the current counter value."""
        self._start = time.perf_counter_ns()

    def elapsed(self) -> float:
        """Return the number of ticks since the last :meth:`start`."""
        result = float(time.perf_counter_ns() - self._start)
        if result < 0:
            print(f"Error: counter returns neg value: {result:.0f}", file=sys.stderr)
        return result

    def overhead(self) -> float:
        """Measure the cost of a start/elapsed pair."""
        result = 0.0
        # Twice, to get past cache effects.
        for _ in range(2):
            self.start()
            result = self.elapsed()
        return result

    def mhz(self, verbose: bool = False, sleeptime: float = 2) -> float:
        """Estimate the counter rate in MHz by sleeping ``sleeptime`` seconds."""
        if sleeptime <= 0:
            raise ValueError("sleeptime must be positive")
        self.start()
        time.sleep(sleeptime)
        rate = self.elapsed() / (1e6 * sleeptime)
        if verbose:
            print(f"Processor clock rate ~= {rate:.1f} MHz")
        return rate

    def _calibrate(self, verbose: bool = False) -> None:
        """Estimate the ticks consumed per timer interrupt."""
        events = 0
        oldc = _user_ticks()
        self.start()
        oldt = self.elapsed()
        while events < _NEVENT:
            newt = self.elapsed()
            if newt - oldt >= _THRESHOLD:
                newc = _user_ticks()
                if newc > oldc:
                    cpt = (newt - oldt) / (newc - oldc)
                    if (self.cyc_per_tick == 0.0 or self.cyc_per_tick > cpt) and cpt > _RECORDTHRESH:
                        self.cyc_per_tick = cpt
                    events += 1
                    oldc = newc
                oldt = newt
        if verbose:
            print(f"Setting cyc_per_tick to {self.cyc_per_tick:f}")

    def start_compensated(self) -> None:
        """Start a measurement that corrects for timer interrupts."""
        if self.cyc_per_tick == 0.0:
            self._calibrate()
        self._start_tick = _user_ticks()
        self.start()

    def elapsed_compensated(self) -> float:
        """Ticks since :meth:`start_compensated`, less interrupt overhead."""
        measured = self.elapsed()
        ticks = _user_ticks() - self._start_tick
        return measured - ticks * self.cyc_per_tick