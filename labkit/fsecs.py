"""High-level timing: the running time of a function in seconds."""

from __future__ import annotations

from enum import Enum
from typing import Callable, Union

from labkit.clock import CycleCounter
from labkit.fcyc import FcycConfig, fcyc
from labkit.ftimer import ftimer_gettod, ftimer_itimer

_RUNS = 10


class TimingMethod(Enum):
    """How running time is measured."""

    FCYC = "fcyc"
    ITIMER = "itimer"
    GETTOD = "gettod"


_MESSAGES = {
    TimingMethod.FCYC: "Measuring performance with a cycle counter.",
    TimingMethod.ITIMER: "Measuring performance with the interval timer.",
    TimingMethod.GETTOD: "Measuring performance with gettimeofday().",
}


class Timer:
    """Measures functions with one chosen timing method."""

    def __init__(
        self,
        method: Union[TimingMethod, str] = TimingMethod.GETTOD,
        verbose: int = 0,
    ) -> None:
        self.method = TimingMethod(method)
        self.verbose = verbose
        self.mhz = 0.0
        self._config = FcycConfig()
        self._counter = CycleCounter()
        if verbose:
            print(_MESSAGES[self.method])
        if self.method is TimingMethod.FCYC:
            self._config = FcycConfig(
                k=3, maxsamples=20, epsilon=0.01, compensate=True, clear_cache=True
            )
            self.mhz = self._counter.mhz(verbose > 0)

    def measure(self, func: Callable[[], object]) -> float:
        """Return the running time of ``func`` in seconds."""
        if self.method is TimingMethod.FCYC:
            cycles = fcyc(func, self._config, self._counter)
            return cycles / (self.mhz * 1e6)
        if self.method is TimingMethod.ITIMER:
            return ftimer_itimer(func, _RUNS)
        return ftimer_gettod(func, _RUNS)