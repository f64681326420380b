import time

import pytest

from labkit.ftimer import ftimer_gettod, ftimer_itimer


@pytest.mark.parametrize("timer", [ftimer_itimer, ftimer_gettod])
def test_runs_function_n_times(timer):
    calls = []
    result = timer(lambda: calls.append(1), 5)
    assert len(calls) == 5
    assert result >= 0


@pytest.mark.parametrize("timer", [ftimer_itimer, ftimer_gettod])
def test_measures_sleeping_function(timer):
    result = timer(lambda: time.sleep(0.01), 2)
    assert result >= 0.008


@pytest.mark.parametrize("timer", [ftimer_itimer, ftimer_gettod])
def test_rejects_non_positive_runs(timer):
    with pytest.raises(ValueError):
        timer(lambda: None, 0)


def test_itimer_propagates_errors_from_function():
    def boom():
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError):
        ftimer_itimer(boom, 3)