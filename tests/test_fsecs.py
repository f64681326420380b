import time

import pytest

from labkit.fsecs import Timer, TimingMethod


def test_default_method_is_gettod():
    assert Timer().method is TimingMethod.GETTOD


def test_method_from_string():
    assert Timer("itimer").method is TimingMethod.ITIMER


def test_unknown_method_raises():
    with pytest.raises(ValueError):
        Timer("sundial")


def test_verbose_announces_method(capsys):
    Timer(TimingMethod.GETTOD, verbose=1)
    assert capsys.readouterr().out == "Measuring performance with gettimeofday().\n"


def test_quiet_by_default(capsys):
    Timer(TimingMethod.ITIMER)
    assert capsys.readouterr().out == ""


@pytest.mark.parametrize("method", [TimingMethod.GETTOD, TimingMethod.ITIMER])
def test_measure_runs_ten_times(method):
    calls = []
    result = Timer(method).measure(lambda: calls.append(1))
    assert len(calls) == 10
    assert result >= 0


@pytest.mark.parametrize("method", [TimingMethod.GETTOD, TimingMethod.ITIMER])
def test_measure_reports_seconds(method):
    result = Timer(method).measure(lambda: time.sleep(0.002))
    assert result >= 0.0015