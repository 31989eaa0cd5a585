from unittest import mock

import pytest

from mpnet.timer import Timer


def test_fresh_timer_reports_zero():
    t = Timer()
    assert t.elapsed() == 0
    assert t.total_elapsed() == 0


def test_stop_without_start_raises():
    with pytest.raises(RuntimeError):
        Timer().stop()


@mock.patch("time.perf_counter", side_effect=[10.0, 12.5])
def test_elapsed_is_difference_of_clock(_clock):
    t = Timer()
    t.start()
    t.stop()
    assert t.elapsed() == pytest.approx(12.5 - 10.0)


@mock.patch("time.perf_counter", side_effect=[0.0, 1.0, 5.0, 8.0])
def test_total_accumulates_intervals(_clock):
    t = Timer()
    t.start()
    t.stop()
    first = t.elapsed()
    t.start()
    t.stop()
    second = t.elapsed()
    assert t.total_elapsed() == pytest.approx(first + second)
    assert second == pytest.approx(8.0 - 5.0)


@mock.patch("time.perf_counter", side_effect=[3.0, 7.0])
def test_context_manager_measures_block(_clock):
    with Timer() as t:
        pass
    assert t.elapsed() == pytest.approx(7.0 - 3.0)
    assert t.total_elapsed() == t.elapsed()


def test_context_manager_stops_on_exception():
    t = Timer()
    with pytest.raises(KeyError):
        with t:
            raise KeyError("boom")
    assert t.elapsed() >= 0
    assert t.total_elapsed() == t.elapsed()