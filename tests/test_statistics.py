import pytest

from mpnet.statistics import Statistics


def test_empty_has_zeroed_lists():
    stat = Statistics.empty(3)
    assert stat.bytes_send == [0, 0, 0]
    assert stat.bytes_recv == [0, 0, 0]
    assert stat.elapsed_send == [0.0] * 3
    assert stat.elapsed_recv == [0.0] * 3
    assert stat.elapsed_total == 0.0


def test_empty_lists_are_independent():
    stat = Statistics.empty(2)
    stat.bytes_send[0] = 5
    assert stat.bytes_recv == [0, 0]


def test_empty_negative():
    with pytest.raises(ValueError):
        Statistics.empty(-1)


def test_totals():
    stat = Statistics.empty(3)
    stat.bytes_send[1] = 100
    stat.bytes_send[2] = 23
    stat.bytes_recv[0] = 7
    assert stat.total_bytes_send() == 100 + 23
    assert stat.total_bytes_recv() == 7


def test_totals_of_default():
    stat = Statistics()
    assert stat.total_bytes_send() == 0
    assert stat.total_bytes_recv() == 0


def test_equality_of_dataclass():
    assert Statistics.empty(2) == Statistics.empty(2)
    assert not Statistics.empty(2) == Statistics.empty(3)