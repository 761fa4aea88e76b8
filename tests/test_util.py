import time

from enginekit.util import get_time_ms


def test_time_is_between_surrounding_clock_reads():
    before = time.time_ns() // 1_000_000
    now = get_time_ms()
    after = time.time_ns() // 1_000_000
    assert before <= now <= after


def test_time_does_not_go_backwards():
    first = get_time_ms()
    time.sleep(0.01)
    second = get_time_ms()
    assert second >= first + 5


def test_time_is_integer_milliseconds():
    value = get_time_ms()
    assert value == int(value)
    assert abs(value - time.time() * 1000) < 1000