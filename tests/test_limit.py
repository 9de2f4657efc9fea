import time

import pytest

from bedrockscan.limit import BasicLimiter, Limiter


class _FakeTime:
    def __init__(self):
        self.now = 0
        self.sleeps = []

    def clock(self):
        return self.now

    def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += round(seconds * 1_000_000_000)


def test_limiter_is_abstract():
    with pytest.raises(TypeError):
        Limiter()


def test_delay_from_rate():
    assert BasicLimiter(1).delay_ns == 1_000_000_000


def test_first_increment_does_not_wait():
    fake = _FakeTime()
    limiter = BasicLimiter(4, clock=fake.clock, sleep=fake.sleep)
    limiter.increment()
    assert fake.sleeps == []


def test_increments_are_spaced():
    fake = _FakeTime()
    limiter = BasicLimiter(4, clock=fake.clock, sleep=fake.sleep)
    for _ in range(5):
        limiter.increment()
    assert len(fake.sleeps) == 4
    assert fake.now == 4 * limiter.delay_ns


def test_no_wait_when_behind_schedule():
    fake = _FakeTime()
    limiter = BasicLimiter(4, clock=fake.clock, sleep=fake.sleep)
    fake.now = 10 * limiter.delay_ns
    for _ in range(3):
        limiter.increment()
    assert fake.sleeps == []


@pytest.mark.parametrize("rate", [0, -5])
def test_invalid_rate(rate):
    with pytest.raises(ValueError):
        BasicLimiter(rate)


def test_real_clock_paces():
    started = time.monotonic()
    limiter = BasicLimiter(200)
    for _ in range(5):
        limiter.increment()
    elapsed = time.monotonic() - started
    assert limiter.delay_ns == 5_000_000
    assert elapsed >= 0.95 * 4 * limiter.delay_ns / 1_000_000_000