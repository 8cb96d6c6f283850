"""Tests for the token bucket rate limiter."""

import threading

import pytest

from keyauth.exceptions import InvalidConfiguration
from keyauth.framework.RateLimiter import RateLimiter, formatWait
from tests.conftest import FakeClock


def makeLimiter(capacity, interval, clock):
    return RateLimiter(maxTokens=capacity, refillRate=interval, clock=clock, sleeper=clock.sleep)


class TestConstruction:

    @pytest.mark.parametrize("capacity,interval", [(0, 1000), (-1, 1000), (10, 0), (10, -5)])
    def test_rejects_non_positive_values(self, capacity, interval, clock):
        with pytest.raises(InvalidConfiguration):
            makeLimiter(capacity, interval, clock)

    def test_invalid_configuration_is_value_error(self, clock):
        with pytest.raises(ValueError):
            makeLimiter(0, 0, clock)

    def test_starts_full(self, clock):
        limiter = makeLimiter(5, 1000, clock)
        assert limiter.tokens == 5


class TestTryAdmit:

    def test_each_admit_consumes_one_token(self, clock):
        limiter = makeLimiter(3, 1000, clock)

        for expected in (2, 1, 0):
            assert limiter.tryAdmit() is True
            assert limiter.tokens == expected

        assert limiter.tryAdmit() is False
        assert limiter.tokens == 0

    @pytest.mark.parametrize("k,expected", [(1, 1), (2, 2), (3, 3), (7, 3)])
    def test_refill_adds_whole_intervals_up_to_capacity(self, k, expected):
        clock = FakeClock()
        limiter = makeLimiter(3, 1000, clock)
        for _ in range(3):
            limiter.tryAdmit()

        clock.advance(k * 1000)

        assert limiter.tryAdmit() is True
        assert limiter.tokens == expected - 1

    def test_sub_interval_time_is_discarded_on_each_check(self, clock):
        limiter = makeLimiter(1, 1000, clock)
        assert limiter.tryAdmit() is True

        clock.advance(600)
        assert limiter.tryAdmit() is False

        # 1200 ms since the token was taken, but only 600 since the last refill check
        clock.advance(600)
        assert limiter.tryAdmit() is False

        clock.advance(1000)
        assert limiter.tryAdmit() is True

    def test_capacity_two_scenario(self, clock):
        limiter = makeLimiter(2, 1000, clock)

        assert limiter.tryAdmit() is True
        assert limiter.tryAdmit() is True
        assert limiter.tokens == 0
        assert limiter.tryAdmit() is False

        clock.advance(2500)

        assert limiter.tryAdmit() is True
        assert limiter.tokens == 1

    def test_concurrent_admissions_never_exceed_capacity(self, clock):
        limiter = makeLimiter(50, 1000, clock)
        admitted = []
        lock = threading.Lock()

        def worker():
            for _ in range(10):
                if limiter.tryAdmit():
                    with lock:
                        admitted.append(1)

        threads = [threading.Thread(target=worker) for _ in range(10)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(admitted) == 50
        assert limiter.tokens == 0


class TestTimeUntilNextToken:

    def test_zero_when_token_available(self, clock):
        limiter = makeLimiter(2, 1000, clock)
        assert limiter.timeUntilNextTokenMs() == 0

    def test_bounded_by_interval_when_empty(self, clock):
        limiter = makeLimiter(1, 1000, clock)
        limiter.tryAdmit()

        clock.advance(300)
        wait = limiter.timeUntilNextTokenMs()

        assert 0 <= wait <= 1000

    def test_string_form(self, clock):
        limiter = makeLimiter(1, 5000, clock)
        assert limiter.timeUntilNextTokenString() == "Now"

        limiter.tryAdmit()
        assert limiter.timeUntilNextTokenString() == "5 seconds"


class TestAwaitAdmission:

    def test_sleeps_then_refills_to_capacity(self, clock):
        limiter = makeLimiter(4, 1000, clock)
        for _ in range(4):
            limiter.tryAdmit()

        limiter.awaitAdmission()

        assert clock.sleeps == [1000]
        assert limiter.tokens == 4

    def test_no_sleep_when_token_available(self, clock):
        limiter = makeLimiter(4, 1000, clock)
        limiter.tryAdmit()

        limiter.awaitAdmission()

        assert clock.sleeps == []
        assert limiter.tokens == 4


class TestFormatWait:

    @pytest.mark.parametrize("waitMs,expected", [
        (0, "Now"),
        (250, "250 milliseconds"),
        (1000, "1 second"),
        (1999, "1 second"),
        (45000, "45 seconds"),
        (60000, "1 minute"),
        (125000, "2 minutes"),
        (3600000, "1 hour"),
        (7200000, "2 hours"),
    ])
    def test_format(self, waitMs, expected):
        assert formatWait(waitMs) == expected
