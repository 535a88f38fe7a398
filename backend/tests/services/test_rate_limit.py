# backend/tests/services/test_rate_limit.py
import time

import pytest

from sitefactory.errors import RateLimitError
from sitefactory.services.rate_limit import ANONYMOUS_CALLER, CallerRateLimiter, caller_key


def test_allows_limit_then_rejects():
    limiter = CallerRateLimiter(5, 60)

    for _ in range(5):
        limiter.hit("203.0.113.9")

    with pytest.raises(RateLimitError) as excinfo:
        limiter.hit("203.0.113.9")
    assert excinfo.value.status_code == 429
    assert 1 <= excinfo.value.retry_after <= 60


def test_window_resets():
    limiter = CallerRateLimiter(2, 1)
    limiter.hit("a")
    limiter.hit("a")

    with pytest.raises(RateLimitError) as excinfo:
        limiter.hit("a")
    assert excinfo.value.retry_after == 1

    time.sleep(1.1)
    limiter.hit("a")


def test_callers_are_independent():
    limiter = CallerRateLimiter(1, 60)
    limiter.hit("a")
    limiter.hit("b")

    with pytest.raises(RateLimitError):
        limiter.hit("a")


def test_reset_clears_counters():
    limiter = CallerRateLimiter(1, 60)
    limiter.hit("a")

    limiter.reset()

    limiter.hit("a")


@pytest.mark.parametrize("headers, expected", [
    ({"x-forwarded-for": "203.0.113.9, 10.0.0.1", "host": "api.local"}, "203.0.113.9"),
    ({"x-real-ip": "198.51.100.4", "host": "api.local"}, "198.51.100.4"),
    ({"x-forwarded-for": " , ", "cf-connecting-ip": "192.0.2.1"}, "192.0.2.1"),
    ({"host": "api.local", "authorization": "Bearer abc"}, "api.local"),
    ({"authorization": "Bearer abc"}, "Bearer abc"),
    ({}, ANONYMOUS_CALLER),
])
def test_caller_key(headers, expected):
    assert caller_key(headers) == expected
