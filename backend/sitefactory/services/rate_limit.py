# backend/sitefactory/services/rate_limit.py
"""Fixed-window rate limiting for the proxy endpoints.

Counters live in a ``limits`` MemoryStorage, so limits are per instance and
reset on restart. Multi-instance deployments need a shared storage backend.
"""
import math
import time
from typing import Mapping, Tuple

from limits import RateLimitItemPerSecond
from limits.storage import MemoryStorage
from limits.strategies import FixedWindowRateLimiter

from ..errors import RateLimitError
from ..utils.logging import service_logger

# Checked in order; forwarded client addresses are preferred over host/auth headers
CALLER_HEADERS: Tuple[str, ...] = (
    "x-forwarded-for",
    "x-real-ip",
    "cf-connecting-ip",
    "x-client-ip",
    "host",
    "authorization",
)
ANONYMOUS_CALLER = "anonymous"
NAMESPACE = "proxy"


def caller_key(headers: Mapping[str, str]) -> str:
    for name in CALLER_HEADERS:
        value = headers.get(name)
        if not value:
            continue
        if name == "x-forwarded-for":
            # client, proxy1, proxy2
            value = value.split(",")[0]
        value = value.strip()
        if value:
            return value
    return ANONYMOUS_CALLER


class CallerRateLimiter:
    def __init__(self, limit: int, window_seconds: int):
        self.item = RateLimitItemPerSecond(limit, window_seconds)
        self.storage = MemoryStorage()
        self.strategy = FixedWindowRateLimiter(self.storage)

    def hit(self, key: str) -> None:
        """Count one request for ``key``, raising RateLimitError once the window is full"""
        if self.strategy.hit(self.item, NAMESPACE, key):
            return

        stats = self.strategy.get_window_stats(self.item, NAMESPACE, key)
        retry_after = max(1, math.ceil(stats.reset_time - time.time()))
        service_logger.warning("Rate limit exceeded", extra={
            "caller": key,
            "retry_after": retry_after
        })
        raise RateLimitError("Too many requests", retry_after=retry_after)

    def reset(self) -> None:
        self.storage.reset()
