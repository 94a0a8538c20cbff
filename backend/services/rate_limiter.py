"""
rate_limiter.py — Fixed-window attempt counters
Login and registration are throttled per client address. Counters live in
a CounterStore so the in-process dict can be swapped for an external cache
(and tests can drive the clock).
"""

import logging
import threading
import time
from abc import ABC, abstractmethod
from typing import Callable, NamedTuple

from fastapi import Depends, Request

from auth import get_client_ip
from config import LOGIN_RATE_LIMIT, REGISTER_RATE_LIMIT, RATE_LIMIT_WINDOW_SECONDS
from errors import RateLimitError

logger = logging.getLogger(__name__)


class RateLimitResult(NamedTuple):
    allowed: bool
    remaining: int
    reset_at: float


class CounterStore(ABC):
    @abstractmethod
    def increment(self, key: str, window_seconds: float) -> tuple[int, float]:
        """Atomically bump the counter for key; returns (count, reset_at).
        An expired window starts over at 1."""

    @abstractmethod
    def reset(self, key: str) -> None:
        ...

    @abstractmethod
    def sweep(self) -> int:
        """Drop expired windows; returns how many were removed."""


class InMemoryCounterStore(CounterStore):
    """Process-wide counters guarded by a lock."""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._lock = threading.Lock()
        # key → [count, reset_at]
        self._counters: dict[str, list] = {}

    def increment(self, key: str, window_seconds: float) -> tuple[int, float]:
        with self._lock:
            now = self._clock()
            record = self._counters.get(key)
            if record is None or now > record[1]:
                record = [0, now + window_seconds]
                self._counters[key] = record
            record[0] += 1
            return record[0], record[1]

    def reset(self, key: str) -> None:
        with self._lock:
            self._counters.pop(key, None)

    def sweep(self) -> int:
        with self._lock:
            now = self._clock()
            expired = [k for k, (_, reset_at) in self._counters.items() if now > reset_at]
            for k in expired:
                del self._counters[k]
            return len(expired)

    def __len__(self) -> int:
        return len(self._counters)


class RateLimiter:
    MESSAGES = {
        "login": "Too many login attempts. Please try again later.",
        "register": "Too many registration attempts. Please try again later.",
    }

    LIMITS = {
        "login": LOGIN_RATE_LIMIT,
        "register": REGISTER_RATE_LIMIT,
    }

    def __init__(self, store: CounterStore | None = None, window_seconds: float = RATE_LIMIT_WINDOW_SECONDS):
        self.store = store or InMemoryCounterStore()
        self.window_seconds = window_seconds

    def check(self, action: str, client: str, limit: int | None = None,
              window_seconds: float | None = None) -> RateLimitResult:
        limit = limit if limit is not None else self.LIMITS.get(action, 5)
        window = window_seconds if window_seconds is not None else self.window_seconds
        count, reset_at = self.store.increment(f"{action}:{client}", window)
        allowed = count <= limit
        return RateLimitResult(allowed, max(0, limit - count), reset_at)

    def enforce(self, action: str, client: str) -> RateLimitResult:
        result = self.check(action, client)
        if not result.allowed:
            logger.warning(f"Rate limit hit for {action} from {client}")
            raise RateLimitError(self.MESSAGES.get(action))
        return result


_default_limiter = RateLimiter()


def get_rate_limiter() -> RateLimiter:
    """FastAPI dependency — the process-wide limiter."""
    return _default_limiter


def rate_limit(action: str):
    """Dependency factory: count and throttle `action` per client address.

    Used as a route dependency so it runs before the body is validated;
    a malformed attempt is still counted and an over-limit one gets 429.
    """
    def enforce_limit(request: Request, limiter: RateLimiter = Depends(get_rate_limiter)) -> RateLimitResult:
        return limiter.enforce(action, get_client_ip(request))

    return enforce_limit
