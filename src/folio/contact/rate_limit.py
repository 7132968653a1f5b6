"""Per-client sliding window rate limiting for the contact form.

The in-memory limiter only sees requests handled by its own process and
forgets everything on restart. Deployments running several processes should
provide a :class:`RateLimiter` backed by a shared key-value store with expiry.
"""

from __future__ import annotations

import logging
import threading
import time
from collections import OrderedDict, deque
from collections.abc import Callable
from typing import Protocol

logger = logging.getLogger(__name__)


class RateLimiter(Protocol):
    def allow(self, key: str) -> bool:
        """Record a hit for ``key`` and return whether it is within the limit."""
        ...


class SlidingWindowRateLimiter:
    """Allow at most ``limit`` hits per client within a trailing window.

    Clients are kept in least-recently-active order. Clients whose hits have
    all left the window are evicted on every call, and the least recently
    active client is dropped once more than ``max_clients`` are tracked.
    """

    def __init__(
        self,
        limit: int,
        window_seconds: float,
        *,
        max_clients: int = 10_000,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if limit < 1:
            msg = "limit must be at least 1"
            raise ValueError(msg)
        if window_seconds <= 0:
            msg = "window_seconds must be positive"
            raise ValueError(msg)
        self.limit = limit
        self.window_seconds = window_seconds
        self.max_clients = max_clients
        self._clock = clock
        self._hits: OrderedDict[str, deque[float]] = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._hits)

    def allow(self, key: str) -> bool:
        now = self._clock()
        cutoff = now - self.window_seconds
        with self._lock:
            self._evict_stale(cutoff)

            hits = self._hits.get(key)
            if hits is None:
                hits = self._hits[key] = deque()
            while hits and hits[0] <= cutoff:
                hits.popleft()
            self._hits.move_to_end(key)

            if len(hits) >= self.limit:
                logger.debug("Rate limit reached for %s", key)
                return False

            hits.append(now)
            while len(self._hits) > self.max_clients:
                evicted, _ = self._hits.popitem(last=False)
                logger.debug("Evicted rate limit window for %s", evicted)
            return True

    def _evict_stale(self, cutoff: float) -> None:
        while self._hits:
            key, hits = next(iter(self._hits.items()))
            if hits and hits[-1] > cutoff:
                break
            del self._hits[key]
