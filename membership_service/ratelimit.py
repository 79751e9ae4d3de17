"""
Fixed-window counter per client address: at most `max_requests` hits per
`window_seconds`, after which requests are rejected until the window rolls over.
"""

import logging
import math
import time
from threading import Lock

from membership_service.exceptions import RateLimitExceeded

logger = logging.getLogger(__name__)


class FixedWindowRateLimiter:
    def __init__(self, max_requests=100, window_seconds=15 * 60, clock=time.monotonic):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.clock = clock
        self._windows = {}
        self._lock = Lock()

    def hit(self, key):
        """
        Count one request for `key`.

        Raises:
            RateLimitExceeded: if `key` has used up its window.
        """
        now = self.clock()
        with self._lock:
            self._evict_expired(now)
            started, count = self._windows.get(key, (now, 0))
            if count >= self.max_requests:
                retry_after = max(1, math.ceil(started + self.window_seconds - now))
                logger.warning("Rate limit exceeded for %s, retry after %ss", key, retry_after)
                raise RateLimitExceeded(retry_after=retry_after)
            self._windows[key] = (started, count + 1)
            return self.max_requests - count - 1

    def _evict_expired(self, now):
        expired = [
            key for key, (started, _count) in self._windows.items()
            if now - started >= self.window_seconds
        ]
        for key in expired:
            del self._windows[key]
