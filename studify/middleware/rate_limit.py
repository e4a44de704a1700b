"""Per-client fixed-window rate limiting"""
import logging
import time
from collections import OrderedDict
from typing import Callable, Optional, Tuple

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

MAX_TRACKED_CLIENTS = 10_000


class FixedWindowRateLimiter:
    """
    Counts requests per key in fixed windows.

    A key's window starts with its first request and is replaced by a new
    one once ``window_seconds`` have elapsed. Windows are kept in start
    order, so expired ones are dropped from the front. When ``max_clients``
    windows are still open, the oldest one is evicted to make room.
    """

    def __init__(
        self,
        max_requests: int = 60,
        window_seconds: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
        max_clients: int = MAX_TRACKED_CLIENTS,
    ):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.max_clients = max_clients
        self._clock = clock
        self._windows: "OrderedDict[str, Tuple[float, int]]" = OrderedDict()

    def allow(self, key: str) -> bool:
        now = self._clock()
        self.prune(now)

        window = self._windows.get(key)
        if window is None or now - window[0] > self.window_seconds:
            self._windows.pop(key, None)
            while len(self._windows) >= self.max_clients:
                self._windows.popitem(last=False)
            self._windows[key] = (now, 1)
            return 1 <= self.max_requests

        start, count = window
        count += 1
        self._windows[key] = (start, count)
        return count <= self.max_requests

    def prune(self, now: Optional[float] = None) -> None:
        """Drop windows that have already expired"""
        if now is None:
            now = self._clock()
        while self._windows:
            start, _ = next(iter(self._windows.values()))
            if now - start <= self.window_seconds:
                break
            self._windows.popitem(last=False)


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Rejects clients that exceed the limiter's budget with 429"""

    def __init__(self, app, limiter: FixedWindowRateLimiter):
        super().__init__(app)
        self.limiter = limiter

    async def dispatch(self, request: Request, call_next):
        client_ip = request.client.host if request.client else "unknown"

        if not self.limiter.allow(client_ip):
            logger.warning(f"Rate limit exceeded for {client_ip}")
            return JSONResponse(status_code=429, content={"error": "Too many requests"})

        return await call_next(request)
