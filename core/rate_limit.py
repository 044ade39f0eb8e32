import threading
import time

from fastapi import Request

from core.config import settings
from core.errors import RateLimited


class FixedWindowRateLimiter:
    """
    Counts hits per key in fixed windows.

    A key's window opens on its first hit and lasts ``window_seconds``; up to
    ``limit`` hits are allowed inside it. Thread-safe.
    """

    def __init__(self, limit: int, window_seconds: int, clock=time.monotonic):
        self.limit = limit
        self.window_seconds = window_seconds
        self.clock = clock
        self._windows: dict[str, tuple[float, int]] = {}
        self._lock = threading.Lock()

    def hit(self, key: str) -> bool:
        """Record one request for ``key``; return False when over the limit."""
        now = self.clock()
        with self._lock:
            self._evict(now)
            start, count = self._windows.get(key, (now, 0))
            if now - start >= self.window_seconds:
                start, count = now, 0
            if count >= self.limit:
                self._windows[key] = (start, count)
                return False
            self._windows[key] = (start, count + 1)
            return True

    def reset(self) -> None:
        with self._lock:
            self._windows.clear()

    def _evict(self, now: float) -> None:
        # Called under lock
        expired = [k for k, (start, _) in self._windows.items() if now - start >= self.window_seconds]
        for k in expired:
            del self._windows[k]


def client_address(request: Request) -> str:
    """Best-effort client address, preferring proxy headers."""
    for header in ("cf-connecting-ip", "x-forwarded-for", "x-real-ip"):
        value = request.headers.get(header)
        if value:
            return value.split(",")[0].strip()
    if request.client:
        return request.client.host
    return "unknown"


otp_limiter = FixedWindowRateLimiter(
    limit=settings.OTP_RATE_LIMIT,
    window_seconds=settings.OTP_RATE_LIMIT_WINDOW_SECONDS,
)


def otp_rate_limit(request: Request) -> None:
    if not otp_limiter.hit(client_address(request)):
        raise RateLimited()
