"""Token-bucket and per-client request rate limiters."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import Callable

Clock = Callable[[], float]


class TokenBucket:
    """Bucket that refills at ``rate`` tokens per second up to ``capacity``."""

    def __init__(self, rate: float, capacity: int, clock: Clock = time.monotonic) -> None:
        self.rate = rate
        self.capacity = capacity
        self.tokens = float(capacity)
        self._clock = clock
        self._last = clock()

    def take_token(self) -> bool:
        """Refill for the time passed, then take one token if there is one."""
        now = self._clock()
        self.tokens = min(self.tokens + (now - self._last) * self.rate, float(self.capacity))
        self._last = now
        if self.tokens >= 1:
            self.tokens -= 1
            return True
        return False


@dataclass
class _Client:
    bucket: TokenBucket
    last_seen: float


class ClientRateLimiter:
    """One token bucket per client; idle clients are forgotten."""

    def __init__(
        self,
        rps: float,
        burst: int,
        *,
        idle_timeout: float = 180.0,
        sweep_interval: float = 60.0,
        clock: Clock = time.monotonic,
    ) -> None:
        self.rps = rps
        self.burst = burst
        self.idle_timeout = idle_timeout
        self.sweep_interval = sweep_interval
        self._clock = clock
        self._clients: dict[str, _Client] = {}
        self._lock = threading.Lock()
        self._last_sweep = clock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._clients)

    def __contains__(self, client: object) -> bool:
        with self._lock:
            return client in self._clients

    def allow(self, client: str) -> bool:
        """Tell whether ``client`` may make a request now."""
        now = self._clock()
        if now - self._last_sweep >= self.sweep_interval:
            self.cleanup()
        with self._lock:
            entry = self._clients.get(client)
            if entry is None:
                entry = _Client(TokenBucket(self.rps, self.burst, self._clock), now)
                self._clients[client] = entry
            entry.last_seen = now
            return entry.bucket.take_token()

    def cleanup(self) -> None:
        """Forget clients not seen for longer than the idle timeout."""
        now = self._clock()
        with self._lock:
            self._last_sweep = now
            for name in [n for n, c in self._clients.items() if now - c.last_seen > self.idle_timeout]:
                del self._clients[name]


class IntervalLimiter:
    """Allow each client at most one request per ``1 / rps`` seconds."""

    def __init__(self, rps: float = 10, clock: Clock = time.monotonic) -> None:
        self.rps = rps
        self._clock = clock
        self._last: dict[str, float] = {}
        self._lock = threading.Lock()

    def allow(self, client: str) -> bool:
        """Tell whether ``client`` may make a request now."""
        now = self._clock()
        with self._lock:
            last = self._last.get(client)
            if last is not None and now - last < 1.0 / self.rps:
                return False
            self._last[client] = now
            return True