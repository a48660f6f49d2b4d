"""Async rate limiting for RPC endpoints."""

from __future__ import annotations

import asyncio
import time
from collections import deque
from dataclasses import dataclass, field


@dataclass
class RateLimitConfig:
    """Configuration for rate limiting."""

    requests_per_second: float = 10.0
    requests_per_minute: float | None = None
    burst_size: int = 10
    retry_on_429: bool = True
    max_429_retries: int = 3
    backoff_factor: float = 2.0
    base_backoff: float = 1.0
    max_backoff: float = 60.0


@dataclass
class RateLimitState:
    """Tracks rate limit state for one endpoint."""

    request_times: deque[float] = field(default_factory=deque)
    retry_after_until: float = 0.0
    consecutive_429s: int = 0


class AsyncRateLimiter:
    """Sliding-window limiter shared by every call through one gateway."""

    def __init__(self, config: RateLimitConfig) -> None:
        self.config = config
        self._state = RateLimitState()
        self._lock = asyncio.Lock()
        self._semaphore: asyncio.Semaphore | None = None

    async def acquire(self) -> None:
        """Wait until a request is permitted, then record it."""
        if self._semaphore is None:
            self._semaphore = asyncio.Semaphore(self.config.burst_size)

        async with self._semaphore:
            async with self._lock:
                await self._wait_for_permit()
                self._state.request_times.append(time.monotonic())

    async def _wait_for_permit(self) -> None:
        now = time.monotonic()

        # Honour an active 429 backoff first
        if now < self._state.retry_after_until:
            await asyncio.sleep(self._state.retry_after_until - now)
            now = time.monotonic()

        cutoff = now - 60.0
        while self._state.request_times and self._state.request_times[0] < cutoff:
            self._state.request_times.popleft()

        wait_time = max(
            self._window_wait(now, 1.0, self.config.requests_per_second),
            self._window_wait(now, 60.0, self.config.requests_per_minute),
        )
        if wait_time > 0:
            await asyncio.sleep(wait_time)

    def _window_wait(self, now: float, window: float, limit: float | None) -> float:
        if not limit:
            return 0.0
        recent = [t for t in self._state.request_times if t > now - window]
        if len(recent) < limit:
            return 0.0
        return recent[0] + window - now

    def handle_429(self, retry_after: float | None = None) -> float:
        """Record a 429 and return how long to back off."""
        self._state.consecutive_429s += 1

        if retry_after:
            wait_time = retry_after
        else:
            wait_time = min(
                self.config.base_backoff
                * self.config.backoff_factor ** (self._state.consecutive_429s - 1),
                self.config.max_backoff,
            )

        self._state.retry_after_until = time.monotonic() + wait_time
        return wait_time

    def reset_429_state(self) -> None:
        self._state.consecutive_429s = 0

    @property
    def should_retry_429(self) -> bool:
        return (
            self.config.retry_on_429
            and self._state.consecutive_429s < self.config.max_429_retries
        )
