"""Request pacing for the Hitbloq API.

Two independent limits, both off by default: a minimum gap between consecutive
requests, and a cap on requests inside any sliding 60-second window.

Usage example:
    from hitbloq_star_ratings.infrastructure.resilience import RateLimiter

    rate_limiter = RateLimiter(max_rpm=120, min_delay_seconds=0.25)
    rate_limiter.wait_if_needed()
"""

from __future__ import annotations

import time
from collections import deque
from dataclasses import dataclass, field
from typing_extensions import override

from ..protocols import RateLimiter as RateLimiterProtocol

WINDOW_SECONDS = 60.0


def _empty_window() -> deque[float]:
    return deque()


@dataclass
class RateLimiter(RateLimiterProtocol):
    """Sliding-window request pacer.

    `max_rpm <= 0` disables the window cap; `min_delay_seconds <= 0` disables the gap.
    """

    max_rpm: int = 0
    min_delay_seconds: float = 0.0
    sent: deque[float] = field(default_factory=_empty_window, init=False)
    last_sent: float | None = field(default=None, init=False)

    def _expire(self, now: float) -> None:
        while self.sent and now - self.sent[0] >= WINDOW_SECONDS:
            self.sent.popleft()

    @override
    def wait_if_needed(self) -> None:
        now = time.monotonic()

        if self.last_sent is not None:
            gap = self.min_delay_seconds - (now - self.last_sent)
            if gap > 0:
                time.sleep(gap)
                now = time.monotonic()

        if self.max_rpm > 0:
            self._expire(now)
            if len(self.sent) >= self.max_rpm:
                time.sleep(WINDOW_SECONDS - (now - self.sent[0]))
                now = time.monotonic()
                self._expire(now)
            self.sent.append(now)

        self.last_sent = now
