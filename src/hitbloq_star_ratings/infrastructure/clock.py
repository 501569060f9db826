"""Wall-clock implementation."""

from __future__ import annotations

import time
from typing_extensions import override

from ..protocols import Clock


class SystemClock(Clock):
    """Clock backed by `time.time()`."""

    @override
    def now(self) -> float:
        return time.time()
