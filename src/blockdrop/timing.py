"""Gravity timer driven by host timestamps."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class DropTimer:
    """Accumulate elapsed time and report when a drop step is due.

    ``interval`` is fixed for the lifetime of the timer.  The first timestamp
    only establishes the baseline.
    """

    interval: float
    accumulated: float = 0.0
    last_ts: Optional[float] = None

    def advance(self, timestamp: float, running: bool = True) -> bool:
        """Advance to ``timestamp`` and return ``True`` if a drop step is due.

        While not running the baseline still moves forward but no time is
        accumulated, so resuming does not release a burst of drops.
        """

        if self.last_ts is None:
            self.last_ts = timestamp
        delta = timestamp - self.last_ts
        self.last_ts = timestamp
        if not running:
            return False
        self.accumulated += delta
        if self.accumulated > self.interval:
            self.accumulated = 0.0
            return True
        return False

    def restart_count(self) -> None:
        """Zero the accumulator after any drop step."""

        self.accumulated = 0.0

    def reset(self) -> None:
        """Forget the baseline and the accumulated time."""

        self.accumulated = 0.0
        self.last_ts = None
