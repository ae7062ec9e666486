"""
Wall-clock budget for anytime searches.

The best-first strategies check `expired()` once per dequeued node and stop
with whatever they have found so far. The clock is injectable so tests can
drive expiry deterministically.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable, Optional
import time


@dataclass
class TimeBudget:
    """
    Tracks elapsed time against an optional limit.

    Attributes:
        limit: Seconds allowed per search (None = unlimited)
        clock: Monotonic clock returning seconds
    """

    limit: Optional[float] = None
    clock: Callable[[], float] = time.perf_counter

    started_at: float = field(init=False, default=0.0)

    # Statistics for analysis
    checks: int = field(init=False, default=0)
    expirations: int = field(init=False, default=0)

    def start(self) -> TimeBudget:
        """Start (or restart) the budget. Returns self for chaining."""
        self.started_at = self.clock()
        self.checks = 0
        self.expirations = 0
        return self

    @property
    def elapsed(self) -> float:
        return self.clock() - self.started_at

    @property
    def remaining(self) -> float:
        if self.limit is None:
            return float('inf')
        return max(0.0, self.limit - self.elapsed)

    def expired(self) -> bool:
        """True once more than `limit` seconds have passed since `start()`."""
        self.checks += 1
        if self.limit is None:
            return False
        if self.elapsed > self.limit:
            self.expirations += 1
            return True
        return False

    def stats(self) -> dict:
        """Return statistics about the last search."""
        return {
            'limit': self.limit,
            'elapsed': self.elapsed,
            'checks': self.checks,
            'expirations': self.expirations,
        }
