from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Protocol
# rewardpool/core/time.py


def effective_time(now: int, end_time: int) -> int:
    """Clamp ``now`` to the end of the emission window."""
    return min(now, end_time)


class Clock(Protocol):
    def now(self) -> int:
        ...


class SystemClock:
    """Wall-clock epoch seconds."""

    def now(self) -> int:
        return int(time.time())


@dataclass
class ManualClock:
    """
    Deterministic clock for tests and scenario replay.

    - Only moves forward
    - The pool reads it, never mutates it
    """
    ts: int = 0

    def now(self) -> int:
        return self.ts

    def advance(self, seconds: int) -> int:
        if seconds < 0:
            raise ValueError(f"clock cannot move backwards: advance({seconds})")
        self.ts += seconds
        return self.ts

    def set(self, ts: int) -> int:
        if ts < self.ts:
            raise ValueError(f"clock cannot move backwards: {ts} < {self.ts}")
        self.ts = ts
        return self.ts
