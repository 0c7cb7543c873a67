from __future__ import annotations
from dataclasses import dataclass


# -------------------------
# Base
# -------------------------
@dataclass(frozen=True)
class PoolEvent:
    ts: int
    participant: str
    amount: int


# -------------------------
# Contribution
# -------------------------
@dataclass(frozen=True)
class Deposited(PoolEvent):
    pass


@dataclass(frozen=True)
class Withdrawn(PoolEvent):
    pass


# -------------------------
# Reward
# -------------------------
@dataclass(frozen=True)
class Claimed(PoolEvent):
    pass
