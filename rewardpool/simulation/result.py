# rewardpool/simulation/result.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

import pandas as pd


@dataclass(frozen=True)
class SimulationResult:
    """
    SimulationResult (FINAL / FROZEN)

    Immutable facts from one scenario replay, used for:
      - CLI reports
      - regression tests
    """

    name: str

    # one row per scenario step, in replay order
    steps: pd.DataFrame

    # one row per participant ever seen by the pool
    participants: pd.DataFrame

    # emitted / distributed / outstanding / unattributed / rounding_dust ...
    summary: Dict[str, int]

    def earned(self, participant: str) -> int:
        """Claimed plus still-claimable reward at the end of the replay."""
        row = self.participants.loc[participant]
        return int(row["claimed"]) + int(row["earned"])
