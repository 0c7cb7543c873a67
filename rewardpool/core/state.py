from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict
# rewardpool/core/state.py


@dataclass(frozen=True)
class PoolSchedule:
    """
    Emission schedule, fixed for the pool's lifetime.

    reward_rate = total_reward // duration (truncating)
    end_time    = start_time + duration
    """
    total_reward: int
    duration: int
    start_time: int

    @property
    def reward_rate(self) -> int:
        return self.total_reward // self.duration

    @property
    def end_time(self) -> int:
        return self.start_time + self.duration

    @property
    def emission_budget(self) -> int:
        """What the rate actually emits over the window (<= total_reward)."""
        return self.reward_rate * self.duration


@dataclass
class GlobalState:
    total_contributed: int = 0
    accumulator: int = 0
    last_update_time: int = 0
    total_distributed: int = 0
    # emission that fell into intervals with nobody contributing
    unattributed_reward: int = 0


@dataclass
class ParticipantState:
    contributed: int = 0
    stored_reward: int = 0
    checkpoint: int = 0


@dataclass
class PoolState:
    """
    Everything one pool mutates, passed explicitly through every operation.
    """
    schedule: PoolSchedule
    global_state: GlobalState
    participants: Dict[str, ParticipantState] = field(default_factory=dict)

    @classmethod
    def open(cls, schedule: PoolSchedule) -> "PoolState":
        return cls(
            schedule=schedule,
            global_state=GlobalState(last_update_time=schedule.start_time),
        )

    def participant(self, participant_id: str) -> ParticipantState:
        """Fetch-or-create. Entries are never removed."""
        p = self.participants.get(participant_id)
        if p is None:
            p = ParticipantState()
            self.participants[participant_id] = p
        return p
