#!filepath: rewardpool/config/pool_config.py
from pydantic import BaseModel, Field, model_validator

from rewardpool.core.fixed_point import UINT256_MAX
from rewardpool.core.state import PoolSchedule


class PoolConfig(BaseModel):
    """
    PoolConfig (FROZEN)

    Accepted once at pool creation; the schedule derived from it never changes.
    """

    model_config = {"frozen": True}

    staking_token: str = Field(..., min_length=1)
    reward_token: str = Field(..., min_length=1)

    # whole reward budget, in reward-token base units
    total_reward: int = Field(..., gt=0)

    # emission window, seconds
    duration: int = Field(..., gt=0)

    @model_validator(mode="after")
    def _check_budget(self) -> "PoolConfig":
        if self.total_reward > UINT256_MAX:
            raise ValueError(f"total_reward out of uint256 range: {self.total_reward}")
        if self.total_reward // self.duration == 0:
            raise ValueError(
                f"total_reward={self.total_reward} over duration={self.duration} "
                f"truncates to a zero reward rate"
            )
        return self

    def schedule(self, start_time: int) -> PoolSchedule:
        return PoolSchedule(
            total_reward=self.total_reward,
            duration=self.duration,
            start_time=start_time,
        )
