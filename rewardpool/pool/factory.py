#!filepath: rewardpool/pool/factory.py
from __future__ import annotations

from typing import Optional

from rewardpool.utils.logger import logs
from rewardpool.config.pool_config import PoolConfig
from rewardpool.core.state import PoolState
from rewardpool.core.time import Clock, SystemClock
from rewardpool.pool.controller import RewardPool
from rewardpool.pool.transfer import AssetTransfer


def create_pool(
    cfg: PoolConfig,
    *,
    staking_transfer: AssetTransfer,
    reward_transfer: AssetTransfer,
    clock: Optional[Clock] = None,
    funder: Optional[str] = None,
) -> RewardPool:
    """
    Open a pool whose emission window starts at the clock's current time.

    When ``funder`` is given, the whole reward budget is pulled from it
    through ``reward_transfer`` before the pool is returned; a failed pull
    means no pool.
    """
    clock = clock if clock is not None else SystemClock()
    schedule = cfg.schedule(start_time=clock.now())

    if funder is not None:
        reward_transfer.transfer_in(funder, cfg.total_reward)

    pool = RewardPool(
        state=PoolState.open(schedule),
        clock=clock,
        staking_transfer=staking_transfer,
        reward_transfer=reward_transfer,
        staking_token=cfg.staking_token,
        reward_token=cfg.reward_token,
    )

    logs.info(
        f"[Pool] opened staking={cfg.staking_token} reward={cfg.reward_token} "
        f"total_reward={cfg.total_reward} rate={schedule.reward_rate}/s "
        f"window=[{schedule.start_time}, {schedule.end_time}]"
    )
    return pool
