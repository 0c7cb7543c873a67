# tests/conftest.py
from __future__ import annotations

import pytest
from loguru import logger

from rewardpool.config.pool_config import PoolConfig
from rewardpool.core.time import ManualClock
from rewardpool.pool.factory import create_pool
from rewardpool.pool.transfer import InMemoryToken, TokenTransfer

START = 1_000_000

# 1e21 over 1000s -> 1e18 per second
TOTAL_REWARD = 10 ** 21
DURATION = 1_000


@pytest.fixture(autouse=True)
def disable_file_logger():
    logger.remove()
    logger.add(lambda msg: None)
    yield


@pytest.fixture
def pool_cfg() -> PoolConfig:
    return PoolConfig(
        staking_token="STK",
        reward_token="RWD",
        total_reward=TOTAL_REWARD,
        duration=DURATION,
    )


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock(ts=START)


@pytest.fixture
def staking() -> InMemoryToken:
    token = InMemoryToken("STK")
    for who in ("alice", "bob", "carol"):
        token.mint(who, 10 ** 30)
    return token


@pytest.fixture
def rewards() -> InMemoryToken:
    token = InMemoryToken("RWD")
    token.mint("treasury", TOTAL_REWARD)
    return token


@pytest.fixture
def make_pool(pool_cfg, clock, staking, rewards):
    """
    Factory fixture for a funded RewardPool opened at START.

    Usage:
        pool = make_pool()
        pool = make_pool(staking_hook=callback)
    """

    def _make(staking_hook=None, cfg: PoolConfig | None = None):
        return create_pool(
            cfg or pool_cfg,
            staking_transfer=TokenTransfer(staking, "pool", on_transfer=staking_hook),
            reward_transfer=TokenTransfer(rewards, "pool"),
            clock=clock,
            funder="treasury",
        )

    return _make


@pytest.fixture
def pool(make_pool):
    return make_pool()


@pytest.fixture
def at(clock):
    """Move the clock to START + offset."""

    def _at(offset: int) -> int:
        return clock.set(START + offset)

    return _at
