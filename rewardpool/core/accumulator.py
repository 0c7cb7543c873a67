from __future__ import annotations

from rewardpool.core.fixed_point import SCALE, mul_div
from rewardpool.core.state import GlobalState, PoolSchedule
from rewardpool.core.time import effective_time
from rewardpool.utils.errors import ClockError
"""
{#!filepath: rewardpool/core/accumulator.py}

AccumulatorEngine (FINAL / FROZEN)

Semantics:
- accumulator(t) = accumulator(last) + elapsed * rate * SCALE / total_contributed
- elapsed is measured on effective time, so nothing accrues after end_time.
- An interval with total_contributed == 0 adds nothing; its emission is not
  carried forward.

Invariants:
- Pure: never mutates GlobalState (SyncOperation commits).
- Result >= global_state.accumulator.
"""


def elapsed_since_update(global_state: GlobalState, schedule: PoolSchedule, now: int) -> int:
    capped = effective_time(now, schedule.end_time)
    elapsed = capped - global_state.last_update_time
    if elapsed < 0:
        raise ClockError(
            f"now={now} is before last_update_time={global_state.last_update_time}"
        )
    return elapsed


def advance(global_state: GlobalState, schedule: PoolSchedule, now: int) -> int:
    elapsed = elapsed_since_update(global_state, schedule, now)

    if global_state.total_contributed == 0:
        return global_state.accumulator

    return global_state.accumulator + mul_div(
        elapsed * schedule.reward_rate,
        SCALE,
        global_state.total_contributed,
    )


def pending_unattributed(global_state: GlobalState, schedule: PoolSchedule, now: int) -> int:
    """Emission since the last update that nobody is contributing to receive."""
    if global_state.total_contributed != 0:
        return 0
    return elapsed_since_update(global_state, schedule, now) * schedule.reward_rate
