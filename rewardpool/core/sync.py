from __future__ import annotations

from rewardpool.core import accumulator, ledger
from rewardpool.core.state import ParticipantState, PoolState
from rewardpool.core.time import effective_time
"""
{#!filepath: rewardpool/core/sync.py}

SyncOperation (FINAL / FROZEN)

Runs exactly once before any balance mutation.

Order:
  1. advance the global accumulator to effective now and commit it
  2. settle the acting participant against that committed value

Settling before advancing would credit the participant against a stale
accumulator and lose everything accrued since the last global update.
"""


def sync_global(state: PoolState, now: int) -> int:
    g = state.global_state
    schedule = state.schedule

    unattributed = accumulator.pending_unattributed(g, schedule, now)
    updated = accumulator.advance(g, schedule, now)

    g.accumulator = updated
    g.last_update_time = effective_time(now, schedule.end_time)
    g.unattributed_reward += unattributed
    return updated


def sync(state: PoolState, participant_id: str, now: int) -> ParticipantState:
    # 🔒 FROZEN: global first, participant second
    updated = sync_global(state, now)

    p = state.participant(participant_id)
    p.stored_reward = ledger.settle(p, updated)
    p.checkpoint = updated
    return p
