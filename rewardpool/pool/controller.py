from __future__ import annotations

from contextlib import contextmanager
from dataclasses import replace
from typing import Callable, List

from rewardpool.utils.logger import logs
from rewardpool.core import accumulator, ledger
from rewardpool.core.events import Claimed, Deposited, PoolEvent, Withdrawn
from rewardpool.core.fixed_point import check_uint
from rewardpool.core.state import ParticipantState, PoolSchedule, PoolState
from rewardpool.core.sync import sync
from rewardpool.core.time import Clock, effective_time
from rewardpool.pool.guard import EntryGuard, non_reentrant
from rewardpool.pool.transfer import AssetTransfer
from rewardpool.utils.errors import (
    InsufficientContribution,
    NoEarnedReward,
    ZeroAmount,
)
"""
{#!filepath: rewardpool/pool/controller.py}

PoolController (FINAL / FROZEN)

Every mutating entry point runs as one transaction:

    validate -> sync -> mutate balances -> external transfer -> event

Invariants:
- sync runs exactly once, before any balance mutation.
- The external transfer happens after all internal state is written.
- Any exception restores the global state and the acting participant.
- Subscribers are notified after the guard is released, so they may call
  back into the pool. A failing subscriber is logged and skipped; it never
  turns a committed operation into a raised one.
"""

Subscriber = Callable[[PoolEvent], None]


class RewardPool:
    """
    Single-pool time-weighted reward accrual.

    Contract:
    - clock yields integer epoch seconds and never moves backwards
    - staking_transfer moves the contributed resource
    - reward_transfer moves the reward resource

    events is the full, unbounded history of committed operations, kept for
    tests and scenario replay.
    """

    def __init__(
        self,
        *,
        state: PoolState,
        clock: Clock,
        staking_transfer: AssetTransfer,
        reward_transfer: AssetTransfer,
        staking_token: str = "",
        reward_token: str = "",
    ):
        self.state = state
        self.clock = clock
        self.staking_transfer = staking_transfer
        self.reward_transfer = reward_transfer
        self.staking_token = staking_token
        self.reward_token = reward_token

        self.guard = EntryGuard()
        self.events: List[PoolEvent] = []
        self._subscribers: List[Subscriber] = []

    # --------------------------------------------------
    # Entry points
    # --------------------------------------------------
    def deposit(self, caller: str, amount: int) -> None:
        self._require_amount(amount)
        self._notify(self._deposit(caller, amount))

    def withdraw(self, caller: str, amount: int) -> None:
        self._require_amount(amount)
        self._notify(self._withdraw(caller, amount))

    def claim(self, caller: str) -> int:
        event = self._claim(caller)
        self._notify(event)
        return event.amount

    @non_reentrant
    def _deposit(self, caller: str, amount: int) -> Deposited:
        now = self.clock.now()
        g = self.state.global_state

        with self._transaction("deposit", caller):
            p = sync(self.state, caller, now)
            p.contributed += amount
            g.total_contributed = check_uint(g.total_contributed + amount, "total_contributed")

            self.staking_transfer.transfer_in(caller, amount)

        logs.info(
            f"[Pool] deposit participant={caller} amount={amount} "
            f"total_contributed={g.total_contributed} acc={g.accumulator} ts={now}"
        )
        return self._record(Deposited(ts=now, participant=caller, amount=amount))

    @non_reentrant
    def _withdraw(self, caller: str, amount: int) -> Withdrawn:
        now = self.clock.now()
        g = self.state.global_state

        with self._transaction("withdraw", caller):
            p = sync(self.state, caller, now)
            if amount > p.contributed:
                raise InsufficientContribution(
                    f"{caller} contributed {p.contributed}, cannot withdraw {amount}"
                )
            p.contributed -= amount
            g.total_contributed -= amount

            self.staking_transfer.transfer_out(caller, amount)

        logs.info(
            f"[Pool] withdraw participant={caller} amount={amount} "
            f"total_contributed={g.total_contributed} acc={g.accumulator} ts={now}"
        )
        return self._record(Withdrawn(ts=now, participant=caller, amount=amount))

    @non_reentrant
    def _claim(self, caller: str) -> Claimed:
        now = self.clock.now()
        g = self.state.global_state

        with self._transaction("claim", caller):
            if self._total_earned_at(caller, now) == 0:
                raise NoEarnedReward(f"{caller} has no reward to claim")

            p = sync(self.state, caller, now)
            reward = p.stored_reward
            p.stored_reward = 0
            g.total_distributed += reward

            self.reward_transfer.transfer_out(caller, reward)

        logs.info(
            f"[Pool] claim participant={caller} amount={reward} "
            f"total_distributed={g.total_distributed} ts={now}"
        )
        return self._record(Claimed(ts=now, participant=caller, amount=reward))

    # --------------------------------------------------
    # Queries (never commit)
    # --------------------------------------------------
    @property
    def schedule(self) -> PoolSchedule:
        return self.state.schedule

    @property
    def total_contributed(self) -> int:
        return self.state.global_state.total_contributed

    @property
    def total_distributed(self) -> int:
        return self.state.global_state.total_distributed

    def get_accumulator(self) -> int:
        with self.guard.reading():
            return accumulator.advance(self.state.global_state, self.schedule, self.clock.now())

    def get_total_earned(self, participant_id: str) -> int:
        with self.guard.reading():
            return self._total_earned_at(participant_id, self.clock.now())

    def get_participant_state(self, participant_id: str) -> ParticipantState:
        with self.guard.reading():
            p = self.state.participants.get(participant_id)
            return replace(p) if p is not None else ParticipantState()

    def participants(self) -> List[str]:
        with self.guard.reading():
            return list(self.state.participants)

    def last_time_reward_applicable(self) -> int:
        return effective_time(self.clock.now(), self.schedule.end_time)

    def remaining_reward(self) -> int:
        return self.schedule.total_reward - self.total_distributed

    def unattributed_reward(self) -> int:
        """Emission lost to zero-contribution intervals, including the pending one."""
        with self.guard.reading():
            g = self.state.global_state
            return g.unattributed_reward + accumulator.pending_unattributed(
                g, self.schedule, self.clock.now()
            )

    # --------------------------------------------------
    # Notifications
    # --------------------------------------------------
    def subscribe(self, callback: Subscriber) -> None:
        self._subscribers.append(callback)

    def _record(self, event: PoolEvent) -> PoolEvent:
        self.events.append(event)
        return event

    def _notify(self, event: PoolEvent) -> None:
        for callback in list(self._subscribers):
            try:
                callback(event)
            except Exception:
                logs.exception(f"[Pool] subscriber failed event={event}")

    # --------------------------------------------------
    # Internals
    # --------------------------------------------------
    def _total_earned_at(self, participant_id: str, now: int) -> int:
        p = self.state.participants.get(participant_id)
        if p is None:
            return 0
        updated = accumulator.advance(self.state.global_state, self.schedule, now)
        return ledger.settle(p, updated)

    @staticmethod
    def _require_amount(amount: int) -> None:
        check_uint(amount, "amount")
        if amount == 0:
            raise ZeroAmount("amount must be greater than zero")

    @contextmanager
    def _transaction(self, op: str, participant_id: str):
        """
        All-or-nothing scope for one operation.

        Only the global state and the acting participant can change inside
        an operation, so those two are the whole snapshot.
        """
        participants = self.state.participants
        g_before = replace(self.state.global_state)
        p_before = participants.get(participant_id)
        p_before = replace(p_before) if p_before is not None else None

        try:
            yield
        except Exception as e:
            self.state.global_state = g_before
            if p_before is None:
                participants.pop(participant_id, None)
            else:
                participants[participant_id] = p_before

            logs.warning(
                f"[Pool] {op} rolled back participant={participant_id} "
                f"reason={type(e).__name__}: {e}"
            )
            raise
