from __future__ import annotations

from typing import Dict, List

import pandas as pd

from rewardpool.utils.logger import logs
from rewardpool.core.events import Claimed
from rewardpool.core.time import ManualClock
from rewardpool.observability.metrics import MetricRecorder
from rewardpool.pool.controller import RewardPool
from rewardpool.pool.factory import create_pool
from rewardpool.pool.transfer import InMemoryToken, TokenTransfer
from rewardpool.simulation.result import SimulationResult
from rewardpool.simulation.scenario import Scenario, ScenarioStep
from rewardpool.utils.errors import RewardPoolError
"""
{#!filepath: rewardpool/simulation/runner.py}

Scenario replay (FINAL / FROZEN)

Semantics:
- Time is driven by a ManualClock set to start_time + step.at.
- Tokens live in in-memory balance books; the reward budget is pulled from
  a treasury account when the pool opens.
- Each step is one pool call; a snapshot step only records state.

Invariants:
- The runner never touches pool state directly.
- With continue_on_error, a rejected step is recorded and replay goes on;
  the pool has already rolled it back.
"""

POOL_ACCOUNT = "pool"
TREASURY_ACCOUNT = "treasury"

STEP_COLUMNS = [
    "step", "ts", "at", "op", "actor", "amount",
    "accumulator", "total_contributed", "actor_earned", "error",
]
PARTICIPANT_COLUMNS = [
    "participant", "contributed", "stored_reward", "checkpoint",
    "earned", "claimed", "staking_balance", "reward_balance",
]


class ScenarioRunner:
    def __init__(
        self,
        scenario: Scenario,
        *,
        continue_on_error: bool = False,
        metrics: MetricRecorder | None = None,
    ):
        self.scenario = scenario
        self.continue_on_error = continue_on_error
        self.metrics = metrics if metrics is not None else MetricRecorder()

    @logs.catch("scenario replay failed")
    def run(self) -> SimulationResult:
        sc = self.scenario
        cfg = sc.pool

        clock = ManualClock(ts=sc.start_time)
        staking = InMemoryToken(cfg.staking_token)
        rewards = InMemoryToken(cfg.reward_token)

        for actor, amount in sc.balances.items():
            staking.mint(actor, amount)
        rewards.mint(TREASURY_ACCOUNT, cfg.total_reward)

        pool = create_pool(
            cfg,
            staking_transfer=TokenTransfer(staking, POOL_ACCOUNT),
            reward_transfer=TokenTransfer(rewards, POOL_ACCOUNT),
            clock=clock,
            funder=TREASURY_ACCOUNT,
        )

        logs.info(f"[Scenario] {sc.name} start steps={len(sc.steps)}")

        rows: List[Dict] = []
        for i, step in enumerate(sc.steps):
            clock.set(sc.start_time + step.at)
            error = None

            try:
                self._apply(pool, staking, step)
                self.metrics.incr(f"ops.{step.op}")
            except RewardPoolError as e:
                if not self.continue_on_error:
                    raise
                error = f"{type(e).__name__}: {e}"
                self.metrics.incr("ops.rejected")
                logs.warning(f"[Scenario] step={i} op={step.op} actor={step.actor} rejected: {error}")

            rows.append(
                dict(
                    step=i,
                    ts=clock.now(),
                    at=step.at,
                    op=step.op,
                    actor=step.actor,
                    amount=step.amount,
                    accumulator=pool.get_accumulator(),
                    total_contributed=pool.total_contributed,
                    actor_earned=pool.get_total_earned(step.actor) if step.actor else None,
                    error=error,
                )
            )

        participants = self._participants_frame(pool, staking, rewards)
        summary = self._summarize(pool, participants)

        logs.info(f"[Scenario] {sc.name} done summary={summary}")

        return SimulationResult(
            name=sc.name,
            steps=pd.DataFrame(rows, columns=STEP_COLUMNS, dtype=object),
            participants=participants,
            summary=summary,
        )

    # --------------------------------------------------
    def _apply(self, pool: RewardPool, staking: InMemoryToken, step: ScenarioStep) -> None:
        if step.op == "deposit":
            shortfall = step.amount - staking.balance_of(step.actor)
            if self.scenario.auto_fund and shortfall > 0:
                staking.mint(step.actor, shortfall)
            pool.deposit(step.actor, step.amount)
        elif step.op == "withdraw":
            pool.withdraw(step.actor, step.amount)
        elif step.op == "claim":
            pool.claim(step.actor)
        # snapshot: nothing to apply

    @staticmethod
    def _participants_frame(
        pool: RewardPool,
        staking: InMemoryToken,
        rewards: InMemoryToken,
    ) -> pd.DataFrame:
        claimed: Dict[str, int] = {}
        for ev in pool.events:
            if isinstance(ev, Claimed):
                claimed[ev.participant] = claimed.get(ev.participant, 0) + ev.amount

        rows = []
        for pid in pool.participants():
            p = pool.get_participant_state(pid)
            rows.append(
                dict(
                    participant=pid,
                    contributed=p.contributed,
                    stored_reward=p.stored_reward,
                    checkpoint=p.checkpoint,
                    earned=pool.get_total_earned(pid),
                    claimed=claimed.get(pid, 0),
                    staking_balance=staking.balance_of(pid),
                    reward_balance=rewards.balance_of(pid),
                )
            )

        return pd.DataFrame(rows, columns=PARTICIPANT_COLUMNS).set_index("participant")

    def _summarize(self, pool: RewardPool, participants: pd.DataFrame) -> Dict[str, int]:
        schedule = pool.schedule
        emitted = schedule.reward_rate * (pool.last_time_reward_applicable() - schedule.start_time)
        outstanding = sum(int(v) for v in participants["earned"])
        unattributed = pool.unattributed_reward()

        summary = dict(
            reward_rate=schedule.reward_rate,
            emitted=emitted,
            distributed=pool.total_distributed,
            outstanding=outstanding,
            unattributed=unattributed,
            # floor truncation in the accumulator and ledger
            rounding_dust=emitted - pool.total_distributed - outstanding - unattributed,
            remaining_budget=pool.remaining_reward(),
            total_contributed=pool.total_contributed,
        )
        for name, value in summary.items():
            self.metrics.record(f"pool.{name}", value)
        return summary
