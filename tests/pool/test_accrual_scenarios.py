#!filepath: tests/pool/test_accrual_scenarios.py
"""
End-to-end accrual properties on a funded pool (rate r = 1e18 / s).
"""
import random

import pytest

from rewardpool.utils.errors import NoEarnedReward, RewardPoolError


def test_proportional_split(pool, at):
    """
    A 100 @ t0, B 300 @ t10, check at t20
    A = 10r + 10r*100/400, B = 10r*300/400, A + B = 20r
    """
    r = pool.schedule.reward_rate

    at(0)
    pool.deposit("alice", 100)
    at(10)
    pool.deposit("bob", 300)
    at(20)

    a = pool.get_total_earned("alice")
    b = pool.get_total_earned("bob")

    assert a == 10 * r + 10 * r * 100 // 400
    assert b == 10 * r * 300 // 400
    assert abs((a + b) - 20 * r) <= 2


def test_gap_scenario(pool, at):
    """
    A 100 @0 out @30, nobody @30-40, B 200 @40, C 300 @70, check at t100
    """
    r = pool.schedule.reward_rate

    at(0)
    pool.deposit("alice", 100)
    at(30)
    pool.withdraw("alice", 100)
    at(40)
    pool.deposit("bob", 200)
    at(70)
    pool.deposit("carol", 300)
    at(100)

    assert pool.get_total_earned("alice") == 30 * r
    assert pool.get_total_earned("bob") == 30 * r + 30 * r * 200 // 500
    assert pool.get_total_earned("carol") == 30 * r * 300 // 500

    # the empty 10s is lost, not rolled forward
    assert pool.unattributed_reward() == 10 * r


def test_uneven_split_loses_at_most_a_few_units(pool, at):
    r = pool.schedule.reward_rate

    at(0)
    pool.deposit("alice", 3)
    at(7)
    pool.deposit("bob", 7)
    at(13)
    pool.deposit("carol", 11)
    at(29)

    earned = sum(pool.get_total_earned(p) for p in ("alice", "bob", "carol"))
    assert 0 <= 29 * r - earned <= 3


def test_withdraw_preserves_rewards(pool, at, rewards):
    r = pool.schedule.reward_rate

    at(0)
    pool.deposit("alice", 100)
    at(50)
    pool.withdraw("alice", 100)

    assert pool.get_participant_state("alice").stored_reward == 50 * r

    at(80)
    assert pool.get_total_earned("alice") == 50 * r

    paid = pool.claim("alice")

    assert paid == 50 * r
    assert rewards.balance_of("alice") == 50 * r


def test_claim_idempotence(pool, at):
    at(0)
    pool.deposit("alice", 100)
    at(10)

    pool.claim("alice")

    assert pool.get_total_earned("alice") == 0
    with pytest.raises(NoEarnedReward):
        pool.claim("alice")


def test_freeze_after_end(pool, at):
    at(0)
    pool.deposit("alice", 100)

    at(pool.schedule.duration)
    frozen = pool.get_accumulator()

    at(pool.schedule.duration + 10)
    assert pool.get_accumulator() == frozen
    at(pool.schedule.duration * 5)
    assert pool.get_accumulator() == frozen

    assert pool.get_total_earned("alice") == pool.schedule.emission_budget


def test_full_window_pays_out_within_budget(pool, at):
    at(0)
    pool.deposit("alice", 1)
    pool.deposit("bob", 2)
    at(pool.schedule.duration * 2)

    pool.claim("alice")
    pool.claim("bob")

    assert pool.total_distributed <= pool.schedule.total_reward
    assert pool.schedule.emission_budget - pool.total_distributed <= 2
    assert pool.remaining_reward() == pool.schedule.total_reward - pool.total_distributed


def test_zero_pool_interval_is_noop(pool, at):
    at(0)
    pool.deposit("alice", 100)
    at(10)
    pool.withdraw("alice", 100)

    before = pool.get_accumulator()
    at(60)
    assert pool.get_accumulator() == before


def test_deposit_after_end_earns_nothing(pool, at):
    at(pool.schedule.duration + 1)
    pool.deposit("alice", 100)
    at(pool.schedule.duration + 500)

    assert pool.get_total_earned("alice") == 0
    with pytest.raises(NoEarnedReward):
        pool.claim("alice")


def test_random_interleaving_keeps_invariants(pool, at):
    """
    Contract:
    - accumulator never decreases
    - sum(contributed) == total_contributed, exactly
    - checkpoint <= accumulator for everyone
    - distributed never exceeds the budget
    """
    rng = random.Random(7)
    actors = ["alice", "bob", "carol"]
    t = 0
    last_acc = pool.get_accumulator()

    for _ in range(400):
        t += rng.choice([0, 0, 1, 3, 17])
        at(t)

        actor = rng.choice(actors)
        op = rng.choice(["deposit", "deposit", "withdraw", "claim"])
        try:
            if op == "deposit":
                pool.deposit(actor, rng.randint(1, 10 ** 6))
            elif op == "withdraw":
                held = pool.get_participant_state(actor).contributed
                pool.withdraw(actor, rng.randint(1, max(held, 1)))
            else:
                pool.claim(actor)
        except RewardPoolError:
            pass

        acc = pool.get_accumulator()
        assert acc >= last_acc
        last_acc = acc

        states = [pool.get_participant_state(p) for p in pool.participants()]
        assert sum(s.contributed for s in states) == pool.total_contributed
        assert all(s.checkpoint <= acc for s in states)
        assert pool.total_distributed <= pool.schedule.total_reward
