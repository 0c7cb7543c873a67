from __future__ import annotations

from rewardpool.core.fixed_point import SCALE, mul_div
from rewardpool.core.state import ParticipantState
from rewardpool.utils.errors import LedgerInvariantError
# rewardpool/core/ledger.py


def accrued_since_checkpoint(participant: ParticipantState, updated_accumulator: int) -> int:
    delta = updated_accumulator - participant.checkpoint
    if delta < 0:
        raise LedgerInvariantError(
            f"checkpoint={participant.checkpoint} ahead of accumulator={updated_accumulator}"
        )
    return mul_div(participant.contributed, delta, SCALE)


def settle(participant: ParticipantState, updated_accumulator: int) -> int:
    """
    Stored reward after settling against ``updated_accumulator``.

    Pure; the caller writes back stored_reward and checkpoint.
    """
    return participant.stored_reward + accrued_since_checkpoint(participant, updated_accumulator)
