# rewardpool/utils/errors.py


class UserInputError(RuntimeError):
    """
    Raised for invalid user-provided input (scenario files, CLI arguments).
    Should NOT print traceback.
    """


class RewardPoolError(RuntimeError):
    """Base class for every failure raised by a pool operation."""


# -------------------------
# Precondition failures (caller may retry with other arguments)
# -------------------------
class ZeroAmount(RewardPoolError):
    """deposit / withdraw called with amount 0."""


class InvalidAmount(RewardPoolError):
    """Amount is not an int in [0, 2**256)."""


class InsufficientContribution(RewardPoolError):
    """withdraw amount exceeds the participant's contributed balance."""


class NoEarnedReward(RewardPoolError):
    """claim called while the participant has earned exactly nothing."""


# -------------------------
# Execution failures
# -------------------------
class ReentrantCall(RewardPoolError):
    """A guarded entry point was entered again before the first call returned."""


class TransferError(RewardPoolError):
    """The asset-transfer collaborator refused or failed a transfer."""


class ClockError(RewardPoolError):
    """The clock reported a time earlier than the last accumulator update."""


class LedgerInvariantError(RewardPoolError):
    """A participant checkpoint is ahead of the global accumulator."""


# -------------------------
# Fatal arithmetic
# -------------------------
class FixedPointOverflow(ArithmeticError):
    """A fixed-point result does not fit in 256 bits."""
