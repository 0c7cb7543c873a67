#!filepath: rewardpool/pool/transfer.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, Protocol

from rewardpool.core.fixed_point import check_uint
from rewardpool.utils.errors import TransferError


class AssetTransfer(Protocol):
    """
    Collaborator boundary for moving one resource in and out of the pool.

    Both calls are atomic: they either complete or raise TransferError
    without moving anything.
    """

    def transfer_in(self, sender: str, amount: int) -> None:
        ...

    def transfer_out(self, recipient: str, amount: int) -> None:
        ...


@dataclass
class InMemoryToken:
    """Balance book for a single token symbol."""

    symbol: str
    balances: Dict[str, int] = field(default_factory=dict)

    def balance_of(self, account: str) -> int:
        return self.balances.get(account, 0)

    def mint(self, account: str, amount: int) -> None:
        check_uint(amount, "amount")
        self.balances[account] = self.balance_of(account) + amount

    def transfer(self, sender: str, recipient: str, amount: int) -> None:
        check_uint(amount, "amount")
        have = self.balance_of(sender)
        if amount > have:
            raise TransferError(
                f"{self.symbol}: {sender} has {have}, cannot send {amount} to {recipient}"
            )
        self.balances[sender] = have - amount
        self.balances[recipient] = self.balance_of(recipient) + amount

    @property
    def total_supply(self) -> int:
        return sum(self.balances.values())


class TokenTransfer:
    """
    AssetTransfer over an InMemoryToken, with the pool as a named account.

    on_transfer runs after a successful move; tests use it to call back
    into the pool the way a hostile token contract would.
    """

    def __init__(
        self,
        token: InMemoryToken,
        pool_account: str,
        on_transfer: Optional[Callable[[str, str, int], None]] = None,
    ):
        self.token = token
        self.pool_account = pool_account
        self.on_transfer = on_transfer

    def transfer_in(self, sender: str, amount: int) -> None:
        self._move(sender, self.pool_account, amount)

    def transfer_out(self, recipient: str, amount: int) -> None:
        self._move(self.pool_account, recipient, amount)

    def _move(self, sender: str, recipient: str, amount: int) -> None:
        self.token.transfer(sender, recipient, amount)
        if self.on_transfer is None:
            return
        try:
            self.on_transfer(sender, recipient, amount)
        except Exception:
            # the hook failed: undo the move so the transfer stays all-or-nothing
            self.token.transfer(recipient, sender, amount)
            raise
