"""
In-memory value transfer adapter (dev/testing).

Dict-backed implementation of ValueTransferPort. Payments land in a single
custody balance; payouts move value from custody to a recipient's external
balance. An optional payout hook runs after each payout has been applied,
which lets tests play the part of a slow or re-entrant downstream receiver.
State lives outside the database, so the service wraps each operation in
savepoint() to undo value moved by an operation that fails.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field

from tierpass.core.ports.value_transfer import (
    InsufficientCustodyError,
    ValueTransferPort,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransferRecord:
    """One movement of value, kept for test assertions."""

    direction: str  # "in" or "out"
    principal: str
    amount: int


@dataclass
class InMemoryValueTransfer:
    """
    In-memory value transfer adapter.

    This adapter satisfies the ValueTransferPort protocol.
    """

    custody: int = 0
    accounts: dict[str, int] = field(default_factory=dict)
    history: list[TransferRecord] = field(default_factory=list)
    on_pay_out: Callable[[str, int], None] | None = None

    def receive(self, payer: str, amount: int) -> None:
        self.custody += amount
        self.history.append(TransferRecord("in", payer, amount))
        logger.debug("InMemoryValueTransfer.receive: payer=%s amount=%d", payer, amount)

    def pay_out(self, recipient: str, amount: int) -> None:
        if amount > self.custody:
            raise InsufficientCustodyError(
                f"Custody holds {self.custody}, cannot pay out {amount}"
            )
        self.custody -= amount
        self.accounts[recipient] = self.accounts.get(recipient, 0) + amount
        self.history.append(TransferRecord("out", recipient, amount))
        logger.debug(
            "InMemoryValueTransfer.pay_out: recipient=%s amount=%d", recipient, amount
        )

        if self.on_pay_out is not None:
            self.on_pay_out(recipient, amount)

    def custody_balance(self) -> int:
        return self.custody

    def balance_of(self, principal: str) -> int:
        return self.accounts.get(principal, 0)

    @contextmanager
    def savepoint(self) -> Iterator[None]:
        """Restore custody, accounts and history if the block raises."""
        custody = self.custody
        accounts = dict(self.accounts)
        mark = len(self.history)
        try:
            yield
        except BaseException:
            self.custody = custody
            self.accounts.clear()
            self.accounts.update(accounts)
            del self.history[mark:]
            raise


# Verify protocol compliance at module load time
def _verify_protocol_compliance() -> None:
    """Verify InMemoryValueTransfer satisfies ValueTransferPort protocol."""
    adapter: ValueTransferPort = InMemoryValueTransfer()
    _ = adapter.custody_balance()


_verify_protocol_compliance()
