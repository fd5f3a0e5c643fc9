"""Account data model."""

import hmac
import threading
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from .transaction import Transaction


@dataclass(frozen=True)
class AccountSummary:
    """Read-only view of an account for display."""

    account_no: str
    name: str
    balance: Decimal


@dataclass
class Account:
    """Represents a bank account and its transaction log."""

    account_no: str
    name: str
    pin: str = field(repr=False)
    balance: Decimal
    history: list[Transaction] = field(default_factory=list, repr=False)
    lock: threading.RLock = field(
        default_factory=threading.RLock, repr=False, compare=False
    )

    def validate_pin(self, pin: str) -> bool:
        """Check a PIN against the stored one without side effects."""
        if not isinstance(pin, str):
            return False
        return hmac.compare_digest(self.pin.encode(), pin.encode())

    def record(self, txn: Transaction) -> None:
        """Append a transaction to the history."""
        self.history.append(txn)

    def stamp(self, now: datetime) -> datetime:
        """
        Return a timestamp for the next record.

        Never earlier than the last recorded one, so history time stays
        non-decreasing if the clock steps back.
        """
        if self.history and now < self.history[-1].time:
            return self.history[-1].time
        return now

    def summary(self) -> AccountSummary:
        """Snapshot of number, holder and balance."""
        return AccountSummary(
            account_no=self.account_no, name=self.name, balance=self.balance
        )
