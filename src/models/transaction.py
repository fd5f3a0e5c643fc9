"""Transaction data model."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum


class TransactionKind(str, Enum):
    """Kinds of ledger events."""

    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    TRANSFER_OUT = "transfer_out"
    TRANSFER_IN = "transfer_in"
    BALANCE_INQUIRY = "balance_inquiry"
    PIN_CHANGE = "pin_change"


_TRANSFER_KINDS = (TransactionKind.TRANSFER_OUT, TransactionKind.TRANSFER_IN)
_ZERO_AMOUNT_KINDS = (TransactionKind.BALANCE_INQUIRY, TransactionKind.PIN_CHANGE)


@dataclass(frozen=True)
class Transaction:
    """An immutable record of one event on an account."""

    kind: TransactionKind
    amount: Decimal
    balance_after: Decimal
    time: datetime
    counterparty: str | None = None

    def __post_init__(self):
        if self.kind in _TRANSFER_KINDS and self.counterparty is None:
            raise ValueError(f"{self.kind.value} requires a counterparty account")
        if self.kind not in _TRANSFER_KINDS and self.counterparty is not None:
            raise ValueError(f"{self.kind.value} cannot carry a counterparty account")
        if self.kind in _ZERO_AMOUNT_KINDS and self.amount != 0:
            raise ValueError(f"{self.kind.value} must have a zero amount")

    @classmethod
    def create(
        cls,
        kind: TransactionKind,
        amount: Decimal,
        balance_after: Decimal,
        counterparty: str | None = None,
        time: datetime | None = None,
    ) -> "Transaction":
        """
        Create a transaction, stamped with the current time unless given.

        Args:
            kind: The kind of event
            amount: The amount moved (zero for inquiries and PIN changes)
            balance_after: The account balance right after the event
            counterparty: The other account of a transfer
            time: Event time, defaults to now

        Returns:
            A new immutable Transaction
        """
        return cls(
            kind=kind,
            amount=amount,
            balance_after=balance_after,
            time=time if time is not None else datetime.now(),
            counterparty=counterparty,
        )

    @property
    def description(self) -> str:
        """Human readable label, e.g. 'TRANSFER OUT to 0987654321'."""
        if self.kind is TransactionKind.TRANSFER_OUT:
            return f"TRANSFER OUT to {self.counterparty}"
        if self.kind is TransactionKind.TRANSFER_IN:
            return f"TRANSFER IN from {self.counterparty}"
        return self.kind.value.replace("_", " ").upper()
