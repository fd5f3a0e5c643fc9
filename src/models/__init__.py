"""Data models for the ledger."""

from .account import Account, AccountSummary
from .transaction import Transaction, TransactionKind
from .money import parse_amount, is_valid_pin
from .exceptions import (
    ErrorKind,
    BankError,
    AccountNotFoundError,
    AccountAlreadyExistsError,
    InvalidAccountError,
    InsufficientFundsError,
    InvalidAmountError,
    InvalidPinFormatError,
    CredentialMismatchError,
    SelfTransferError,
    LedgerUnavailableError,
)

__all__ = [
    "Account",
    "AccountSummary",
    "Transaction",
    "TransactionKind",
    "parse_amount",
    "is_valid_pin",
    "ErrorKind",
    "BankError",
    "AccountNotFoundError",
    "AccountAlreadyExistsError",
    "InvalidAccountError",
    "InsufficientFundsError",
    "InvalidAmountError",
    "InvalidPinFormatError",
    "CredentialMismatchError",
    "SelfTransferError",
    "LedgerUnavailableError",
]
