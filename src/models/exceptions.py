"""Custom exceptions for the ledger."""

from enum import Enum


class ErrorKind(str, Enum):
    """Failure kinds reported by ledger operations."""

    ACCOUNT_NOT_FOUND = "account_not_found"
    ACCOUNT_ALREADY_EXISTS = "account_already_exists"
    INVALID_ACCOUNT = "invalid_account"
    INVALID_AMOUNT = "invalid_amount"
    INSUFFICIENT_FUNDS = "insufficient_funds"
    INVALID_CREDENTIAL_FORMAT = "invalid_credential_format"
    CREDENTIAL_MISMATCH = "credential_mismatch"
    SELF_TRANSFER = "self_transfer"
    UNAVAILABLE = "unavailable"


class BankError(Exception):
    """Base exception for all ledger errors."""

    kind: ErrorKind | None = None


class AccountNotFoundError(BankError):
    """Raised when an account cannot be found."""

    kind = ErrorKind.ACCOUNT_NOT_FOUND


class AccountAlreadyExistsError(BankError):
    """Raised when provisioning an account number that is already taken."""

    kind = ErrorKind.ACCOUNT_ALREADY_EXISTS


class InvalidAccountError(BankError):
    """Raised when an account number or holder name is not a string."""

    kind = ErrorKind.INVALID_ACCOUNT


class InvalidAmountError(BankError):
    """Raised when an amount is non-numeric, not positive or too large."""

    kind = ErrorKind.INVALID_AMOUNT


class InsufficientFundsError(BankError):
    """Raised when an account has insufficient balance for a transaction."""

    kind = ErrorKind.INSUFFICIENT_FUNDS


class InvalidPinFormatError(BankError):
    """Raised when a PIN is not exactly 4 digits."""

    kind = ErrorKind.INVALID_CREDENTIAL_FORMAT


class CredentialMismatchError(BankError):
    """Raised when a supplied PIN does not match the stored one."""

    kind = ErrorKind.CREDENTIAL_MISMATCH


class SelfTransferError(BankError):
    """Raised when sender and receiver of a transfer are the same account."""

    kind = ErrorKind.SELF_TRANSFER


class LedgerUnavailableError(BankError):
    """Raised when account locks could not be acquired in time."""

    kind = ErrorKind.UNAVAILABLE
