"""Bank service for business logic layer."""

import logging
from contextlib import contextmanager
from datetime import datetime
from decimal import Decimal
from typing import Callable, Iterable

from src.models.account import Account, AccountSummary
from src.models.exceptions import (
    AccountAlreadyExistsError,
    AccountNotFoundError,
    CredentialMismatchError,
    InsufficientFundsError,
    InvalidAccountError,
    InvalidAmountError,
    InvalidPinFormatError,
    LedgerUnavailableError,
    SelfTransferError,
)
from src.models.money import is_valid_pin, parse_amount
from src.models.transaction import Transaction, TransactionKind
from src.repositories.account_repo import AccountRepository

logger = logging.getLogger(__name__)

DEFAULT_MAX_AMOUNT = Decimal("1000000000000")
ZERO = Decimal("0.00")


class BankService:
    """Service layer for ledger operations."""

    def __init__(
        self,
        account_repo: AccountRepository,
        max_amount: Decimal = DEFAULT_MAX_AMOUNT,
        record_inquiries: bool = True,
        lock_timeout: float | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        """
        Initialize the BankService with a repository.

        Args:
            account_repo: Repository holding the accounts
            max_amount: Maximum allowed amount for a single operation
            record_inquiries: Whether get_balance appends a BALANCE_INQUIRY record
            lock_timeout: Seconds to wait for account locks, None waits forever
            clock: Source of transaction timestamps
        """
        self._account_repo = account_repo
        self._max_amount = Decimal(max_amount)
        self._record_inquiries = record_inquiries
        self._lock_timeout = lock_timeout
        self._clock = clock

    @classmethod
    def from_settings(cls, settings, account_repo: AccountRepository | None = None) -> "BankService":
        """Build a service configured from Settings."""
        return cls(
            account_repo=account_repo if account_repo is not None else AccountRepository(),
            max_amount=settings.max_amount,
            record_inquiries=settings.record_inquiries,
            lock_timeout=settings.lock_timeout,
        )

    def _get_account(self, account_no: str, role: str = "Account") -> Account:
        account = self._account_repo.find_by_account_no(account_no)
        if account is None:
            raise AccountNotFoundError(f"{role} {account_no} not found")
        return account

    def _validate_amount(self, amount, action: str) -> Decimal:
        amount = parse_amount(amount)
        if amount < 0:
            raise InvalidAmountError(
                f"Cannot {action} negative amount: {amount}. Amount must be positive."
            )
        if amount == 0:
            raise InvalidAmountError(f"{action.capitalize()} amount must be greater than zero.")
        if amount > self._max_amount:
            raise InvalidAmountError(
                f"Amount {amount} exceeds maximum allowed {action} of {self._max_amount}"
            )
        return amount

    @contextmanager
    def _locked(self, *accounts: Account):
        """
        Hold the locks of the given accounts.

        Locks are taken in account number order. On timeout every lock
        already taken is released before LedgerUnavailableError is raised.
        """
        ordered = sorted({a.account_no: a for a in accounts}.values(), key=lambda a: a.account_no)
        acquired = []
        try:
            for account in ordered:
                if self._lock_timeout is None:
                    ok = account.lock.acquire()
                else:
                    ok = account.lock.acquire(timeout=self._lock_timeout)
                if not ok:
                    raise LedgerUnavailableError(
                        f"Account {account.account_no} is busy, please try again"
                    )
                acquired.append(account)
            yield
        finally:
            for account in reversed(acquired):
                account.lock.release()

    def _new_record(
        self,
        account: Account,
        kind: TransactionKind,
        amount: Decimal,
        balance_after: Decimal,
        counterparty: str | None = None,
    ) -> Transaction:
        """Build a record for account without touching its state."""
        return Transaction.create(
            kind=kind,
            amount=amount,
            balance_after=balance_after,
            counterparty=counterparty,
            time=account.stamp(self._clock()),
        )

    def provision(self, seed: Iterable[tuple]) -> list[AccountSummary]:
        """
        Create accounts from (account_no, pin, balance, name) tuples.

        The whole seed is validated before any account is created.

        Args:
            seed: Iterable of (account_no, pin, balance, name)

        Returns:
            Summaries of the created accounts

        Raises:
            AccountAlreadyExistsError: If an account number is repeated or taken
            InvalidAccountError: If an account number or name is not a string
            InvalidPinFormatError: If a PIN is not 4 digits
            InvalidAmountError: If an opening balance is malformed or negative
        """
        accounts = []
        seen = set()
        for account_no, pin, balance, name in seed:
            if not isinstance(account_no, str):
                raise InvalidAccountError(f"Account number must be a string, got {account_no!r}")
            if not isinstance(name, str):
                raise InvalidAccountError(f"Holder name of account {account_no} must be a string")
            if account_no in seen or self._account_repo.exists(account_no):
                raise AccountAlreadyExistsError(f"Account {account_no} already exists")
            if not is_valid_pin(pin):
                raise InvalidPinFormatError(f"PIN for account {account_no} must be exactly 4 digits")
            balance = parse_amount(balance)
            if balance < 0:
                raise InvalidAmountError(
                    f"Opening balance of account {account_no} cannot be negative"
                )
            seen.add(account_no)
            accounts.append(Account(account_no=account_no, name=name, pin=pin, balance=balance))

        self._account_repo.create_many(accounts)
        logger.info("Provisioned %d account(s)", len(accounts))
        return [account.summary() for account in accounts]

    def authenticate(self, account_no: str, pin: str) -> bool:
        """
        Check an account number and PIN.

        Pure: no history entry is recorded.

        Returns:
            True iff the account exists and the PIN matches exactly
        """
        account = self._account_repo.find_by_account_no(account_no)
        ok = account is not None and account.validate_pin(pin)
        if ok:
            logger.info("Login succeeded for account %s", account_no)
        else:
            logger.warning("Login failed for account %s", account_no)
        return ok

    def deposit(self, account_no: str, amount) -> Decimal:
        """
        Deposit funds into an account.

        Args:
            account_no: The account to deposit to
            amount: The amount to deposit (must be positive and <= max_amount)

        Returns:
            The new balance

        Raises:
            AccountNotFoundError: If the account doesn't exist
            InvalidAmountError: If the amount is invalid (negative, zero, or exceeds max)
        """
        account = self._get_account(account_no)
        amount = self._validate_amount(amount, "deposit")

        with self._locked(account):
            new_balance = account.balance + amount
            txn = self._new_record(account, TransactionKind.DEPOSIT, amount, new_balance)
            account.balance = new_balance
            account.record(txn)

        logger.info("Deposited %s into %s, balance %s", amount, account_no, new_balance)
        return new_balance

    def withdraw(self, account_no: str, amount) -> Decimal:
        """
        Withdraw funds from an account.

        Args:
            account_no: The account to withdraw from
            amount: The amount to withdraw (must be positive and <= max_amount)

        Returns:
            The new balance

        Raises:
            AccountNotFoundError: If the account doesn't exist
            InvalidAmountError: If the amount is invalid (negative, zero, or exceeds max)
            InsufficientFundsError: If the amount exceeds the balance
        """
        account = self._get_account(account_no)
        amount = self._validate_amount(amount, "withdraw")

        with self._locked(account):
            if amount > account.balance:
                raise InsufficientFundsError(
                    f"Insufficient balance: {account.balance} available, {amount} requested"
                )
            new_balance = account.balance - amount
            txn = self._new_record(account, TransactionKind.WITHDRAWAL, amount, new_balance)
            account.balance = new_balance
            account.record(txn)

        logger.info("Withdrew %s from %s, balance %s", amount, account_no, new_balance)
        return new_balance

    def transfer(self, from_account_no: str, to_account_no: str, amount) -> tuple[Decimal, Decimal]:
        """
        Transfer funds from one account to another.

        Both balances and both transaction records are applied together
        while holding both account locks, or nothing is applied.

        Args:
            from_account_no: The sender account
            to_account_no: The receiver account
            amount: The amount to transfer (must be positive)

        Returns:
            A tuple of (sender balance, receiver balance) after the transfer

        Raises:
            AccountNotFoundError: If either account doesn't exist
            SelfTransferError: If sender and receiver are the same
            InvalidAmountError: If the amount is invalid (negative, zero, or exceeds max)
            InsufficientFundsError: If the sender has insufficient balance
        """
        sender = self._get_account(from_account_no, "Sender account")
        receiver = self._get_account(to_account_no, "Receiver account")

        if from_account_no == to_account_no:
            raise SelfTransferError("Cannot transfer to the same account")

        amount = self._validate_amount(amount, "transfer")

        with self._locked(sender, receiver):
            if amount > sender.balance:
                raise InsufficientFundsError(
                    f"Insufficient balance: {sender.balance} available, {amount} requested"
                )
            balances = (sender.balance - amount, receiver.balance + amount)
            out_txn = self._new_record(
                sender, TransactionKind.TRANSFER_OUT, amount, balances[0], counterparty=to_account_no
            )
            in_txn = self._new_record(
                receiver, TransactionKind.TRANSFER_IN, amount, balances[1], counterparty=from_account_no
            )
            sender.balance, receiver.balance = balances
            sender.record(out_txn)
            receiver.record(in_txn)

        logger.info("Transferred %s from %s to %s", amount, from_account_no, to_account_no)
        return balances

    def change_pin(self, account_no: str, new_pin: str, current_pin: str | None = None) -> None:
        """
        Replace the PIN of an account.

        Args:
            account_no: The account to update
            new_pin: The new PIN, exactly 4 digits
            current_pin: If given, must match the stored PIN

        Raises:
            AccountNotFoundError: If the account doesn't exist
            CredentialMismatchError: If current_pin is given and wrong
            InvalidPinFormatError: If new_pin is not 4 digits
        """
        account = self._get_account(account_no)

        with self._locked(account):
            if current_pin is not None and not account.validate_pin(current_pin):
                raise CredentialMismatchError("Incorrect current PIN")
            if not is_valid_pin(new_pin):
                raise InvalidPinFormatError("PIN must be exactly 4 digits")
            txn = self._new_record(account, TransactionKind.PIN_CHANGE, ZERO, account.balance)
            account.pin = new_pin
            account.record(txn)

        logger.info("PIN changed for account %s", account_no)

    def record_inquiry(self, account_no: str) -> Decimal:
        """
        Append a BALANCE_INQUIRY record.

        Returns:
            The current balance

        Raises:
            AccountNotFoundError: If the account doesn't exist
        """
        account = self._get_account(account_no)
        with self._locked(account):
            account.record(
                self._new_record(account, TransactionKind.BALANCE_INQUIRY, ZERO, account.balance)
            )
            return account.balance

    def get_balance(self, account_no: str) -> Decimal:
        """
        Get the balance for an account.

        Records a balance inquiry when the record_inquiries policy is on.

        Raises:
            AccountNotFoundError: If the account doesn't exist
        """
        if self._record_inquiries:
            return self.record_inquiry(account_no)
        account = self._get_account(account_no)
        with self._locked(account):
            return account.balance

    def get_history(self, account_no: str, limit: int = 10) -> list[Transaction]:
        """
        Get the most recent transactions of an account.

        Args:
            account_no: The account number
            limit: Number of recent transactions to retrieve

        Returns:
            Up to limit transactions, most recent first

        Raises:
            AccountNotFoundError: If the account doesn't exist
            ValueError: If limit is not a non-negative integer
        """
        if isinstance(limit, bool) or not isinstance(limit, int):
            raise ValueError(f"limit must be an integer, got {limit!r}")
        if limit < 0:
            raise ValueError(f"limit must be non-negative, got {limit}")
        account = self._get_account(account_no)
        if limit == 0:
            return []
        with self._locked(account):
            return list(reversed(account.history[-limit:]))

    def get_account_summary(self, account_no: str) -> AccountSummary:
        """
        Get number, holder name and balance of an account.

        Raises:
            AccountNotFoundError: If the account doesn't exist
        """
        account = self._get_account(account_no)
        with self._locked(account):
            return account.summary()

    def get_account_holder(self, account_no: str) -> str:
        """Holder name of an account, e.g. to confirm a transfer recipient."""
        account = self._get_account(account_no)
        with self._locked(account):
            return account.name

    def history_length(self, account_no: str) -> int:
        """Total number of transactions recorded on an account."""
        account = self._get_account(account_no)
        with self._locked(account):
            return len(account.history)
