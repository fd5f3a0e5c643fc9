"""Account repository backed by an in-memory map."""

import threading
from decimal import Decimal

from src.models.account import Account
from src.models.exceptions import AccountAlreadyExistsError


class AccountRepository:
    """Repository for Account data access operations."""

    def __init__(self):
        """Initialize an empty repository."""
        self._accounts: dict[str, Account] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._accounts)

    def find_by_account_no(self, account_no: str) -> Account | None:
        """
        Find an account by account number.

        Args:
            account_no: The account number to search for

        Returns:
            Account object if found, None otherwise
        """
        return self._accounts.get(account_no)

    def create(self, account: Account) -> None:
        """
        Add a new account.

        Args:
            account: The Account object to add

        Raises:
            AccountAlreadyExistsError: If an account with the same account_no already exists
        """
        with self._lock:
            if account.account_no in self._accounts:
                raise AccountAlreadyExistsError(
                    f"Account {account.account_no} already exists"
                )
            self._accounts[account.account_no] = account

    def create_many(self, accounts: list[Account]) -> None:
        """
        Add several accounts, all or none.

        Args:
            accounts: The Account objects to add

        Raises:
            AccountAlreadyExistsError: If any account_no is taken or repeated
        """
        with self._lock:
            seen = set()
            for account in accounts:
                if account.account_no in self._accounts or account.account_no in seen:
                    raise AccountAlreadyExistsError(
                        f"Account {account.account_no} already exists"
                    )
                seen.add(account.account_no)
            for account in accounts:
                self._accounts[account.account_no] = account

    def exists(self, account_no: str) -> bool:
        """
        Check if an account exists.

        Args:
            account_no: The account number to check

        Returns:
            True if the account exists, False otherwise
        """
        return account_no in self._accounts

    def all(self) -> list[Account]:
        """Return every account, in provisioning order."""
        with self._lock:
            return list(self._accounts.values())

    def total_balance(self) -> Decimal:
        """Sum of all account balances."""
        return sum((account.balance for account in self.all()), Decimal("0.00"))
