"""Tests for BankService transfer operations."""

from decimal import Decimal

import pytest

from src.models.exceptions import (
    AccountNotFoundError,
    InsufficientFundsError,
    InvalidAmountError,
    SelfTransferError,
)
from src.models.transaction import TransactionKind
from src.repositories.account_repo import AccountRepository
from src.services.bank_service import BankService


@pytest.fixture
def account_repo():
    """Create an empty AccountRepository."""
    return AccountRepository()


@pytest.fixture
def bank_service(account_repo):
    """Create a BankService with Alice (1500.00) and Bob (250.00)."""
    service = BankService(account_repo=account_repo)
    service.provision(
        [
            ("1111111111", "1234", "1500.00", "Alice"),
            ("2222222222", "5678", "250.00", "Bob"),
        ]
    )
    return service


def snapshot(account_repo):
    return {
        a.account_no: (a.balance, list(a.history)) for a in account_repo.all()
    }


def test_transfer_success(bank_service, account_repo):
    """Transfer between accounts updates both sides and records both legs."""
    sender_balance, receiver_balance = bank_service.transfer(
        "1111111111", "2222222222", Decimal("300.00")
    )

    assert sender_balance == Decimal("1200.00")
    assert receiver_balance == Decimal("550.00")

    sender = account_repo.find_by_account_no("1111111111")
    receiver = account_repo.find_by_account_no("2222222222")
    assert sender.balance == Decimal("1200.00")
    assert receiver.balance == Decimal("550.00")

    out_txn = sender.history[-1]
    assert out_txn.kind is TransactionKind.TRANSFER_OUT
    assert out_txn.amount == Decimal("300.00")
    assert out_txn.balance_after == Decimal("1200.00")
    assert out_txn.counterparty == "2222222222"

    in_txn = receiver.history[-1]
    assert in_txn.kind is TransactionKind.TRANSFER_IN
    assert in_txn.amount == Decimal("300.00")
    assert in_txn.balance_after == Decimal("550.00")
    assert in_txn.counterparty == "1111111111"


def test_transfer_adds_exactly_one_record_per_side(bank_service, account_repo):
    bank_service.transfer("1111111111", "2222222222", Decimal("1"))

    assert bank_service.history_length("1111111111") == 1
    assert bank_service.history_length("2222222222") == 1


def test_transfer_conserves_total(bank_service, account_repo):
    before = account_repo.total_balance()
    bank_service.transfer("1111111111", "2222222222", Decimal("99.99"))
    bank_service.transfer("2222222222", "1111111111", Decimal("349.99"))
    assert account_repo.total_balance() == before


def test_transfer_sender_not_found(bank_service, account_repo):
    """Should raise AccountNotFoundError when sender doesn't exist."""
    before = snapshot(account_repo)
    with pytest.raises(AccountNotFoundError) as exc_info:
        bank_service.transfer("9999999999", "2222222222", Decimal("100"))

    assert "9999999999" in str(exc_info.value)
    assert snapshot(account_repo) == before


def test_transfer_receiver_not_found(bank_service, account_repo):
    """Unlike a bot wallet, the receiver is never auto-created."""
    before = snapshot(account_repo)
    with pytest.raises(AccountNotFoundError):
        bank_service.transfer("1111111111", "3333333333", Decimal("100"))

    assert snapshot(account_repo) == before
    assert not account_repo.exists("3333333333")


def test_transfer_same_account_raises_error(bank_service, account_repo):
    """Should raise SelfTransferError when sender and receiver are the same."""
    before = snapshot(account_repo)
    with pytest.raises(SelfTransferError):
        bank_service.transfer("1111111111", "1111111111", Decimal("100.00"))

    assert snapshot(account_repo) == before


@pytest.mark.parametrize("amount", [Decimal("-100"), Decimal("0"), "1e-3"])
def test_transfer_invalid_amount(bank_service, account_repo, amount):
    before = snapshot(account_repo)
    with pytest.raises(InvalidAmountError):
        bank_service.transfer("1111111111", "2222222222", amount)

    assert snapshot(account_repo) == before


def test_transfer_insufficient_balance(bank_service, account_repo):
    """Neither account changes when the sender cannot cover the amount."""
    before = snapshot(account_repo)
    with pytest.raises(InsufficientFundsError):
        bank_service.transfer("2222222222", "1111111111", Decimal("250.01"))

    assert snapshot(account_repo) == before


def test_transfer_entire_balance(bank_service):
    sender_balance, receiver_balance = bank_service.transfer(
        "2222222222", "1111111111", Decimal("250.00")
    )
    assert sender_balance == Decimal("0.00")
    assert receiver_balance == Decimal("1750.00")


def test_transfer_with_empty_account_number(account_repo):
    """Account numbers are opaque, so an empty one transfers like any other."""
    service = BankService(account_repo=account_repo)
    service.provision(
        [
            ("1111111111", "1234", "100.00", "Alice"),
            ("", "5678", "0.00", "Nobody"),
        ]
    )

    assert service.transfer("1111111111", "", Decimal("10.00")) == (
        Decimal("90.00"),
        Decimal("10.00"),
    )
    assert service.transfer("", "1111111111", Decimal("4.00")) == (
        Decimal("6.00"),
        Decimal("94.00"),
    )

    sender = account_repo.find_by_account_no("1111111111")
    empty = account_repo.find_by_account_no("")
    assert [(t.kind, t.counterparty, t.balance_after) for t in sender.history] == [
        (TransactionKind.TRANSFER_OUT, "", Decimal("90.00")),
        (TransactionKind.TRANSFER_IN, "", Decimal("94.00")),
    ]
    assert [(t.kind, t.counterparty, t.balance_after) for t in empty.history] == [
        (TransactionKind.TRANSFER_IN, "1111111111", Decimal("10.00")),
        (TransactionKind.TRANSFER_OUT, "1111111111", Decimal("6.00")),
    ]
    assert account_repo.total_balance() == Decimal("100.00")
