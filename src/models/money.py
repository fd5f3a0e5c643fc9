"""Amount parsing and PIN format policy."""

from decimal import Decimal, InvalidOperation

from .exceptions import InvalidAmountError

CENT = Decimal("0.01")
PIN_LENGTH = 4


def parse_amount(value) -> Decimal:
    """
    Convert user or caller input into an exact two-place Decimal.

    The sign is not checked here; ledger operations reject non-positive
    amounts themselves.

    Args:
        value: A Decimal, int, float or numeric string

    Returns:
        The amount quantized to cents

    Raises:
        InvalidAmountError: If the value is not a finite number with at most
            two decimal places
    """
    if isinstance(value, bool):
        raise InvalidAmountError(f"Invalid amount: {value!r}")
    if isinstance(value, float):
        value = str(value)
    if isinstance(value, str):
        value = value.strip()
    try:
        amount = Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        raise InvalidAmountError(f"Invalid amount: {value!r}. Please enter a number.")

    if not amount.is_finite():
        raise InvalidAmountError(f"Invalid amount: {value!r}")
    try:
        cents = amount.quantize(CENT)
    except InvalidOperation:
        raise InvalidAmountError(f"Invalid amount: {value!r}. Amount is too large.")
    if amount != cents:
        raise InvalidAmountError(
            f"Invalid amount: {value!r}. At most two decimal places are allowed."
        )
    return cents


def is_valid_pin(pin) -> bool:
    """True if pin is exactly four ASCII digits."""
    return (
        isinstance(pin, str)
        and len(pin) == PIN_LENGTH
        and pin.isascii()
        and pin.isdigit()
    )
