"""Configuration management for the ATM ledger."""
import os
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import List, Optional, Tuple

DEMO_ACCOUNTS = [
    ('1234567890', '1234', '1500000.00', 'Bharat Choudhary'),
    ('0987654321', '5678', '250000.75', 'Anil Seervi'),
    ('1122334455', '9999', '750000.25', 'Manish Kumar'),
]

_TRUE = ('1', 'true', 'yes', 'on')
_FALSE = ('0', 'false', 'no', 'off')


@dataclass
class Settings:
    """Configuration settings for the ATM ledger.

    This class centralizes all configuration values, replacing hardcoded
    values throughout the codebase.
    """

    # Logging Configuration
    log_file: str = 'atm.log'
    log_level: str = 'INFO'

    # Ledger Policy
    history_limit: int = 10
    record_inquiries: bool = True
    lock_timeout: Optional[float] = None  # seconds, None waits forever

    # Business Rules
    max_amount: Decimal = Decimal('1000000000000')  # 1T

    # Accounts provisioned at startup
    demo_accounts: List[Tuple[str, str, str, str]] = field(
        default_factory=lambda: list(DEMO_ACCOUNTS)
    )

    @classmethod
    def load(cls) -> 'Settings':
        """Load settings from environment variables.

        Unset variables keep their defaults.

        Returns:
            Settings: A Settings instance with values from environment variables.

        Raises:
            ValueError: If an environment variable holds a malformed value.
        """
        settings = cls()

        settings.log_file = os.getenv('ATM_LOG_FILE', settings.log_file)
        settings.log_level = os.getenv('ATM_LOG_LEVEL', settings.log_level).upper()

        history_limit = os.getenv('ATM_HISTORY_LIMIT')
        if history_limit is not None:
            try:
                settings.history_limit = int(history_limit)
            except ValueError:
                raise ValueError("ATM_HISTORY_LIMIT must be an integer")
            if settings.history_limit < 0:
                raise ValueError("ATM_HISTORY_LIMIT must be non-negative")

        record_inquiries = os.getenv('ATM_RECORD_INQUIRIES')
        if record_inquiries is not None:
            value = record_inquiries.strip().lower()
            if value in _TRUE:
                settings.record_inquiries = True
            elif value in _FALSE:
                settings.record_inquiries = False
            else:
                raise ValueError("ATM_RECORD_INQUIRIES must be true or false")

        lock_timeout = os.getenv('ATM_LOCK_TIMEOUT')
        if lock_timeout:
            try:
                settings.lock_timeout = float(lock_timeout)
            except ValueError:
                raise ValueError("ATM_LOCK_TIMEOUT must be a number of seconds")
            if settings.lock_timeout < 0:
                raise ValueError("ATM_LOCK_TIMEOUT must be non-negative")

        max_amount = os.getenv('ATM_MAX_AMOUNT')
        if max_amount is not None:
            try:
                settings.max_amount = Decimal(max_amount)
            except InvalidOperation:
                raise ValueError("ATM_MAX_AMOUNT must be a number")
            if not settings.max_amount.is_finite() or settings.max_amount <= 0:
                raise ValueError("ATM_MAX_AMOUNT must be positive")

        return settings
