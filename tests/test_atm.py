"""Tests for the entry point."""
import logging

import pytest

import atm


@pytest.fixture
def src_logger():
    logger = logging.getLogger('src')
    handlers = list(logger.handlers)
    level = logger.level
    yield logger
    for handler in logger.handlers[len(handlers):]:
        handler.close()
    logger.handlers = handlers
    logger.setLevel(level)


def test_main_seeds_demo_accounts_and_logs(monkeypatch, tmp_path, src_logger):
    log_file = tmp_path / 'atm.log'
    monkeypatch.setenv('ATM_LOG_FILE', str(log_file))
    monkeypatch.setenv('ATM_LOG_LEVEL', 'INFO')
    answers = iter(['1234567890', '1234', '7', 'exit'])
    monkeypatch.setattr('builtins.input', lambda prompt='': next(answers))

    atm.main()

    for handler in src_logger.handlers:
        handler.flush()
    text = log_file.read_text(encoding='utf-8')
    assert 'Provisioned 3 account(s)' in text
    assert 'Login succeeded for account 1234567890' in text
    assert ':INFO:src.services.bank_service: ' in text
