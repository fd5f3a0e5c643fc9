import logging
from dotenv import load_dotenv
from config.settings import Settings
from shell.console import ConsoleShell
from src.repositories.account_repo import AccountRepository
from src.services.bank_service import BankService


def setup_logging(settings):
    logger = logging.getLogger('src')
    logger.setLevel(settings.log_level)
    handler = logging.FileHandler(filename=settings.log_file, encoding='utf-8', mode='w')
    handler.setFormatter(logging.Formatter('%(asctime)s:%(levelname)s:%(name)s: %(message)s'))
    logger.addHandler(handler)
    return logger


def main():
    load_dotenv()
    settings = Settings.load()
    setup_logging(settings)

    bank = BankService.from_settings(settings, AccountRepository())
    bank.provision(settings.demo_accounts)

    shell = ConsoleShell(bank, history_limit=settings.history_limit)
    shell.run()


if __name__ == '__main__':
    main()
