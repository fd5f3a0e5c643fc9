"""Text console front-end for the ledger."""

from tabulate import tabulate

from src.models.exceptions import BankError
from src.models.money import parse_amount

MENU = """
=================================
         ATM MAIN MENU
=================================
1. Balance Inquiry
2. Withdraw Money
3. Deposit Money
4. Transfer Money
5. Transaction History
6. Change PIN
7. Logout"""


def fmt(amount) -> str:
    return '{:,.2f}'.format(amount)


class ConsoleShell:
    def __init__(self, bank, input_fn=None, output=None, history_limit=10):
        self.bank = bank
        self._input = input_fn or input
        self._output = output or print
        self.history_limit = history_limit
        self.current = None
        self.running = False

    def _ask(self, prompt):
        return self._input(prompt).strip()

    def _say(self, msg=''):
        self._output(msg)

    def run(self):
        """Serve sessions until 'exit' is entered or input runs out."""
        self.running = True
        self._say('=================================')
        self._say('   WELCOME TO SECURE ATM')
        self._say('=================================')
        try:
            while self.running:
                if self.current is None:
                    self.login()
                else:
                    self.main_menu()
        except EOFError:
            self.running = False
        self._say('Thank you for using our ATM!')

    def login(self):
        self._say('\n--- LOGIN ---')
        account_no = self._ask("Enter Account Number (or 'exit' to quit): ")
        if account_no.lower() == 'exit':
            self.running = False
            return
        pin = self._ask('Enter PIN: ')
        if self.bank.authenticate(account_no, pin):
            self.current = account_no
            self._say('\nLogin successful! Welcome, ' + self.bank.get_account_holder(account_no))
        else:
            self._say('Invalid account number or PIN. Please try again.')

    def main_menu(self):
        self._say(MENU)
        actions = {
            '1': self.balance_inquiry,
            '2': self.withdraw,
            '3': self.deposit,
            '4': self.transfer,
            '5': self.transaction_history,
            '6': self.change_pin,
            '7': self.logout,
        }
        choice = self._ask('\nSelect an option (1-7): ')
        action = actions.get(choice)
        if action is None:
            self._say('Invalid option. Please select 1-7.')
            return
        try:
            action()
        except BankError as err:
            self._say(str(err))

    def balance_inquiry(self):
        balance = self.bank.get_balance(self.current)
        summary = self.bank.get_account_summary(self.current)
        self._say('\n--- BALANCE INQUIRY ---')
        self._say('Account Number: ' + summary.account_no)
        self._say('Account Holder: ' + summary.name)
        self._say('Current Balance: ' + fmt(balance))

    def withdraw(self):
        self._say('\n--- WITHDRAW MONEY ---')
        amount = parse_amount(self._ask('Enter withdrawal amount: '))
        balance = self.bank.withdraw(self.current, amount)
        self._say('Amount withdrawn: ' + fmt(amount))
        self._say('New balance: ' + fmt(balance))

    def deposit(self):
        self._say('\n--- DEPOSIT MONEY ---')
        amount = parse_amount(self._ask('Enter deposit amount: '))
        balance = self.bank.deposit(self.current, amount)
        self._say('Amount deposited: ' + fmt(amount))
        self._say('New balance: ' + fmt(balance))

    def transfer(self):
        self._say('\n--- TRANSFER MONEY ---')
        to_account = self._ask('Enter recipient account number: ')
        self._say('Recipient: ' + self.bank.get_account_holder(to_account))
        amount = parse_amount(self._ask('Enter transfer amount: '))
        balance, _ = self.bank.transfer(self.current, to_account, amount)
        self._say('Amount transferred: ' + fmt(amount))
        self._say('To: ' + to_account)
        self._say('New balance: ' + fmt(balance))

    def transaction_history(self):
        self._say('\n--- TRANSACTION HISTORY ---')
        history = self.bank.get_history(self.current, self.history_limit)
        if not history:
            self._say('No transactions found.')
            return
        rows = [
            [txn.time.strftime('%Y-%m-%d %H:%M:%S'), txn.description, fmt(txn.amount), fmt(txn.balance_after)]
            for txn in history
        ]
        self._say(tabulate(rows, headers=['Time', 'Type', 'Amount', 'Balance'], stralign='right', numalign='right'))
        total = self.bank.history_length(self.current)
        if total > len(history):
            self._say('Showing last {} of {} transactions'.format(len(history), total))

    def change_pin(self):
        self._say('\n--- CHANGE PIN ---')
        current_pin = self._ask('Enter current PIN: ')
        new_pin = self._ask('Enter new PIN (4 digits): ')
        confirm_pin = self._ask('Confirm new PIN: ')
        if new_pin != confirm_pin:
            self._say('PINs do not match. PIN not changed.')
            return
        self.bank.change_pin(self.current, new_pin, current_pin=current_pin)
        self._say('PIN changed successfully!')

    def logout(self):
        self._say('Logged out successfully. Thank you!')
        self.current = None
