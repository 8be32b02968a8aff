"""
User Module

A user owns an ordered collection of accounts and issues their numbers.
"""

from typing import List, Optional, Type, TypeVar
import threading

from .accounts import (
    Account, SavingsAccount, FixedDepositAccount, LoanAccount, find_account
)
from .cards import DebitCard, CreditCard
from .config import get_config
from .exceptions import AccountNotFoundError, AccountKindMismatchError
from .money import ZERO, AmountLike
from .logging_config import get_logger, log_action


logger = get_logger("ledger.users")

AccountT = TypeVar("AccountT", bound=Account)


class User:
    """
    Bank customer with credentials and owned accounts.

    Account numbers are PREFIX-COUNTER, where PREFIX is the upper-cased start
    of the username. The counter never reuses a value, so numbers are unique
    among this user's accounts. Uniqueness across users depends on distinct
    username prefixes and is not enforced.
    """

    def __init__(self, username: str, password: str, name: Optional[str] = None,
                 counter_start: Optional[int] = None):
        if not username:
            raise ValueError("Username is required")
        config = get_config()
        self._username = username
        self._password = password
        self.name = name or username
        self._accounts: List[Account] = []
        self._counter = config.account_counter_start if counter_start is None else counter_start
        self._prefix_length = config.account_prefix_length
        self._lock = threading.RLock()

    @property
    def username(self) -> str:
        return self._username

    def check_password(self, password: str) -> bool:
        """Exact plaintext comparison"""
        return self._password == password

    @property
    def accounts(self) -> List[Account]:
        """Snapshot of owned accounts in opening order"""
        with self._lock:
            return list(self._accounts)

    def generate_account_number(self) -> str:
        with self._lock:
            self._counter += 1
            counter = self._counter
        prefix = self._username[:self._prefix_length].upper()
        return f"{prefix}-{counter}"

    def add_account(self, account: Account) -> Account:
        with self._lock:
            if find_account(self._accounts, account.account_number) is not None:
                raise ValueError(f"Account number {account.account_number} already in use")
            self._accounts.append(account)
        log_action(logger, "info", "Account opened", user_id=self.username,
                   action="account_opened", resource=account.account_number,
                   extra={"type": account.kind.value})
        return account

    def find_account(self, account_number: str) -> Optional[Account]:
        """Look up an owned account, None when absent"""
        with self._lock:
            return find_account(self._accounts, account_number)

    def get_account(self, account_number: str) -> Account:
        """
        Look up an owned account

        Raises:
            AccountNotFoundError: If this user owns no such account
        """
        account = self.find_account(account_number)
        if account is None:
            raise AccountNotFoundError(account_number)
        return account

    def get_account_of_kind(self, account_number: str, account_class: Type[AccountT]) -> AccountT:
        """
        Look up an owned account and check its variant

        Raises:
            AccountNotFoundError: If this user owns no such account
            AccountKindMismatchError: If the account is another variant
        """
        account = self.get_account(account_number)
        if not isinstance(account, account_class):
            raise AccountKindMismatchError(account_number, account_class.__name__)
        return account

    # Opening helpers

    def open_savings(self, initial: AmountLike = ZERO) -> SavingsAccount:
        account = SavingsAccount(self.generate_account_number(), self.name, initial)
        self.add_account(account)
        return account

    def open_fixed_deposit(self, principal: AmountLike, term_months: int,
                           interest_rate: AmountLike) -> FixedDepositAccount:
        account = FixedDepositAccount(
            self.generate_account_number(), self.name, principal, term_months, interest_rate
        )
        self.add_account(account)
        return account

    def apply_loan(self, principal: AmountLike, interest_rate: AmountLike,
                   term_months: int) -> LoanAccount:
        account = LoanAccount(
            self.generate_account_number(), self.name, principal, interest_rate, term_months
        )
        self.add_account(account)
        return account

    def issue_debit_card(self, linked_account_number: str) -> DebitCard:
        """
        Issue a debit card against one of this user's savings accounts

        Raises:
            AccountNotFoundError: If the linked account is missing or not savings
        """
        self.get_account_of_kind(linked_account_number, SavingsAccount)
        card = DebitCard(
            self.generate_account_number(), self.name, linked_account_number, self.find_account
        )
        self.add_account(card)
        return card

    def issue_credit_card(self, credit_limit: AmountLike) -> CreditCard:
        card = CreditCard(self.generate_account_number(), self.name, credit_limit)
        self.add_account(card)
        return card

    def __repr__(self) -> str:
        return f"User({self.username!r})"
