"""
Account Management Module

The closed set of account variants a user can own. Every variant carries an
account number, a holder name and a transaction log, and guards its mutable
state with its own lock so that read-check-mutate-log runs as one critical
section under concurrent callers.

Card variants live in cards.py.
"""

from decimal import Decimal, DecimalException
from typing import Any, Dict, List, Optional, Tuple
from enum import Enum
import threading

from .money import ZERO, AmountLike, to_amount, to_rate, validate_positive
from .transactions import Transaction, TransactionLog
from .logging_config import get_logger, log_action


logger = get_logger("ledger.accounts")


class AccountKind(Enum):
    """Account variants, valued by their display tag"""
    SAVINGS = "SavingsAccount"
    FIXED_DEPOSIT = "FDAccount"
    LOAN = "LoanAccount"
    DEBIT_CARD = "DebitCard"
    CREDIT_CARD = "CreditCard"


class Account:
    """
    Base account: identity plus transaction log.

    Subclasses set ``kind`` and add their own operations; callers select
    behaviour by variant rather than through a single transact verb.
    """

    kind: AccountKind

    def __init__(self, account_number: str, holder_name: str):
        if not account_number:
            raise ValueError("Account number is required")
        self._account_number = account_number
        self._holder_name = holder_name
        self._transactions = TransactionLog()
        self._lock = threading.RLock()

    @property
    def account_number(self) -> str:
        return self._account_number

    @property
    def holder_name(self) -> str:
        return self._holder_name

    def record_transaction(self, description: str, amount: AmountLike) -> Transaction:
        """Append an entry to this account's log"""
        return self._transactions.append(description, amount)

    def transactions(self) -> List[Transaction]:
        """Transaction history, oldest first"""
        return self._transactions.list()

    def summary(self) -> Dict[str, Any]:
        """Type tag plus the salient numeric fields, for account listings"""
        return {
            "account_number": self.account_number,
            "type": self.kind.value,
            "holder_name": self.holder_name,
        }

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.account_number!r})"


class SavingsAccount(Account):
    """Deposit/withdraw against a balance that never goes negative"""

    kind = AccountKind.SAVINGS

    def __init__(self, account_number: str, holder_name: str, initial: AmountLike = ZERO):
        super().__init__(account_number, holder_name)
        initial = to_amount(initial)
        if initial < ZERO:
            raise ValueError("Initial balance cannot be negative")
        self._balance = initial
        self.record_transaction("Account opened", initial)

    @property
    def balance(self) -> Decimal:
        with self._lock:
            return self._balance

    def deposit(self, amount: AmountLike) -> None:
        """Add funds. Non-positive amounts are ignored."""
        value = validate_positive(amount)
        if value is None:
            return
        balance = self._apply_deposit(value, "Deposit")
        log_action(logger, "info", "Deposit posted", action="deposit",
                   resource=self.account_number,
                   extra={"amount": str(value), "balance": str(balance)})

    def withdraw(self, amount: AmountLike) -> bool:
        """
        Remove funds if the balance covers them.

        Returns:
            True on success; False for non-positive amounts or insufficient
            funds, in which case nothing changes
        """
        value = to_amount(amount)
        ok, balance = self._apply_withdraw(value, "Withdraw")

        if ok:
            log_action(logger, "info", "Withdrawal posted", action="withdraw",
                       resource=self.account_number,
                       extra={"amount": str(value), "balance": str(balance)})
        else:
            log_action(logger, "warning", "Withdrawal rejected", action="withdraw_rejected",
                       resource=self.account_number,
                       extra={"amount": str(value), "balance": str(balance)})
        return ok

    # Lock-scoped mutations that do not log. Debit cards share them; callers
    # log after releasing every lock

    def _apply_deposit(self, value: Decimal, description: str) -> Decimal:
        with self._lock:
            self._balance += value
            self.record_transaction(description, value)
            return self._balance

    def _apply_withdraw(self, value: Decimal, description: str) -> Tuple[bool, Decimal]:
        with self._lock:
            if value <= ZERO or value > self._balance:
                return False, self._balance
            self._balance -= value
            self.record_transaction(description, -value)
            return True, self._balance

    def summary(self) -> Dict[str, Any]:
        result = super().summary()
        result["balance"] = str(self.balance)
        return result


class FixedDepositAccount(Account):
    """Fixed principal with a simple-interest maturity projection"""

    kind = AccountKind.FIXED_DEPOSIT

    def __init__(self, account_number: str, holder_name: str, principal: AmountLike,
                 term_months: int, interest_rate: AmountLike):
        super().__init__(account_number, holder_name)
        principal = to_amount(principal)
        interest_rate = to_rate(interest_rate)
        if principal < ZERO:
            raise ValueError("Principal cannot be negative")
        if term_months <= 0:
            raise ValueError("Term must be at least one month")
        if interest_rate < 0:
            raise ValueError("Interest rate cannot be negative")

        self._principal = principal
        self._term_months = int(term_months)
        self._interest_rate = interest_rate  # Annual, percent
        # Summaries render the maturity, so it must be representable up front
        self.maturity_amount()
        self.record_transaction("FD Opened", principal)

    @property
    def principal(self) -> Decimal:
        return self._principal

    @property
    def term_months(self) -> int:
        return self._term_months

    @property
    def interest_rate(self) -> Decimal:
        return self._interest_rate

    def maturity_amount(self) -> Decimal:
        """
        Simple interest: principal + principal * rate/100 * months/12

        Raises:
            ValueError: If the result is too large to represent
        """
        try:
            interest = self._principal * (self._interest_rate / Decimal('100')) * (
                Decimal(self._term_months) / Decimal('12')
            )
            total = self._principal + interest
        except DecimalException:
            raise ValueError("Maturity amount exceeds supported precision")
        return to_amount(total)

    def summary(self) -> Dict[str, Any]:
        result = super().summary()
        result["principal"] = str(self.principal)
        result["maturity_amount"] = str(self.maturity_amount())
        return result


class LoanAccount(Account):
    """Principal with a shrinking outstanding balance"""

    kind = AccountKind.LOAN

    def __init__(self, account_number: str, holder_name: str, principal: AmountLike,
                 interest_rate: AmountLike, term_months: int):
        super().__init__(account_number, holder_name)
        principal = to_amount(principal)
        if principal < ZERO:
            raise ValueError("Principal cannot be negative")
        if term_months <= 0:
            raise ValueError("Term must be at least one month")

        self._principal = principal
        self._outstanding = principal
        # Stored for display; payments do not accrue interest
        self._interest_rate = to_rate(interest_rate)
        self._term_months = int(term_months)
        self.record_transaction("Loan issued", principal)

    @property
    def principal(self) -> Decimal:
        return self._principal

    @property
    def outstanding(self) -> Decimal:
        with self._lock:
            return self._outstanding

    @property
    def interest_rate(self) -> Decimal:
        return self._interest_rate

    @property
    def term_months(self) -> int:
        return self._term_months

    @property
    def is_paid_off(self) -> bool:
        return self.outstanding == ZERO

    def pay(self, amount: AmountLike) -> Decimal:
        """
        Pay towards the outstanding balance.

        Overpayment is capped at the outstanding amount; the excess is not
        applied. Non-positive amounts are ignored.

        Returns:
            The amount actually applied
        """
        value = validate_positive(amount)
        if value is None:
            return ZERO
        with self._lock:
            payment = min(value, self._outstanding)
            self._outstanding -= payment
            self.record_transaction("Loan payment", -payment)
            outstanding = self._outstanding

        log_action(logger, "info", "Loan payment posted", action="loan_payment",
                   resource=self.account_number,
                   extra={"requested": str(value), "applied": str(payment),
                          "outstanding": str(outstanding)})
        return payment

    def summary(self) -> Dict[str, Any]:
        result = super().summary()
        result["principal"] = str(self.principal)
        result["outstanding"] = str(self.outstanding)
        return result


def find_account(accounts: List[Account], account_number: str) -> Optional[Account]:
    """Linear scan by account number"""
    for account in accounts:
        if account.account_number == account_number:
            return account
    return None
