"""
Card Module

The card capability: a uniform charge/pay contract over two backing stores.
A debit card moves money in a linked savings account; a credit card keeps its
own outstanding balance against a limit.

The two ``pay`` operations mean different things. Debit ``pay`` deposits into
the linked savings account, credit ``pay`` reduces the debt.
"""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Any, Callable, Dict, Optional

from .accounts import Account, AccountKind, SavingsAccount
from .config import get_config
from .exceptions import LinkedAccountNotFoundError
from .money import ZERO, AmountLike, to_amount, validate_positive
from .logging_config import get_logger, log_action


logger = get_logger("ledger.cards")

AccountResolver = Callable[[str], Optional[Account]]


class Card(Account, ABC):
    """Abstract card capability"""

    @abstractmethod
    def charge(self, amount: AmountLike) -> bool:
        """Spend with the card. Returns False when the backing store refuses."""

    @abstractmethod
    def pay(self, amount: AmountLike) -> None:
        """Pay into the card. Non-positive amounts are ignored."""


class DebitCard(Card):
    """
    Card backed by a savings account owned by the same user.

    The card does not hold the savings account itself, only its number. The
    resolver (normally the owning user's account lookup) turns the number
    into an account at call time.
    """

    kind = AccountKind.DEBIT_CARD

    def __init__(self, account_number: str, holder_name: str,
                 linked_account_number: str, resolver: AccountResolver):
        super().__init__(account_number, holder_name)
        self._linked_account_number = linked_account_number
        self._resolver = resolver
        self.record_transaction("Debit card issued", ZERO)

    @property
    def linked_account_number(self) -> str:
        return self._linked_account_number

    @property
    def linked_account(self) -> SavingsAccount:
        """Resolve the linked savings account"""
        account = self._resolver(self._linked_account_number)
        if not isinstance(account, SavingsAccount):
            raise LinkedAccountNotFoundError(self.account_number, self._linked_account_number)
        return account

    def charge(self, amount: AmountLike) -> bool:
        """Withdraw from the linked savings account, exactly as strict as withdraw()"""
        value = to_amount(amount)
        if value <= ZERO:
            return False
        savings = self.linked_account
        # Lock order is always card then savings
        with self._lock:
            ok, balance = savings._apply_withdraw(value, "Withdraw")
            if ok:
                self.record_transaction("Card withdrawal", -value)

        if ok:
            log_action(logger, "info", "Debit card charged", action="card_charge",
                       resource=self.account_number,
                       extra={"amount": str(value), "linked_account": savings.account_number,
                              "balance": str(balance)})
        else:
            log_action(logger, "warning", "Debit card charge declined", action="card_declined",
                       resource=self.account_number,
                       extra={"amount": str(value), "linked_account": savings.account_number})
        return ok

    def pay(self, amount: AmountLike) -> None:
        """Deposit into the linked savings account"""
        value = validate_positive(amount)
        if value is None:
            return
        savings = self.linked_account
        with self._lock:
            balance = savings._apply_deposit(value, "Deposit")
            self.record_transaction("Card deposit", value)

        log_action(logger, "info", "Debit card payment posted", action="card_payment",
                   resource=self.account_number,
                   extra={"amount": str(value), "linked_account": savings.account_number,
                          "balance": str(balance)})

    def summary(self) -> Dict[str, Any]:
        result = super().summary()
        result["linked_account"] = self.linked_account_number
        return result


class CreditCard(Card):
    """Card with its own outstanding balance, capped by a credit limit"""

    kind = AccountKind.CREDIT_CARD

    def __init__(self, account_number: str, holder_name: str, credit_limit: AmountLike):
        super().__init__(account_number, holder_name)
        credit_limit = to_amount(credit_limit)
        if credit_limit < ZERO:
            raise ValueError("Credit limit cannot be negative")
        self._credit_limit = credit_limit
        self._outstanding = ZERO
        self.record_transaction("Credit card issued", ZERO)

    @property
    def credit_limit(self) -> Decimal:
        return self._credit_limit

    @property
    def outstanding(self) -> Decimal:
        with self._lock:
            return self._outstanding

    @property
    def available_credit(self) -> Decimal:
        with self._lock:
            return self._credit_limit - self._outstanding

    def charge(self, amount: AmountLike) -> bool:
        """Charge if outstanding + amount stays within the limit"""
        value = to_amount(amount)
        with self._lock:
            if value <= ZERO or self._outstanding + value > self._credit_limit:
                ok = False
            else:
                self._outstanding += value
                self.record_transaction("Card charge", value)
                ok = True
            outstanding = self._outstanding

        if ok:
            log_action(logger, "info", "Credit card charged", action="card_charge",
                       resource=self.account_number,
                       extra={"amount": str(value), "outstanding": str(outstanding)})
        else:
            log_action(logger, "warning", "Credit card charge declined", action="card_declined",
                       resource=self.account_number,
                       extra={"amount": str(value), "outstanding": str(outstanding),
                              "limit": str(self._credit_limit)})
        return ok

    def pay(self, amount: AmountLike) -> None:
        """Reduce outstanding; overpayment is capped like a loan payment"""
        value = validate_positive(amount)
        if value is None:
            return
        with self._lock:
            payment = min(value, self._outstanding)
            self._outstanding -= payment
            self.record_transaction("Card payment", -payment)
            outstanding = self._outstanding

        log_action(logger, "info", "Credit card payment posted", action="card_payment",
                   resource=self.account_number,
                   extra={"requested": str(value), "applied": str(payment),
                          "outstanding": str(outstanding)})

    def minimum_due(self) -> Decimal:
        """max(floor, outstanding * rate), 10.00 and 10% by default"""
        config = get_config()
        floor = to_amount(config.minimum_due_floor)
        rate = Decimal(config.minimum_due_rate)
        return max(floor, to_amount(self.outstanding * rate))

    def summary(self) -> Dict[str, Any]:
        result = super().summary()
        result["limit"] = str(self.credit_limit)
        result["outstanding"] = str(self.outstanding)
        return result
