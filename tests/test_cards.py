"""
Test suite for cards module

Tests the charge/pay capability for debit cards (backed by a linked savings
account) and credit cards (own outstanding against a limit).
"""

import logging
import threading

import pytest
from decimal import Decimal

from account_ledger.accounts import SavingsAccount, LoanAccount
from account_ledger.cards import Card, DebitCard, CreditCard
from account_ledger.config import get_config
from account_ledger.exceptions import LinkedAccountNotFoundError, NotFoundError


class TestCardCapability:
    """Card is an abstract capability"""

    def test_cannot_instantiate_card(self):
        with pytest.raises(TypeError):
            Card("X-1", "X")


class TestDebitCard:
    """Test DebitCard functionality"""

    def setup_method(self):
        self.savings = SavingsAccount("ALI-1001", "Alice", Decimal('1000'))
        self.registry = {self.savings.account_number: self.savings}
        self.card = DebitCard("ALI-1002", "Alice", "ALI-1001", self.registry.get)

    def test_issue_entry(self):
        txns = self.card.transactions()
        assert [(t.description, t.amount) for t in txns] == [("Debit card issued", Decimal('0.00'))]
        assert self.card.linked_account is self.savings

    def test_charge_withdraws_from_savings(self):
        assert self.card.charge(300) is True
        assert self.savings.balance == Decimal('700.00')
        assert self.card.transactions()[-1].description == "Card withdrawal"
        assert self.card.transactions()[-1].amount == Decimal('-300.00')
        assert self.savings.transactions()[-1].description == "Withdraw"
        assert self.savings.transactions()[-1].amount == Decimal('-300.00')

    def test_failed_charge_leaves_both_logs_unchanged(self):
        card_before = len(self.card.transactions())
        savings_before = len(self.savings.transactions())

        assert self.card.charge(1000.01) is False

        assert self.savings.balance == Decimal('1000.00')
        assert len(self.card.transactions()) == card_before
        assert len(self.savings.transactions()) == savings_before

    def test_charge_as_strict_as_withdraw(self):
        for amount in ["0", "-5", "1000", "1000.01", "999.99"]:
            shadow = SavingsAccount("S-1", "Shadow", self.savings.balance)
            expected = shadow.withdraw(amount)
            assert self.card.charge(amount) is expected
            assert self.savings.balance == shadow.balance

    def test_pay_deposits_into_savings(self):
        self.card.pay(250)
        assert self.savings.balance == Decimal('1250.00')
        assert self.card.transactions()[-1].description == "Card deposit"
        assert self.card.transactions()[-1].amount == Decimal('250.00')
        assert self.savings.transactions()[-1].description == "Deposit"

    def test_pay_non_positive_is_noop(self):
        self.card.pay(0)
        self.card.pay(-20)
        assert self.savings.balance == Decimal('1000.00')
        assert len(self.card.transactions()) == 1
        assert len(self.savings.transactions()) == 1

    def test_link_resolved_at_call_time(self):
        """Removing the linked account from the resolver surfaces a not-found error"""
        del self.registry["ALI-1001"]
        with pytest.raises(LinkedAccountNotFoundError):
            self.card.charge(10)
        with pytest.raises(NotFoundError):
            self.card.pay(10)
        assert len(self.card.transactions()) == 1

    def test_link_to_non_savings_rejected(self):
        loan = LoanAccount("ALI-1003", "Alice", 100, 5, 12)
        card = DebitCard("ALI-1004", "Alice", "ALI-1003", {"ALI-1003": loan}.get)
        with pytest.raises(LinkedAccountNotFoundError):
            card.charge(10)

    def test_summary(self):
        assert self.card.summary() == {
            "account_number": "ALI-1002",
            "type": "DebitCard",
            "holder_name": "Alice",
            "linked_account": "ALI-1001",
        }


class TestCreditCard:
    """Test CreditCard functionality"""

    def setup_method(self):
        self.card = CreditCard("ALI-1005", "Alice", Decimal('5000'))

    def test_issue_entry(self):
        assert self.card.credit_limit == Decimal('5000.00')
        assert self.card.outstanding == Decimal('0.00')
        txns = self.card.transactions()
        assert [(t.description, t.amount) for t in txns] == [("Credit card issued", Decimal('0.00'))]

    def test_end_to_end_scenario(self):
        """limit 5000: charge 4000, min due 400, charge 2000 fails, pay 4500"""
        assert self.card.charge(4000) is True
        assert self.card.outstanding == Decimal('4000.00')
        assert self.card.minimum_due() == Decimal('400.00')

        assert self.card.charge(2000) is False
        assert self.card.outstanding == Decimal('4000.00')

        self.card.pay(4500)
        assert self.card.outstanding == Decimal('0.00')

        amounts = [t.amount for t in self.card.transactions()]
        assert amounts == [Decimal('0.00'), Decimal('4000.00'), Decimal('-4000.00')]

    def test_charge_up_to_limit(self):
        assert self.card.charge(5000) is True
        assert self.card.available_credit == Decimal('0.00')
        assert self.card.charge("0.01") is False

    def test_charge_non_positive_fails(self):
        assert self.card.charge(0) is False
        assert self.card.charge(-10) is False
        assert len(self.card.transactions()) == 1

    def test_outstanding_never_exceeds_limit(self):
        for amount in [1200, 3000, 900, 1, 2500, 100]:
            self.card.charge(amount)
            assert self.card.outstanding <= self.card.credit_limit

    def test_pay_non_positive_is_noop(self):
        self.card.charge(100)
        self.card.pay(0)
        self.card.pay(-1)
        assert self.card.outstanding == Decimal('100.00')
        assert len(self.card.transactions()) == 2

    def test_minimum_due_floor(self):
        assert self.card.minimum_due() == Decimal('10.00')
        self.card.charge(50)
        assert self.card.minimum_due() == Decimal('10.00')
        self.card.charge(1000)
        assert self.card.minimum_due() == Decimal('105.00')

    def test_minimum_due_uses_config(self, monkeypatch):
        config = get_config()
        monkeypatch.setattr(config, "minimum_due_floor", "25.00")
        monkeypatch.setattr(config, "minimum_due_rate", "0.02")
        self.card.charge(2000)
        assert self.card.minimum_due() == Decimal('40.00')
        self.card.pay(1000)
        assert self.card.minimum_due() == Decimal('25.00')

    def test_summary(self):
        self.card.charge(120)
        summary = self.card.summary()
        assert summary["type"] == "CreditCard"
        assert summary["limit"] == "5000.00"
        assert summary["outstanding"] == "120.00"


class LockStateHandler(logging.Handler):
    """Records each log entry together with whether the watched locks were free"""

    def __init__(self, locks):
        super().__init__(logging.DEBUG)
        self.locks = locks
        self.entries = []

    def _locks_free(self):
        # RLocks are re-entrant, so test acquisition from another thread
        results = []

        def try_locks():
            for lock in self.locks:
                acquired = lock.acquire(blocking=False)
                if acquired:
                    lock.release()
                results.append(acquired)

        thread = threading.Thread(target=try_locks)
        thread.start()
        thread.join()
        return all(results)

    def emit(self, record):
        self.entries.append((record.getMessage(), getattr(record, "action", None),
                             self._locks_free()))


class TestCardLogging:
    """Card mutations log once, after every account lock is released"""

    def setup_method(self):
        self.savings = SavingsAccount("ALI-1001", "Alice", Decimal('1000'))
        self.debit = DebitCard("ALI-1002", "Alice", "ALI-1001",
                               {"ALI-1001": self.savings}.get)
        self.credit = CreditCard("ALI-1003", "Alice", Decimal('500'))
        self.handler = LockStateHandler([self.savings._lock, self.debit._lock, self.credit._lock])
        self.loggers = [logging.getLogger("ledger.cards"), logging.getLogger("ledger.accounts")]
        self.levels = [logger.level for logger in self.loggers]
        for logger in self.loggers:
            logger.addHandler(self.handler)
            logger.setLevel(logging.DEBUG)

    def teardown_method(self):
        for logger, level in zip(self.loggers, self.levels):
            logger.removeHandler(self.handler)
            logger.setLevel(level)

    def test_debit_charge_logs_outside_locks(self):
        assert self.debit.charge(200) is True
        assert self.debit.charge(5000) is False
        assert [(action, free) for _, action, free in self.handler.entries] == [
            ("card_charge", True), ("card_declined", True)
        ]
        assert [t.description for t in self.savings.transactions()] == ["Account opened", "Withdraw"]

    def test_debit_pay_logs_outside_locks(self):
        self.debit.pay(50)
        assert [(action, free) for _, action, free in self.handler.entries] == [
            ("card_payment", True)
        ]
        assert self.savings.balance == Decimal('1050.00')

    def test_credit_pay_logged(self):
        self.credit.charge(300)
        self.credit.pay(400)
        assert [(action, free) for _, action, free in self.handler.entries] == [
            ("card_charge", True), ("card_payment", True)
        ]
        assert self.handler.entries[1][0] == "Credit card payment posted"
        assert self.credit.outstanding == Decimal('0.00')
