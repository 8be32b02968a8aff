"""
Test suite for money module

Tests Decimal conversion, cent rounding and the validate-then-noop helper.
"""

import pytest
from decimal import Decimal

from account_ledger.money import (
    to_amount, to_rate, validate_positive
)


class TestToAmount:
    """Test conversion to cent-rounded Decimal"""

    def test_accepts_common_types(self):
        assert to_amount(Decimal('100.50')) == Decimal('100.50')
        assert to_amount(100) == Decimal('100.00')
        assert to_amount("42.1") == Decimal('42.10')
        # Floats go through str() so 0.1 stays 0.1
        assert to_amount(0.1) == Decimal('0.10')

    def test_rounds_half_up(self):
        assert to_amount("100.555") == Decimal('100.56')
        assert to_amount("100.554") == Decimal('100.55')
        assert to_amount("-2.005") == Decimal('-2.01')

    def test_rejects_garbage(self):
        with pytest.raises(ValueError):
            to_amount("ten dollars")
        with pytest.raises(ValueError):
            to_amount("NaN")
        with pytest.raises(ValueError):
            to_amount("Infinity")
        with pytest.raises(ValueError):
            to_amount(True)


class TestValidatePositive:
    """The validate-then-noop policy"""

    def test_positive_amount_passes(self):
        assert validate_positive("25") == Decimal('25.00')

    def test_non_positive_amounts_are_ignored(self):
        assert validate_positive(0) is None
        assert validate_positive("-10") is None
        # Rounds to zero
        assert validate_positive("0.001") is None


class TestToRate:
    """Test interest rate parsing"""

    def test_keeps_precision(self):
        assert to_rate("5.5") == Decimal('5.5')
        assert to_rate(Decimal('6.125')) == Decimal('6.125')
        assert to_rate(7) == Decimal('7')

    def test_rejects_garbage(self):
        for bad in ["abc", "", "NaN", "Infinity", "-Infinity", True]:
            with pytest.raises(ValueError):
                to_rate(bad)


def test_amount_beyond_precision_rejected():
    # Holding 1e30 to the cent needs more digits than the context allows
    with pytest.raises(ValueError):
        to_amount("1e30")
    with pytest.raises(ValueError):
        validate_positive(Decimal('1e30'))
